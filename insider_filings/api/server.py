from __future__ import annotations

from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from insider_filings import __version__
from insider_filings.config import Config, load_config
from insider_filings.tools import TOOLS, InsiderFilingsTools


def _debug(msg: str) -> None:
    print(f"[api] {msg}")


class ToolCallRequest(BaseModel):
    arguments: Dict[str, Any] | None = None


def create_app(tools: InsiderFilingsTools | None = None, cfg: Config | None = None) -> FastAPI:
    app = FastAPI(title="SEC Insider Filings", version=__version__)
    app.state.tools = tools or InsiderFilingsTools(cfg or load_config())

    # -----------------------------
    # Health
    # -----------------------------

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"status": "ok"}

    # -----------------------------
    # Tools
    # -----------------------------

    @app.get("/tools")
    def list_tools() -> Dict[str, List[Dict[str, Any]]]:
        return {
            "tools": [
                {"name": t.name, "description": t.description, "inputSchema": t.input_schema}
                for t in TOOLS
            ]
        }

    @app.post("/tools/{name}")
    def call_tool(name: str, body: ToolCallRequest) -> Dict[str, Any]:
        if name not in {t.name for t in TOOLS}:
            raise HTTPException(status_code=404, detail="unknown_tool")
        _debug(f"call {name} args={body.arguments}")
        result = app.state.tools.call(name, body.arguments)
        return result.as_payload()

    return app


app = create_app()
