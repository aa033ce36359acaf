"""Serve the insider filings tools over HTTP.

Usage:
  python scripts/run_api.py --port 8000
"""

import argparse
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--host", default=os.environ.get("API_HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.environ.get("API_PORT", "8000")))
    args = parser.parse_args()

    uvicorn.run("insider_filings.api.server:app", host=args.host, port=args.port, reload=False)


if __name__ == "__main__":
    main()
