"""Tool surface for an agent: five named operations returning text.

Every failure from the SEC pipeline is caught here, once, and rendered as
"Error executing <tool>: <cause>". Nothing raised below this layer reaches the host.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from insider_filings.config import Config, load_config
from insider_filings.errors import InsiderFilingsError
from insider_filings.models import ExtractionStatus, FilingMetadata, Form4Extraction, InsiderTransaction
from insider_filings.sec.client import FilingSourceClient
from insider_filings.sec.form4 import Form4Extractor
from insider_filings.sec.submissions import INSIDER_FORM_TYPES, FilingIndex
from insider_filings.sec.tickers import CompanyDirectory


def _debug(msg: str) -> None:
    print(f"[tools] {msg}")


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_schema: Dict[str, Any]


@dataclass(frozen=True)
class ToolResult:
    text: str
    is_error: bool = False

    def as_payload(self) -> Dict[str, Any]:
        return {"content": [{"type": "text", "text": self.text}], "is_error": self.is_error}


class ToolArgumentError(InsiderFilingsError):
    pass


TOOLS: List[ToolSpec] = [
    ToolSpec(
        name="search_company_cik",
        description="Search for a company's CIK (Central Index Key) by ticker symbol or company name",
        input_schema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Company ticker symbol or company name to search for"},
            },
            "required": ["query"],
        },
    ),
    ToolSpec(
        name="get_insider_transactions",
        description="Get recent insider trading filings for a company using CIK",
        input_schema={
            "type": "object",
            "properties": {
                "cik": {"type": "string", "description": "Company CIK (Central Index Key)"},
                "limit": {"type": "number", "description": "Maximum number of filings to retrieve (default: 20)", "default": 20},
                "form_types": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Form types to filter by (3, 4, 5, 3/A, 4/A, 5/A)",
                    "default": list(INSIDER_FORM_TYPES),
                },
            },
            "required": ["cik"],
        },
    ),
    ToolSpec(
        name="parse_form4_filing",
        description="Parse a specific Form 4 filing to extract filer and transaction information",
        input_schema={
            "type": "object",
            "properties": {
                "cik": {"type": "string", "description": "Company CIK"},
                "accession_number": {"type": "string", "description": "SEC accession number for the filing"},
            },
            "required": ["cik", "accession_number"],
        },
    ),
    ToolSpec(
        name="get_executive_transactions",
        description="List insider filings for a company; role/date filtering is not applied yet",
        input_schema={
            "type": "object",
            "properties": {
                "cik": {"type": "string", "description": "Company CIK"},
                "role_filter": {"type": "string", "description": "Executive role (CEO, CFO, Director, ...)", "default": "all"},
                "date_from": {"type": "string", "description": "Start date (YYYY-MM-DD)"},
                "date_to": {"type": "string", "description": "End date (YYYY-MM-DD)"},
            },
            "required": ["cik"],
        },
    ),
    ToolSpec(
        name="analyze_insider_trends",
        description="List insider filings for a trend window; statistics are not computed yet",
        input_schema={
            "type": "object",
            "properties": {
                "cik": {"type": "string", "description": "Company CIK"},
                "period_months": {"type": "number", "description": "Number of months to analyze (default: 12)", "default": 12},
            },
            "required": ["cik"],
        },
    ),
]


def _required(args: Dict[str, Any], name: str) -> str:
    v = args.get(name)
    if v is None or not str(v).strip():
        raise ToolArgumentError(f"missing required argument '{name}'")
    return str(v).strip()


def _int_arg(args: Dict[str, Any], name: str, default: int) -> int:
    v = args.get(name)
    if v is None or v == "":
        return default
    try:
        return int(v)
    except (TypeError, ValueError):
        raise ToolArgumentError(f"argument '{name}' must be an integer, got {v!r}")


def _format_filings(filings: List[FilingMetadata], index: FilingIndex, cik: str) -> str:
    blocks = []
    for f in filings:
        url = index.document_url(index.location_for(cik, f))
        blocks.append(
            f"Form: {f.form_type}\n"
            f"Filing Date: {f.filing_date or 'N/A'}\n"
            f"Accession Number: {f.accession_number}\n"
            f"Document URL: {url}"
        )
    return "\n\n".join(blocks)


def _format_transaction(tx: InsiderTransaction) -> str:
    def num(v: Optional[float]) -> str:
        return "N/A" if v is None else f"{v:,.2f}".rstrip("0").rstrip(".")

    kind = "Derivative" if tx.is_derivative else "Non-derivative"
    return (
        f"- {tx.transaction_date or 'N/A'} {kind} code={tx.transaction_code or 'N/A'} "
        f"shares={num(tx.shares)} price={num(tx.price_per_share)} value={num(tx.value)} "
        f"owned_after={num(tx.shares_owned_after)} ownership={tx.direct_or_indirect or 'N/A'}"
    )


def format_extraction(result: Form4Extraction) -> str:
    f = result.filer
    lines = [
        "Form 4 Filing Analysis:",
        "",
        "Filer Information:",
        f"Name: {f.name}",
        f"CIK: {f.cik or 'N/A'}",
        f"Is Director: {str(f.is_director).lower()}",
        f"Is Officer: {str(f.is_officer).lower()}",
        f"Officer Title: {f.officer_title}",
        f"Is 10% Owner: {str(f.is_ten_percent_owner).lower()}",
        "",
        f"Extraction Status: {result.status.value}",
        f"Transactions Found: {len(result.transactions) if result.transactions else len(result.rows)}",
    ]
    if result.status is ExtractionStatus.COMPLETE:
        lines.append("")
        lines.extend(_format_transaction(tx) for tx in result.transactions)
    elif result.status is ExtractionStatus.PARTIAL:
        lines.append("")
        lines.extend(f"- {' | '.join(row.cells)}" for row in result.rows)
    lines += ["", f"Document URL: {result.document_url}"]
    if result.status is not ExtractionStatus.COMPLETE:
        lines += [
            "",
            "Note: rows are unverified table cells from the rendered filing; "
            "fields such as transaction code, shares and price are not mapped.",
        ]
    return "\n".join(lines)


class InsiderFilingsTools:
    """Wires the SEC pipeline together and exposes it as named tools."""

    def __init__(self, cfg: Config | None = None, client: FilingSourceClient | None = None):
        self.cfg = cfg or load_config()
        self.client = client or FilingSourceClient(self.cfg)
        self.directory = CompanyDirectory(self.client)
        self.index = FilingIndex(self.client)
        self.extractor = Form4Extractor(self.client, self.index)
        self._handlers: Dict[str, Callable[[Dict[str, Any]], str]] = {
            "search_company_cik": self._search_company_cik,
            "get_insider_transactions": self._get_insider_transactions,
            "parse_form4_filing": self._parse_form4_filing,
            "get_executive_transactions": self._get_executive_transactions,
            "analyze_insider_trends": self._analyze_insider_trends,
        }

    # -----------------------------
    # Operations
    # -----------------------------

    def search_company_cik(self, query: str) -> str:
        matches = self.directory.resolve(query)
        return f"Found {len(matches)} matching companies:\n\n" + "\n\n".join(
            f"CIK: {c.cik}\nTicker: {c.ticker}\nCompany: {c.company_name}" for c in matches
        )

    def get_insider_transactions(self, cik: str, limit: int | None = None, form_types: List[str] | None = None) -> str:
        limit = self.cfg.DEFAULT_FILINGS_LIMIT if limit is None else limit
        filings = self.index.list(cik, INSIDER_FORM_TYPES if form_types is None else form_types, limit)
        text = f"Found {len(filings)} recent insider trading filings"
        if not filings:
            return text + "."
        return text + ":\n\n" + _format_filings(filings, self.index, cik)

    def parse_form4_filing(self, cik: str, accession_number: str) -> str:
        return format_extraction(self.extractor.extract(cik, accession_number))

    def get_executive_transactions(
        self,
        cik: str,
        role_filter: str = "all",
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> str:
        filings = self.index.list(cik, INSIDER_FORM_TYPES, 50)
        return (
            f"Role filter: {role_filter}\n"
            f"Date range: {date_from or 'N/A'} to {date_to or 'N/A'}\n\n"
            f"Role and date filtering is not applied; listing {len(filings)} recent insider filings. "
            f"Use parse_form4_filing on a filing to see the filer's role.\n\n"
            + _format_filings(filings, self.index, cik)
        ).rstrip()

    def analyze_insider_trends(self, cik: str, period_months: int = 12) -> str:
        filings = self.index.list(cik, INSIDER_FORM_TYPES, 100)
        return (
            f"Insider Trading Trend Analysis:\n\n"
            f"Company CIK: {cik}\n"
            f"Analysis Period: {period_months} months\n"
            f"Insider filings in the recent window: {len(filings)}\n\n"
            f"Trend statistics (buy/sell ratios, volumes, role patterns) are not computed; "
            f"they need typed transactions from each filing."
        )

    # -----------------------------
    # Dispatch
    # -----------------------------

    def _search_company_cik(self, args: Dict[str, Any]) -> str:
        return self.search_company_cik(_required(args, "query"))

    def _get_insider_transactions(self, args: Dict[str, Any]) -> str:
        form_types = args.get("form_types")
        if form_types is not None and not isinstance(form_types, (list, tuple)):
            raise ToolArgumentError("argument 'form_types' must be a list of strings")
        return self.get_insider_transactions(
            _required(args, "cik"),
            limit=_int_arg(args, "limit", self.cfg.DEFAULT_FILINGS_LIMIT),
            form_types=None if form_types is None else [str(f) for f in form_types],
        )

    def _parse_form4_filing(self, args: Dict[str, Any]) -> str:
        return self.parse_form4_filing(_required(args, "cik"), _required(args, "accession_number"))

    def _get_executive_transactions(self, args: Dict[str, Any]) -> str:
        return self.get_executive_transactions(
            _required(args, "cik"),
            role_filter=str(args.get("role_filter") or "all"),
            date_from=args.get("date_from"),
            date_to=args.get("date_to"),
        )

    def _analyze_insider_trends(self, args: Dict[str, Any]) -> str:
        return self.analyze_insider_trends(_required(args, "cik"), period_months=_int_arg(args, "period_months", 12))

    def call(self, name: str, arguments: Dict[str, Any] | None) -> ToolResult:
        handler = self._handlers.get(name)
        if handler is None:
            return ToolResult(text=f"Error executing {name}: Unknown tool: {name}", is_error=True)
        if arguments is None:
            return ToolResult(text=f"Error: No arguments provided for {name}", is_error=True)

        try:
            return ToolResult(text=handler(dict(arguments)))
        except (InsiderFilingsError, ValueError) as e:
            _debug(f"{name} failed: {type(e).__name__}: {e}")
            return ToolResult(text=f"Error executing {name}: {e}", is_error=True)
        except Exception as e:
            # Unexpected bug: still report it as this request's failure, not the host's.
            _debug(f"{name} crashed: {type(e).__name__}: {e}")
            return ToolResult(text=f"Error executing {name}: {type(e).__name__}: {e}", is_error=True)
