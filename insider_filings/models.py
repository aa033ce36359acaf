from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from insider_filings.util.normalization import cik_path_component


NOT_FOUND = "Not found"
NOT_SPECIFIED = "Not specified"


@dataclass(frozen=True)
class CompanyInfo:
    cik: str  # always 10 digits
    ticker: str
    company_name: str


@dataclass(frozen=True)
class FilingMetadata:
    accession_number: str
    form_type: str
    filing_date: str | None
    primary_document: str
    report_date: str | None = None


@dataclass(frozen=True)
class DocumentLocation:
    cik: str
    accession_nodash: str
    primary_document: str

    def url(self, base_url: str) -> str:
        # Archive paths use the integer CIK, unlike the zero-padded submissions path.
        return f"{base_url.rstrip('/')}/Archives/edgar/data/{cik_path_component(self.cik)}/{self.accession_nodash}/{self.primary_document}"


@dataclass(frozen=True)
class FilerRelationship:
    name: str = NOT_FOUND
    cik: str | None = None
    is_director: bool = False
    is_officer: bool = False
    is_ten_percent_owner: bool = False
    officer_title: str = NOT_SPECIFIED


@dataclass(frozen=True)
class TransactionRow:
    """A candidate transaction row from an HTML/XML table.

    Cells are kept in document order and are NOT mapped onto transaction fields:
    the table layout is not schema-verified.
    """

    cells: Tuple[str, ...]
    raw_row: str


@dataclass(frozen=True)
class InsiderTransaction:
    """A transaction read from the ownershipDocument XML schema."""

    is_derivative: bool
    security_title: str | None
    transaction_date: str | None
    transaction_code: str | None
    shares: float | None
    price_per_share: float | None
    value: float | None
    acquired_disposed: str | None
    shares_owned_after: float | None
    direct_or_indirect: str | None  # 'D' | 'I'
    raw_payload: Dict[str, Any] = field(default_factory=dict)


class ExtractionStatus(str, Enum):
    COMPLETE = "complete"  # schema-verified transactions parsed
    PARTIAL = "partial"  # heuristic rows only
    EMPTY = "empty"  # nothing found (still a valid result)


@dataclass(frozen=True)
class Form4Extraction:
    filer: FilerRelationship
    rows: List[TransactionRow]
    document_url: str
    transactions: List[InsiderTransaction] = field(default_factory=list)
    document_type: Optional[str] = None

    @property
    def status(self) -> ExtractionStatus:
        if self.transactions:
            return ExtractionStatus.COMPLETE
        if self.rows:
            return ExtractionStatus.PARTIAL
        return ExtractionStatus.EMPTY
