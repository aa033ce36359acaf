from __future__ import annotations

import warnings
from typing import List, Optional, Sequence
from xml.etree import ElementTree as ET

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning
from bs4.element import Tag

from insider_filings.models import (
    NOT_FOUND,
    NOT_SPECIFIED,
    FilerRelationship,
    Form4Extraction,
    InsiderTransaction,
    TransactionRow,
)
from insider_filings.sec.client import FilingSourceClient
from insider_filings.sec.ownership import extract_ownership_fragment, parse_ownership_xml
from insider_filings.sec.submissions import FilingIndex
from insider_filings.util.normalization import pad_cik


def _debug(msg: str) -> None:
    print(f"[form4] {msg}")


# Alternate tag spellings seen across filing eras, probed in order (first non-empty wins).
# The HTML parser lowercases tag names, so these are compared lowercased.
FILER_NAME_TAGS = ("filerName", "FILER_NAME", "rptOwnerName")
FILER_CIK_TAGS = ("filerCik", "FILER_CIK", "rptOwnerCik")
IS_DIRECTOR_TAGS = ("isDirector", "IS_DIRECTOR")
IS_OFFICER_TAGS = ("isOfficer", "IS_OFFICER")
IS_TEN_PERCENT_OWNER_TAGS = ("isTenPercentOwner", "IS_TEN_PERCENT_OWNER")
OFFICER_TITLE_TAGS = ("officerTitle", "OFFICER_TITLE")

# A table is scanned for rows only if its text contains one of these (case-sensitive).
TRANSACTION_TABLE_MARKERS = ("Transaction", "Shares")
MIN_ROW_CELLS = 6

# Raw ownership XML is parsed as HTML on purpose.
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)


def parse_markup(body: str) -> BeautifulSoup:
    # lxml's HTML parser accepts both HTML renderings and raw ownership XML.
    return BeautifulSoup(body or "", "lxml")


def _probe_text(soup: BeautifulSoup, names: Sequence[str]) -> Optional[str]:
    for name in names:
        for el in soup.find_all(name.lower()):
            text = el.get_text().strip()
            if text:
                return text
    return None


def _flag(soup: BeautifulSoup, names: Sequence[str]) -> bool:
    v = _probe_text(soup, names)
    return v is not None and v.strip().lower() in ("1", "true")


def extract_filer(soup: BeautifulSoup, default_cik: str | None = None) -> FilerRelationship:
    """Filer identity and relationship flags. Missing fields fall back to defaults."""
    return FilerRelationship(
        name=_probe_text(soup, FILER_NAME_TAGS) or NOT_FOUND,
        cik=_probe_text(soup, FILER_CIK_TAGS) or default_cik,
        is_director=_flag(soup, IS_DIRECTOR_TAGS),
        is_officer=_flag(soup, IS_OFFICER_TAGS),
        is_ten_percent_owner=_flag(soup, IS_TEN_PERCENT_OWNER_TAGS),
        officer_title=_probe_text(soup, OFFICER_TITLE_TAGS) or NOT_SPECIFIED,
    )


def _is_transaction_table(table: Tag) -> bool:
    text = table.get_text()
    return any(marker in text for marker in TRANSACTION_TABLE_MARKERS)


def _accept_row(cells: List[str]) -> bool:
    # Header rows are recognised by "transaction" in the first cell.
    return len(cells) >= MIN_ROW_CELLS and bool(cells[0]) and "transaction" not in cells[0].lower()


def extract_transaction_rows(soup: BeautifulSoup) -> List[TransactionRow]:
    """Candidate transaction rows from every transaction-like table, in document order.

    Every row under an accepted table is scanned, including rows of nested layout
    tables. A row reachable from several accepted tables is emitted once. Cells are a
    row's own td/th children; a wrapper row around a nested table has one cell.
    """
    rows: List[TransactionRow] = []
    seen: set[int] = set()
    for table in soup.find_all("table"):
        if not _is_transaction_table(table):
            continue
        for tr in table.find_all("tr"):
            if id(tr) in seen:
                continue
            seen.add(id(tr))
            cells = [c.get_text().strip() for c in tr.find_all(["td", "th"], recursive=False)]
            if not _accept_row(cells):
                continue
            rows.append(TransactionRow(cells=tuple(cells), raw_row=tr.decode_contents()))
    return rows


def extract_schema_transactions(body: str) -> tuple[Optional[str], List[InsiderTransaction]]:
    """(document_type, typed transactions) when the body embeds an ownershipDocument, else (None, [])."""
    fragment = extract_ownership_fragment(body)
    if fragment is None:
        return None, []
    try:
        doc = parse_ownership_xml(fragment)
    except (ET.ParseError, ValueError) as e:
        _debug(f"ownershipDocument present but unparseable, keeping heuristic rows: {e}")
        return None, []
    return doc.document_type, doc.transactions


def extract_form4(body: str, document_url: str, default_cik: str | None = None) -> Form4Extraction:
    soup = parse_markup(body)
    filer = extract_filer(soup, default_cik=default_cik)
    rows = extract_transaction_rows(soup)
    document_type, transactions = extract_schema_transactions(body)

    result = Form4Extraction(
        filer=filer,
        rows=rows,
        document_url=document_url,
        transactions=transactions,
        document_type=document_type,
    )
    _debug(
        f"Extracted: filer={filer.name!r} rows={len(rows)} txs={len(transactions)} "
        f"status={result.status.value} url={document_url}"
    )
    return result


class Form4Extractor:
    def __init__(self, client: FilingSourceClient, index: FilingIndex):
        self.client = client
        self.index = index

    def extract(self, cik: str, accession_number: str) -> Form4Extraction:
        """Locate, fetch and extract one filing.

        FilingNotFound and FetchError propagate unchanged. Finding nothing is not an error:
        the result's status is EMPTY.
        """
        cik10 = pad_cik(cik)
        location = self.index.locate(cik10, accession_number)
        url = self.index.document_url(location)
        body = self.client.fetch(url, host=self.client.data_host)
        return extract_form4(body, url, default_cik=cik10)
