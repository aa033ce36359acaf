from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List

from insider_filings.errors import FilingNotFound
from insider_filings.models import DocumentLocation, FilingMetadata
from insider_filings.sec.client import FilingSourceClient
from insider_filings.util.normalization import accession_nodash, pad_cik


def _debug(msg: str) -> None:
    print(f"[submissions] {msg}")


INSIDER_FORM_TYPES = ("3", "4", "5", "3/A", "4/A", "5/A")


def _at(values: List[Any], i: int) -> str | None:
    if i >= len(values) or values[i] is None:
        return None
    s = str(values[i]).strip()
    return s or None


def iter_recent(recent: Dict[str, Any]) -> Iterator[FilingMetadata]:
    """Zip the index-aligned arrays of `filings.recent` into FilingMetadata records.

    Index i across all arrays is one filing. Indices missing the accession number,
    form type, or primary document are skipped. Order is SEC's (most recent first).
    """
    accs = recent.get("accessionNumber") or []
    forms = recent.get("form") or []
    dates = recent.get("filingDate") or []
    report_dates = recent.get("reportDate") or []
    docs = recent.get("primaryDocument") or []

    for i in range(len(accs)):
        acc = _at(accs, i)
        form = _at(forms, i)
        doc = _at(docs, i)
        if not acc or not form or not doc:
            continue
        yield FilingMetadata(
            accession_number=acc,
            form_type=form,
            filing_date=_at(dates, i),
            primary_document=doc,
            report_date=_at(report_dates, i),
        )


class FilingIndex:
    """Lists a company's recent filings from data.sec.gov/submissions/CIK##########.json.

    Only the inline `filings.recent` window is read; the paginated `filings.files`
    blocks for older filings are not fetched.
    """

    def __init__(self, client: FilingSourceClient):
        self.client = client

    def submissions_url(self, cik: str) -> str:
        return f"{self.client.cfg.SEC_DATA_BASE_URL.rstrip('/')}/submissions/CIK{pad_cik(cik)}.json"

    def document_url(self, location: DocumentLocation) -> str:
        return location.url(self.client.cfg.SEC_DATA_BASE_URL)

    def location_for(self, cik: str, filing: FilingMetadata) -> DocumentLocation:
        return DocumentLocation(
            cik=pad_cik(cik),
            accession_nodash=accession_nodash(filing.accession_number),
            primary_document=filing.primary_document,
        )

    def _recent(self, cik: str) -> Dict[str, Any]:
        data = self.client.fetch_json(self.submissions_url(cik), host=self.client.data_host)
        if not isinstance(data, dict):
            return {}
        return (data.get("filings") or {}).get("recent") or {}

    def list(self, cik: str, form_types: Iterable[str] = INSIDER_FORM_TYPES, limit: int = 20) -> List[FilingMetadata]:
        wanted = {str(f).strip() for f in form_types if str(f).strip()}
        if limit <= 0 or not wanted:
            return []

        out: List[FilingMetadata] = []
        for filing in iter_recent(self._recent(cik)):
            if filing.form_type not in wanted:
                continue
            out.append(filing)
            if len(out) >= limit:
                break

        _debug(f"cik={pad_cik(cik)} forms={sorted(wanted)} limit={limit} found={len(out)}")
        return out

    def locate(self, cik: str, accession_number: str) -> DocumentLocation:
        """Re-read the manifest and resolve the filing's primary document.

        The manifest may have changed since list() ran; a missing accession is reported as
        FilingNotFound.
        """
        acc = str(accession_number or "").strip()
        cik10 = pad_cik(cik)
        recent = self._recent(cik10)

        accs = recent.get("accessionNumber") or []
        docs = recent.get("primaryDocument") or []
        for i in range(len(accs)):
            if _at(accs, i) != acc:
                continue
            doc = _at(docs, i)
            if not doc:
                raise FilingNotFound(cik10, acc, reason="no primary document listed")
            return DocumentLocation(cik=cik10, accession_nodash=accession_nodash(acc), primary_document=doc)

        raise FilingNotFound(cik10, acc)
