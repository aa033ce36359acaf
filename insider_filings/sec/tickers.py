from __future__ import annotations

from typing import Any, List

from insider_filings.errors import CompanyNotFound
from insider_filings.models import CompanyInfo
from insider_filings.sec.client import FilingSourceClient
from insider_filings.util.normalization import pad_cik


def _debug(msg: str) -> None:
    print(f"[tickers] {msg}")


def parse_company_tickers(data: Any) -> List[CompanyInfo]:
    """Turn company_tickers.json into CompanyInfo records, in file order.

    Format is typically { "0": {"cik_str": 320193, "ticker": "AAPL", "title": "Apple Inc."}, ... }
    """
    out: List[CompanyInfo] = []
    items = data.values() if isinstance(data, dict) else (data or [])
    for obj in items:
        if not isinstance(obj, dict):
            continue

        ticker = str(obj.get("ticker") or "").strip()
        title = str(obj.get("title") or "").strip()
        cik_str = obj.get("cik_str")

        if cik_str is None:
            continue

        try:
            cik10 = pad_cik(cik_str)
        except ValueError:
            continue

        out.append(CompanyInfo(cik=cik10, ticker=ticker, company_name=title))

    return out


def match_companies(companies: List[CompanyInfo], query: str) -> List[CompanyInfo]:
    """Exact ticker match OR title substring match, both case-insensitive.

    A company qualifying through either rule is returned once, in snapshot order.
    An empty query is a substring of every title, so it matches the whole snapshot.
    """
    q = (query or "").strip().lower()
    return [c for c in companies if c.ticker.lower() == q or q in c.company_name.lower()]


class CompanyDirectory:
    """Resolves tickers / company names against SEC's company_tickers.json snapshot.

    The snapshot is fetched on every resolve(); nothing is cached between calls.
    """

    def __init__(self, client: FilingSourceClient):
        self.client = client

    @property
    def snapshot_url(self) -> str:
        return f"{self.client.cfg.SEC_WWW_BASE_URL.rstrip('/')}/files/company_tickers.json"

    def resolve(self, query: str) -> List[CompanyInfo]:
        data = self.client.fetch_json(self.snapshot_url, host=self.client.www_host)
        companies = parse_company_tickers(data)
        matches = match_companies(companies, query)
        _debug(f"query={query!r} snapshot={len(companies)} matches={len(matches)}")

        if not matches:
            raise CompanyNotFound(query or "")
        return matches

