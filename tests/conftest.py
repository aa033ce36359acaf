"""
Pytest configuration and shared fixtures.

All tests are offline: requests.Session is replaced by a fake that serves canned
responses keyed by URL.
"""
import json

import pytest

from insider_filings.config import Config
from insider_filings.sec.client import FilingSourceClient
from insider_filings.sec.throttle import RequestThrottle


class FakeResponse:
    def __init__(self, status_code=200, text="", json_data=None):
        self.status_code = status_code
        if json_data is not None:
            text = json.dumps(json_data)
        self.text = text

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Records every GET and answers from a {url: FakeResponse | Exception} map."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        resp = self.routes.get(url)
        if resp is None:
            return FakeResponse(status_code=404, text="Not Found")
        if isinstance(resp, Exception):
            raise resp
        return resp


@pytest.fixture
def cfg():
    return Config(
        SEC_USER_AGENT="TestProduct test@example.com",
        SEC_WWW_BASE_URL="https://www.sec.gov",
        SEC_DATA_BASE_URL="https://data.sec.gov",
        SEC_MIN_INTERVAL_SECONDS=0.0,
        SEC_TIMEOUT_SECONDS=30.0,
        DEFAULT_FILINGS_LIMIT=20,
    )


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(cfg, session):
    return FilingSourceClient(cfg, throttle=RequestThrottle(0.0), session=session)


TICKERS_URL = "https://www.sec.gov/files/company_tickers.json"


def submissions_url(cik10):
    return f"https://data.sec.gov/submissions/CIK{cik10}.json"


def make_manifest(forms, accessions, docs=None, dates=None):
    n = len(forms)
    return {
        "cik": "50863",
        "name": "INTEL CORP",
        "filings": {
            "recent": {
                "accessionNumber": list(accessions),
                "form": list(forms),
                "filingDate": list(dates) if dates is not None else [f"2024-01-{i + 10:02d}" for i in range(n)],
                "reportDate": [""] * n,
                "primaryDocument": list(docs) if docs is not None else [f"doc{i}.xml" for i in range(n)],
            },
            "files": [],
        },
    }
