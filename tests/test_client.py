"""
Unit tests for insider_filings/sec/client.py
"""
import pytest
import requests
from unittest.mock import MagicMock

from conftest import FakeResponse, FakeSession
from insider_filings.errors import FetchError, FetchTimeout
from insider_filings.sec.client import FilingSourceClient


URL = "https://data.sec.gov/submissions/CIK0000050863.json"


class TestHeadersAndTimeout:
    def test_attaches_required_headers(self, client, session):
        session.routes[URL] = FakeResponse(json_data={"ok": True})
        client.fetch_json(URL, host="data.sec.gov")

        call = session.calls[0]
        assert call["headers"] == {
            "User-Agent": "TestProduct test@example.com",
            "Accept-Encoding": "gzip, deflate",
            "Host": "data.sec.gov",
        }
        assert call["timeout"] == 30.0

    def test_host_header_follows_argument(self, client, session):
        url = "https://www.sec.gov/files/company_tickers.json"
        session.routes[url] = FakeResponse(json_data={})
        client.fetch_json(url, host=client.www_host)
        assert session.calls[0]["headers"]["Host"] == "www.sec.gov"

    def test_hosts_derived_from_config(self, client):
        assert client.www_host == "www.sec.gov"
        assert client.data_host == "data.sec.gov"


class TestThrottleIsApplied:
    def test_waits_before_every_request(self, cfg, session):
        throttle = MagicMock()
        c = FilingSourceClient(cfg, throttle=throttle, session=session)
        session.routes[URL] = FakeResponse(text="body")
        c.fetch(URL, host="data.sec.gov")
        c.fetch(URL, host="data.sec.gov")
        assert throttle.wait.call_count == 2

    def test_waits_even_when_request_fails(self, cfg, session):
        throttle = MagicMock()
        c = FilingSourceClient(cfg, throttle=throttle, session=session)
        with pytest.raises(FetchError):
            c.fetch(URL, host="data.sec.gov")
        assert throttle.wait.call_count == 1


class TestErrors:
    def test_non_2xx_is_fetch_error_with_status(self, client, session):
        session.routes[URL] = FakeResponse(status_code=403, text="Request Rate Threshold Exceeded")
        with pytest.raises(FetchError) as exc:
            client.fetch(URL, host="data.sec.gov")
        assert exc.value.status_code == 403
        assert "Request Rate Threshold Exceeded" in str(exc.value)
        assert not isinstance(exc.value, FetchTimeout)

    def test_timeout_is_fetch_timeout(self, client, session):
        session.routes[URL] = requests.Timeout("read timed out")
        with pytest.raises(FetchTimeout) as exc:
            client.fetch(URL, host="data.sec.gov")
        assert isinstance(exc.value, FetchError)
        assert "timed out after 30s" in str(exc.value)

    def test_transport_error_is_fetch_error(self, client, session):
        session.routes[URL] = requests.ConnectionError("connection reset")
        with pytest.raises(FetchError) as exc:
            client.fetch(URL, host="data.sec.gov")
        assert "ConnectionError" in exc.value.cause
        assert exc.value.status_code is None

    def test_invalid_json_is_fetch_error(self, client, session):
        session.routes[URL] = FakeResponse(text="<html>blocked</html>")
        with pytest.raises(FetchError) as exc:
            client.fetch_json(URL, host="data.sec.gov")
        assert "invalid JSON" in str(exc.value)

    def test_no_retry_on_failure(self, client, session):
        session.routes[URL] = FakeResponse(status_code=500, text="oops")
        with pytest.raises(FetchError):
            client.fetch(URL, host="data.sec.gov")
        assert len(session.calls) == 1

    def test_2xx_other_than_200_is_success(self, client, session):
        session.routes[URL] = FakeResponse(status_code=203, text="ok")
        assert client.fetch(URL, host="data.sec.gov") == "ok"
