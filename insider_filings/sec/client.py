from __future__ import annotations

from typing import Any, Dict
from urllib.parse import urlparse

import requests

from insider_filings.config import Config
from insider_filings.errors import FetchError, FetchTimeout
from insider_filings.sec.throttle import RequestThrottle, get_throttle


def _debug(msg: str) -> None:
    print(f"[sec] {msg}")


class FilingSourceClient:
    """GET-only client for SEC EDGAR.

    Every request waits on the shared throttle, carries the SEC-mandated User-Agent and
    an explicit Host header, and is bounded by a fixed timeout. Failures are final: there
    are no retries.
    """

    def __init__(
        self,
        cfg: Config,
        *,
        throttle: RequestThrottle | None = None,
        session: requests.Session | None = None,
    ):
        self.cfg = cfg
        self.throttle = throttle or get_throttle(cfg.SEC_MIN_INTERVAL_SECONDS)
        self.session = session or requests.Session()
        self.timeout_seconds = float(cfg.SEC_TIMEOUT_SECONDS)

    @property
    def www_host(self) -> str:
        return urlparse(self.cfg.SEC_WWW_BASE_URL).netloc or "www.sec.gov"

    @property
    def data_host(self) -> str:
        return urlparse(self.cfg.SEC_DATA_BASE_URL).netloc or "data.sec.gov"

    def headers(self, host: str) -> Dict[str, str]:
        return {
            "User-Agent": self.cfg.SEC_USER_AGENT,
            "Accept-Encoding": "gzip, deflate",
            "Host": host,
        }

    def _get(self, url: str, host: str) -> requests.Response:
        self.throttle.wait()
        _debug(f"GET {url}")
        try:
            r = self.session.get(url, headers=self.headers(host), timeout=self.timeout_seconds)
        except requests.Timeout as e:
            raise FetchTimeout(url, self.timeout_seconds) from e
        except requests.RequestException as e:
            raise FetchError(url, f"{type(e).__name__}: {e}") from e

        if not 200 <= r.status_code < 300:
            raise FetchError(url, (r.text or "")[:500], status_code=r.status_code)
        return r

    def fetch(self, url: str, host: str) -> str:
        return self._get(url, host).text

    def fetch_json(self, url: str, host: str) -> Any:
        r = self._get(url, host)
        try:
            return r.json()
        except ValueError as e:
            raise FetchError(url, f"invalid JSON body: {e}") from e
