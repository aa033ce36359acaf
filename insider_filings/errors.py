from __future__ import annotations


class InsiderFilingsError(Exception):
    """Base class for failures surfaced to the tool boundary."""


class NotFound(InsiderFilingsError):
    """Input resolved to nothing upstream. The caller can rephrase and try again."""


class CompanyNotFound(NotFound):
    def __init__(self, query: str):
        super().__init__(f'No companies found matching "{query}"')
        self.query = str(query)


class FilingNotFound(NotFound):
    def __init__(self, cik: str, accession_number: str, reason: str | None = None):
        msg = f"Filing {accession_number} not found for CIK {cik}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)
        self.cik = str(cik)
        self.accession_number = str(accession_number)


class FetchError(InsiderFilingsError):
    """Non-2xx response or transport failure from SEC. Never retried."""

    def __init__(self, url: str, cause: str, *, status_code: int | None = None):
        if status_code is not None:
            msg = f"SEC request failed {status_code} for {url}: {cause}"
        else:
            msg = f"SEC request failed for {url}: {cause}"
        super().__init__(msg)
        self.url = str(url)
        self.cause = str(cause)
        self.status_code = status_code


class FetchTimeout(FetchError):
    """The per-request timeout elapsed (upstream slow, as opposed to upstream refusing)."""

    def __init__(self, url: str, timeout_seconds: float):
        super().__init__(url, f"timed out after {timeout_seconds:g}s")
        self.timeout_seconds = float(timeout_seconds)
