import os
from dataclasses import dataclass, field

# Optional: load a local .env file if present.
try:
    from dotenv import load_dotenv

    load_dotenv()
except Exception:
    # If python-dotenv isn't installed or .env isn't present, that's fine.
    pass


def _env_str(name: str, default: str) -> str:
    return (os.environ.get(name) or "").strip() or default


@dataclass(frozen=True)
class Config:
    """Runtime configuration.

    Values are read from the environment when the instance is created, so tests can
    monkeypatch env vars and call load_config() again.
    """

    # -----------------
    # SEC
    # -----------------
    # EDGAR requires "<product-name> <contact-email>" as the User-Agent.
    SEC_USER_AGENT: str = field(
        default_factory=lambda: _env_str("SEC_USER_AGENT", "InsiderFilings/0.1 admin@example.com")
    )

    # Two virtual hosts: static files (ticker snapshot) and submissions/archives.
    SEC_WWW_BASE_URL: str = field(default_factory=lambda: _env_str("SEC_WWW_BASE_URL", "https://www.sec.gov"))
    SEC_DATA_BASE_URL: str = field(default_factory=lambda: _env_str("SEC_DATA_BASE_URL", "https://data.sec.gov"))

    # SEC fair-access limit is 10 requests/second -> 100ms spacing.
    SEC_MIN_INTERVAL_SECONDS: float = field(
        default_factory=lambda: float(_env_str("SEC_MIN_INTERVAL_SECONDS", "0.1"))
    )
    SEC_TIMEOUT_SECONDS: float = field(default_factory=lambda: float(_env_str("SEC_TIMEOUT_SECONDS", "30")))

    # -----------------
    # Tools
    # -----------------
    DEFAULT_FILINGS_LIMIT: int = field(default_factory=lambda: int(_env_str("DEFAULT_FILINGS_LIMIT", "20")))


def load_config() -> Config:
    return Config()
