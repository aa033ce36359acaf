from __future__ import annotations

from typing import Any


def pad_cik(value: Any) -> str:
    """Normalize a CIK: digits only, left-pad to 10.

    Accepts ints (as found in company_tickers.json) and strings with or without
    leading zeros. Idempotent: pad_cik(pad_cik(x)) == pad_cik(x).
    """
    if value is None:
        raise ValueError("CIK is missing")
    s = str(value).strip()
    digits = "".join(ch for ch in s if ch.isdigit())
    if not digits:
        raise ValueError(f"CIK has no digits: {value!r}")
    digits = digits.lstrip("0") or "0"
    if len(digits) > 10:
        raise ValueError(f"CIK is longer than 10 digits: {value!r}")
    return digits.zfill(10)


def cik_path_component(cik10: str) -> str:
    # EDGAR archive paths use the integer CIK without leading zeros
    return str(int(pad_cik(cik10)))


def accession_nodash(accession_number: str) -> str:
    return str(accession_number or "").replace("-", "").strip()
