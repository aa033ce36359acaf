"""Resolve a ticker or company name to CIKs.

Usage:
  python scripts/search_company.py INTC
  python scripts/search_company.py "intel corp"
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from insider_filings.tools import InsiderFilingsTools


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("query", help="Ticker symbol or company name")
    args = parser.parse_args()

    result = InsiderFilingsTools().call("search_company_cik", {"query": args.query})
    print(result.text)
    sys.exit(1 if result.is_error else 0)


if __name__ == "__main__":
    main()
