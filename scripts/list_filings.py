"""List a company's recent insider filings.

Usage:
  python scripts/list_filings.py 0000050863 --limit 10 --form 4 --form 4/A
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
    parser.add_argument("cik", help="Company CIK (with or without leading zeros)")
    parser.add_argument("--limit", type=int, default=None, help="Maximum filings to list")
    parser.add_argument("--form", action="append", dest="forms", help="Form type to include (repeatable)")
    args = parser.parse_args()

    arguments = {"cik": args.cik, "limit": args.limit, "form_types": args.forms}
    result = InsiderFilingsTools().call("get_insider_transactions", arguments)
    print(result.text)
    sys.exit(1 if result.is_error else 0)


if __name__ == "__main__":
    main()
