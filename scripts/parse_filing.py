"""Extract filer and transaction data from one Form 4 filing.

Usage:
  python scripts/parse_filing.py 0000050863 0000050863-24-000012
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
    parser.add_argument("cik", help="Company CIK")
    parser.add_argument("accession_number", help="Accession number, e.g. 0000050863-24-000012")
    args = parser.parse_args()

    result = InsiderFilingsTools().call(
        "parse_form4_filing", {"cik": args.cik, "accession_number": args.accession_number}
    )
    print(result.text)
    sys.exit(1 if result.is_error else 0)


if __name__ == "__main__":
    main()
