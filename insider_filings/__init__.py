"""Insider Filings - SEC Form 4 retrieval and extraction.

Scope:
- Resolve a ticker or company name to a CIK.
- List a company's recent insider filings (Forms 3/4/5 and amendments).
- Fetch one filing document and extract filer identity plus candidate transaction rows.

All outbound SEC traffic goes through a single throttled client (10 req/s ceiling).
Nothing is persisted between calls.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
