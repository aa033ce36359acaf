from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from xml.etree import ElementTree as ET

from insider_filings.models import InsiderTransaction


def _debug(msg: str) -> None:
    print(f"[ownership] {msg}")


@dataclass(frozen=True)
class OwnershipDocument:
    document_type: str | None
    issuer_cik: str | None
    issuer_trading_symbol: str | None
    transactions: List[InsiderTransaction]


def extract_ownership_fragment(text: str) -> Optional[str]:
    """Return the <ownershipDocument>...</ownershipDocument> slice of a filing body, if any."""
    if not isinstance(text, str):
        return None
    m_start = re.search(r"<ownershipdocument\b", text, flags=re.IGNORECASE)
    if not m_start:
        return None
    m_end = re.search(r"</ownershipdocument>", text, flags=re.IGNORECASE)
    if not m_end or m_end.end() <= m_start.start():
        return None
    return text[m_start.start() : m_end.end()]


def _local(tag: str) -> str:
    # "{namespace}name" -> "name"
    return tag.rsplit("}", 1)[-1]


def _child(el: ET.Element | None, name: str) -> Optional[ET.Element]:
    if el is None:
        return None
    return next((c for c in el if _local(c.tag) == name), None)


def _text_at(el: ET.Element | None, *path: str) -> Optional[str]:
    for name in path:
        el = _child(el, name)
    if el is None:
        return None
    return (el.text or "").strip() or None


def _value_at(el: ET.Element | None, *path: str) -> Optional[str]:
    # Most ownership fields wrap their text as <field><value>TEXT</value></field>
    return _text_at(el, *path, "value")


def _number(s: Optional[str]) -> Optional[float]:
    cleaned = (s or "").replace(",", "").replace("$", "").strip()
    try:
        return float(cleaned) if cleaned else None
    except ValueError:
        return None


def parse_ownership_xml(xml_text: str) -> OwnershipDocument:
    """Parse an ownershipDocument (Forms 3/4/5 XML schema).

    Raises ET.ParseError on malformed XML and ValueError when there is no ownershipDocument.
    """
    tree = ET.fromstring(xml_text)
    root = next((el for el in tree.iter() if _local(el.tag).lower() == "ownershipdocument"), None)
    if root is None:
        raise ValueError("No ownershipDocument element found in XML")

    doc_type = _text_at(root, "documentType")
    issuer_el = _child(root, "issuer")

    transactions: List[InsiderTransaction] = []
    for table_name, tx_name, is_derivative in (
        ("nonDerivativeTable", "nonDerivativeTransaction", False),
        ("derivativeTable", "derivativeTransaction", True),
    ):
        table = _child(root, table_name)
        rows = [tx for tx in (table if table is not None else []) if _local(tx.tag) == tx_name]
        transactions.extend(_parse_transaction(tx, is_derivative=is_derivative) for tx in rows)

    _debug(f"Parsed ownershipDocument: doc_type={doc_type} txs={len(transactions)}")

    return OwnershipDocument(
        document_type=doc_type,
        issuer_cik=_text_at(issuer_el, "issuerCik"),
        issuer_trading_symbol=_text_at(issuer_el, "issuerTradingSymbol"),
        transactions=transactions,
    )


def _parse_transaction(tx_el: ET.Element, is_derivative: bool) -> InsiderTransaction:
    tx_code = _text_at(tx_el, "transactionCoding", "transactionCode")
    tx_date = _value_at(tx_el, "transactionDate")
    shares = _number(_value_at(tx_el, "transactionAmounts", "transactionShares"))
    price = _number(_value_at(tx_el, "transactionAmounts", "transactionPricePerShare"))
    acq_disp = _value_at(tx_el, "transactionAmounts", "transactionAcquiredDisposedCode")
    shares_after = _number(_value_at(tx_el, "postTransactionAmounts", "sharesOwnedFollowingTransaction"))
    sec_title = _value_at(tx_el, "securityTitle") or _text_at(tx_el, "securityTitle")

    d_or_i = _value_at(tx_el, "ownershipNature", "directOrIndirectOwnership")
    d_or_i = d_or_i.upper() if d_or_i and d_or_i.upper() in ("D", "I") else None

    value = shares * price if shares is not None and price is not None else None

    raw: Dict[str, Any] = {
        "transaction_code": tx_code,
        "transaction_date": tx_date,
        "shares": shares,
        "price": price,
        "shares_owned_following": shares_after,
        "is_derivative": is_derivative,
    }

    # Footnote references, unique in document order
    footnote_ids: List[str] = []
    for el in tx_el.iter():
        if _local(el.tag).lower() == "footnoteid":
            fid = (el.attrib.get("id") or el.attrib.get("ID") or "").strip()
            if fid and fid not in footnote_ids:
                footnote_ids.append(fid)
    if footnote_ids:
        raw["footnote_ids"] = footnote_ids

    return InsiderTransaction(
        is_derivative=is_derivative,
        security_title=sec_title,
        transaction_date=tx_date,
        transaction_code=tx_code,
        shares=shares,
        price_per_share=price,
        value=value,
        acquired_disposed=acq_disp,
        shares_owned_after=shares_after,
        direct_or_indirect=d_or_i,
        raw_payload=raw,
    )
