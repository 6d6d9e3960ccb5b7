from __future__ import annotations

from typing import Any, Dict, List
import io
import json
import os
from pathlib import Path

import yaml
from bs4 import BeautifulSoup

from .types import Holding, Sale, Transaction

# <script id="..."> blocks on the portfolio page -> top-level key
HTML_BLOCK_IDS: Dict[str, str] = {
    "holdings-data": "holdings",
    "transactions-data": "transactions",
    "sales-data": "sales",
}


def parse_html_blocks(html: str) -> Dict[str, Any]:
    """
    Pull the JSON data blocks embedded in a portfolio page.
    Missing blocks are simply absent from the result.
    """
    soup = BeautifulSoup(html, "html.parser")
    data: Dict[str, Any] = {}
    for element_id, key in HTML_BLOCK_IDS.items():
        tag = soup.find(id=element_id)
        if tag is None:
            continue
        text = tag.string if tag.string is not None else tag.get_text()
        data[key] = json.loads(text or "[]")
    if not data:
        raise SystemExit(f"no portfolio data blocks found (looked for ids: {sorted(HTML_BLOCK_IDS)})")
    return data


def _parse_text(text: str, suffix: str) -> Dict[str, Any]:
    if suffix in (".html", ".htm"):
        return parse_html_blocks(text)
    if suffix == ".json":
        cfg = json.loads(text or "{}")
    else:
        cfg = yaml.safe_load(text) or {}
    if not isinstance(cfg, dict):
        raise SystemExit(f"portfolio root must be a mapping, got {type(cfg).__name__}")
    return cfg


def load_portfolio_dict(source: str | os.PathLike | io.StringIO, *, suffix: str = ".yaml") -> Dict[str, Any]:
    """
    Load raw portfolio data from a path or text stream.
    The file suffix picks the parser (.yaml/.yml, .json, .html/.htm); streams use `suffix`.
    """
    if hasattr(source, "read"):
        text = str(source.read())
    else:
        p = Path(os.fspath(source))
        if p.is_dir():
            raise SystemExit(f"{p} is a directory (expected a file)")
        text = p.read_text(encoding="utf-8")
        suffix = p.suffix
    return _parse_text(text, suffix.lower())


class Portfolio:
    """Typed view over a loaded portfolio dict."""

    def __init__(self, holdings: List[Holding], transactions: List[Transaction], sales: List[Sale]):
        self.holdings = holdings
        self.transactions = transactions
        self.sales = sales

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Portfolio":
        return cls(
            holdings=[Holding.from_dict(d) for d in data.get("holdings") or []],
            transactions=[Transaction.from_dict(d) for d in data.get("transactions") or []],
            sales=[Sale.from_dict(d) for d in data.get("sales") or []],
        )

    def __repr__(self) -> str:
        return (
            f"<Portfolio holdings={len(self.holdings)} "
            f"transactions={len(self.transactions)} sales={len(self.sales)}>"
        )


def load_portfolio(source: str | os.PathLike | io.StringIO, *, suffix: str = ".yaml") -> Portfolio:
    return Portfolio.from_dict(load_portfolio_dict(source, suffix=suffix))
