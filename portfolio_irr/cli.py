# portfolio_irr/cli.py
from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import datetime
from pathlib import Path

from .finance.irr import DEFAULT_GUESS
from .holdings import COLUMNS
from .runner import FORMATS, MODES, run_dir


def _as_of(value: str) -> datetime:
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="portfolio_irr",
        description="Portfolio summary and money-weighted return (IRR) from holdings, transactions and sales",
    )
    p.add_argument(
        "--mode",
        default="summary",
        choices=list(MODES),
        help="Which rows to write to the results file (default: summary).",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Portfolio file (.yaml/.yml/.json/.html) or a directory of them to validate.",
    )
    p.add_argument(
        "--outputs-dir",
        default="outputs",
        help="Directory to write result files (default: outputs). Will be created if missing.",
    )
    p.add_argument(
        "--format",
        dest="fmt",
        default="text",
        choices=list(FORMATS),
        help="csv/jsonl write a results file; text prints the formatted summary (default: text).",
    )
    p.add_argument("--as-of", type=_as_of, default=None, help="Valuation date for current holdings (default: now).")
    p.add_argument("--guess", type=float, default=DEFAULT_GUESS, help="Initial IRR guess (default: 0.10).")
    p.add_argument("--search", default="", help="Holdings mode: match name, category or notes.")
    p.add_argument("--category", default="all", help="Holdings mode: only this category (default: all).")
    p.add_argument("--sort", default=None, choices=COLUMNS, help="Holdings mode: sort column.")
    p.add_argument("--descending", action="store_true", help="Holdings mode: sort descending.")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    v = p.add_mutually_exclusive_group()
    v.add_argument(
        "--strict",
        action="store_true",
        help="Enable strict validation (unknown keys raise, transactions required).",
    )
    v.add_argument(
        "--relaxed",
        action="store_true",
        help="Enable relaxed validation (unknown keys ignored).",
    )
    return p.parse_args(argv)


def _apply_validation_mode(ns: argparse.Namespace) -> None:
    # Default: leave env as-is; flags override explicitly.
    if ns.strict:
        os.environ["VALIDATION_MODE"] = "strict"
    elif ns.relaxed:
        os.environ["VALIDATION_MODE"] = "relaxed"


def _print_summary(display: dict) -> None:
    labels = [
        ("holdings_count", "Holdings"),
        ("total_cost", "Total cost"),
        ("total_value", "Current value"),
        ("total_gain", "Unrealized gain"),
        ("realized_gain", "Realized gain"),
        ("total_gain_all", "Total gain"),
        ("irr", "IRR"),
    ]
    width = max(len(label) for _, label in labels)
    for key, label in labels:
        print(f"{label:<{width}}  {display[key]}")


def main(argv: list[str] | None = None) -> int:
    ns = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    _apply_validation_mode(ns)

    if not ns.config:
        print("ERROR: --config is required", file=sys.stderr)
        return 2

    outputs_dir = Path(ns.outputs_dir).resolve()
    outputs_dir.mkdir(parents=True, exist_ok=True)

    try:
        res = run_dir(
            Path(ns.config).resolve(),
            outputs_dir,
            mode=ns.mode,
            fmt=ns.fmt,
            as_of=ns.as_of,
            initial_guess=ns.guess,
            search=ns.search,
            category=ns.category,
            sort=ns.sort,
            direction="desc" if ns.descending else "asc",
        )
    except SystemExit as e:
        # validation failures carry a message; keep them on stderr with exit code 2
        if isinstance(e.code, int):
            return e.code
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if ns.fmt == "text" and "display" in res.summary:
        _print_summary(res.summary["display"])
    return 0


__all__ = ["main", "parse_args"]
