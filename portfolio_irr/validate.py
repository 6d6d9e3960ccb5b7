# portfolio_irr/validate.py
from __future__ import annotations
import os, sys
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .config import load_portfolio_dict
from .schema import BLOCKS, TOP_LEVEL_KEYS
from .types import as_amount, as_datetime

def mode_from_env_or_flag(flag: str | None) -> str:
    if flag in ("strict", "relaxed"):
        return flag
    env = (os.environ.get("VALIDATION_MODE") or "").lower()
    return env if env in ("strict", "relaxed") else "relaxed"

def _check_field(block: str, i: int, key: str, value: Any, spec: Dict[str, Any]) -> None:
    where = f"{block}[{i}].{key}"
    kind = spec.get("type")
    if kind == "float":
        try:
            v = as_amount(value)
        except (TypeError, ValueError):
            raise SystemExit(f"{where} must be a number, got {value!r}")
        if "min" in spec and v < float(spec["min"]):
            raise SystemExit(f"{where} must be >= {spec['min']}, got {v}")
    elif kind == "date":
        try:
            as_datetime(value)
        except (TypeError, ValueError):
            raise SystemExit(f"{where} must be a YYYY-MM-DD date, got {value!r}")

def validate_records(block: str, records: Any, *, mode: str = "relaxed") -> None:
    schema = BLOCKS[block]
    if not isinstance(records, list):
        raise SystemExit(f"{block} must be a list, got {type(records).__name__}")
    for i, rec in enumerate(records):
        if not isinstance(rec, dict):
            raise SystemExit(f"{block}[{i}] must be a mapping")
        missing = [k for k, spec in schema.items() if spec.get("required") and rec.get(k) in (None, "")]
        if missing:
            raise SystemExit(f"{block}[{i}] missing required keys: {missing}")
        if mode == "strict":
            unknown = [k for k in rec if k not in schema]
            if unknown:
                raise SystemExit(f"{block}[{i}] unknown keys (strict mode): {unknown}")
        for k, spec in schema.items():
            if k in rec and rec[k] not in (None, ""):
                _check_field(block, i, k, rec[k], spec)

def validate_portfolio_dict(data: Dict[str, Any], *, mode: str = "relaxed") -> None:
    """
    Guardrails:
      - relaxed: require holdings or transactions; typed record fields
      - strict : require transactions, reject unknown top-level keys and record fields
    """
    if not ("holdings" in data or "transactions" in data):
        raise SystemExit("missing required keys: need 'holdings' or 'transactions'")

    if mode == "strict":
        if "transactions" not in data:
            raise SystemExit("strict mode requires 'transactions' list")
        unknown = [k for k in data.keys() if k not in TOP_LEVEL_KEYS]
        if unknown:
            raise SystemExit(f"unknown top-level keys (strict mode): {unknown}")

    for block in BLOCKS:
        if block in data and data[block] is not None:
            validate_records(block, data[block], mode=mode)

def _iter_input_files(p: Path) -> Iterable[Path]:
    if p.is_file():
        yield p
    elif p.is_dir():
        for ext in ("*.yaml", "*.yml", "*.json", "*.html"):
            yield from sorted(p.rglob(ext))

def _main(argv: List[str] | None = None) -> int:
    import argparse
    parser = argparse.ArgumentParser(prog="portfolio_irr.validate", add_help=True)
    parser.add_argument("paths", nargs="+", help="YAML/JSON/HTML portfolio files or directories to validate")
    parser.add_argument("--mode", choices=["strict", "relaxed"], default=None, help="validation mode")
    args = parser.parse_args(argv)

    mode = mode_from_env_or_flag(args.mode)
    had_error = False

    for raw in args.paths:
        target = Path(raw)
        any_seen = False
        for f in _iter_input_files(target):
            if not f.is_file():
                continue
            any_seen = True
            try:
                data = load_portfolio_dict(f)
                validate_portfolio_dict(data, mode=mode)
                print(f"OK: {f}")
            except SystemExit as e:
                print(f"{f}: {e}", file=sys.stderr)
                had_error = True
            except Exception as e:
                print(f"{f}: ERROR: {e}", file=sys.stderr)
                had_error = True
        if not any_seen:
            print(f"{target}: no YAML/JSON/HTML files found", file=sys.stderr)
            had_error = True

    return 1 if had_error else 0

if __name__ == "__main__":
    raise SystemExit(_main())
