from __future__ import annotations
from typing import Dict, Any

# Record schemas for the three data blocks of a portfolio file.
# type: "str" | "float" | "date"; required fields must be present in every record.
HOLDING_SCHEMA: Dict[str, Dict[str, Any]] = {
    "id":            {"type": "str",   "required": False, "desc": "Holding identifier (referenced by sales)"},
    "name":          {"type": "str",   "required": True,  "desc": "Display name"},
    "category":      {"type": "str",   "required": True,  "desc": "Asset class / bucket used for filtering"},
    "cost_basis":    {"type": "float", "required": True,  "min": 0.0, "unit": "USD", "desc": "Amount paid for the position still held"},
    "current_value": {"type": "float", "required": True,  "min": 0.0, "unit": "USD", "desc": "Market value today"},
    "notes":         {"type": "str",   "required": False, "desc": "Free text, searchable"},
}

TRANSACTION_SCHEMA: Dict[str, Dict[str, Any]] = {
    "date":          {"type": "date",  "required": True,  "desc": "YYYY-MM-DD"},
    "amount":        {"type": "float", "required": True,  "unit": "USD", "desc": "Negative = money in, positive = money out"},
    "type":          {"type": "str",   "required": False, "desc": "Buy / Sell / Dividend / ..."},
    "description":   {"type": "str",   "required": False, "desc": "Free text"},
}

SALE_SCHEMA: Dict[str, Dict[str, Any]] = {
    "holding_id":      {"type": "str",   "required": True,  "desc": "Holding the lot was sold from"},
    "date_sold":       {"type": "date",  "required": True,  "desc": "YYYY-MM-DD"},
    "sale_proceeds":   {"type": "float", "required": True,  "min": 0.0, "unit": "USD", "desc": "Cash received"},
    "cost_basis_sold": {"type": "float", "required": True,  "min": 0.0, "unit": "USD", "desc": "Cost basis of the lot sold"},
    "notes":           {"type": "str",   "required": False, "desc": "Free text"},
}

# top-level block name -> record schema
BLOCKS: Dict[str, Dict[str, Dict[str, Any]]] = {
    "holdings": HOLDING_SCHEMA,
    "transactions": TRANSACTION_SCHEMA,
    "sales": SALE_SCHEMA,
}

# Allowed top-level keys in strict mode.
TOP_LEVEL_KEYS = set(BLOCKS) | {"meta"}
