"""
Finance layer.

- IRR/NPV implementations live only in portfolio_irr.finance.irr.
- cashflow assembles the IRR stream; metrics aggregates holdings and sales.
"""
