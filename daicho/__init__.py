"""Delivery ledger (納入台帳) paste parser.

Usage:
    from daicho import parse

    result = parse(pasted_text)
    for row in result.rows:
        print(row.code, row.name, row.quantity, row.unit_price, row.amount)
    print(result.summary.taxable_base, result.summary.match_mark)
"""

from daicho.ledger.ledger_parser import parse

__all__ = ["parse"]
