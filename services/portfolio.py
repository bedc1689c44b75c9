"""
Portfolio aggregation over an application's products and funds.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable


def flatten_funds(products: Iterable[Any]) -> list[Any]:
    """All funds across products, in product order then fund order."""
    return [fund for product in products for fund in product.funds]


def portfolio_total(products: Iterable[Any], tax_rate: Decimal) -> Decimal:
    """
    Sum of (amount - fees) * tax_rate over every fund, left to right.
    No products or no funds yields Decimal("0").
    """
    total = Decimal("0")
    for fund in flatten_funds(products):
        total += (Decimal(fund.amount) - Decimal(fund.fees)) * tax_rate
    return total
