"""
Money display helpers.

Amounts are shown as whole units with German digit grouping:
    format_currency(1234.5, 'EUR') -> '€1.235'
    format_currency(149, 'USD')    -> 'USD 149'
"""
import math
from typing import Optional

from revenuela.config import DEFAULT_CURRENCY


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (towards +inf)."""
    return int(math.floor(value + 0.5))


def finite_amount(amount) -> Optional[float]:
    """The amount, or None when it is missing, NaN or infinite."""
    if amount is None or not math.isfinite(amount):
        return None
    return amount


def currency_symbol(currency) -> str:
    cur = currency or DEFAULT_CURRENCY
    return '€' if cur == 'EUR' else cur + ' '


def format_currency(amount, currency=None) -> str:
    whole = round_half_up(finite_amount(amount) or 0)
    grouped = f'{abs(whole):,}'.replace(',', '.')
    sign = '-' if whole < 0 else ''
    return currency_symbol(currency) + sign + grouped
