# vault_indexer/utils/amounts.py
"""
Utility functions for handling on-chain integer amounts and their
human-scale decimal values
"""

import functools
from decimal import Decimal, localcontext
from typing import Iterable, Optional, Union

ZERO_BD = Decimal(0)

# a uint256 has 78 decimal digits
ACCOUNTING_PRECISION = 78

RawAmount = Union[str, int, None]


def amount_to_int(amount: RawAmount) -> int:
    """Convert amount to int with robust type handling"""
    if amount is None:
        return 0
    if isinstance(amount, str):
        if amount.strip() == "":
            return 0
        return int(amount)
    return int(amount)


def add_amounts(amounts: Iterable[RawAmount]) -> int:
    return sum(amount_to_int(amt) for amt in amounts)


def is_positive(amount: RawAmount) -> bool:
    return amount_to_int(amount) > 0


def scale_down(amount: RawAmount, decimals: Optional[int]) -> Decimal:
    """Integer amount with `decimals` implied places -> exact Decimal.

    A token whose decimals could not be read is treated as having none.
    """
    # built from a string so wide amounts skip context rounding
    return Decimal(f"{amount_to_int(amount)}E-{decimals or 0}")


def safe_div(numerator: Decimal, denominator: Decimal) -> Optional[Decimal]:
    """None instead of an exception for zero denominators"""
    if denominator == ZERO_BD:
        return None
    return numerator / denominator


def accounting_precision(func):
    """Run `func` with enough decimal digits to add and subtract full uint256 amounts exactly"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with localcontext() as ctx:
            ctx.prec = ACCOUNTING_PRECISION
            return func(*args, **kwargs)
    return wrapper
