from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP, getcontext, localcontext
from typing import Iterable, Union


# Set high precision for intermediate calculations
getcontext().prec = 28


TWOPLACES = Decimal("0.01")
ZERO = Decimal(0)

MoneyLike = Union[Decimal, int, str, float]


def money(value: MoneyLike) -> Decimal:
    """Build a Decimal from user-facing input.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` rather than its
    binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def to_money(value: Decimal) -> Decimal:
    """Round to pennies half-up, whatever the size of ``value``.

    Precision is raised locally so every integer digit plus two decimals fits.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def add_money(a: Decimal, b: Decimal) -> Decimal:
    return a + b


def subtract_money(a: Decimal, b: Decimal) -> Decimal:
    return a - b


def multiply_money(amount: Decimal, factor: MoneyLike) -> Decimal:
    return amount * money(factor)


def divide_money(amount: Decimal, divisor: MoneyLike) -> Decimal:
    return amount / money(divisor)


def sum_money(amounts: Iterable[Decimal]) -> Decimal:
    total = ZERO
    for amount in amounts:
        total += amount
    return total


def min_money(a: Decimal, b: Decimal) -> Decimal:
    return a if a <= b else b


def max_money(a: Decimal, b: Decimal) -> Decimal:
    return a if a >= b else b


def compare_money(a: Decimal, b: Decimal) -> int:
    """Return -1, 0 or 1."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def is_zero(amount: Decimal) -> bool:
    return amount == 0


def is_positive(amount: Decimal) -> bool:
    return amount > 0


def is_negative(amount: Decimal) -> bool:
    return amount < 0


def format_money(amount: MoneyLike, symbol: str = "£") -> str:
    """Render an amount as a currency string, e.g. ``£1,234.56``."""
    rounded = to_money(money(amount))
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"
