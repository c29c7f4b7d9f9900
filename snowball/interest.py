"""Interest arithmetic for debt projections.

Rates are annual percentages (``18.99`` means 18.99% APR). Every charge is rounded to
pennies half-up at the point it is applied to a balance; balances themselves are carried
at full precision.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation, Overflow
from typing import Optional

from snowball.dates import add_months, days_in_year
from snowball.money import ZERO, min_money, to_money


DEFAULT_MAX_MONTHS = 600  # 50 years


def monthly_interest(balance: Decimal, annual_interest_rate_percent: Decimal) -> Decimal:
    """One month of interest: ``balance * rate / 100 / 12`` rounded to 2dp."""
    if balance <= 0 or annual_interest_rate_percent <= 0:
        return ZERO
    monthly_rate = Decimal(annual_interest_rate_percent) / Decimal(100) / Decimal(12)
    return to_money(balance * monthly_rate)


def daily_interest(
    balance: Decimal, annual_interest_rate_percent: Decimal, on: Optional[date] = None
) -> Decimal:
    """One day of interest, using 365 or 366 days depending on the year of ``on``."""
    if balance <= 0 or annual_interest_rate_percent <= 0:
        return ZERO
    on = on or date.today()
    daily_rate = Decimal(annual_interest_rate_percent) / Decimal(100) / Decimal(days_in_year(on.year))
    return to_money(balance * daily_rate)


def project_future_balance(
    balance: Decimal, annual_interest_rate_percent: Decimal, monthly_payment: Decimal, months: int
) -> Optional[Decimal]:
    """Balance after ``months`` of interest then payment.

    Returns ``None`` if the balance compounds beyond what Decimal can hold.
    """
    if months < 0:
        raise ValueError("Number of months cannot be negative")
    if months == 0:
        return balance
    if balance <= 0:
        return ZERO

    remaining = balance
    try:
        for _ in range(months):
            remaining += monthly_interest(remaining, annual_interest_rate_percent)
            remaining -= monthly_payment
            if remaining <= 0:
                return ZERO
        return to_money(remaining)
    except (InvalidOperation, Overflow):
        return None


def months_to_payoff(
    balance: Decimal,
    annual_interest_rate_percent: Decimal,
    monthly_payment: Decimal,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> Optional[int]:
    """Months until a single debt clears under a fixed payment.

    Returns ``None`` when the payment never outpaces interest or the debt is still
    outstanding after ``max_months``.
    """
    if balance <= 0:
        return 0
    if monthly_payment <= monthly_interest(balance, annual_interest_rate_percent):
        return None

    remaining = balance
    months = 0
    try:
        while remaining > 0 and months < max_months:
            months += 1
            remaining += monthly_interest(remaining, annual_interest_rate_percent)
            remaining -= monthly_payment
    except (InvalidOperation, Overflow):
        return None

    if remaining <= 0:
        return months
    return None


def payoff_date(
    balance: Decimal,
    annual_interest_rate_percent: Decimal,
    monthly_payment: Decimal,
    start_date: Optional[date] = None,
) -> Optional[date]:
    months = months_to_payoff(balance, annual_interest_rate_percent, monthly_payment)
    if months is None:
        return None
    return add_months(start_date or date.today(), months)


def total_interest(
    balance: Decimal,
    annual_interest_rate_percent: Decimal,
    monthly_payment: Decimal,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> Optional[Decimal]:
    """Interest paid over the life of a debt, or ``None`` if it never clears."""
    if monthly_payment <= monthly_interest(balance, annual_interest_rate_percent):
        return None

    remaining = balance
    paid = ZERO
    months = 0
    try:
        while remaining > 0 and months < max_months:
            months += 1
            interest = monthly_interest(remaining, annual_interest_rate_percent)
            paid += interest
            remaining += interest
            remaining -= min_money(monthly_payment, remaining)
    except (InvalidOperation, Overflow):
        return None

    if remaining > 0:
        return None
    return to_money(paid)
