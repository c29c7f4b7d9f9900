"""Monthly income/expense normalisation and the disposable-income figure.

The Universal Credit taper is computed elsewhere; it arrives here as a plain monthly
deduction.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable

from snowball.money import ZERO, sum_money


class Frequency(str, Enum):
    ONE_TIME = "one-time"
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"
    ANNUAL = "annual"


@dataclass(frozen=True)
class RecurringAmount:
    amount: Decimal
    frequency: Frequency = Frequency.MONTHLY
    uc_paid: bool = False


@dataclass(frozen=True)
class DisposableIncome:
    gross_income: Decimal
    total_expenses: Decimal
    uc_deduction: Decimal

    @property
    def disposable_income(self) -> Decimal:
        return self.gross_income - self.total_expenses - self.uc_deduction


def to_monthly_equivalent(amount: Decimal, frequency: Frequency) -> Decimal:
    if frequency is Frequency.WEEKLY:
        return amount * 52 / 12
    if frequency is Frequency.FORTNIGHTLY:
        return amount * 26 / 12
    if frequency is Frequency.MONTHLY:
        return amount
    if frequency is Frequency.ANNUAL:
        return amount / 12
    if frequency is Frequency.ONE_TIME:
        # not recurring, so it never contributes to a monthly total
        return ZERO
    raise ValueError(f"Unknown frequency: {frequency}")


def from_monthly_equivalent(monthly_amount: Decimal, frequency: Frequency) -> Decimal:
    if frequency is Frequency.WEEKLY:
        return monthly_amount * 12 / 52
    if frequency is Frequency.FORTNIGHTLY:
        return monthly_amount * 12 / 26
    if frequency is Frequency.ANNUAL:
        return monthly_amount * 12
    if frequency in (Frequency.MONTHLY, Frequency.ONE_TIME):
        return monthly_amount
    raise ValueError(f"Unknown frequency: {frequency}")


def to_annual_total(amount: Decimal, frequency: Frequency) -> Decimal:
    if frequency is Frequency.WEEKLY:
        return amount * 52
    if frequency is Frequency.FORTNIGHTLY:
        return amount * 26
    if frequency is Frequency.MONTHLY:
        return amount * 12
    if frequency in (Frequency.ANNUAL, Frequency.ONE_TIME):
        return amount
    raise ValueError(f"Unknown frequency: {frequency}")


def monthly_total(items: Iterable[RecurringAmount], exclude_uc_paid: bool = False) -> Decimal:
    return sum_money(
        to_monthly_equivalent(item.amount, item.frequency)
        for item in items
        if not (exclude_uc_paid and item.uc_paid)
    )


def calculate_disposable_income(
    incomes: Iterable[RecurringAmount],
    expenses: Iterable[RecurringAmount],
    uc_deduction: Decimal = ZERO,
) -> DisposableIncome:
    """Gross monthly income minus non-UC-paid expenses minus the UC deduction."""
    return DisposableIncome(
        gross_income=monthly_total(incomes),
        total_expenses=monthly_total(expenses, exclude_uc_paid=True),
        uc_deduction=uc_deduction,
    )
