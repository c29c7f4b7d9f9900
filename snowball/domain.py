from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from snowball.money import sum_money


class DebtStatus(str, Enum):
    ACTIVE = "active"
    PAID = "paid"


@dataclass(frozen=True)
class DebtRecord:
    """A debt as handed to the engine for a single calculation.

    ``ccj_deadline`` must be set whenever ``is_ccj`` is true. The validation layer owns
    that rule; the engine only asserts it.
    """

    id: str
    name: str
    balance: Decimal
    interest_rate: Decimal
    minimum_payment: Decimal
    is_ccj: bool = False
    ccj_deadline: Optional[date] = None
    status: DebtStatus = DebtStatus.ACTIVE
    snowball_position: Optional[int] = None


@dataclass(frozen=True)
class PaymentScheduleEntry:
    debt_id: str
    name: str
    balance: Decimal
    minimum_payment: Decimal
    monthly_payment: Decimal
    snowball_position: int


@dataclass(frozen=True)
class PaymentSchedule:
    entries: List[PaymentScheduleEntry]
    total_monthly_payment: Decimal

    @property
    def total_minimum_payment(self) -> Decimal:
        return sum_money(entry.minimum_payment for entry in self.entries)


@dataclass(frozen=True)
class MonthlyProjectionEntry:
    debt_id: str
    name: str
    starting_balance: Decimal
    interest_charged: Decimal
    payment_applied: Decimal
    ending_balance: Decimal
    is_paid_off: bool


@dataclass(frozen=True)
class MonthlyProjection:
    period_start: date
    entries: List[MonthlyProjectionEntry]

    @property
    def month(self) -> int:
        return self.period_start.month

    @property
    def year(self) -> int:
        return self.period_start.year


@dataclass(frozen=True)
class DebtFreeProjection:
    debt_free_date: Optional[date]
    months_to_debt_free: Optional[int]
    schedule: List[MonthlyProjection] = field(default_factory=list)

    @property
    def is_feasible(self) -> bool:
        return self.months_to_debt_free is not None

    @property
    def total_interest(self) -> Decimal:
        return sum_money(
            entry.interest_charged for month in self.schedule for entry in month.entries
        )
