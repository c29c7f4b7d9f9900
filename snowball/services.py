"""Debt snowball engine.

Debts are ranked once (CCJ debts by deadline, then everything else by smallest balance),
the focused debt takes every penny above the minimums, and each cleared debt's minimum
rolls onto whichever debt is focused next. All functions here are pure.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal, InvalidOperation, Overflow
from typing import Iterable, List, Optional

from snowball.dates import add_months, today
from snowball.domain import (
    DebtFreeProjection,
    DebtRecord,
    MonthlyProjection,
    MonthlyProjectionEntry,
    PaymentSchedule,
    PaymentScheduleEntry,
)
from snowball.interest import DEFAULT_MAX_MONTHS, monthly_interest
from snowball.logging_config import get_logger
from snowball.money import ZERO, min_money, sum_money

logger = get_logger("services")


def order_debts(debts: Iterable[DebtRecord]) -> List[DebtRecord]:
    """Return debts in snowball order with ``snowball_position`` set to 1..N.

    CCJ debts come first, earliest deadline first. The rest follow by ascending
    balance. Ties keep their input order.
    """
    debts = list(debts)
    for debt in debts:
        assert not debt.is_ccj or debt.ccj_deadline is not None, (
            f"CCJ debt {debt.id} has no deadline"
        )

    ccj_debts = sorted((d for d in debts if d.is_ccj), key=lambda d: d.ccj_deadline)
    other_debts = sorted((d for d in debts if not d.is_ccj), key=lambda d: d.balance)

    return [
        replace(debt, snowball_position=position)
        for position, debt in enumerate(ccj_debts + other_debts, start=1)
    ]


def calculate_monthly_payments(
    ordered_debts: List[DebtRecord], disposable_income: Decimal
) -> PaymentSchedule:
    """Split one month of disposable income across already-ordered debts.

    Every debt gets its minimum and the first debt also gets any surplus. When income
    does not cover the minimums, the minimums are still reported in full, so the total
    can exceed ``disposable_income``.
    """
    if not ordered_debts:
        return PaymentSchedule(entries=[], total_monthly_payment=ZERO)

    total_minimums = sum_money(debt.minimum_payment for debt in ordered_debts)
    surplus = disposable_income - total_minimums
    if surplus < 0:
        logger.info(
            "Disposable income below total minimum payments",
            extra={
                "disposable_income": disposable_income,
                "total_minimums": total_minimums,
            },
        )
        surplus = ZERO

    entries: List[PaymentScheduleEntry] = []
    for index, debt in enumerate(ordered_debts):
        payment = debt.minimum_payment + surplus if index == 0 else debt.minimum_payment
        entries.append(
            PaymentScheduleEntry(
                debt_id=debt.id,
                name=debt.name,
                balance=debt.balance,
                minimum_payment=debt.minimum_payment,
                monthly_payment=payment,
                snowball_position=index + 1,
            )
        )

    return PaymentSchedule(
        entries=entries,
        total_monthly_payment=sum_money(entry.monthly_payment for entry in entries),
    )


def calculate_rollover(current_payment: Decimal, next_minimum: Decimal) -> Decimal:
    return current_payment + next_minimum


def _paid_off_entry(debt: DebtRecord) -> MonthlyProjectionEntry:
    return MonthlyProjectionEntry(
        debt_id=debt.id,
        name=debt.name,
        starting_balance=ZERO,
        interest_charged=ZERO,
        payment_applied=ZERO,
        ending_balance=ZERO,
        is_paid_off=True,
    )


def _simulate_month(
    ordered_debts: List[DebtRecord],
    balances: List[Decimal],
    paid_off: List[bool],
    surplus: Decimal,
) -> List[MonthlyProjectionEntry]:
    """Charge interest and apply one month of payments, updating the working state."""
    # Freed minimums from every debt cleared in earlier months.
    rollover = surplus
    for index, debt in enumerate(ordered_debts):
        if paid_off[index]:
            rollover = calculate_rollover(rollover, debt.minimum_payment)
    focused = paid_off.index(False)

    entries: List[MonthlyProjectionEntry] = []
    for index, debt in enumerate(ordered_debts):
        if paid_off[index]:
            entries.append(_paid_off_entry(debt))
            continue

        starting_balance = balances[index]
        interest = monthly_interest(starting_balance, debt.interest_rate)
        amount_due = starting_balance + interest

        payment = debt.minimum_payment
        if index == focused:
            payment = calculate_rollover(rollover, payment)
        payment = min_money(payment, amount_due)

        ending_balance = amount_due - payment
        if ending_balance <= 0:
            ending_balance = ZERO
            paid_off[index] = True
        balances[index] = ending_balance

        entries.append(
            MonthlyProjectionEntry(
                debt_id=debt.id,
                name=debt.name,
                starting_balance=starting_balance,
                interest_charged=interest,
                payment_applied=payment,
                ending_balance=ending_balance,
                is_paid_off=paid_off[index],
            )
        )
    return entries


def project_debt_free_date(
    ordered_debts: List[DebtRecord],
    monthly_payment: Decimal,
    *,
    start_date: Optional[date] = None,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> DebtFreeProjection:
    """Simulate the snowball month by month until every debt is cleared.

    ``ordered_debts`` must already be in snowball order; the order is never revisited
    during the run. Month 1 is labelled ``start_date`` (today by default) and later
    months step forward by calendar month. Returns a projection with ``None`` date and
    month count when ``monthly_payment`` is below the minimums or the debts are still
    outstanding after ``max_months``.
    """
    start = start_date or today()
    if not ordered_debts:
        return DebtFreeProjection(debt_free_date=start, months_to_debt_free=0, schedule=[])

    total_minimums = sum_money(debt.minimum_payment for debt in ordered_debts)
    if monthly_payment < total_minimums:
        logger.info(
            "Projection infeasible: payment below total minimums",
            extra={
                "monthly_payment": monthly_payment,
                "total_minimums": total_minimums,
            },
        )
        return DebtFreeProjection(debt_free_date=None, months_to_debt_free=None, schedule=[])

    surplus = monthly_payment - total_minimums
    balances = [debt.balance for debt in ordered_debts]
    paid_off = [False] * len(ordered_debts)
    schedule: List[MonthlyProjection] = []
    months = 0

    while not all(paid_off) and months < max_months:
        label = add_months(start, months)
        months += 1
        try:
            entries = _simulate_month(ordered_debts, balances, paid_off, surplus)
        except (InvalidOperation, Overflow):
            # Balances compounded past what Decimal can represent.
            logger.warning(
                "Projection diverged",
                extra={"month": months, "debts": len(ordered_debts)},
            )
            return DebtFreeProjection(
                debt_free_date=None, months_to_debt_free=None, schedule=schedule
            )
        schedule.append(MonthlyProjection(period_start=label, entries=entries))

    if all(paid_off):
        debt_free_date = schedule[-1].period_start
        logger.debug(
            "Projection converged",
            extra={"months": months, "debt_free_date": debt_free_date},
        )
        return DebtFreeProjection(
            debt_free_date=debt_free_date, months_to_debt_free=months, schedule=schedule
        )

    logger.warning(
        "Projection did not converge within month cap",
        extra={"max_months": max_months, "debts": len(ordered_debts)},
    )
    return DebtFreeProjection(debt_free_date=None, months_to_debt_free=None, schedule=schedule)
