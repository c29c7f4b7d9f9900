from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from snowball.config import Settings, get_settings
from snowball.domain import DebtRecord, DebtStatus
from snowball.income import calculate_disposable_income
from snowball.logging_config import get_logger
from snowball.money import money, to_money
from snowball.schemas import (
    DebtFreeDateRequest,
    DebtFreeDateResponse,
    DebtIn,
    DisposableIncomeRequest,
    DisposableIncomeResponse,
    PaymentScheduleItem,
    ProjectionEntryOut,
    ProjectionMonthOut,
    RolloverRequest,
    RolloverResponse,
    SnowballRequest,
    SnowballResponse,
)
from snowball.services import (
    calculate_monthly_payments,
    calculate_rollover,
    order_debts,
    project_debt_free_date,
)

router = APIRouter()
logger = get_logger("routers.calculations")


def active_ordered_debts(debts: List[DebtIn]) -> List[DebtRecord]:
    return order_debts(debt.to_record() for debt in debts if debt.status == DebtStatus.ACTIVE)


@router.post("/snowball", response_model=SnowballResponse)
def snowball(payload: SnowballRequest):
    schedule = calculate_monthly_payments(
        active_ordered_debts(payload.debts), money(payload.disposable_income)
    )
    return SnowballResponse(
        debts=[
            PaymentScheduleItem(
                debt_id=entry.debt_id,
                name=entry.name,
                balance=to_money(entry.balance),
                minimum_payment=to_money(entry.minimum_payment),
                monthly_payment=to_money(entry.monthly_payment),
                snowball_position=entry.snowball_position,
            )
            for entry in schedule.entries
        ],
        total_monthly_payment=to_money(schedule.total_monthly_payment),
        disposable_income=to_money(money(payload.disposable_income)),
    )


@router.post("/debt-free-date", response_model=DebtFreeDateResponse)
def debt_free_date(payload: DebtFreeDateRequest, settings: Settings = Depends(get_settings)):
    debts = active_ordered_debts(payload.debts)
    projection = project_debt_free_date(
        debts,
        money(payload.monthly_payment),
        start_date=payload.start_date,
        max_months=settings.MAX_PROJECTION_MONTHS,
    )
    logger.info(
        "Debt-free projection computed",
        extra={"debts": len(debts), "months": projection.months_to_debt_free},
    )
    return DebtFreeDateResponse(
        debt_free_date=projection.debt_free_date,
        months_to_debt_free=projection.months_to_debt_free,
        total_monthly_payment=to_money(money(payload.monthly_payment)),
        total_interest=to_money(projection.total_interest),
        schedule=[
            ProjectionMonthOut(
                month=month.month,
                year=month.year,
                period_start=month.period_start,
                debts=[
                    ProjectionEntryOut(
                        debt_id=entry.debt_id,
                        name=entry.name,
                        starting_balance=to_money(entry.starting_balance),
                        interest_charged=to_money(entry.interest_charged),
                        payment_applied=to_money(entry.payment_applied),
                        ending_balance=to_money(entry.ending_balance),
                        is_paid_off=entry.is_paid_off,
                    )
                    for entry in month.entries
                ],
            )
            for month in projection.schedule
        ],
    )


@router.post("/disposable-income", response_model=DisposableIncomeResponse)
def disposable_income(payload: DisposableIncomeRequest):
    result = calculate_disposable_income(
        [item.to_domain() for item in payload.incomes],
        [item.to_domain() for item in payload.expenses],
        money(payload.uc_deduction),
    )
    return DisposableIncomeResponse(
        gross_income=to_money(result.gross_income),
        total_expenses=to_money(result.total_expenses),
        uc_deduction=to_money(result.uc_deduction),
        disposable_income=to_money(result.disposable_income),
    )


@router.post("/rollover", response_model=RolloverResponse)
def rollover(payload: RolloverRequest):
    amount = calculate_rollover(money(payload.current_payment), money(payload.next_minimum))
    return RolloverResponse(amount=to_money(amount))
