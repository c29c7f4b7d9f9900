from __future__ import annotations

from typing import List

from fastapi import APIRouter

from snowball.domain import DebtStatus
from snowball.schemas import DebtOrderRequest, DebtOut
from snowball.services import order_debts

router = APIRouter()


@router.post("/order", response_model=List[DebtOut])
def order(payload: DebtOrderRequest):
    """Rank the active debts and return them with their snowball positions.

    Paid debts are dropped; callers persist the returned positions.
    """
    active = [debt.to_record() for debt in payload.debts if debt.status == DebtStatus.ACTIVE]
    return [
        DebtOut(
            id=debt.id,
            name=debt.name,
            balance=debt.balance,
            interest_rate=debt.interest_rate,
            minimum_payment=debt.minimum_payment,
            is_ccj=debt.is_ccj,
            ccj_deadline=debt.ccj_deadline,
            snowball_position=debt.snowball_position,
        )
        for debt in order_debts(active)
    ]
