from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, condecimal, model_validator

from snowball.domain import DebtRecord, DebtStatus
from snowball.income import Frequency, RecurringAmount


Money = condecimal(max_digits=18, decimal_places=2)
# Responses may carry compounded balances from projections that never converge.
MoneyOut = condecimal(decimal_places=2)
Rate = condecimal(decimal_places=4)  # percentage, e.g. 18.99 means 18.99%


class DebtIn(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    balance: Money = Field(..., ge=0)
    interest_rate: Rate = Field(..., ge=0)
    minimum_payment: Money = Field(..., ge=0)
    is_ccj: bool = False
    ccj_deadline: Optional[date] = None
    status: DebtStatus = DebtStatus.ACTIVE

    @model_validator(mode="after")
    def check_ccj_deadline(self) -> "DebtIn":
        if self.is_ccj and self.ccj_deadline is None:
            raise ValueError("ccj_deadline is required when is_ccj is true")
        if not self.is_ccj and self.ccj_deadline is not None:
            raise ValueError("ccj_deadline is only allowed when is_ccj is true")
        return self

    def to_record(self) -> DebtRecord:
        return DebtRecord(
            id=self.id,
            name=self.name,
            balance=self.balance,
            interest_rate=self.interest_rate,
            minimum_payment=self.minimum_payment,
            is_ccj=self.is_ccj,
            ccj_deadline=self.ccj_deadline,
            status=self.status,
        )


class DebtOut(BaseModel):
    id: str
    name: str
    balance: MoneyOut
    interest_rate: Rate
    minimum_payment: MoneyOut
    is_ccj: bool
    ccj_deadline: Optional[date] = None
    snowball_position: int


class DebtOrderRequest(BaseModel):
    debts: List[DebtIn]


class SnowballRequest(BaseModel):
    debts: List[DebtIn]
    disposable_income: Money


class PaymentScheduleItem(BaseModel):
    debt_id: str
    name: str
    balance: MoneyOut
    minimum_payment: MoneyOut
    monthly_payment: MoneyOut
    snowball_position: int


class SnowballResponse(BaseModel):
    debts: List[PaymentScheduleItem]
    total_monthly_payment: MoneyOut
    disposable_income: MoneyOut


class DebtFreeDateRequest(BaseModel):
    debts: List[DebtIn]
    monthly_payment: Money
    start_date: Optional[date] = None


class ProjectionEntryOut(BaseModel):
    debt_id: str
    name: str
    starting_balance: MoneyOut
    interest_charged: MoneyOut
    payment_applied: MoneyOut
    ending_balance: MoneyOut
    is_paid_off: bool


class ProjectionMonthOut(BaseModel):
    month: int
    year: int
    period_start: date
    debts: List[ProjectionEntryOut]


class DebtFreeDateResponse(BaseModel):
    debt_free_date: Optional[date] = None
    months_to_debt_free: Optional[int] = None
    total_monthly_payment: MoneyOut
    total_interest: MoneyOut
    schedule: List[ProjectionMonthOut]


class RecurringAmountIn(BaseModel):
    amount: Money = Field(..., ge=0)
    frequency: Frequency = Frequency.MONTHLY
    uc_paid: bool = False

    def to_domain(self) -> RecurringAmount:
        return RecurringAmount(amount=self.amount, frequency=self.frequency, uc_paid=self.uc_paid)


class DisposableIncomeRequest(BaseModel):
    incomes: List[RecurringAmountIn] = Field(default_factory=list)
    expenses: List[RecurringAmountIn] = Field(default_factory=list)
    uc_deduction: Money = Field(default=0, ge=0)


class DisposableIncomeResponse(BaseModel):
    gross_income: MoneyOut
    total_expenses: MoneyOut
    uc_deduction: MoneyOut
    disposable_income: MoneyOut


class RolloverRequest(BaseModel):
    current_payment: Money = Field(..., ge=0)
    next_minimum: Money = Field(..., ge=0)


class RolloverResponse(BaseModel):
    amount: MoneyOut
