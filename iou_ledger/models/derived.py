"""Derived value objects computed by the engine, never persisted."""

from dataclasses import dataclass
from datetime import datetime

from iou_ledger.models.enums import LoanStatus


@dataclass(frozen=True)
class InterestPaymentStatus:
    """How far a loan's interest payments lag the monthly cadence."""

    months_overdue: int
    amount_due: int
    last_payment_date: datetime | None = None


@dataclass(frozen=True)
class LoanDerivedState:
    """Everything computed for one loan at one instant."""

    outstanding_principal: int
    outstanding_interest: int
    total_principal_repaid: int
    total_interest_paid: int
    accrued_interest: int
    monthly_interest: int
    interest_status: InterestPaymentStatus
    status: LoanStatus
    last_interest_payment_date: datetime

    @property
    def is_overdue(self) -> bool:
        return self.status == LoanStatus.OVERDUE

    @property
    def is_settled(self) -> bool:
        return self.outstanding_principal <= 0 and self.outstanding_interest <= 0


@dataclass(frozen=True)
class LoanSummary:
    """Portfolio totals across every loan."""

    total_lent: int
    total_outstanding_principal: int
    total_outstanding_interest: int
    total_principal_repaid: int
    total_interest_paid: int
