"""Ledger domain models."""

from iou_ledger.models.derived import InterestPaymentStatus, LoanDerivedState, LoanSummary
from iou_ledger.models.enums import InterestType, LoanStatus, PaymentType
from iou_ledger.models.loan import (
    Loan,
    Payment,
    ensure_utc,
    parse_timestamp,
    require_whole_amount,
)

__all__ = [
    "InterestPaymentStatus",
    "InterestType",
    "Loan",
    "LoanDerivedState",
    "LoanStatus",
    "LoanSummary",
    "Payment",
    "PaymentType",
    "ensure_utc",
    "parse_timestamp",
    "require_whole_amount",
]
