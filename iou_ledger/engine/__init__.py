"""Interest accrual, balance and status engine."""

from iou_ledger.engine.accrual import (
    MONTH,
    accrued_interest,
    compound_interest,
    elapsed_whole_months,
    monthly_interest_amount,
    round_currency,
    simple_interest,
)
from iou_ledger.engine.balance import (
    outstanding_interest,
    outstanding_principal,
    payments_for_loan,
    portfolio_summary,
    total_interest_paid,
    total_principal_repaid,
    without_orphans,
)
from iou_ledger.engine.status import (
    OVERDUE_AFTER_MONTHS,
    accrual_cutoff,
    derive_loan_state,
    derive_status,
    interest_status,
    is_overdue,
    latest_interest_payment_date,
)

__all__ = [
    "MONTH",
    "OVERDUE_AFTER_MONTHS",
    "accrual_cutoff",
    "accrued_interest",
    "compound_interest",
    "derive_loan_state",
    "derive_status",
    "elapsed_whole_months",
    "interest_status",
    "is_overdue",
    "latest_interest_payment_date",
    "monthly_interest_amount",
    "outstanding_interest",
    "outstanding_principal",
    "payments_for_loan",
    "portfolio_summary",
    "round_currency",
    "simple_interest",
    "total_interest_paid",
    "total_principal_repaid",
    "without_orphans",
]
