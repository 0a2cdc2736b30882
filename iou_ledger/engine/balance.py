"""Outstanding principal/interest and portfolio totals.

Pure computation: nothing here mutates a loan or a payment. Outstanding
figures are clamped at zero; overpayment is not tracked as credit.
"""

from collections import defaultdict
from datetime import datetime
from typing import Iterable

from iou_ledger.engine.accrual import accrued_interest, utc_now
from iou_ledger.models import Loan, LoanStatus, LoanSummary, Payment, PaymentType


def _sum_of_type(payments: Iterable[Payment], payment_type: PaymentType) -> int:
    return sum(p.amount for p in payments if p.payment_type == payment_type)


def payments_for_loan(loan_id: str, payments: Iterable[Payment]) -> list[Payment]:
    """Payments recorded against ``loan_id``."""
    return [p for p in payments if p.loan_id == loan_id]


def without_orphans(loans: Iterable[Loan], payments: Iterable[Payment]) -> list[Payment]:
    """Drop payments whose loan is not in ``loans``."""
    known = {loan.loan_id for loan in loans}
    return [p for p in payments if p.loan_id in known]


def total_principal_repaid(payments: Iterable[Payment]) -> int:
    """Sum of principal-type payment amounts."""
    return _sum_of_type(payments, PaymentType.PRINCIPAL)


def total_interest_paid(payments: Iterable[Payment]) -> int:
    """Sum of interest-type payment amounts."""
    return _sum_of_type(payments, PaymentType.INTEREST)


def outstanding_principal(loan: Loan, payments: Iterable[Payment]) -> int:
    """Principal still owed on ``loan``; payments for other loans are ignored."""
    repaid = total_principal_repaid(payments_for_loan(loan.loan_id, payments))
    return max(0, loan.amount - repaid)


def outstanding_interest(
    loan: Loan,
    payments: Iterable[Payment],
    as_of: datetime | str | None = None,
) -> int:
    """Accrued interest on ``loan`` not yet covered by its interest payments."""
    paid = total_interest_paid(payments_for_loan(loan.loan_id, payments))
    return max(0, accrued_interest(loan, as_of) - paid)


def portfolio_summary(
    loans: Iterable[Loan],
    payments: Iterable[Payment],
    as_of: datetime | str | None = None,
) -> LoanSummary:
    """Totals across every loan.

    Orphaned payments are excluded from every figure, and loans in ``paid``
    status contribute no outstanding interest.

    Parameters
    ----------
    loans : Iterable[Loan]
        All loans.
    payments : Iterable[Payment]
        All payments, possibly including orphans.
    as_of : datetime | str | None
        Accrual instant shared by every loan (default now).

    Returns
    -------
    LoanSummary
        Aggregate figures.
    """
    loans = list(loans)
    live = without_orphans(loans, payments)
    as_of = as_of if as_of is not None else utc_now()

    by_loan: dict[str, list[Payment]] = defaultdict(list)
    for payment in live:
        by_loan[payment.loan_id].append(payment)

    outstanding_interest_total = 0
    for loan in loans:
        if loan.status == LoanStatus.PAID:
            continue
        outstanding_interest_total += outstanding_interest(loan, by_loan[loan.loan_id], as_of)

    return LoanSummary(
        total_lent=sum(loan.amount for loan in loans),
        total_outstanding_principal=sum(
            outstanding_principal(loan, by_loan[loan.loan_id]) for loan in loans
        ),
        total_outstanding_interest=outstanding_interest_total,
        total_principal_repaid=total_principal_repaid(live),
        total_interest_paid=total_interest_paid(live),
    )
