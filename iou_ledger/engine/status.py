"""Interest payment status and the active/overdue/paid state machine.

A loan is overdue once more than one whole month has passed since its last
interest payment (or its start date); a single month's gap is the normal
cadence. A loan is paid once both outstanding principal and outstanding
interest are zero. Interest on a paid loan stops accruing at its close date.
"""

from datetime import datetime
from typing import Iterable

from iou_ledger.engine.accrual import (
    accrued_interest,
    elapsed_whole_months,
    monthly_interest_amount,
    utc_now,
)
from iou_ledger.engine.balance import (
    outstanding_interest,
    outstanding_principal,
    payments_for_loan,
    total_interest_paid,
    total_principal_repaid,
)
from iou_ledger.models import (
    InterestPaymentStatus,
    Loan,
    LoanDerivedState,
    LoanStatus,
    Payment,
    PaymentType,
    parse_timestamp,
)

OVERDUE_AFTER_MONTHS = 1


def interest_status(
    loan: Loan,
    payments: Iterable[Payment],
    now: datetime | str | None = None,
) -> InterestPaymentStatus:
    """Unpaid whole months since the last interest payment and the amount due.

    The clock runs from ``loan.last_interest_payment_date`` (or the start
    date when unset). ``payments`` is accepted for signature parity with the
    balance functions; the stored date is authoritative here.
    """
    last_paid = loan.last_interest_payment_date or loan.start_date
    months = elapsed_whole_months(last_paid, now if now is not None else utc_now())
    return InterestPaymentStatus(
        months_overdue=months,
        amount_due=monthly_interest_amount(loan.amount, loan.interest_rate) * months,
        last_payment_date=loan.last_interest_payment_date,
    )


def is_overdue(
    loan: Loan,
    payments: Iterable[Payment],
    now: datetime | str | None = None,
) -> bool:
    """True when the loan is unpaid and more than one month of interest is unpaid."""
    if loan.status == LoanStatus.PAID:
        return False
    return interest_status(loan, payments, now).months_overdue > OVERDUE_AFTER_MONTHS


def latest_interest_payment_date(loan: Loan, payments: Iterable[Payment]) -> datetime:
    """Date of the chronologically latest interest payment, else the start date."""
    dates = [
        p.date
        for p in payments_for_loan(loan.loan_id, payments)
        if p.payment_type == PaymentType.INTEREST
    ]
    return max(dates, default=loan.start_date)


def accrual_cutoff(loan: Loan, now: datetime | str | None = None) -> datetime:
    """Instant up to which interest accrues: ``now``, or the close date of a paid loan."""
    now = parse_timestamp(now) if now is not None else utc_now()
    if loan.status == LoanStatus.PAID and loan.close_date is not None:
        return min(loan.close_date, now)
    return now


def derive_status(
    loan: Loan,
    payments: Iterable[Payment],
    now: datetime | str | None = None,
) -> LoanStatus:
    """Recompute a loan's status from its facts alone.

    Unlike :func:`is_overdue`, this ignores the stored status, so a paid
    loan whose settling payment was removed goes back to active or overdue.
    """
    payments = payments_for_loan(loan.loan_id, payments)
    now = parse_timestamp(now) if now is not None else utc_now()
    cutoff = accrual_cutoff(loan, now)

    if (
        outstanding_principal(loan, payments) <= 0
        and outstanding_interest(loan, payments, cutoff) <= 0
    ):
        return LoanStatus.PAID

    last_paid = latest_interest_payment_date(loan, payments)
    if elapsed_whole_months(last_paid, now) > OVERDUE_AFTER_MONTHS:
        return LoanStatus.OVERDUE
    return LoanStatus.ACTIVE


def derive_loan_state(
    loan: Loan,
    payments: Iterable[Payment],
    now: datetime | str | None = None,
) -> LoanDerivedState:
    """Every derived figure for ``loan`` at ``now``.

    Parameters
    ----------
    loan : Loan
        The loan; only its stored ``status``/``close_date`` influence the
        accrual cutoff.
    payments : Iterable[Payment]
        Payments, possibly for other loans too.
    now : datetime | str | None
        Evaluation instant (default now).

    Returns
    -------
    LoanDerivedState
        Outstanding figures, totals, interest status and derived status.
    """
    payments = payments_for_loan(loan.loan_id, payments)
    now = parse_timestamp(now) if now is not None else utc_now()
    cutoff = accrual_cutoff(loan, now)
    status = derive_status(loan, payments, now)
    last_paid = latest_interest_payment_date(loan, payments)
    # Nothing falls due on a paid loan after it closed
    months = elapsed_whole_months(last_paid, cutoff if status == LoanStatus.PAID else now)
    monthly = monthly_interest_amount(loan.amount, loan.interest_rate)

    return LoanDerivedState(
        outstanding_principal=outstanding_principal(loan, payments),
        outstanding_interest=outstanding_interest(loan, payments, cutoff),
        total_principal_repaid=total_principal_repaid(payments),
        total_interest_paid=total_interest_paid(payments),
        accrued_interest=accrued_interest(loan, cutoff),
        monthly_interest=monthly,
        interest_status=InterestPaymentStatus(
            months_overdue=months,
            amount_due=monthly * months,
            last_payment_date=last_paid,
        ),
        status=status,
        last_interest_payment_date=last_paid,
    )
