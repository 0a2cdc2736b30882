"""Interest accrual on a loan's principal over elapsed whole months.

A month is a fixed 30-day unit, not a calendar month. Interest is computed
exactly as a fraction of whole currency units and rounded once at the end,
so every result is a whole number of units.
"""

from datetime import datetime, timedelta, timezone
from fractions import Fraction

from iou_ledger.models import InterestType, Loan, parse_timestamp, require_whole_amount

MONTH = timedelta(days=30)


def utc_now() -> datetime:
    """Current instant, used only when a caller omits ``as_of``."""
    return datetime.now(timezone.utc)


def round_currency(value: Fraction | int) -> int:
    """Round an exact amount to whole currency units, halves to even.

    Exact halves go to the even neighbour, unlike a half-up ``Math.round``:
    ``Fraction(1, 2)`` is 0 and ``Fraction(205, 2)`` is 102, so
    ``monthly_interest_amount(50, 1)`` is 0 rather than 1. One rule for every
    figure keeps compound interest at or above simple interest.
    """
    return round(Fraction(value))


def monthly_interest_amount(principal: int, monthly_rate_percent: int) -> int:
    """Fixed per-month interest charge on ``principal``.

    Parameters
    ----------
    principal : int
        Loan principal in whole units.
    monthly_rate_percent : int
        Monthly rate as a percentage.

    Returns
    -------
    int
        ``round(principal * rate / 100)``.
    """
    require_whole_amount("principal", principal)
    require_whole_amount("monthly_rate_percent", monthly_rate_percent)
    return round_currency(Fraction(principal * monthly_rate_percent, 100))


def elapsed_whole_months(start: datetime | str, end: datetime | str) -> int:
    """Whole 30-day months between two instants, floored at zero."""
    delta = parse_timestamp(end) - parse_timestamp(start)
    if delta <= timedelta(0):
        return 0
    return delta // MONTH


def simple_interest(
    principal: int,
    monthly_rate_percent: int,
    start: datetime | str,
    end: datetime | str | None = None,
) -> int:
    """Non-compounding interest for the whole months between ``start`` and ``end``."""
    require_whole_amount("principal", principal)
    require_whole_amount("monthly_rate_percent", monthly_rate_percent)
    months = elapsed_whole_months(start, end if end is not None else utc_now())
    return round_currency(Fraction(principal * monthly_rate_percent * months, 100))


def compound_interest(
    principal: int,
    monthly_rate_percent: int,
    start: datetime | str,
    end: datetime | str | None = None,
) -> int:
    """Interest compounded once per elapsed whole month.

    ``principal * (1 + rate/100) ** months - principal``, evaluated exactly:
    1000 at 5% over two months is 102.5, which rounds to 102.
    """
    require_whole_amount("principal", principal)
    require_whole_amount("monthly_rate_percent", monthly_rate_percent)
    months = elapsed_whole_months(start, end if end is not None else utc_now())
    growth = Fraction(100 + monthly_rate_percent, 100) ** months
    return round_currency(principal * growth - principal)


def accrued_interest(loan: Loan, as_of: datetime | str | None = None) -> int:
    """Interest accrued on ``loan`` from its start date to ``as_of`` (default now)."""
    if loan.interest_type == InterestType.COMPOUND:
        return compound_interest(loan.amount, loan.interest_rate, loan.start_date, as_of)
    return simple_interest(loan.amount, loan.interest_rate, loan.start_date, as_of)
