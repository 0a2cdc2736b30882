"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from iou_ledger.models import InterestType, Loan, Payment, PaymentType

T0 = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def days(n: int) -> datetime:
    """Instant ``n`` days after T0."""
    return T0 + timedelta(days=n)


class FixedClock:
    """Settable clock for the store."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, n_days: int) -> datetime:
        self.now = self.now + timedelta(days=n_days)
        return self.now


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def t0() -> datetime:
    """Loan start instant."""
    return T0


@pytest.fixture
def clock() -> FixedClock:
    """Clock starting at T0."""
    return FixedClock()


@pytest.fixture
def simple_loan() -> Loan:
    """1000 at 5% per month, simple interest, starting T0."""
    return Loan(
        loan_id="loan-test-001",
        borrower_name="Alex Borrower",
        amount=1000,
        interest_rate=5,
        interest_type=InterestType.SIMPLE,
        start_date=T0,
        last_interest_payment_date=T0,
    )


@pytest.fixture
def compound_loan() -> Loan:
    """1000 at 5% per month, compounded monthly, starting T0."""
    return Loan(
        loan_id="loan-test-002",
        borrower_name="Sam Borrower",
        amount=1000,
        interest_rate=5,
        interest_type=InterestType.COMPOUND,
        start_date=T0,
        last_interest_payment_date=T0,
    )


@pytest.fixture
def make_payment() -> Callable[..., Payment]:
    """Factory for payments against the simple loan."""
    counter = iter(range(1, 10_000))

    def _make(
        amount: int,
        payment_type: PaymentType = PaymentType.PRINCIPAL,
        date: datetime = T0,
        loan_id: str = "loan-test-001",
    ) -> Payment:
        return Payment(
            payment_id=f"pay-test-{next(counter):03d}",
            loan_id=loan_id,
            amount=amount,
            date=date,
            payment_type=payment_type,
        )

    return _make
