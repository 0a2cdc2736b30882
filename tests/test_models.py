"""Tests for ledger models and their validation."""

from datetime import datetime, timedelta, timezone

import pytest

from iou_ledger.exceptions import InvalidInputError
from iou_ledger.models import (
    InterestPaymentStatus,
    InterestType,
    Loan,
    LoanDerivedState,
    LoanStatus,
    Payment,
    PaymentType,
    parse_timestamp,
)


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_parses_zulu_suffix(self) -> None:
        parsed = parse_timestamp("2024-01-01T09:00:00.000Z")

        assert parsed == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

    def test_parses_offset(self) -> None:
        parsed = parse_timestamp("2024-01-01T10:00:00+01:00")

        assert parsed == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

    def test_naive_is_utc(self) -> None:
        parsed = parse_timestamp(datetime(2024, 1, 1))

        assert parsed.tzinfo is timezone.utc

    def test_malformed_raises(self) -> None:
        with pytest.raises(InvalidInputError, match="Malformed timestamp"):
            parse_timestamp("next tuesday")

    def test_non_string_raises(self) -> None:
        with pytest.raises(InvalidInputError):
            parse_timestamp(20240101)  # type: ignore[arg-type]


class TestLoan:
    """Tests for Loan model."""

    def test_loan_creation(self, t0: datetime) -> None:
        loan = Loan(
            loan_id="loan-001",
            borrower_name="Jo",
            amount=500,
            interest_rate=2,
            interest_type=InterestType.SIMPLE,
            start_date=t0,
        )

        assert loan.status == LoanStatus.ACTIVE
        assert loan.last_interest_payment_date is None
        assert loan.close_date is None
        assert loan.notes == ""
        assert loan.borrower_photo is None

    def test_string_fields_are_coerced(self) -> None:
        loan = Loan(
            loan_id="loan-001",
            borrower_name="Jo",
            amount=500,
            interest_rate=2,
            interest_type="compound",
            start_date="2024-01-01T00:00:00Z",
            status="overdue",
        )

        assert loan.interest_type is InterestType.COMPOUND
        assert loan.status is LoanStatus.OVERDUE
        assert loan.start_date.tzinfo is not None

    @pytest.mark.parametrize("amount", [-1, 10.5, "100", True])
    def test_invalid_amount(self, amount: object, t0: datetime) -> None:
        with pytest.raises(InvalidInputError):
            Loan(
                loan_id="loan-001",
                borrower_name="Jo",
                amount=amount,  # type: ignore[arg-type]
                interest_rate=2,
                interest_type=InterestType.SIMPLE,
                start_date=t0,
            )

    def test_negative_rate(self, t0: datetime) -> None:
        with pytest.raises(InvalidInputError, match="interest_rate"):
            Loan(
                loan_id="loan-001",
                borrower_name="Jo",
                amount=100,
                interest_rate=-5,
                interest_type=InterestType.SIMPLE,
                start_date=t0,
            )

    def test_unknown_interest_type(self, t0: datetime) -> None:
        with pytest.raises(InvalidInputError, match="InterestType"):
            Loan(
                loan_id="loan-001",
                borrower_name="Jo",
                amount=100,
                interest_rate=5,
                interest_type="daily",  # type: ignore[arg-type]
                start_date=t0,
            )


class TestPayment:
    """Tests for Payment model."""

    def test_payment_creation(self, t0: datetime) -> None:
        payment = Payment(
            payment_id="pay-001",
            loan_id="loan-001",
            amount=50,
            date=t0,
            payment_type="interest",
        )

        assert payment.payment_type is PaymentType.INTEREST
        assert payment.note == ""
        assert payment.created_at is None

    def test_negative_amount(self, t0: datetime) -> None:
        with pytest.raises(InvalidInputError, match="non-negative"):
            Payment(
                payment_id="pay-001",
                loan_id="loan-001",
                amount=-50,
                date=t0,
                payment_type=PaymentType.PRINCIPAL,
            )

    def test_unknown_type(self, t0: datetime) -> None:
        with pytest.raises(InvalidInputError, match="PaymentType"):
            Payment(
                payment_id="pay-001",
                loan_id="loan-001",
                amount=50,
                date=t0,
                payment_type="fee",  # type: ignore[arg-type]
            )


class TestDerivedModels:
    """Tests for derived value objects."""

    def test_interest_status_is_frozen(self) -> None:
        status = InterestPaymentStatus(months_overdue=1, amount_due=50)

        with pytest.raises(AttributeError):
            status.months_overdue = 2  # type: ignore[misc]

    def test_loan_derived_state_flags(self, t0: datetime) -> None:
        state = LoanDerivedState(
            outstanding_principal=0,
            outstanding_interest=0,
            total_principal_repaid=1000,
            total_interest_paid=100,
            accrued_interest=100,
            monthly_interest=50,
            interest_status=InterestPaymentStatus(0, 0, t0),
            status=LoanStatus.PAID,
            last_interest_payment_date=t0 + timedelta(days=60),
        )

        assert state.is_settled is True
        assert state.is_overdue is False
