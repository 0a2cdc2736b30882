"""Loan and payment records."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, TypeVar

from iou_ledger.exceptions import InvalidInputError
from iou_ledger.models.enums import InterestType, LoanStatus, PaymentType

_E = TypeVar("_E", bound=Enum)


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Parameters
    ----------
    value : str | datetime
        ISO string (a trailing ``Z`` is accepted) or a datetime.

    Returns
    -------
    datetime
        Timezone-aware datetime.

    Raises
    ------
    InvalidInputError
        If the string cannot be parsed.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if not isinstance(value, str):
        raise InvalidInputError(f"Expected ISO timestamp, got {type(value).__name__}")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise InvalidInputError(f"Malformed timestamp: {value!r}") from e
    return ensure_utc(parsed)


def require_whole_amount(field_name: str, value: Any) -> int:
    """Validate a non-negative whole-unit integer."""
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{field_name} must be a whole number, got {value!r}")
    if value < 0:
        raise InvalidInputError(f"{field_name} must be non-negative, got {value}")
    return value


def _coerce_enum(enum_cls: type[_E], value: Any) -> _E:
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidInputError(
            f"Invalid {enum_cls.__name__} {value!r} (expected one of: {allowed})"
        ) from e


def _optional_timestamp(value: str | datetime | None) -> datetime | None:
    return None if value is None else parse_timestamp(value)


@dataclass
class Loan:
    """An IOU extended to a borrower.

    ``status``, ``close_date`` and ``last_interest_payment_date`` are derived
    fields kept in sync by :class:`~iou_ledger.store.LedgerStore`.
    """

    loan_id: str
    borrower_name: str
    amount: int  # Principal, whole currency units
    interest_rate: int  # Monthly percentage (5 = 5% of principal per month)
    interest_type: InterestType
    start_date: datetime
    status: LoanStatus = LoanStatus.ACTIVE
    last_interest_payment_date: datetime | None = None
    close_date: datetime | None = None
    notes: str = ""
    borrower_photo: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.amount = require_whole_amount("amount", self.amount)
        self.interest_rate = require_whole_amount("interest_rate", self.interest_rate)
        self.interest_type = _coerce_enum(InterestType, self.interest_type)
        self.status = _coerce_enum(LoanStatus, self.status)
        self.start_date = parse_timestamp(self.start_date)
        self.last_interest_payment_date = _optional_timestamp(self.last_interest_payment_date)
        self.close_date = _optional_timestamp(self.close_date)
        self.created_at = _optional_timestamp(self.created_at)
        self.updated_at = _optional_timestamp(self.updated_at)


@dataclass
class Payment:
    """A transfer from borrower to lender against one loan."""

    payment_id: str
    loan_id: str
    amount: int
    date: datetime
    payment_type: PaymentType
    note: str = ""
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        self.amount = require_whole_amount("amount", self.amount)
        self.payment_type = _coerce_enum(PaymentType, self.payment_type)
        self.date = parse_timestamp(self.date)
        self.created_at = _optional_timestamp(self.created_at)
