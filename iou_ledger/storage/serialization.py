"""Shared serialization utilities for ledger storage."""

from dataclasses import fields
from datetime import date, datetime
from enum import Enum
from typing import Any, TypeVar

from iou_ledger.exceptions import InvalidInputError
from iou_ledger.models import Loan, Payment

_T = TypeVar("_T", Loan, Payment)


def record_to_dict(obj: Any) -> dict:
    """Serialize a loan or payment into a JSON-ready dict.

    Enums become their values and datetimes ISO-8601 strings; loans and
    payments hold no nested dataclasses.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def _from_dict(cls: type[_T], data: dict[str, Any]) -> _T:
    if not isinstance(data, dict):
        raise InvalidInputError(f"{cls.__name__} record must be an object, got {data!r}")
    known = {f.name for f in fields(cls)}
    try:
        return cls(**{k: v for k, v in data.items() if k in known})
    except TypeError as e:
        # Missing required fields
        raise InvalidInputError(f"Incomplete {cls.__name__} record: {e}") from e


def loan_from_dict(data: dict[str, Any]) -> Loan:
    """Rebuild a :class:`Loan` from its serialized form; unknown keys are ignored."""
    return _from_dict(Loan, data)


def payment_from_dict(data: dict[str, Any]) -> Payment:
    """Rebuild a :class:`Payment` from its serialized form; unknown keys are ignored."""
    return _from_dict(Payment, data)
