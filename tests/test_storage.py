"""Tests for serialization and JSON file storage."""

import json
from datetime import date
from pathlib import Path

import pytest
from conftest import T0

from iou_ledger.exceptions import InvalidInputError, StorageError
from iou_ledger.models import InterestType, Loan, LoanStatus, Payment, PaymentType
from iou_ledger.storage import JsonFileStorage
from iou_ledger.storage.serialization import (
    loan_from_dict,
    payment_from_dict,
    record_to_dict,
    serialize_value,
)


class TestSerializeValue:
    """Tests for serialize_value."""

    def test_enum(self) -> None:
        assert serialize_value(LoanStatus.OVERDUE) == "overdue"

    def test_datetime(self) -> None:
        assert serialize_value(T0) == "2024-01-01T09:00:00+00:00"

    def test_date(self) -> None:
        assert serialize_value(date(2024, 1, 15)) == "2024-01-15"

    def test_nested(self) -> None:
        value = {"type": PaymentType.INTEREST, "dates": [T0]}

        assert serialize_value(value) == {
            "type": "interest",
            "dates": ["2024-01-01T09:00:00+00:00"],
        }

    def test_passthrough(self) -> None:
        assert serialize_value(42) == 42
        assert serialize_value(None) is None


class TestRecordToDict:
    """Tests for record_to_dict."""

    def test_loan(self, simple_loan: Loan) -> None:
        data = record_to_dict(simple_loan)

        assert data["loan_id"] == "loan-test-001"
        assert data["interest_type"] == "simple"
        assert data["status"] == "active"
        assert data["start_date"] == "2024-01-01T09:00:00+00:00"
        assert data["close_date"] is None

    def test_payment(self) -> None:
        payment = Payment("p1", "l1", 50, T0, PaymentType.INTEREST, note="cash")

        assert record_to_dict(payment) == {
            "payment_id": "p1",
            "loan_id": "l1",
            "amount": 50,
            "date": "2024-01-01T09:00:00+00:00",
            "payment_type": "interest",
            "note": "cash",
            "created_at": None,
        }


class TestFromDict:
    """Tests for rebuilding records."""

    def test_loan_from_dict(self, simple_loan: Loan) -> None:
        assert loan_from_dict(record_to_dict(simple_loan)) == simple_loan

    def test_unknown_keys_ignored(self, simple_loan: Loan) -> None:
        data = dict(record_to_dict(simple_loan), createdBy="app")

        assert loan_from_dict(data) == simple_loan

    def test_payment_accepts_zulu_dates(self) -> None:
        payment = payment_from_dict(
            {
                "payment_id": "p1",
                "loan_id": "l1",
                "amount": 50,
                "date": "2024-01-01T09:00:00.000Z",
                "payment_type": "interest",
            }
        )

        assert payment.date == T0
        assert payment.payment_type is PaymentType.INTEREST

    def test_missing_field_raises(self) -> None:
        with pytest.raises(InvalidInputError, match="Incomplete"):
            payment_from_dict({"payment_id": "p1"})

    def test_non_object_raises(self) -> None:
        with pytest.raises(InvalidInputError):
            loan_from_dict(["not", "a", "loan"])  # type: ignore[arg-type]


class TestJsonFileStorage:
    """Tests for JsonFileStorage."""

    def test_creates_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "data"

        JsonFileStorage(target)

        assert target.is_dir()

    def test_missing_files_are_empty(self, tmp_path: Path) -> None:
        storage = JsonFileStorage(tmp_path)

        assert storage.load_loans() == []
        assert storage.load_payments() == []
        assert storage.load_settings() is None

    def test_loans_round_trip(self, tmp_path: Path, simple_loan: Loan) -> None:
        storage = JsonFileStorage(tmp_path)

        storage.save_loans([simple_loan])

        assert storage.load_loans() == [simple_loan]

    def test_payments_round_trip(self, tmp_path: Path) -> None:
        storage = JsonFileStorage(tmp_path)
        payment = Payment("p1", "l1", 50, T0, PaymentType.INTEREST, note="cash")

        storage.save_payments([payment])

        assert storage.load_payments() == [payment]

    def test_pretty_output(self, tmp_path: Path, compound_loan: Loan) -> None:
        JsonFileStorage(tmp_path, pretty=True).save_loans([compound_loan])

        text = (tmp_path / "loans.json").read_text(encoding="utf-8")
        assert "\n  " in text
        assert json.loads(text)[0]["interest_type"] == InterestType.COMPOUND.value

    def test_settings(self, tmp_path: Path) -> None:
        storage = JsonFileStorage(tmp_path)

        storage.save_settings({"currency": {"code": "USD", "symbol": "$"}})

        assert storage.load_settings() == {"currency": {"code": "USD", "symbol": "$"}}

    def test_settings_not_object(self, tmp_path: Path) -> None:
        (tmp_path / "settings.json").write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(StorageError):
            JsonFileStorage(tmp_path).load_settings()

    def test_corrupt_json(self, tmp_path: Path) -> None:
        (tmp_path / "loans.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError, match="Cannot read"):
            JsonFileStorage(tmp_path).load_loans()

    def test_not_a_list(self, tmp_path: Path) -> None:
        (tmp_path / "payments.json").write_text('{"a": 1}', encoding="utf-8")

        with pytest.raises(StorageError, match="list"):
            JsonFileStorage(tmp_path).load_payments()

    def test_invalid_record(self, tmp_path: Path) -> None:
        records = [{"payment_id": "p1", "loan_id": "l1", "amount": -5,
                    "date": "2024-01-01", "payment_type": "principal"}]
        (tmp_path / "payments.json").write_text(json.dumps(records), encoding="utf-8")

        with pytest.raises(StorageError, match="Corrupt record"):
            JsonFileStorage(tmp_path).load_payments()

    def test_clear_all_keeps_settings(self, tmp_path: Path, simple_loan: Loan) -> None:
        storage = JsonFileStorage(tmp_path)
        storage.save_loans([simple_loan])
        storage.save_payments([])
        storage.save_settings({"currency": "EUR"})

        storage.clear_all()

        assert storage.load_loans() == []
        assert storage.load_settings() == {"currency": "EUR"}

    def test_clear_all_without_files(self, tmp_path: Path) -> None:
        JsonFileStorage(tmp_path).clear_all()
