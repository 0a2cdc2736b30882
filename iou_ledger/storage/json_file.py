"""JSON file storage for loans, payments and settings."""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, TypeVar

from iou_ledger.exceptions import InvalidInputError, StorageError
from iou_ledger.models import Loan, Payment
from iou_ledger.storage.serialization import loan_from_dict, payment_from_dict, record_to_dict

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

LOANS_FILE = "loans.json"
PAYMENTS_FILE = "payments.json"
SETTINGS_FILE = "settings.json"


class JsonFileStorage:
    """Persist the ledger as one JSON file per collection."""

    def __init__(self, data_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file storage.

        Parameters
        ----------
        data_dir : str | Path
            Directory holding the JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.data_dir = Path(data_dir)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create data directory {self.data_dir}: {e}") from e
        self.pretty = pretty

    def save_loans(self, loans: Iterable[Loan]) -> None:
        """Overwrite the stored loans."""
        self._write(LOANS_FILE, [record_to_dict(loan) for loan in loans])

    def load_loans(self) -> list[Loan]:
        """Load stored loans; an absent file means no loans."""
        return self._read_records(LOANS_FILE, loan_from_dict)

    def save_payments(self, payments: Iterable[Payment]) -> None:
        """Overwrite the stored payments."""
        self._write(PAYMENTS_FILE, [record_to_dict(payment) for payment in payments])

    def load_payments(self) -> list[Payment]:
        """Load stored payments; an absent file means no payments."""
        return self._read_records(PAYMENTS_FILE, payment_from_dict)

    def save_settings(self, settings: dict[str, Any]) -> None:
        """Overwrite the stored display settings."""
        self._write(SETTINGS_FILE, settings)

    def load_settings(self) -> dict[str, Any] | None:
        """Load display settings, or ``None`` if none were saved."""
        data = self._read(SETTINGS_FILE)
        if data is None:
            return None
        if not isinstance(data, dict):
            raise StorageError(f"{SETTINGS_FILE} does not hold an object")
        return data

    def clear_all(self) -> None:
        """Delete the loans and payments files."""
        for name in (LOANS_FILE, PAYMENTS_FILE):
            try:
                (self.data_dir / name).unlink(missing_ok=True)
            except OSError as e:
                raise StorageError(f"Cannot delete {name}: {e}") from e
        logger.info("Cleared ledger data in %s", self.data_dir)

    def _write(self, name: str, data: Any) -> None:
        file_path = self.data_dir / name
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                else:
                    json.dump(data, f, ensure_ascii=False)
        except OSError as e:
            raise StorageError(f"Cannot write {file_path}: {e}") from e
        logger.debug("Saved %s", file_path)

    def _read(self, name: str) -> Any:
        file_path = self.data_dir / name
        if not file_path.exists():
            return None
        try:
            with open(file_path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read {file_path}: {e}") from e

    def _read_records(self, name: str, factory: Callable[[dict[str, Any]], _T]) -> list[_T]:
        data = self._read(name)
        if data is None:
            return []
        if not isinstance(data, list):
            raise StorageError(f"{name} does not hold a list")
        try:
            records = [factory(item) for item in data]
        except InvalidInputError as e:
            raise StorageError(f"Corrupt record in {name}: {e}") from e
        logger.debug("Loaded %d records from %s", len(records), name)
        return records
