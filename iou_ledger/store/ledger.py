"""Loan/payment store with referential integrity and derived-field upkeep."""

import logging
import threading
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Callable, Iterable

from iou_ledger.engine.accrual import utc_now
from iou_ledger.engine.balance import portfolio_summary
from iou_ledger.engine.status import derive_loan_state, derive_status, latest_interest_payment_date
from iou_ledger.exceptions import (
    EntityNotFoundError,
    InvalidEntityStateError,
    InvalidInputError,
    ReferentialIntegrityError,
)
from iou_ledger.models import (
    InterestType,
    Loan,
    LoanDerivedState,
    LoanStatus,
    LoanSummary,
    Payment,
    PaymentType,
    ensure_utc,
    parse_timestamp,
)
from iou_ledger.storage import JsonFileStorage

logger = logging.getLogger(__name__)

# Fields callers may edit; the rest are identity or derived
EDITABLE_LOAN_FIELDS = frozenset(
    {
        "borrower_name",
        "amount",
        "interest_rate",
        "interest_type",
        "start_date",
        "notes",
        "borrower_photo",
    }
)
DERIVED_LOAN_FIELDS = frozenset(
    {"loan_id", "status", "last_interest_payment_date", "close_date", "created_at", "updated_at"}
)
EDITABLE_PAYMENT_FIELDS = frozenset({"amount", "date", "payment_type", "note"})


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class LedgerStore:
    """In-memory store for loans and payments.

    Every mutation runs under one lock, refreshes the affected loan's
    ``status``, ``close_date`` and ``last_interest_payment_date`` from its
    full payment list, then saves through ``storage`` when one is attached.
    """

    loans: dict[str, Loan] = field(default_factory=dict)
    payments: dict[str, Payment] = field(default_factory=dict)
    storage: JsonFileStorage | None = None
    clock: Callable[[], datetime] = utc_now
    id_factory: Callable[[], str] = _new_id

    # Relationship index
    _loan_payments: dict[str, list[str]] = field(default_factory=dict, init=False, repr=False)

    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        loans, payments = list(self.loans.values()), list(self.payments.values())
        self.loans, self.payments = {}, {}
        self._index_all(loans, payments)

    @classmethod
    def load(
        cls,
        storage: JsonFileStorage,
        clock: Callable[[], datetime] = utc_now,
    ) -> "LedgerStore":
        """Build a store from persisted loans and payments.

        Payments whose loan is missing are dropped with a warning.
        """
        store = cls(storage=storage, clock=clock)
        store._index_all(storage.load_loans(), storage.load_payments())
        logger.info("Loaded %d loans and %d payments", len(store.loans), len(store.payments))
        return store

    # Loans
    def add_loan(
        self,
        borrower_name: str,
        amount: int,
        interest_rate: int,
        interest_type: InterestType | str = InterestType.SIMPLE,
        start_date: datetime | str | None = None,
        notes: str = "",
        borrower_photo: str | None = None,
    ) -> Loan:
        """Create a loan in ``active`` status.

        Parameters
        ----------
        borrower_name : str
            Display name of the borrower.
        amount : int
            Principal in whole currency units.
        interest_rate : int
            Monthly interest rate as a percentage.
        interest_type : InterestType | str
            ``simple`` or ``compound``.
        start_date : datetime | str | None
            When interest starts accruing (default now).
        notes : str
            Free text.
        borrower_photo : str | None
            Photo URI.

        Returns
        -------
        Loan
            The stored loan.
        """
        with self._lock:
            now = self._now()
            start = parse_timestamp(start_date) if start_date is not None else now
            loan = Loan(
                loan_id=self.id_factory(),
                borrower_name=borrower_name,
                amount=amount,
                interest_rate=interest_rate,
                interest_type=interest_type,
                start_date=start,
                status=LoanStatus.ACTIVE,
                last_interest_payment_date=start,
                notes=notes,
                borrower_photo=borrower_photo,
                created_at=now,
                updated_at=now,
            )
            self._index_loan(loan)
            logger.info(
                "Added loan %s for %s (%d)",
                loan.loan_id,
                borrower_name,
                amount,
                extra={"loan_id": loan.loan_id},
            )
            self.save()
            return loan

    def update_loan(self, loan_id: str, /, **changes: Any) -> Loan:
        """Edit a loan's display fields or terms in place.

        Raises
        ------
        EntityNotFoundError
            If the loan does not exist.
        InvalidEntityStateError
            If a derived or identity field is passed.
        InvalidInputError
            If an unknown field or an invalid value is passed.
        """
        with self._lock:
            loan = self.get_loan(loan_id)
            derived = DERIVED_LOAN_FIELDS.intersection(changes)
            if derived:
                raise InvalidEntityStateError(
                    f"Loan fields {sorted(derived)} are managed by the ledger"
                )
            unknown = set(changes) - EDITABLE_LOAN_FIELDS
            if unknown:
                raise InvalidInputError(f"Unknown loan fields: {sorted(unknown)}")

            # replace() re-runs validation before anything is touched
            validated = replace(loan, **changes)
            for name in changes:
                setattr(loan, name, getattr(validated, name))

            now = self._now()
            loan.updated_at = now
            self._refresh_loan(loan, now)
            logger.info(
                "Updated loan %s: %s",
                loan_id,
                ", ".join(sorted(changes)),
                extra={"loan_id": loan_id},
            )
            self.save()
            return loan

    def delete_loan(self, loan_id: str) -> None:
        """Delete a loan and every payment recorded against it."""
        with self._lock:
            self.get_loan(loan_id)
            payment_ids = self._loan_payments.pop(loan_id, [])
            for payment_id in payment_ids:
                del self.payments[payment_id]
            del self.loans[loan_id]
            logger.info(
                "Deleted loan %s and %d payments",
                loan_id,
                len(payment_ids),
                extra={"loan_id": loan_id},
            )
            self.save()

    # Payments
    def add_payment(
        self,
        loan_id: str,
        amount: int,
        date: datetime | str | None = None,
        payment_type: PaymentType | str = PaymentType.PRINCIPAL,
        note: str = "",
    ) -> Payment:
        """Record a payment and refresh the loan's derived fields.

        Raises
        ------
        ReferentialIntegrityError
            If the loan does not exist.
        """
        with self._lock:
            if loan_id not in self.loans:
                raise ReferentialIntegrityError(f"Loan {loan_id} not found")

            now = self._now()
            payment = Payment(
                payment_id=self.id_factory(),
                loan_id=loan_id,
                amount=amount,
                date=parse_timestamp(date) if date is not None else now,
                payment_type=payment_type,
                note=note,
                created_at=now,
            )
            self._index_payment(payment)
            logger.info(
                "Recorded %s payment %s of %d on loan %s",
                payment.payment_type.value,
                payment.payment_id,
                amount,
                loan_id,
                extra={"loan_id": loan_id, "payment_id": payment.payment_id},
            )
            self._refresh_loan(self.loans[loan_id], now)
            self.save()
            return payment

    def update_payment(self, payment_id: str, /, **changes: Any) -> Payment:
        """Edit a payment in place and refresh its loan.

        Raises
        ------
        EntityNotFoundError
            If the payment does not exist.
        InvalidEntityStateError
            If ``payment_id`` or ``loan_id`` is passed.
        """
        with self._lock:
            payment = self.get_payment(payment_id)
            fixed = {"payment_id", "loan_id", "created_at"}.intersection(changes)
            if fixed:
                raise InvalidEntityStateError(f"Payment fields {sorted(fixed)} cannot change")
            unknown = set(changes) - EDITABLE_PAYMENT_FIELDS
            if unknown:
                raise InvalidInputError(f"Unknown payment fields: {sorted(unknown)}")

            validated = replace(payment, **changes)
            for name in changes:
                setattr(payment, name, getattr(validated, name))

            self._refresh_loan(self.loans[payment.loan_id], self._now())
            logger.info(
                "Updated payment %s: %s",
                payment_id,
                ", ".join(sorted(changes)),
                extra={"loan_id": payment.loan_id, "payment_id": payment_id},
            )
            self.save()
            return payment

    def delete_payment(self, payment_id: str) -> None:
        """Delete a payment and refresh its loan."""
        with self._lock:
            payment = self.get_payment(payment_id)
            del self.payments[payment_id]
            self._loan_payments[payment.loan_id].remove(payment_id)
            self._refresh_loan(self.loans[payment.loan_id], self._now())
            logger.info(
                "Deleted payment %s from loan %s",
                payment_id,
                payment.loan_id,
                extra={"loan_id": payment.loan_id, "payment_id": payment_id},
            )
            self.save()

    # Queries
    def get_loan(self, loan_id: str) -> Loan:
        """Get a loan by id."""
        try:
            return self.loans[loan_id]
        except KeyError:
            raise EntityNotFoundError(f"Loan {loan_id} not found") from None

    def get_payment(self, payment_id: str) -> Payment:
        """Get a payment by id."""
        try:
            return self.payments[payment_id]
        except KeyError:
            raise EntityNotFoundError(f"Payment {payment_id} not found") from None

    def get_loan_payments(self, loan_id: str) -> list[Payment]:
        """Get all payments for a loan, in the order they were recorded."""
        with self._lock:
            payment_ids = self._loan_payments.get(loan_id, [])
            return [self.payments[pid] for pid in payment_ids]

    def loan_state(self, loan_id: str, now: datetime | str | None = None) -> LoanDerivedState:
        """Freshly derived figures for one loan."""
        with self._lock:
            loan = self.get_loan(loan_id)
            return derive_loan_state(
                loan, self.get_loan_payments(loan_id), now if now is not None else self._now()
            )

    def summary(self, now: datetime | str | None = None) -> LoanSummary:
        """Portfolio totals across every loan."""
        with self._lock:
            return portfolio_summary(
                list(self.loans.values()),
                list(self.payments.values()),
                now if now is not None else self._now(),
            )

    def entity_counts(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        with self._lock:
            return {
                "loans": len(self.loans),
                "payments": len(self.payments),
            }

    # Maintenance
    def refresh_statuses(self, now: datetime | str | None = None) -> list[Loan]:
        """Re-derive the status of every unpaid loan as time passes.

        Paid loans are left alone; only a payment change re-opens them.

        Returns
        -------
        list[Loan]
            Loans whose status changed.
        """
        with self._lock:
            now = parse_timestamp(now) if now is not None else self._now()
            changed = [
                loan
                for loan in self.loans.values()
                if loan.status != LoanStatus.PAID and self._refresh_loan(loan, now)
            ]
            if changed:
                logger.info("Status changed on %d loans", len(changed))
                self.save()
            return changed

    def clear(self) -> None:
        """Drop every loan and payment, including persisted copies."""
        with self._lock:
            self.loans.clear()
            self.payments.clear()
            self._loan_payments.clear()
            if self.storage is not None:
                self.storage.clear_all()

    def save(self) -> None:
        """Write loans and payments to the attached storage, if any."""
        if self.storage is None:
            return
        with self._lock:
            self.storage.save_loans(self.loans.values())
            self.storage.save_payments(self.payments.values())

    def _now(self) -> datetime:
        # Naive clock values are UTC
        return ensure_utc(self.clock())

    def _index_all(self, loans: Iterable[Loan], payments: Iterable[Payment]) -> None:
        """Index loans, then their payments; payments for unknown loans are dropped."""
        for loan in loans:
            self._index_loan(loan)
        orphans = 0
        for payment in payments:
            if payment.loan_id not in self.loans:
                orphans += 1
                continue
            self._index_payment(payment)
        if orphans:
            logger.warning("Dropped %d orphaned payments", orphans)

    def _index_loan(self, loan: Loan) -> None:
        self.loans[loan.loan_id] = loan
        self._loan_payments.setdefault(loan.loan_id, [])

    def _index_payment(self, payment: Payment) -> None:
        self.payments[payment.payment_id] = payment
        self._loan_payments[payment.loan_id].append(payment.payment_id)

    def _refresh_loan(self, loan: Loan, now: datetime) -> bool:
        """Sync a loan's derived fields; return True if its status changed."""
        payments = self.get_loan_payments(loan.loan_id)
        loan.last_interest_payment_date = latest_interest_payment_date(loan, payments)

        new_status = derive_status(loan, payments, now)
        if new_status == loan.status:
            return False

        if new_status == LoanStatus.PAID:
            loan.close_date = now
        elif loan.status == LoanStatus.PAID:
            loan.close_date = None
        logger.info(
            "Loan %s: %s -> %s",
            loan.loan_id,
            loan.status.value,
            new_status.value,
            extra={
                "loan_id": loan.loan_id,
                "from_status": loan.status.value,
                "to_status": new_status.value,
            },
        )
        loan.status = new_status
        loan.updated_at = now
        return True
