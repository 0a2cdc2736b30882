"""Sample ledger generator: borrowers, loans and payment histories."""

import logging
import random
from datetime import datetime, timedelta
from typing import Any, Iterator

from iou_ledger.engine.accrual import MONTH, accrued_interest, elapsed_whole_months
from iou_ledger.generators.base import BaseGenerator
from iou_ledger.models import InterestType, Loan, PaymentType
from iou_ledger.store import LedgerStore

logger = logging.getLogger(__name__)

# (amount, date, type, note)
PaymentPlan = tuple[int, datetime, PaymentType, str]


class LedgerGenerator(BaseGenerator):
    """Generate realistic IOUs and record them through a :class:`LedgerStore`."""

    MONTHLY_RATES = [0, 1, 2, 3, 5, 10]

    def generate_terms(self, as_of: datetime) -> dict[str, Any]:
        """Generate keyword arguments for :meth:`LedgerStore.add_loan`.

        Parameters
        ----------
        as_of : datetime
            Reference instant; start dates fall 1-18 months before it.

        Returns
        -------
        dict[str, Any]
            Loan terms.
        """
        return {
            "borrower_name": self.fake.name(),
            "amount": random.randint(1, 50) * 100,
            "interest_rate": random.choice(self.MONTHLY_RATES),
            "interest_type": self.weighted_choice(
                {InterestType.SIMPLE: 0.8, InterestType.COMPOUND: 0.2}
            ),
            "start_date": self.days_before(as_of, 30, 540),
            "notes": self.fake.sentence(nb_words=6) if random.random() < 0.5 else "",
        }

    def populate(
        self,
        store: LedgerStore,
        num_loans: int = 10,
        as_of: datetime | None = None,
        settled_rate: float = 0.20,
        late_rate: float = 0.25,
    ) -> list[Loan]:
        """Add ``num_loans`` loans with payment histories to ``store``.

        Parameters
        ----------
        store : LedgerStore
            Target store.
        num_loans : int
            Number of loans to create.
        as_of : datetime | None
            No payment is dated after this instant (default: the store clock).
        settled_rate : float
            Share of borrowers who repay in full.
        late_rate : float
            Share of borrowers who skip or delay interest payments.

        Returns
        -------
        list[Loan]
            Created loans.
        """
        as_of = as_of if as_of is not None else store.clock()
        loans = []
        for _ in range(num_loans):
            loan = store.add_loan(**self.generate_terms(as_of))
            behavior = self.weighted_choice(
                {
                    "good": max(0.0, 1 - settled_rate - late_rate),
                    "late": late_rate,
                    "settled": settled_rate,
                }
            )
            for amount, date, payment_type, note in self._payment_history(loan, behavior, as_of):
                store.add_payment(loan.loan_id, amount, date, payment_type, note)
            loans.append(loan)

        logger.info(
            "Generated %d loans with %d payments", len(loans), len(store.payments)
        )
        return loans

    def _payment_history(self, loan: Loan, behavior: str, as_of: datetime) -> Iterator[PaymentPlan]:
        """Chronological payments for one loan."""
        interest_paid = 0
        principal_paid = 0
        months = elapsed_whole_months(loan.start_date, as_of)

        for i in range(1, months + 1):
            due = loan.start_date + MONTH * i
            if behavior == "late":
                if random.random() < 0.4:
                    continue  # missed month
                paid_on = due + timedelta(days=random.randint(5, 25))
            else:
                paid_on = due + timedelta(days=random.randint(0, 3))
            if paid_on > as_of:
                break

            amount = accrued_interest(loan, paid_on) - interest_paid
            if amount > 0:
                interest_paid += amount
                yield amount, paid_on, PaymentType.INTEREST, f"Interest for month {i}"

            if behavior == "good" and random.random() < 0.15:
                part = min(loan.amount - principal_paid, loan.amount // 10)
                if part > 0:
                    principal_paid += part
                    yield part, paid_on, PaymentType.PRINCIPAL, "Partial repayment"

        if behavior == "settled":
            if loan.amount > principal_paid:
                yield loan.amount - principal_paid, as_of, PaymentType.PRINCIPAL, "Final repayment"
            remaining = accrued_interest(loan, as_of) - interest_paid
            if remaining > 0:
                yield remaining, as_of, PaymentType.INTEREST, "Final interest"
