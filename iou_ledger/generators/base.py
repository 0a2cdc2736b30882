"""Base generator class for sample ledger generators."""

from __future__ import annotations

import random
from abc import ABC
from datetime import datetime, timedelta
from typing import TypeVar

from faker import Faker

_T = TypeVar("_T")


class BaseGenerator(ABC):
    """Base class for sample ledger generators.

    Owns the Faker instance and seeds both Faker and ``random`` so a given
    seed always yields the same borrowers, terms and payment histories.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale for borrower names and notes (default ``en_US``).
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
    ) -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)

    @staticmethod
    def weighted_choice(weights: dict[_T, float]) -> _T:
        """Pick one key of ``weights`` with probability proportional to its value."""
        return random.choices(list(weights), weights=list(weights.values()), k=1)[0]

    @staticmethod
    def days_before(as_of: datetime, min_days: int, max_days: int) -> datetime:
        """Random instant between ``min_days`` and ``max_days`` days before ``as_of``."""
        return as_of - timedelta(days=random.randint(min_days, max_days))
