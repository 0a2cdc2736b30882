"""Enumeration types for ledger entities."""

from enum import Enum


class InterestType(str, Enum):
    SIMPLE = "simple"
    COMPOUND = "compound"  # compounds once per elapsed month


class LoanStatus(str, Enum):
    ACTIVE = "active"
    OVERDUE = "overdue"
    PAID = "paid"


class PaymentType(str, Enum):
    PRINCIPAL = "principal"
    INTEREST = "interest"
