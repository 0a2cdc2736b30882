"""Personal loan/IOU ledger with an interest and balance accrual engine."""

__version__ = "0.1.0"
