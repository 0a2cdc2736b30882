"""In-memory loan/payment store."""

from iou_ledger.store.ledger import LedgerStore

__all__ = ["LedgerStore"]
