"""Sample data generators."""

from iou_ledger.generators.ledger import LedgerGenerator

__all__ = ["LedgerGenerator"]
