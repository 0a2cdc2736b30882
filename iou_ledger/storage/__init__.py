"""Persistence for ledger data."""

from iou_ledger.storage.json_file import JsonFileStorage

__all__ = ["JsonFileStorage"]
