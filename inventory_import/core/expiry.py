from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from enum import Enum

from ..models.records import StagedRecord

"""Expiry status of staged records relative to a reference day."""

__all__ = [
    "WARNING_WINDOW_DAYS",
    "ExpiryStatus",
    "InventoryStats",
    "days_remaining",
    "expiry_status",
    "inventory_stats",
]

WARNING_WINDOW_DAYS = 7


class ExpiryStatus(Enum):
    SAFE = "SAFE"
    WARNING = "WARNING"
    EXPIRED = "EXPIRED"


@dataclass(frozen=True)
class InventoryStats:
    total: int
    expired: int
    expiring_soon: int
    safe: int
    undated: int  # staged dates that are not real calendar days (e.g. 2025-02-31)


def days_remaining(expiry_date: str, today: date) -> int | None:
    """Whole days from today until expiry_date (negative once expired).

    None when the staged date does not exist on the calendar.
    """
    try:
        expiry = date.fromisoformat(expiry_date)
    except ValueError:
        return None
    return (expiry - today).days


def expiry_status(days: int) -> ExpiryStatus:
    if days < 0:
        return ExpiryStatus.EXPIRED
    if days <= WARNING_WINDOW_DAYS:
        return ExpiryStatus.WARNING
    return ExpiryStatus.SAFE


def inventory_stats(records: Iterable[StagedRecord], today: date) -> InventoryStats:
    counts = {status: 0 for status in ExpiryStatus}
    total = undated = 0
    for record in records:
        total += 1
        days = days_remaining(record.expiry_date, today)
        if days is None:
            undated += 1
            continue
        counts[expiry_status(days)] += 1
    return InventoryStats(
        total=total,
        expired=counts[ExpiryStatus.EXPIRED],
        expiring_soon=counts[ExpiryStatus.WARNING],
        safe=counts[ExpiryStatus.SAFE],
        undated=undated,
    )
