from __future__ import annotations

from dataclasses import dataclass

"""Staged inventory record and skipped-row models.

A StagedRecord is import-ready but carries no identity or timestamps; the
record sink assigns those.
"""

__all__ = [
    "DEFAULT_CATEGORY",
    "DEFAULT_QUANTITY",
    "StagedRecord",
    "SkippedRow",
]

DEFAULT_CATEGORY = "Geral"
DEFAULT_QUANTITY = 1


@dataclass(frozen=True)
class StagedRecord:
    """Normalized inventory entry.

    Only ``name`` (non-empty, trimmed) and ``expiry_date`` (YYYY-MM-DD) are
    gate-checked; the rest are defaulted.
    """
    name: str
    expiry_date: str  # YYYY-MM-DD
    category: str = DEFAULT_CATEGORY
    quantity: int = DEFAULT_QUANTITY
    location: str = ""
    barcode: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "expiryDate": self.expiry_date,
            "category": self.category,
            "quantity": self.quantity,
            "location": self.location,
            "barcode": self.barcode,
        }


@dataclass(frozen=True)
class SkippedRow:
    """A row rejected by the date gate.

    row_number is the physical spreadsheet row (header row counts as 1).
    """
    row_number: int
    reason: str
