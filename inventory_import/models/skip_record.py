from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""SkipRecord model for the skipped-row log.

Each skipped row, and each file that failed as a whole, becomes one JSON
Lines entry. row=-1 marks file-level failures where no row applies.
"""

__all__ = [
    "SkipRecord",
]


@dataclass(frozen=True)
class SkipRecord:
    """Structured record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Source file name
        row: Physical row number (1-based). -1 for file-level failures
        error_type: ImportErrorKind value (UPPER_SNAKE_CASE)
        message: User-facing reason
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, row: int, error_type: str, message: str) -> SkipRecord:
        """Create a new SkipRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return SkipRecord(
            timestamp=ts,
            file=file,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize to one JSON object with exactly the dataclass keys."""
        return json.dumps(asdict(self), ensure_ascii=False)
