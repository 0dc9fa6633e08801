"""Import resolution and normalization engine."""

from .aliases import MissingRequiredColumns, resolve_columns
from .dates import coerce_date
from .engine import SourceLabel, import_rows
from .normalizer import normalize
from .rows import RowResult, RowStatus, process_row

__all__ = [
    "MissingRequiredColumns",
    "RowResult",
    "RowStatus",
    "SourceLabel",
    "coerce_date",
    "import_rows",
    "normalize",
    "process_row",
    "resolve_columns",
]
