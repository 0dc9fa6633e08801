from .reader import SourceReadError, SourceTable, read_table
from .writer import export_records, format_display_date, write_template

__all__ = [
    "SourceReadError",
    "SourceTable",
    "export_records",
    "format_display_date",
    "read_table",
    "write_template",
]
