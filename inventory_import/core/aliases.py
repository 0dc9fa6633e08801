from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.roles import AliasTable, ColumnMap, FieldRole
from .normalizer import normalize

"""Header alias resolution.

Each role is resolved independently against the observed headers:

1. exact pass: first header (left to right) whose normalized form equals a
   normalized alias;
2. containment pass, only when (1) found nothing: first header whose
   normalized form contains a normalized alias.

Header order is authoritative and exact matches always outrank substring
matches. Aliases that normalize to "" are dropped so they can never match
everything. Overlapping alias lists may bind one header to two roles; that
is accepted.
"""

__all__ = [
    "MissingRequiredColumns",
    "resolve_columns",
    "resolve_role",
]

logger = logging.getLogger(__name__)


class MissingRequiredColumns(Exception):
    """Raised when the name or expiry role matches no header."""

    def __init__(self, headers: Sequence[str], missing: Sequence[FieldRole]) -> None:
        self.headers = list(headers)
        self.missing = list(missing)
        found = ", ".join(self.headers) if self.headers else "(nenhuma coluna)"
        super().__init__(
            "Colunas não identificadas.\n"
            "Preciso de 'Produto' e 'Validade'.\n"
            f"Encontrei apenas: {found}"
        )


def resolve_role(
    normalized_headers: Sequence[tuple[str, str]], aliases: Sequence[str]
) -> str | None:
    """Pick the header for one role.

    normalized_headers holds (original, normalized) pairs in header order.
    """
    targets = [t for t in (normalize(a) for a in aliases) if t]
    if not targets:
        return None
    for original, norm in normalized_headers:
        if norm in targets:
            return original
    for original, norm in normalized_headers:
        if norm and any(t in norm for t in targets):
            return original
    return None


def resolve_columns(
    headers: Sequence[str], alias_table: AliasTable, *, strict: bool = True
) -> ColumnMap:
    """Build the ColumnMap for the observed headers.

    Raises:
        MissingRequiredColumns: when strict and NAME or EXPIRY is unresolved
    """
    # normalize each header once, shared by every role
    normalized = [(h, normalize(h)) for h in headers]
    columns: dict[FieldRole, str] = {}
    for role in FieldRole:
        header = resolve_role(normalized, alias_table.for_role(role))
        if header is not None:
            columns[role] = header
            logger.debug(f"role {role.value} -> {header!r}")
    column_map = ColumnMap(columns=columns)
    missing = column_map.missing_required()
    if strict and missing:
        raise MissingRequiredColumns(headers, missing)
    return column_map
