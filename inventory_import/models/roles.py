from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

"""Field roles, alias configuration and the resolved column map."""

__all__ = [
    "FieldRole",
    "AliasTable",
    "ColumnMap",
    "default_alias_table",
]


class FieldRole(Enum):
    """Logical inventory field the importer has to locate among headers.

    Declaration order is the resolution order.
    """
    NAME = "name"
    EXPIRY = "expiry"
    CATEGORY = "category"
    QUANTITY = "quantity"
    LOCATION = "location"
    BARCODE = "barcode"

    @property
    def required(self) -> bool:
        return self in (FieldRole.NAME, FieldRole.EXPIRY)


@dataclass(frozen=True)
class AliasTable:
    """Immutable mapping of each role to its ordered synonym list.

    Roles absent from ``entries`` simply never resolve.
    """
    entries: Mapping[FieldRole, tuple[str, ...]]

    @staticmethod
    def from_mapping(raw: Mapping[FieldRole | str, Iterable[str]]) -> AliasTable:
        entries: dict[FieldRole, tuple[str, ...]] = {}
        for key, synonyms in raw.items():
            role = key if isinstance(key, FieldRole) else FieldRole(key)
            entries[role] = tuple(str(s) for s in synonyms)
        return AliasTable(entries=entries)

    def for_role(self, role: FieldRole) -> tuple[str, ...]:
        return self.entries.get(role, ())


def default_alias_table() -> AliasTable:
    """Built-in pt-BR alias table.

    Containment matching makes roles share headers when one role's synonym
    sits inside another's, so no "estoque" for QUANTITY ("Local de estoque").
    """
    return AliasTable.from_mapping(
        {
            FieldRole.NAME: ["produto", "nome", "item", "desc", "product"],
            FieldRole.EXPIRY: ["validade", "vencimento", "vence", "expiry", "data", "val"],
            FieldRole.CATEGORY: ["categoria", "tipo", "cat"],
            FieldRole.QUANTITY: ["quantidade", "qtd", "qtde"],
            FieldRole.LOCATION: ["local", "localizacao", "setor", "prateleira"],
            FieldRole.BARCODE: ["codigodebarras", "codbarras", "barcode", "ean", "gtin"],
        }
    )


@dataclass(frozen=True)
class ColumnMap:
    """Observed header chosen for each role; unresolved roles are absent."""
    columns: Mapping[FieldRole, str] = field(default_factory=dict)

    def get(self, role: FieldRole) -> str | None:
        return self.columns.get(role)

    def missing_required(self) -> list[FieldRole]:
        return [r for r in FieldRole if r.required and r not in self.columns]

    def describe(self) -> str:
        return ", ".join(f"{r.value}={self.columns[r]!r}" for r in FieldRole if r in self.columns)
