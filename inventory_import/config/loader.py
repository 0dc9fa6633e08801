from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.roles import AliasTable, default_alias_table

"""Alias table loader.

Responsibilities:
- Load a YAML alias file (``aliases: {role: [synonyms...]}``)
- Validate it against the bundled JSON schema
- Resolve which alias file applies (explicit path > environment > built-in)
"""

__all__ = [
    "ALIASES_ENV_VAR",
    "SCHEMA_PATH",
    "ConfigError",
    "load_alias_table",
    "resolve_alias_table",
]

SCHEMA_PATH = Path(__file__).with_name("alias_schema.json")
ALIASES_ENV_VAR = "INVENTORY_IMPORT_ALIASES"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate alias data against the JSON schema.

    Raises:
        ConfigError: schema missing/unreadable or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_alias_table(path: Path) -> AliasTable:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)
    return AliasTable.from_mapping(data["aliases"])


def resolve_alias_table(path: Path | None = None) -> AliasTable:
    """Alias table for a run: explicit path, then $INVENTORY_IMPORT_ALIASES, then built-in."""
    if path is None:
        env_path = os.getenv(ALIASES_ENV_VAR)
        if env_path:
            path = Path(env_path)
    if path is None:
        return default_alias_table()
    return load_alias_table(path)
