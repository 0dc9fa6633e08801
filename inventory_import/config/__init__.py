from .loader import ALIASES_ENV_VAR, ConfigError, load_alias_table, resolve_alias_table

__all__ = [
    "ALIASES_ENV_VAR",
    "ConfigError",
    "load_alias_table",
    "resolve_alias_table",
]
