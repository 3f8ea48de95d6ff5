"""Configuration loading for the search query package."""

from fulltext_query.config.config import (
    Config,
    LoggingConfig,
    QueryConfig,
    apply_config,
    get_query_config,
    load_config,
    load_config_from_env,
    set_query_config,
)

__all__ = [
    "Config",
    "LoggingConfig",
    "QueryConfig",
    "apply_config",
    "get_query_config",
    "load_config",
    "load_config_from_env",
    "set_query_config",
]
