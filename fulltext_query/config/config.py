"""
Configuration management for the search query package.

This module handles loading and validating configuration from YAML files and
environment variables, and holds the process-wide query defaults that
QueryBuilder falls back to when no configuration is injected.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from fulltext_query.utils.environment import (
    get_env,
    get_env_bool,
    get_env_int,
    load_env_file,
)
from fulltext_query.utils.errors import ConfigurationError, ErrorDetail
from fulltext_query.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

ENV_PREFIX = "FULLTEXT_QUERY_"


class QueryConfig(BaseModel):
    """Defaults applied while building search queries."""

    default_page_size: int = Field(10, description="Results per page for set_page_size")

    @field_validator("default_page_size")
    @classmethod
    def validate_default_page_size(cls, v: int) -> int:
        """Validate that the page size is positive."""
        if v < 1:
            raise ValueError("Default page size must be at least 1")
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field("INFO", description="Default logging level")
    config_file: Optional[str] = Field(
        None, description="Path to logging configuration file"
    )
    log_file: Optional[str] = Field(None, description="Path to log file")


class Config(BaseModel):
    """Main configuration for the search query package."""

    query: QueryConfig = Field(default_factory=QueryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    debug: bool = Field(False, description="Enable debug mode")
    environment: str = Field("production", description="Deployment environment")


_query_config = QueryConfig()


def get_query_config() -> QueryConfig:
    """Return the process-wide query configuration."""
    return _query_config


def set_query_config(config: QueryConfig) -> QueryConfig:
    """
    Replace the process-wide query configuration.

    Builders without an injected configuration pick the new value up on their
    next set_page_size call.

    Args:
        config: New query configuration

    Returns:
        The previous configuration, so callers can restore it
    """
    global _query_config
    previous = _query_config
    _query_config = config
    logger.debug(f"Default page size set to {config.default_page_size}")
    return previous


def apply_config(config: Config) -> None:
    """
    Apply a loaded configuration to the running process.

    Configures logging from the logging section and installs the query
    section as the process-wide query configuration.

    Args:
        config: Configuration returned by load_config or load_config_from_env
    """
    log_level = "DEBUG" if config.debug else config.logging.level
    configure_logging(
        config_path=config.logging.config_file,
        log_level=log_level,
        log_file=config.logging.log_file,
    )
    set_query_config(config.query)
    logger.info(f"Configuration applied for environment {config.environment}")


def _validation_details(error: ValidationError) -> list:
    return [
        ErrorDetail(
            location=".".join(str(loc) for loc in item.get("loc", ())),
            message=item.get("msg", "Invalid value"),
        )
        for item in error.errors()
    ]


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r") as file:
            data = yaml.safe_load(file)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration in {path} must be a mapping")
    return data


def load_config(config_path: Union[str, Path]) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to configuration YAML file

    Returns:
        Validated configuration object

    Raises:
        FileNotFoundError: If the configuration file does not exist
        ConfigurationError: If the configuration is invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    config_data = _read_yaml(config_path)

    # Load environment-specific configuration if it exists
    env_config_path = config_path.parent / f"{config_path.stem}.{os.getenv('ENV', 'local')}.yaml"
    if env_config_path.exists():
        logger.debug(f"Merging environment configuration from {env_config_path}")
        config_data = _deep_merge(config_data, _read_yaml(env_config_path))

    try:
        return Config(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", details=_validation_details(e))


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary with values to override in base

    Returns:
        Merged dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config_from_env(env_file: Optional[Union[str, Path]] = None) -> Config:
    """
    Load configuration from environment variables.

    Environment variables are prefixed with FULLTEXT_QUERY_.

    Examples:
        FULLTEXT_QUERY_DEFAULT_PAGE_SIZE=25
        FULLTEXT_QUERY_LOGGING_LEVEL=DEBUG
        FULLTEXT_QUERY_LOG_FILE=logs/query.log

    Args:
        env_file: Optional .env file loaded before reading the environment

    Returns:
        Validated configuration object with values from environment variables
    """
    if env_file:
        load_env_file(env_file)

    config_data: Dict[str, Any] = {}

    page_size = get_env(f"{ENV_PREFIX}DEFAULT_PAGE_SIZE")
    if page_size is not None:
        parsed = get_env_int(f"{ENV_PREFIX}DEFAULT_PAGE_SIZE")
        if parsed is None:
            raise ConfigurationError(f"Invalid default page size: {page_size!r}")
        config_data["query"] = {"default_page_size": parsed}

    if log_level := get_env(f"{ENV_PREFIX}LOGGING_LEVEL"):
        config_data.setdefault("logging", {})["level"] = log_level

    if log_file := get_env(f"{ENV_PREFIX}LOG_FILE"):
        config_data.setdefault("logging", {})["log_file"] = log_file

    if get_env(f"{ENV_PREFIX}DEBUG") is not None:
        config_data["debug"] = get_env_bool(f"{ENV_PREFIX}DEBUG")

    if env := get_env(f"{ENV_PREFIX}ENVIRONMENT"):
        config_data["environment"] = env

    try:
        return Config(**config_data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid environment configuration: {e}", details=_validation_details(e)
        )
