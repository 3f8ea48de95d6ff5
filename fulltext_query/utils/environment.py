"""
Environment variable access for the search query package.

This module provides utilities for loading .env files and reading typed
environment variables for the configuration layer.
"""

import os
from pathlib import Path
from typing import Any, Optional, Union

from dotenv import load_dotenv


def load_env_file(env_file: Optional[Union[str, Path]] = None) -> bool:
    """
    Load environment variables from a .env file.

    Args:
        env_file: Path to .env file. If not provided, looks for .env in the
                  current directory and its parents.

    Returns:
        True if at least one variable was loaded, False otherwise.
    """
    if env_file:
        return load_dotenv(env_file)

    return load_dotenv(dotenv_path=None, override=True)


def get_env(key: str, default: Any = None) -> Optional[str]:
    """Get an environment variable, or ``default`` when unset."""
    return os.getenv(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """
    Get a boolean environment variable.

    Args:
        key: Environment variable name
        default: Default value if environment variable is not set

    Returns:
        True if the value is "1", "true", "yes", or "y" (case insensitive),
        False otherwise.
    """
    value = get_env(key)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "y")


def get_env_int(key: str, default: Optional[int] = None) -> Optional[int]:
    """
    Get an integer environment variable.

    Args:
        key: Environment variable name
        default: Default value if environment variable is not set or invalid

    Returns:
        Integer value of environment variable or default if not set or invalid
    """
    value = get_env(key)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default
