"""
Logging configuration for the search query package.

This module provides utilities for configuring logging throughout the library
and for applications embedding it.
"""

import logging
import logging.config
import os
import sys
from typing import Any, Dict, Optional

import yaml


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(filename)s:%(lineno)d - %(message)s"
)


def _default_config() -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": DEFAULT_FORMAT},
            "detailed": {"format": DETAILED_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "INFO",
                "formatter": "standard",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "": {  # root logger
                "handlers": ["console"],
                "level": "INFO",
                "propagate": True,
            }
        },
    }


def configure_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Configure logging for the application.

    Args:
        config_path: Path to logging configuration YAML file
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Write detailed logs to this file as well

    Returns:
        The dictConfig mapping that was applied
    """
    config = _default_config()

    # Load config from file if provided
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, "r") as file:
                file_config = yaml.safe_load(file)
                if file_config:
                    config = file_config
        except (OSError, yaml.YAMLError) as e:
            print(f"Error loading logging config from {config_path}: {e}")
            print("Using default logging configuration")

    # Override log level if provided
    if log_level:
        numeric_level = getattr(logging, log_level.upper(), None)
        if isinstance(numeric_level, int):
            if "" in config.get("loggers", {}):
                config["loggers"][""]["level"] = log_level.upper()
            if "console" in config.get("handlers", {}):
                config["handlers"]["console"]["level"] = log_level.upper()

    if log_file:
        log_directory = os.path.dirname(log_file)
        if log_directory:
            os.makedirs(log_directory, exist_ok=True)
        config.setdefault("handlers", {})["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "detailed",
            "filename": log_file,
            "maxBytes": 10485760,  # 10 MB
            "backupCount": 5,
            "encoding": "utf8",
        }
        root = config.setdefault("loggers", {}).setdefault("", {"handlers": []})
        if "file" not in root.setdefault("handlers", []):
            root["handlers"].append("file")

    # Apply configuration
    try:
        logging.config.dictConfig(config)
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        print(f"Error configuring logging: {e}")
        print("Falling back to basic configuration")
        logging.basicConfig(
            level=logging.INFO,
            format=DEFAULT_FORMAT,
            handlers=[logging.StreamHandler(sys.stdout)],
        )

    return config


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name, typically __name__ of the calling module

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
