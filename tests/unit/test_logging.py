"""
Tests for the logging configuration.
"""

import logging
import os
import tempfile

import yaml

from fulltext_query.search.query import QueryBuilder
from fulltext_query.utils.logging import configure_logging, get_logger


def test_get_logger():
    """Test that loggers are named after their module."""
    logger = get_logger("fulltext_query.search.query")

    assert isinstance(logger, logging.Logger)
    assert logger.name == "fulltext_query.search.query"


def test_configure_logging_level():
    """Test overriding the log level."""
    config = configure_logging(log_level="DEBUG")

    assert config["loggers"][""]["level"] == "DEBUG"
    assert logging.getLogger().level == logging.DEBUG

    configure_logging(log_level="INFO")


def test_configure_logging_invalid_level_ignored():
    """Test that an unknown level leaves the defaults in place."""
    config = configure_logging(log_level="LOUD")

    assert config["loggers"][""]["level"] == "INFO"


def test_configure_logging_file():
    """Test that a log file receives builder debug output."""
    with tempfile.TemporaryDirectory() as directory:
        log_file = os.path.join(directory, "logs", "query.log")
        config = configure_logging(log_level="DEBUG", log_file=log_file)

        assert "file" in config["loggers"][""]["handlers"]

        QueryBuilder().set_page_size(2)
        for handler in logging.getLogger().handlers:
            handler.flush()

        with open(log_file) as file:
            content = file.read()

        configure_logging(log_level="INFO")

    assert "Page 2 selected with page size 10" in content


def test_configure_logging_from_yaml():
    """Test loading a logging configuration file."""
    with tempfile.NamedTemporaryFile(suffix=".yaml", mode="w+") as temp_file:
        yaml.dump(
            {
                "version": 1,
                "disable_existing_loggers": False,
                "loggers": {"fulltext_query": {"level": "WARNING"}},
            },
            temp_file,
        )
        temp_file.flush()

        configure_logging(config_path=temp_file.name)

    assert logging.getLogger("fulltext_query").level == logging.WARNING
    logging.getLogger("fulltext_query").setLevel(logging.NOTSET)
    configure_logging()
