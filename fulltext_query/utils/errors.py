"""
Error types for the search query package.

The query IR itself never raises; these exceptions cover the configuration
layer and give adapters a shared, coded error vocabulary.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel

from fulltext_query.utils.logging import get_logger

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """Enumeration of error codes for consistent error reporting."""

    # Configuration errors (1xxx)
    CONFIGURATION_INVALID = "1002"

    # Query errors (2xxx), raised by adapters
    QUERY_ERROR = "2000"


class ErrorDetail(BaseModel):
    """Model representing detailed error information."""

    location: Optional[str] = None
    param: Optional[str] = None
    value: Optional[Any] = None
    message: str


class ErrorResponse(BaseModel):
    """Model representing a standardized error payload."""

    code: str
    message: str
    details: Optional[List[ErrorDetail]] = None


class QueryError(Exception):
    """Base exception class for search query errors."""

    def __init__(
        self,
        code: ErrorCode = ErrorCode.QUERY_ERROR,
        message: str = "Query error",
        details: Optional[List[ErrorDetail]] = None,
    ):
        """
        Initialize a new query error.

        Args:
            code: Error code
            message: Error message
            details: Optional list of error details
        """
        self.code = code
        self.message = message
        self.details = details or []
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Render the error as a standardized payload."""
        return ErrorResponse(
            code=self.code.value,
            message=self.message,
            details=self.details or None,
        )


class ConfigurationError(QueryError, ValueError):
    """Exception for invalid configuration."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        details: Optional[List[ErrorDetail]] = None,
    ):
        """Initialize a new configuration error."""
        super().__init__(
            code=ErrorCode.CONFIGURATION_INVALID,
            message=message,
            details=details,
        )
        logger.error(f"Configuration error: {self.code.value} - {message}")
