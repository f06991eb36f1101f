"""
Error management module.
"""
import logging
import traceback
from enum import Enum
from typing import Any, Dict, Optional

from .llm_client import LlmError

MODEL_NOT_FOUND_CODE = "model_not_found"


class ErrorType(Enum):
    """Error classification types."""
    MISSING_CREDENTIAL = "missing_credential"
    INVALID_MODEL = "invalid_model"
    INVALID_PARAMS = "invalid_params"
    REMOTE_SERVICE = "remote_service"
    UNKNOWN_TOOL = "unknown_tool"
    UNKNOWN = "unknown"


class GroundedSearchError(Exception):
    """Base exception for grounded search errors."""

    def __init__(self, message: str, error_type: ErrorType = ErrorType.UNKNOWN, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "error_type": self.error_type.value,
            "message": str(self),
            "details": self.details,
        }


class MissingCredentialError(GroundedSearchError):
    def __init__(self, variable: str = "OPENAI_API_KEY"):
        super().__init__(
            f"{variable} environment variable is required",
            ErrorType.MISSING_CREDENTIAL,
            {"variable": variable},
        )


class InvalidParamsError(GroundedSearchError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorType.INVALID_PARAMS, details)


class InvalidQueryError(InvalidParamsError):
    def __init__(self, message: str = "query must be a non-empty string"):
        super().__init__(message, {"argument": "query"})


class RemoteServiceError(GroundedSearchError):
    """The completion service call failed (after any fallback)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"OpenAI API error: {message}", ErrorType.REMOTE_SERVICE, details)


def classify_error(error: Exception) -> ErrorType:
    """
    Classify error type from exception.

    The structured error code/param of the API wins; otherwise any message
    mentioning "model" counts as a rejected model.

    Args:
        error: Exception instance

    Returns:
        ErrorType enum value
    """
    if isinstance(error, GroundedSearchError):
        return error.error_type

    if isinstance(error, LlmError):
        if error.code == MODEL_NOT_FOUND_CODE or error.param == "model":
            return ErrorType.INVALID_MODEL

    if "model" in str(error):
        return ErrorType.INVALID_MODEL

    if isinstance(error, LlmError):
        return ErrorType.REMOTE_SERVICE

    return ErrorType.UNKNOWN


def log_error(
    error: Exception,
    logger: Optional[logging.Logger] = None,
    context: Optional[Dict[str, Any]] = None,
    level: str = "ERROR",
) -> Dict[str, Any]:
    """
    Log error with context and return error info.

    Args:
        error: Exception instance
        logger: Logger instance (if None, uses default)
        context: Additional context information
        level: Logging level

    Returns:
        Dictionary with error information
    """
    if logger is None:
        logger = logging.getLogger("grounded_search")

    error_type = classify_error(error)
    error_info = {
        "error_type": error_type.value,
        "error_class": type(error).__name__,
        "message": str(error),
        "context": context or {},
    }

    log_method = getattr(logger, level.lower(), logger.error)
    log_method(
        f"[{error_type.value}] {type(error).__name__}: {error}",
        extra={"error_info": error_info},
    )

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Traceback:\n{traceback.format_exc()}")

    return error_info
