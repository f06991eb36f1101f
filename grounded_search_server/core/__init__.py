"""Core module: server, configuration, request composition, dispatch, and error handling."""
from .composer import build_prompt, compose, effort_profile, with_model
from .config import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_MODEL,
    DEFAULT_REASONING_EFFORT,
    DEFAULT_TIMEOUT,
    EFFORT_TOKEN_LIMITS,
    REASONING_EFFORTS,
    SUPPORTED_MODELS,
    get_openai_config,
    load_env,
)
from .dispatcher import FallbackDispatcher
from .error import (
    ErrorType,
    GroundedSearchError,
    InvalidParamsError,
    InvalidQueryError,
    MissingCredentialError,
    RemoteServiceError,
    classify_error,
    log_error,
)
from .logger import get_logger, setup_logger
from .llm_client import LlmError, ResponsesClient, extract_output_text
from .server import GROUNDED_SEARCH_TOOL, build_dispatcher, build_server, handle_call_tool, main

__all__ = [
    # Server
    "GROUNDED_SEARCH_TOOL",
    "build_dispatcher",
    "build_server",
    "handle_call_tool",
    "main",
    # Config
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_MODEL",
    "DEFAULT_REASONING_EFFORT",
    "DEFAULT_TIMEOUT",
    "EFFORT_TOKEN_LIMITS",
    "REASONING_EFFORTS",
    "SUPPORTED_MODELS",
    "get_openai_config",
    "load_env",
    # Request composition and dispatch
    "build_prompt",
    "compose",
    "effort_profile",
    "with_model",
    "FallbackDispatcher",
    # LLM
    "LlmError",
    "ResponsesClient",
    "extract_output_text",
    # Error handling
    "ErrorType",
    "GroundedSearchError",
    "InvalidParamsError",
    "InvalidQueryError",
    "MissingCredentialError",
    "RemoteServiceError",
    "classify_error",
    "log_error",
    # Logging
    "setup_logger",
    "get_logger",
]
