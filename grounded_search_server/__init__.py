"""OpenAI grounded search MCP server."""
from .core import build_server, main
from .core.config import (
    DEFAULT_MODEL,
    DEFAULT_REASONING_EFFORT,
    SERVER_VERSION as __version__,
    SUPPORTED_MODELS,
    get_openai_config,
)

__all__ = [
    "build_server",
    "main",
    "DEFAULT_MODEL",
    "DEFAULT_REASONING_EFFORT",
    "SUPPORTED_MODELS",
    "get_openai_config",
    "__version__",
]
