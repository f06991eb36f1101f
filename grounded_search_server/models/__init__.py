"""Models module: request, payload and result types."""
from .schema import (
    EffortProfile,
    ResponsesPayload,
    SearchRequest,
    SearchResult,
    build_result,
    build_search_request,
    build_tool_result,
)

__all__ = [
    "EffortProfile",
    "ResponsesPayload",
    "SearchRequest",
    "SearchResult",
    "build_result",
    "build_search_request",
    "build_tool_result",
]
