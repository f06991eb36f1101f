from typing import Any, Dict, List, Optional, TypedDict

from mcp import types


class SearchRequest(TypedDict):
    query: str
    model: str
    reasoning_effort: str


class EffortProfile(TypedDict):
    max_output_tokens: int
    service_tier: Optional[str]


class ReasoningConfig(TypedDict):
    effort: str


class _ResponsesPayloadBase(TypedDict):
    model: str
    input: str
    tools: List[Dict[str, Any]]
    reasoning: ReasoningConfig
    max_output_tokens: int


class ResponsesPayload(_ResponsesPayloadBase, total=False):
    service_tier: str


class SearchResult(TypedDict):
    text: str
    is_error: bool


def build_search_request(
    *,
    query: str,
    model: Optional[str] = None,
    reasoning_effort: Optional[str] = None,
    default_model: str,
    default_effort: str,
) -> SearchRequest:
    return {
        "query": query,
        "model": model or default_model,
        "reasoning_effort": reasoning_effort or default_effort,
    }


def build_result(text: Optional[str], is_error: bool = False) -> SearchResult:
    return {"text": text or "", "is_error": is_error}


def build_tool_result(result: SearchResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result["text"])],
        isError=result["is_error"],
    )
