"""
Request composition: prompt grounding, effort profile and the Responses payload.
"""
from datetime import date, datetime, timezone
from typing import Optional

from .config import (
    DEFAULT_MODEL,
    DEFAULT_REASONING_EFFORT,
    EFFORT_TOKEN_LIMITS,
    FLEX_EFFORTS,
    FLEX_SERVICE_TIER,
)
from .error import InvalidParamsError, InvalidQueryError
from ..models.schema import EffortProfile, ResponsesPayload

WEB_SEARCH_TOOL = {"type": "web_search"}


def effort_profile(effort: str) -> EffortProfile:
    """
    Token ceiling and optional service tier for a reasoning effort.

    Unknown efforts get the "low" ceiling and no tier hint.
    """
    max_tokens = EFFORT_TOKEN_LIMITS.get(effort, EFFORT_TOKEN_LIMITS[DEFAULT_REASONING_EFFORT])
    tier = FLEX_SERVICE_TIER if effort in FLEX_EFFORTS else None
    return {"max_output_tokens": max_tokens, "service_tier": tier}


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def build_prompt(query: str, today: Optional[date] = None) -> str:
    """Prefix the query with the current UTC date; the model has no clock of its own."""
    day = today or today_utc()
    return f"Today's date: {day.isoformat()}\nQuery: {query}"


def compose(
    query: str,
    model: Optional[str] = None,
    effort: Optional[str] = None,
    today: Optional[date] = None,
) -> ResponsesPayload:
    """
    Build the Responses API payload for a grounded search.

    Args:
        query: User query, kept verbatim
        model: Model identifier; unlisted values are passed through
        effort: Reasoning effort (low/medium/high)
        today: Date override for the prompt prefix

    Returns:
        Payload dict ready to POST to /responses
    """
    if not isinstance(query, str) or not query.strip():
        raise InvalidQueryError()
    for name, value in (("model", model), ("reasoning_effort", effort)):
        if value is not None and not isinstance(value, str):
            raise InvalidParamsError(
                f"{name} must be a string, got {type(value).__name__}",
                {"argument": name},
            )

    model = model or DEFAULT_MODEL
    effort = effort or DEFAULT_REASONING_EFFORT
    profile = effort_profile(effort)

    payload: ResponsesPayload = {
        "model": model,
        "input": build_prompt(query, today),
        "tools": [dict(WEB_SEARCH_TOOL)],
        "reasoning": {"effort": effort},
        "max_output_tokens": profile["max_output_tokens"],
    }
    if profile["service_tier"]:
        payload["service_tier"] = profile["service_tier"]
    return payload


def with_model(payload: ResponsesPayload, model: str) -> ResponsesPayload:
    """Copy of the payload with only the model swapped."""
    swapped = dict(payload)
    swapped["model"] = model
    return swapped  # type: ignore[return-value]
