from datetime import date, datetime, timezone

import pytest

from grounded_search_server.core.composer import build_prompt, compose, effort_profile, with_model
from grounded_search_server.core.config import DEFAULT_MODEL
from grounded_search_server.core.error import ErrorType, InvalidParamsError, InvalidQueryError


def test_prompt_starts_with_utc_date_then_exact_query():
    query = "  Who won the 2026 World Cup?\n  (include café résumé ✓)  "
    prompt = build_prompt(query, today=date(2026, 3, 9))
    assert prompt == f"Today's date: 2026-03-09\nQuery: {query}"


def test_compose_uses_current_utc_date_by_default():
    payload = compose("weather in Oslo")
    today = datetime.now(timezone.utc).date().isoformat()
    assert payload["input"] == f"Today's date: {today}\nQuery: weather in Oslo"


@pytest.mark.parametrize(
    "effort,tokens,tier",
    [
        ("low", 4000, None),
        ("medium", 8000, "flex"),
        ("high", 16000, "flex"),
        ("maximum", 4000, None),
        ("bogus", 4000, None),
    ],
)
def test_effort_profile_table(effort, tokens, tier):
    assert effort_profile(effort) == {"max_output_tokens": tokens, "service_tier": tier}


def test_compose_defaults():
    payload = compose("q", today=date(2025, 1, 2))
    assert payload == {
        "model": DEFAULT_MODEL,
        "input": "Today's date: 2025-01-02\nQuery: q",
        "tools": [{"type": "web_search"}],
        "reasoning": {"effort": "low"},
        "max_output_tokens": 4000,
    }
    assert "service_tier" not in payload


@pytest.mark.parametrize("effort", ["medium", "high"])
def test_compose_flex_tier_for_medium_and_high(effort):
    payload = compose("q", model="gpt-5", effort=effort)
    assert payload["service_tier"] == "flex"
    assert payload["reasoning"] == {"effort": effort}
    assert payload["model"] == "gpt-5"


def test_compose_passes_unlisted_model_through():
    assert compose("q", model="my-custom-model")["model"] == "my-custom-model"


@pytest.mark.parametrize("query", ["", "   ", None])
def test_compose_rejects_empty_query(query):
    with pytest.raises(InvalidQueryError):
        compose(query)


@pytest.mark.parametrize("kwargs", [{"effort": ["high"]}, {"model": 5}])
def test_compose_rejects_non_string_model_or_effort(kwargs):
    with pytest.raises(InvalidParamsError) as exc_info:
        compose("q", **kwargs)
    assert exc_info.value.error_type is ErrorType.INVALID_PARAMS


def test_with_model_only_swaps_model():
    payload = compose("q", model="gpt-5", effort="high")
    swapped = with_model(payload, DEFAULT_MODEL)
    assert swapped["model"] == DEFAULT_MODEL
    assert payload["model"] == "gpt-5"
    assert {k: v for k, v in swapped.items() if k != "model"} == {
        k: v for k, v in payload.items() if k != "model"
    }
