from typing import Any, Dict, List, Optional

import pytest

from grounded_search_server.core.dispatcher import FallbackDispatcher
from grounded_search_server.core.llm_client import LlmError


class FakeClient:
    """Stands in for ResponsesClient: replays queued responses/exceptions and records payloads."""

    def __init__(self, outcomes: Optional[List[Any]] = None):
        self.outcomes = list(outcomes or [])
        self.payloads: List[Dict[str, Any]] = []

    def create_response(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.payloads.append(payload)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def text_response(text: str) -> Dict[str, Any]:
    return {
        "id": "resp_123",
        "object": "response",
        "status": "completed",
        "output": [
            {"type": "web_search_call", "id": "ws_1", "status": "completed"},
            {
                "type": "message",
                "role": "assistant",
                "content": [{"type": "output_text", "text": text, "annotations": []}],
            },
        ],
    }


def model_not_found(model: str = "gpt-5") -> LlmError:
    return LlmError(
        f"404 The model `{model}` does not exist or you do not have access to it.",
        status_code=404,
        code="model_not_found",
        error_type="invalid_request_error",
        param="model",
    )


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def dispatcher(fake_client):
    return FallbackDispatcher(fake_client)
