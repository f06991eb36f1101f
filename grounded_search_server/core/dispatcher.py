"""
Dispatch composed requests to the Responses API with a one-shot model fallback.
"""
import asyncio
import logging
import time
from typing import Any, Dict, Protocol

from .composer import with_model
from .config import DEFAULT_MODEL
from .error import ErrorType, RemoteServiceError, classify_error
from .llm_client import extract_output_text
from ..models.schema import ResponsesPayload

logger = logging.getLogger("grounded_search")


class ResponsesBackend(Protocol):
    """
    Anything that can create a response from a payload (the real client or a test fake).
    """
    def create_response(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        ...


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class FallbackDispatcher:
    """
    Sends one payload per call; if the service rejects the model, retries once
    with the fallback model. No state is kept between calls.
    """

    def __init__(self, client: ResponsesBackend, fallback_model: str = DEFAULT_MODEL):
        self.client = client
        self.fallback_model = fallback_model

    async def _create(self, payload: ResponsesPayload) -> Dict[str, Any]:
        # The client is blocking; keep the event loop free for other tool calls.
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.client.create_response, payload)

    async def dispatch(self, payload: ResponsesPayload) -> str:
        """
        Run the request and return the output text ("" when the response has none).

        Raises:
            RemoteServiceError: the call (and the fallback, if attempted) failed
        """
        model = payload["model"]
        effort = payload["reasoning"]["effort"]
        logger.info(
            "Starting request - Model: %s | Reasoning effort: %s | Query length: %s chars | Max tokens: %s",
            model,
            effort,
            len(payload["input"]),
            payload["max_output_tokens"],
        )
        if payload.get("service_tier"):
            logger.info("Using %s service tier for %s reasoning effort", payload["service_tier"], effort)

        start = time.perf_counter()
        try:
            resp = await self._create(payload)
        except Exception as exc:
            logger.error("Request failed after %sms: %s", _elapsed_ms(start), exc)
            error_type = classify_error(exc)
            if error_type is not ErrorType.INVALID_MODEL or model == self.fallback_model:
                raise RemoteServiceError(str(exc), {"model": model, "error_type": error_type.value}) from exc
            return await self._fallback(payload, start)

        logger.info("Request completed successfully in %sms", _elapsed_ms(start))
        return extract_output_text(resp)

    async def _fallback(self, payload: ResponsesPayload, start: float) -> str:
        logger.warning(
            "Model %s not available, falling back to %s",
            payload["model"],
            self.fallback_model,
        )
        fallback_start = time.perf_counter()
        try:
            resp = await self._create(with_model(payload, self.fallback_model))
        except Exception as exc:
            logger.error("Fallback request failed after %sms: %s", _elapsed_ms(start), exc)
            raise RemoteServiceError(
                str(exc),
                {"model": self.fallback_model, "requested_model": payload["model"], "fallback": True},
            ) from exc

        logger.info("Fallback request completed in %sms", _elapsed_ms(fallback_start))
        return extract_output_text(resp)
