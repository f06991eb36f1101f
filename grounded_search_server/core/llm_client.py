import json
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import DEFAULT_API_BASE, DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT

RETRY_STATUSES = (408, 409, 429, 500, 502, 503, 504)


class LlmError(RuntimeError):
    """Failure talking to the Responses API, with the structured error fields when present."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        error_type: Optional[str] = None,
        param: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.error_type = error_type
        self.param = param


def _build_session(max_retries: int) -> requests.Session:
    retry = Retry(
        total=max_retries,
        connect=max_retries,
        read=max_retries,
        status=max_retries,
        backoff_factor=0.5,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=None,
        raise_on_status=False,
        respect_retry_after_header=True,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def _error_from_response(resp: requests.Response) -> LlmError:
    """Build an LlmError from an OpenAI-style `{"error": {...}}` body."""
    err: Dict[str, Any] = {}
    try:
        body = resp.json()
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            err = body["error"]
    except ValueError:
        pass
    message = err.get("message") or (resp.text or "").strip()[:500] or resp.reason or "request failed"
    return LlmError(
        f"{resp.status_code} {message}",
        status_code=resp.status_code,
        code=err.get("code"),
        error_type=err.get("type"),
        param=err.get("param"),
    )


class ResponsesClient:
    """
    Minimal client for the OpenAI Responses API.

    Built once at startup and shared by every tool call; the session carries
    the credential, timeout and transport-level retry policy.
    """

    def __init__(
        self,
        api_key: str,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValueError("api_key is required")
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self._session = session or _build_session(max_retries)
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    @classmethod
    def from_config(cls, cfg: dict) -> "ResponsesClient":
        return cls(
            api_key=cfg["api_key"],
            api_base=cfg["api_base"],
            timeout=cfg["timeout"],
            max_retries=cfg["max_retries"],
        )

    def create_response(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST the payload to `/responses` and return the decoded JSON body.
        """
        url = f"{self.api_base}/responses"
        try:
            resp = self._session.post(
                url,
                headers=self._headers,
                data=json.dumps(payload),
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            raise LlmError(f"Request timed out after {self.timeout:g}s") from exc
        except requests.RequestException as exc:
            raise LlmError(f"Request failed: {exc}") from exc

        if resp.status_code >= 400:
            raise _error_from_response(resp)
        try:
            data = resp.json()
        except ValueError as exc:
            raise LlmError("Malformed response: body is not JSON", status_code=resp.status_code) from exc
        if not isinstance(data, dict):
            raise LlmError("Malformed response: expected a JSON object", status_code=resp.status_code)
        return data


def extract_output_text(response: Dict[str, Any]) -> str:
    """
    Return the plain output text of a Responses API result, or "" when there is none.
    """
    text = response.get("output_text")
    if isinstance(text, str):
        return text

    parts = []
    for item in response.get("output") or []:
        if not isinstance(item, dict) or item.get("type") != "message":
            continue
        for content in item.get("content") or []:
            if isinstance(content, dict) and content.get("type") == "output_text":
                parts.append(content.get("text") or "")
    return "".join(parts)
