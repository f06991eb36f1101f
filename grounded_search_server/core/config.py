import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

# Baseline model, also the fallback when a requested model is rejected.
DEFAULT_MODEL = "o3-2025-04-16"
SUPPORTED_MODELS: List[str] = [
    "gpt-5",
    "gpt-5-mini",
    "gpt-5-nano",
    "o3-2025-04-16",
    "o3-deep-research",
    "o4-mini-deep-research",
]

DEFAULT_REASONING_EFFORT = "low"
REASONING_EFFORTS: List[str] = ["low", "medium", "high"]
EFFORT_TOKEN_LIMITS: Dict[str, int] = {
    "low": 4000,
    "medium": 8000,
    "high": 16000,
}
FLEX_EFFORTS = frozenset({"medium", "high"})
FLEX_SERVICE_TIER = "flex"

DEFAULT_API_BASE = "https://api.openai.com/v1"
# 15 minutes
DEFAULT_TIMEOUT = 900.0
DEFAULT_MAX_RETRIES = 2

SERVER_NAME = "openai-grounded-search"
SERVER_VERSION = "1.0.0"


def load_env() -> Optional[Path]:
    """
    Load environment variables from the project root `.env`, falling back to the CWD.

    Returns the path that was loaded, if any. Variables already set in the
    process environment win.
    """
    project_root = Path(__file__).resolve().parents[2]
    for env_path in (project_root / ".env", Path.cwd() / ".env"):
        if env_path.exists():
            load_dotenv(env_path)
            return env_path
    return None


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return max(0, int(raw))
    except ValueError:
        return default


def get_openai_config() -> dict:
    """
    OpenAI config is read from environment variables.
    - OPENAI_API_KEY: secret key (required, must be set in env)
    - OPENAI_API_BASE: optional base URL override
    - GROUNDED_SEARCH_TIMEOUT: client timeout in seconds (default 900)
    - GROUNDED_SEARCH_MAX_RETRIES: transport-level retries (default 2)
    """
    api_base = (os.getenv("OPENAI_API_BASE") or "").strip() or DEFAULT_API_BASE
    return {
        "api_key": (os.getenv("OPENAI_API_KEY") or "").strip() or None,
        "api_base": api_base.rstrip("/"),
        "timeout": _env_float("GROUNDED_SEARCH_TIMEOUT", DEFAULT_TIMEOUT),
        "max_retries": _env_int("GROUNDED_SEARCH_MAX_RETRIES", DEFAULT_MAX_RETRIES),
    }
