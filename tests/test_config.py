import logging

import pytest

from grounded_search_server.core.config import (
    DEFAULT_API_BASE,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    get_openai_config,
)
from grounded_search_server.core.logger import setup_logger

_ENV_KEYS = ["OPENAI_API_KEY", "OPENAI_API_BASE", "GROUNDED_SEARCH_TIMEOUT", "GROUNDED_SEARCH_MAX_RETRIES"]


@pytest.fixture
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    cfg = get_openai_config()
    assert cfg == {
        "api_key": None,
        "api_base": DEFAULT_API_BASE,
        "timeout": DEFAULT_TIMEOUT,
        "max_retries": DEFAULT_MAX_RETRIES,
    }
    assert DEFAULT_TIMEOUT == 900
    assert DEFAULT_MAX_RETRIES == 2


def test_env_overrides(clean_env):
    clean_env.setenv("OPENAI_API_KEY", " sk-abc ")
    clean_env.setenv("OPENAI_API_BASE", "https://proxy.local/v1/")
    clean_env.setenv("GROUNDED_SEARCH_TIMEOUT", "120")
    clean_env.setenv("GROUNDED_SEARCH_MAX_RETRIES", "0")
    cfg = get_openai_config()
    assert cfg["api_key"] == "sk-abc"
    assert cfg["api_base"] == "https://proxy.local/v1"
    assert cfg["timeout"] == 120.0
    assert cfg["max_retries"] == 0


def test_bad_numbers_fall_back_to_defaults(clean_env):
    clean_env.setenv("GROUNDED_SEARCH_TIMEOUT", "soon")
    clean_env.setenv("GROUNDED_SEARCH_MAX_RETRIES", "many")
    cfg = get_openai_config()
    assert cfg["timeout"] == DEFAULT_TIMEOUT
    assert cfg["max_retries"] == DEFAULT_MAX_RETRIES


def test_logger_writes_to_stderr_and_file(tmp_path, capsys):
    log_file = tmp_path / "logs" / "server.log"
    logger = setup_logger(name="grounded_search_cfg_test", level="INFO", log_file=log_file)
    logger.info("hello stderr")
    for handler in logger.handlers:
        handler.flush()

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "hello stderr" in captured.err
    assert "hello stderr" in log_file.read_text(encoding="utf-8")
    assert logger.level == logging.INFO
