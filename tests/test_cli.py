import importlib.util
from pathlib import Path

import pytest

from grounded_search_server.core.error import RemoteServiceError

_CLI_PATH = Path(__file__).resolve().parent.parent / "scripts" / "grounded_search_cli.py"


@pytest.fixture
def cli(monkeypatch):
    spec = importlib.util.spec_from_file_location("grounded_search_cli", _CLI_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module, "load_env", lambda: None)
    return module


def test_prints_answer(cli, monkeypatch, capsys):
    seen = {}

    async def fake_run_query(query, model, effort):
        seen.update(query=query, model=model, effort=effort)
        return "Windsurf shipped a new release."

    monkeypatch.setattr(cli, "run_query", fake_run_query)

    assert cli.main([]) == 0
    assert capsys.readouterr().out == "Windsurf shipped a new release.\n"
    assert seen == {"query": "windsurf ide news", "model": "o3-2025-04-16", "effort": "medium"}


def test_error_goes_to_stderr(cli, monkeypatch, capsys):
    async def failing(query, model, effort):
        raise RemoteServiceError("401 Incorrect API key provided")

    monkeypatch.setattr(cli, "run_query", failing)

    assert cli.main(["some query", "--reasoning-effort", "low"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error: OpenAI API error: 401")


def test_missing_key_is_reported(cli, monkeypatch, capsys):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    assert cli.main(["q"]) == 1
    assert "OPENAI_API_KEY environment variable is required" in capsys.readouterr().err
