#!/usr/bin/env python3
"""
One-shot grounded search from the command line, without the MCP server.

Reads OPENAI_API_KEY from the environment (or `.env`) and prints the answer text to stdout.

Examples:
  python scripts/grounded_search_cli.py "windsurf ide news"
  python scripts/grounded_search_cli.py "latest CPython release" --model gpt-5 --reasoning-effort high
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

# Importable from a source checkout without installing
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from grounded_search_server.core.composer import compose
from grounded_search_server.core.config import DEFAULT_MODEL, REASONING_EFFORTS, get_openai_config, load_env
from grounded_search_server.core.error import GroundedSearchError
from grounded_search_server.core.logger import setup_logger
from grounded_search_server.core.server import build_dispatcher

DEFAULT_QUERY = "windsurf ide news"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a single OpenAI web-search grounded query")
    parser.add_argument("query", nargs="?", default=DEFAULT_QUERY, help=f"Query text (default: {DEFAULT_QUERY!r})")
    parser.add_argument("--model", default=DEFAULT_MODEL, help=f"Model identifier (default: {DEFAULT_MODEL})")
    parser.add_argument(
        "--reasoning-effort",
        default="medium",
        choices=REASONING_EFFORTS,
        help="Reasoning effort (default: medium)",
    )
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


async def run_query(query: str, model: str, effort: str) -> str:
    dispatcher = build_dispatcher(get_openai_config())
    return await dispatcher.dispatch(compose(query, model, effort))


def main(argv: Optional[List[str]] = None) -> int:
    load_env()
    args = parse_args(argv)
    setup_logger(level=args.log_level)
    try:
        text = asyncio.run(run_query(args.query, args.model, args.reasoning_effort))
    except GroundedSearchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
