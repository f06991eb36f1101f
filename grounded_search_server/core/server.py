import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import mcp.server.stdio
from mcp import types
from mcp.server.lowlevel import Server
from mcp.shared.exceptions import McpError

from .composer import compose
from .config import (
    DEFAULT_MODEL,
    DEFAULT_REASONING_EFFORT,
    REASONING_EFFORTS,
    SERVER_NAME,
    SERVER_VERSION,
    SUPPORTED_MODELS,
    get_openai_config,
    load_env,
)
from .dispatcher import FallbackDispatcher
from .error import GroundedSearchError, MissingCredentialError, log_error
from .llm_client import ResponsesClient
from .logger import bind_library_loggers, setup_logger
from ..models.schema import build_result, build_search_request, build_tool_result

logger = logging.getLogger("grounded_search")

TOOL_NAME = "grounded_search"

GROUNDED_SEARCH_TOOL = types.Tool(
    name=TOOL_NAME,
    description=(
        "Search for current information using OpenAI models (GPT-5, O3, Deep Research) "
        "with Web Search grounding. The AI can specify model and reasoning effort based on "
        "query complexity. Deep Research models provide enhanced research capabilities for "
        "complex queries."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "Search query for current information",
            },
            "model": {
                "type": "string",
                "description": (
                    "OpenAI model to use. Options: "
                    + ", ".join(f"'{m}'" for m in SUPPORTED_MODELS)
                    + ". Deep Research models provide advanced research capabilities. "
                    f"Defaults to '{DEFAULT_MODEL}'"
                ),
                "enum": list(SUPPORTED_MODELS),
                "default": DEFAULT_MODEL,
            },
            "reasoning_effort": {
                "type": "string",
                "description": (
                    "Reasoning effort level. Options: "
                    + ", ".join(f"'{e}'" for e in REASONING_EFFORTS)
                    + f". Defaults to '{DEFAULT_REASONING_EFFORT}'"
                ),
                "enum": list(REASONING_EFFORTS),
                "default": DEFAULT_REASONING_EFFORT,
            },
        },
        "required": ["query"],
    },
)

# Keys whose values should be masked when printing env
_ENV_MASK_KEYS = frozenset({"OPENAI_API_KEY"})
_STARTUP_ENV_KEYS = [
    "OPENAI_API_KEY",
    "OPENAI_API_BASE",
    "GROUNDED_SEARCH_TIMEOUT",
    "GROUNDED_SEARCH_MAX_RETRIES",
]


async def handle_call_tool(
    dispatcher: FallbackDispatcher,
    name: str,
    arguments: Optional[Dict[str, Any]],
) -> types.CallToolResult:
    """
    Run one tool call. Per-call failures become an `isError` result; an unknown
    tool name is a protocol error.
    """
    if name != TOOL_NAME:
        raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=f"Unknown tool: {name}"))

    args = arguments or {}
    try:
        request = build_search_request(
            query=args.get("query"),
            model=args.get("model"),
            reasoning_effort=args.get("reasoning_effort"),
            default_model=DEFAULT_MODEL,
            default_effort=DEFAULT_REASONING_EFFORT,
        )
        payload = compose(request["query"], request["model"], request["reasoning_effort"])
        text = await dispatcher.dispatch(payload)
        result = build_result(text)
    except GroundedSearchError as exc:
        log_error(exc, logger, context={"tool": name})
        result = build_result(f"Error: {exc}", is_error=True)
    return build_tool_result(result)


def build_server(dispatcher: FallbackDispatcher) -> Server:
    """Create the MCP server with the grounded_search tool bound to `dispatcher`."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [GROUNDED_SEARCH_TOOL]

    # Not @server.call_tool(): it turns every exception, McpError included, into an
    # isError result. No schema validation, so unlisted models pass through.
    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        return types.ServerResult(await handle_call_tool(dispatcher, req.params.name, req.params.arguments))

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


def build_dispatcher(cfg: Dict[str, Any]) -> FallbackDispatcher:
    """
    Build the shared client and dispatcher from config.

    Raises:
        MissingCredentialError: OPENAI_API_KEY is not set
    """
    if not cfg.get("api_key"):
        raise MissingCredentialError("OPENAI_API_KEY")
    client = ResponsesClient.from_config(cfg)
    logger.info(
        "OpenAI client initialized successfully with %gs timeout and %s retries",
        client.timeout,
        client.max_retries,
    )
    return FallbackDispatcher(client)


def print_startup_env() -> None:
    """
    Log relevant environment variables at startup, masking secrets.
    """
    for k in _STARTUP_ENV_KEYS:
        v = os.getenv(k)
        if v is None or v == "":
            logger.info("  %s= (unset)", k)
        elif k in _ENV_MASK_KEYS:
            logger.info("  %s= *** (set)", k)
        else:
            logger.info("  %s= %s", k, v)


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="OpenAI grounded search MCP server (stdio)")
    parser.add_argument(
        "--log-level",
        default=os.getenv("GROUNDED_SEARCH_LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=os.getenv("GROUNDED_SEARCH_LOG_FILE") or None,
        help="Optional log file path (logs always go to stderr)",
    )
    args, _unknown = parser.parse_known_args(argv)
    return args


async def serve(server: Server) -> None:
    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        logger.info("OpenAI grounded search MCP server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main(argv: Optional[List[str]] = None) -> None:
    load_env()
    args = parse_args(argv)
    log = setup_logger(
        level=args.log_level,
        log_file=Path(args.log_file) if args.log_file else None,
    )
    bind_library_loggers(log)
    print_startup_env()

    try:
        dispatcher = build_dispatcher(get_openai_config())
        server = build_server(dispatcher)
        asyncio.run(serve(server))
    except KeyboardInterrupt:
        logger.info("Shutting down")
    except MissingCredentialError as exc:
        logger.error("Error: %s", exc)
        sys.exit(1)
    except Exception as exc:
        log_error(exc, logger, context={"stage": "serve"})
        logger.error("Server failed: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
