"""Shared helpers for CLI command handlers."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, Awaitable, Callable

from otterboard.api import AiService, BoardsApi, make_client
from otterboard.config import read_config
from otterboard.errors import AuthenticationRequired, ConfigError, OtterboardError
from otterboard.model.snapshot import Board

logger = logging.getLogger(__name__)


def load_config_or_die(args) -> dict[str, Any]:
    """Read config, applying --api-url. Exit 1 with message if invalid."""
    try:
        config = read_config(getattr(args, "config", None))
    except ConfigError as e:
        error(str(e), getattr(args, "json", False))
    if getattr(args, "api_url", None):
        config["api_url"] = args.api_url
    return config


def call_api(args, func: Callable[[BoardsApi, AiService], Awaitable[Any]]) -> Any:
    """Run func against fresh API clients. Exit 1 on any API error."""
    config = load_config_or_die(args)

    async def _run():
        client = make_client(config["api_url"], config["token"])
        try:
            return await func(BoardsApi(client), AiService(client))
        finally:
            await client.aclose()

    try:
        return asyncio.run(_run())
    except AuthenticationRequired:
        error("not signed in: set token in the config file or OTTERBOARD_TOKEN", args.json)
    except OtterboardError as e:
        logger.debug("api call failed", exc_info=True)
        error(str(e), args.json)


def board_to_dict(board: Board, with_result: bool = False) -> dict:
    data = {
        "id": board.id,
        "title": board.title,
        "owner": board.owner,
        "ownerEmail": board.owner_email,
        "collaborators": list(board.collaborators),
        "updatedAt": board.updated_at,
    }
    if with_result:
        data["result"] = board.result.to_dict() if board.result is not None else None
    return data


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)
