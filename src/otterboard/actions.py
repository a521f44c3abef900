"""Async board actions that call the AI service and update the session.

Remote failures propagate as ApiError; callers turn them into
notifications.
"""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path

from otterboard.api import FRAMEWORKS, AiService, BoardsApi
from otterboard.model.board import replace_themes, set_action_plan
from otterboard.model.session import BoardSession
from otterboard.model.snapshot import Board


async def reframe(session: BoardSession, ai: AiService, framework: str) -> bool:
    """Regroup the board's cards under a strategy framework.

    The first clustered result is remembered so choosing ``clusters``
    restores it without a remote call. Only strategy boards can be
    reframed. Returns True if the snapshot changed.
    """
    if framework not in FRAMEWORKS:
        raise ValueError(f"unknown framework: {framework!r}")
    snapshot = session.snapshot
    if snapshot is None or snapshot.mode != "strategy":
        return False
    if session.state.framework in (None, "clusters") and session.original is None:
        session.remember_original(snapshot)
    if framework == (session.state.framework or "clusters"):
        return False

    original = session.original
    if framework == "clusters":
        session.install(original)
        session.state.framework = framework
        return True

    token = session.token
    themes = await ai.reframe(original.themes, framework)
    if not session.is_active(token):
        return False
    session.apply(replace_themes, themes)
    session.state.framework = framework
    return True


async def generate_action_plan(session: BoardSession, ai: AiService, context: str = "") -> bool:
    """Ask for prioritised next steps and store them on the snapshot."""
    snapshot = session.snapshot
    if snapshot is None or snapshot.mode != "strategy":
        return False
    token = session.token
    plan = await ai.action_plan(snapshot.themes, context)
    if not session.is_active(token):
        return False
    session.apply(set_action_plan, plan)
    return True


def encode_image(path: str | Path) -> str:
    """Read an image file as a base64 data URL."""
    path = Path(path)
    mime = mimetypes.guess_type(path.name)[0] or "image/jpeg"
    return f"data:{mime};base64,{base64.b64encode(path.read_bytes()).decode('ascii')}"


async def analyze_to_board(
    boards: BoardsApi,
    ai: AiService,
    images: list[str],
    mode: str,
    title: str,
    options: dict[str, bool] | None = None,
) -> Board:
    """Analyze encoded images and store the result on a new board."""
    if not images:
        raise ValueError("at least one image is required")
    snapshot = await ai.analyze(images, mode, options)
    board = await boards.create_board(title)
    return await boards.update_board(board.id, snapshot)


def share_link(base_url: str, board_id: str) -> str:
    return f"{base_url.rstrip('/')}/?board={board_id}"
