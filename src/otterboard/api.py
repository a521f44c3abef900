"""HTTP clients for the boards store and the AI service."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from otterboard.errors import ApiError, AuthenticationRequired
from otterboard.model.snapshot import ActionPlan, Board, BoardSnapshot, Group

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120.0
FRAMEWORKS = ("clusters", "swot", "eisenhower", "roadmap", "bmc")


def make_client(
    base_url: str,
    token: str = "",
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build the shared AsyncClient. Image/video calls are slow, hence the long timeout."""
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        headers=headers,
        timeout=DEFAULT_TIMEOUT,
        transport=transport,
    )


class ApiClient:
    """JSON request helper shared by the concrete clients."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    async def request(self, method: str, path: str, body: Any = None) -> Any:
        """Send a request and return the decoded JSON body (None for 204).

        Non-2xx responses raise ApiError with the response text, or
        AuthenticationRequired on 401.
        """
        try:
            response = await self.client.request(method, path, json=body)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(str(exc) or f"{method} {path} failed") from exc

        if response.status_code == 401:
            raise AuthenticationRequired(response.text or "Unauthorized")
        if response.is_error:
            logger.warning("%s %s -> %s", method, path, response.status_code)
            raise ApiError(response.text or f"Request failed: {response.status_code}", response.status_code)
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"invalid JSON from {path}", response.status_code) from exc

    async def request_field(self, method: str, path: str, body: Any, key: str) -> Any:
        """Send a request and return one key of its JSON object body."""
        data = await self.request(method, path, body)
        if not isinstance(data, dict) or key not in data:
            raise ApiError(f"{path} response has no {key!r}")
        return data[key]

    async def aclose(self) -> None:
        await self.client.aclose()


class BoardsApi(ApiClient):
    """The hosted board store."""

    async def list_boards(self) -> list[Board]:
        data = await self.request("GET", "/boards")
        return [Board.from_dict(b) for b in (data or {}).get("boards", [])]

    async def create_board(self, title: str) -> Board:
        return Board.from_dict(await self.request("POST", "/boards", {"title": title}))

    async def delete_board(self, board_id: str) -> None:
        await self.request("DELETE", f"/boards/{board_id}")

    async def get_board(self, board_id: str) -> Board:
        return Board.from_dict(await self.request("GET", f"/boards/{board_id}"))

    async def update_board(
        self,
        board_id: str,
        result: BoardSnapshot | None = None,
        title: str | None = None,
    ) -> Board:
        body: dict[str, Any] = {"result": result.to_dict() if result is not None else None}
        if title is not None:
            body["title"] = title
        return Board.from_dict(await self.request("PATCH", f"/boards/{board_id}", body))

    async def share_board(self, board_id: str, email: str) -> Board:
        return Board.from_dict(await self.request("POST", f"/boards/{board_id}/share", {"email": email}))


class AiService(ApiClient):
    """The vision/chat/image model endpoints."""

    async def analyze(self, images: list[str], mode: str, options: dict[str, bool] | None = None) -> BoardSnapshot:
        body = {
            "images": images,
            "mode": mode,
            "options": options or {"useColorCoding": True, "respectLayout": True, "gapAnalysis": True},
        }
        return BoardSnapshot.from_dict(await self.request("POST", "/analyze", body))

    async def reframe(self, themes: tuple[Group, ...], framework: str) -> tuple[Group, ...]:
        body = {"themes": [t.to_dict() for t in themes], "framework": framework}
        data = await self.request("POST", "/reframe", body)
        return tuple(Group.from_dict(t) for t in (data or {}).get("themes", []))

    async def action_plan(self, themes: tuple[Group, ...], context: str = "") -> ActionPlan:
        body = {"themes": [t.to_dict() for t in themes], "context": context}
        return ActionPlan.from_dict(await self.request("POST", "/action-plan", body))

    async def generate_image(self, prompt: str) -> str:
        return await self.request_field("POST", "/generate-image", {"prompt": prompt}, "imageUrl")

    async def generate_video(self, prompt: str) -> str:
        return await self.request_field("POST", "/generate-video", {"prompt": prompt}, "videoUrl")

    async def chat(self, message: str, context: BoardSnapshot | None = None) -> str:
        body = {"message": message, "context": context.to_dict() if context is not None else None}
        return await self.request_field("POST", "/chat", body, "text")
