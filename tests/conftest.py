"""Shared builders and a fake board/AI service for tests."""

from __future__ import annotations

import asyncio
import json
import re

import httpx
import pytest

from otterboard.api import AiService, BoardsApi, make_client
from otterboard.model.session import BoardSession
from otterboard.model.snapshot import ActionPlan, BoardSnapshot, Card, Group, Priority

BASE_URL = "http://test/api"


def make_snapshot(**overrides) -> BoardSnapshot:
    """Three groups: two risks, one idea, and an empty group. Plus an action plan.

    Priority p1 names c1, c3 and a card id that does not exist; p2 names nothing.
    """
    themes = (
        Group(
            title="Risks",
            meta_insight="Delivery is fragile",
            notes=(Card("c1", "Supplier risk"), Card("c2", "Budget problem")),
        ),
        Group(title="Ideas", notes=(Card("c3", "New market"),), color="green"),
        Group(title="Parking lot"),
    )
    plan = ActionPlan(
        priorities=(
            Priority("p1", "Secure suppliers", "Big Rock", "Biggest exposure", ("c1", "c3", "gone")),
            Priority("p2", "Tidy backlog", "Quick Win"),
        )
    )
    values = {"mode": "strategy", "themes": themes, "raw_markdown": "# Board", "action_plan": plan}
    values.update(overrides)
    return BoardSnapshot(**values)


@pytest.fixture
def snapshot() -> BoardSnapshot:
    return make_snapshot()


@pytest.fixture
def session(snapshot) -> BoardSession:
    """A session with board b1 open and the standard snapshot installed."""
    s = BoardSession()
    s.open("b1", snapshot)
    return s


class FakeService:
    """In-memory stand-in for the boards store and AI endpoints.

    Use as an ``httpx.MockTransport`` handler. ``fail`` maps
    ``(method, path)`` to a status code to return instead. ``hold`` maps
    the same keys to an asyncio.Event the response waits for.
    ``ai`` maps AI paths to a response dict or a callable taking the body.
    """

    def __init__(self) -> None:
        self.boards: dict[str, dict] = {}
        self.requests: list[tuple[str, str, object]] = []
        self.fail: dict[tuple[str, str], int] = {}
        self.hold: dict[tuple[str, str], asyncio.Event] = {}
        self.ai: dict[str, object] = {}
        self._next_id = 1

    def add_board(self, board_id: str, title: str = "Board", result: BoardSnapshot | None = None, **extra) -> dict:
        record = {
            "id": board_id,
            "title": title,
            "owner": "u1",
            "ownerEmail": "owner@example.com",
            "collaborators": [],
            "updatedAt": "2026-01-02T03:04:05Z",
            "result": result.to_dict() if result is not None else None,
        }
        record.update(extra)
        self.boards[board_id] = record
        return record

    def calls(self, method: str, path: str | None = None) -> list:
        return [r for r in self.requests if r[0] == method and (path is None or r[1] == path)]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        method = request.method
        path = request.url.path.removeprefix("/api")
        body = json.loads(request.content) if request.content else None
        self.requests.append((method, path, body))

        key = (method, path)
        if key in self.hold:
            await self.hold[key].wait()
        if key in self.fail:
            status = self.fail[key]
            return httpx.Response(status, text="" if status == 500 else f"{method} {path} refused")
        return self._route(method, path, body)

    def _route(self, method: str, path: str, body) -> httpx.Response:
        if path == "/boards":
            if method == "GET":
                return httpx.Response(200, json={"boards": list(self.boards.values())})
            board_id = f"new{self._next_id}"
            self._next_id += 1
            return httpx.Response(201, json=self.add_board(board_id, body["title"]))

        match = re.fullmatch(r"/boards/([^/]+)(/share)?", path)
        if match:
            board_id, share = match.groups()
            record = self.boards.get(board_id)
            if record is None:
                return httpx.Response(404, text="Board not found")
            if share:
                record["collaborators"].append(body["email"])
                return httpx.Response(200, json=record)
            if method == "GET":
                return httpx.Response(200, json=record)
            if method == "PATCH":
                record.update(body)
                return httpx.Response(200, json=record)
            if method == "DELETE":
                del self.boards[board_id]
                return httpx.Response(204)

        if path in self.ai:
            response = self.ai[path]
            if callable(response):
                response = response(body)
            return httpx.Response(200, json=response)
        return httpx.Response(404, text="Not found")


@pytest.fixture
def service() -> FakeService:
    return FakeService()


@pytest.fixture
def transport(service) -> httpx.MockTransport:
    return httpx.MockTransport(service)


@pytest.fixture
def client(transport) -> httpx.AsyncClient:
    return make_client(BASE_URL, "secret", transport)


@pytest.fixture
def boards_api(client) -> BoardsApi:
    return BoardsApi(client)


@pytest.fixture
def ai(client) -> AiService:
    return AiService(client)
