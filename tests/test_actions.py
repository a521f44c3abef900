"""Tests for AI-backed board actions."""

import asyncio

import pytest

from otterboard.actions import analyze_to_board, encode_image, generate_action_plan, reframe, share_link
from otterboard.errors import ApiError
from otterboard.model.board import edit_card_text

from tests.conftest import make_snapshot

SWOT = {
    "themes": [
        {"title": "Strengths", "notes": [{"id": "c3", "text": "New market"}]},
        {"title": "Threats", "notes": [{"id": "c1", "text": "Supplier risk"}, {"id": "c2", "text": "Budget problem"}]},
    ]
}


@pytest.fixture
def swot(service):
    service.ai["/reframe"] = SWOT
    return service


@pytest.mark.asyncio
async def test_reframe_replaces_themes(session, ai, swot):
    assert await reframe(session, ai, "swot") is True
    assert [g.title for g in session.snapshot.themes] == ["Strengths", "Threats"]
    assert session.state.framework == "swot"
    assert session.snapshot.action_plan == make_snapshot().action_plan
    body = swot.calls("POST", "/reframe")[0][2]
    assert body["framework"] == "swot"
    assert [t["title"] for t in body["themes"]] == ["Risks", "Ideas", "Parking lot"]


@pytest.mark.asyncio
async def test_reframe_twice_starts_from_original(session, ai, swot):
    await reframe(session, ai, "swot")
    await reframe(session, ai, "eisenhower")
    body = swot.calls("POST", "/reframe")[1][2]
    assert [t["title"] for t in body["themes"]] == ["Risks", "Ideas", "Parking lot"]


@pytest.mark.asyncio
async def test_clusters_restores_original_without_request(session, ai, swot):
    original = session.snapshot
    await reframe(session, ai, "swot")
    assert await reframe(session, ai, "clusters") is True
    assert session.snapshot is original
    assert len(swot.calls("POST", "/reframe")) == 1


@pytest.mark.asyncio
async def test_reframe_to_current_framework_is_noop(session, ai, swot):
    assert await reframe(session, ai, "clusters") is False
    await reframe(session, ai, "swot")
    assert await reframe(session, ai, "swot") is False
    assert len(swot.calls("POST", "/reframe")) == 1


@pytest.mark.asyncio
async def test_reframe_unknown_framework(session, ai):
    with pytest.raises(ValueError, match="unknown framework"):
        await reframe(session, ai, "pestle")


@pytest.mark.asyncio
async def test_reframe_refused_outside_strategy_mode(session, ai, swot):
    session.install(make_snapshot(mode="process", diagram_code="graph TD"))
    assert await reframe(session, ai, "swot") is False
    assert swot.calls("POST", "/reframe") == []


@pytest.mark.asyncio
async def test_reframe_result_dropped_after_board_switch(session, ai, swot):
    swot.hold[("POST", "/reframe")] = gate = asyncio.Event()
    task = asyncio.create_task(reframe(session, ai, "swot"))
    await asyncio.sleep(0.01)
    session.open("b2", make_snapshot(raw_markdown="# Other"))
    gate.set()
    assert await task is False
    assert session.snapshot.raw_markdown == "# Other"


@pytest.mark.asyncio
async def test_action_plan_is_stored(session, ai, service):
    service.ai["/action-plan"] = {
        "priorities": [{"id": "n1", "title": "Hire", "type": "Big Rock", "sourceNoteIds": ["c2"]}]
    }
    session.apply(edit_card_text, 0, 0, "Supplier risk (EU)")
    assert await generate_action_plan(session, ai, "Q3 focus") is True
    plan = session.snapshot.action_plan
    assert [p.title for p in plan.priorities] == ["Hire"]
    assert plan.priorities[0].source_note_ids == ("c2",)
    body = service.calls("POST", "/action-plan")[0][2]
    assert body["context"] == "Q3 focus"
    assert body["themes"][0]["notes"][0]["text"] == "Supplier risk (EU)"


@pytest.mark.asyncio
async def test_action_plan_error_propagates(session, ai, service):
    service.fail[("POST", "/action-plan")] = 500
    with pytest.raises(ApiError, match="Request failed: 500"):
        await generate_action_plan(session, ai)
    assert session.snapshot == make_snapshot()


def test_encode_image(tmp_path):
    path = tmp_path / "wall.png"
    path.write_bytes(b"\x89PNG")
    assert encode_image(path) == "data:image/png;base64,iVBORw=="


def test_encode_image_unknown_type_defaults_to_jpeg(tmp_path):
    path = tmp_path / "photo"
    path.write_bytes(b"abc")
    assert encode_image(path) == "data:image/jpeg;base64,YWJj"


@pytest.mark.asyncio
async def test_analyze_to_board(boards_api, ai, service):
    service.ai["/analyze"] = make_snapshot().to_dict()
    board = await analyze_to_board(boards_api, ai, ["data:image/png;base64,AA=="], "strategy", "Offsite")
    assert board.id == "new1"
    assert board.title == "Offsite"
    assert board.result == make_snapshot()
    body = service.calls("POST", "/analyze")[0][2]
    assert body["mode"] == "strategy"
    assert body["options"] == {"useColorCoding": True, "respectLayout": True, "gapAnalysis": True}


@pytest.mark.asyncio
async def test_analyze_requires_images(boards_api, ai, service):
    with pytest.raises(ValueError):
        await analyze_to_board(boards_api, ai, [], "strategy", "Empty")
    assert service.requests == []


def test_share_link():
    assert share_link("https://otter.example/", "b1") == "https://otter.example/?board=b1"
