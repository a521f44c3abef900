"""Tests for snapshot values and their JSON form."""

import json

from otterboard.model.snapshot import ActionPlan, Board, BoardSnapshot, Card, Group, Priority, serialize

from tests.conftest import make_snapshot


def test_card_from_dict_reads_media_urls():
    card = Card.from_dict({"id": "c1", "text": "Hi", "imageUrl": "data:img", "videoUrl": "https://v"})
    assert card == Card("c1", "Hi", video_url="https://v", image_url="data:img")


def test_card_to_dict_omits_missing_media():
    assert Card("c1", "Hi").to_dict() == {"id": "c1", "text": "Hi"}


def test_card_id_is_stringified():
    assert Card.from_dict({"id": 7, "text": "x"}).id == "7"


def test_group_unknown_color_is_dropped():
    group = Group.from_dict({"title": "T", "color": "purple", "notes": []})
    assert group.color is None


def test_group_round_trip_keys():
    group = Group("T", "insight", (Card("c1", "a"),), "pink")
    assert group.to_dict() == {
        "title": "T",
        "metaInsight": "insight",
        "notes": [{"id": "c1", "text": "a"}],
        "color": "pink",
    }


def test_priority_defaults():
    p = Priority.from_dict({"id": "p1", "title": "Do it"})
    assert p.type == "Quick Win"
    assert p.source_note_ids == ()
    assert not p.is_big_rock


def test_priority_big_rock():
    assert Priority("p1", "x", "Big Rock").is_big_rock


def test_action_plan_find():
    plan = ActionPlan((Priority("p1", "a"), Priority("p2", "b")))
    assert plan.find("p2").title == "b"
    assert plan.find("p3") is None


def test_snapshot_from_dict_defaults():
    s = BoardSnapshot.from_dict({})
    assert s.mode == "strategy"
    assert s.themes == ()
    assert s.action_plan is None
    assert s.strategic_gaps is None


def test_snapshot_to_dict_omits_absent_optionals():
    data = BoardSnapshot(mode="process", diagram_code="graph TD").to_dict()
    assert data == {"mode": "process", "themes": [], "rawMarkdown": "", "diagramCode": "graph TD"}


def test_snapshot_from_dict_reads_nested_values():
    s = BoardSnapshot.from_dict(make_snapshot(strategic_gaps=("No owner",)).to_dict())
    assert s == make_snapshot(strategic_gaps=("No owner",))


def test_snapshot_card_ids_and_iter_cards(snapshot):
    assert snapshot.card_ids() == {"c1", "c2", "c3"}
    assert [(g, i, c.id) for g, i, c in snapshot.iter_cards()] == [(0, 0, "c1"), (0, 1, "c2"), (1, 0, "c3")]


def test_serialize_is_canonical(snapshot):
    text = serialize(snapshot)
    assert json.loads(text) == snapshot.to_dict()
    assert text == json.dumps(snapshot.to_dict(), sort_keys=True, separators=(",", ":"))


def test_serialize_equal_snapshots_match():
    assert serialize(make_snapshot()) == serialize(make_snapshot())


def test_serialize_none():
    assert serialize(None) == "null"


def test_board_from_dict():
    board = Board.from_dict(
        {
            "id": "b1",
            "title": "Offsite",
            "owner": "u1",
            "ownerEmail": "a@example.com",
            "collaborators": ["b@example.com"],
            "updatedAt": "2026-01-01",
            "result": {"mode": "strategy", "themes": []},
        }
    )
    assert board.title == "Offsite"
    assert board.collaborators == ("b@example.com",)
    assert board.result == BoardSnapshot()


def test_board_without_result():
    assert Board.from_dict({"id": "b1"}).result is None


def test_report_appends_gaps():
    snapshot = make_snapshot(strategic_gaps=("No owner for hiring", "Pricing untested"))
    assert snapshot.report() == "# Board\n\n## Gaps\n\n- No owner for hiring\n- Pricing untested"


def test_report_without_gaps_or_markdown():
    assert make_snapshot().report() == "# Board"
    assert make_snapshot(raw_markdown="  ", strategic_gaps=()).report() == ""
