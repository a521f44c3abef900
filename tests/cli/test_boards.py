"""Tests for 'otterboard boards' commands."""

import json

import pytest

import otterboard.cli._common
from otterboard.cli.boards import boards_create, boards_delete, boards_list


def test_boards_list(remote, make_args, capsys):
    remote.add_board("b0", "Older", updatedAt="2025-01-01T00:00:00Z")
    assert boards_list(make_args()) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("b1  Offsite")
    assert "shared with 1" in lines[0]
    assert lines[1].startswith("b0  Older")


def test_boards_list_json(remote, make_args, capsys):
    assert boards_list(make_args(json=True)) == 0

    data = json.loads(capsys.readouterr().out)
    assert data[0]["id"] == "b1"
    assert data[0]["collaborators"] == ["ana@example.com"]
    assert "result" not in data[0]


def test_boards_list_empty(remote, make_args, capsys):
    remote.boards.clear()
    assert boards_list(make_args()) == 0
    assert capsys.readouterr().out == "no boards\n"


def test_boards_create(remote, make_args, capsys):
    assert boards_create(make_args(title="Retro")) == 0
    assert capsys.readouterr().out == "Created board new1: Retro\n"
    assert remote.boards["new1"]["title"] == "Retro"


def test_boards_delete(remote, make_args, capsys):
    assert boards_delete(make_args(id="b1", json=True)) == 0
    assert json.loads(capsys.readouterr().out) == {"deleted": "b1"}
    assert "b1" not in remote.boards


def test_boards_delete_missing(remote, make_args, capsys):
    with pytest.raises(SystemExit) as exc:
        boards_delete(make_args(id="nope"))
    assert exc.value.code == 1
    assert capsys.readouterr().err == "error: Board not found\n"


def test_unauthorized_error(remote, make_args, capsys):
    remote.fail[("GET", "/boards")] = 401
    with pytest.raises(SystemExit):
        boards_list(make_args(json=True))
    assert "not signed in" in json.loads(capsys.readouterr().err)["error"]


def test_api_url_flag_overrides_config(remote, make_args, monkeypatch):
    seen = []
    fake = otterboard.cli._common.make_client

    def capture(base_url, token=""):
        seen.append(base_url)
        return fake(base_url, token)

    monkeypatch.setattr(otterboard.cli._common, "make_client", capture)
    assert boards_list(make_args(api_url="http://other/api")) == 0
    assert seen == ["http://other/api"]
