"""Shared fixtures for CLI tests."""

from argparse import Namespace

import httpx
import pytest

import otterboard.cli._common
from otterboard.api import make_client
from otterboard.config import DEFAULTS, _env_key

from tests.conftest import make_snapshot


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """A config file pointing at the fake service, with OTTERBOARD_* cleared."""
    for key in DEFAULTS:
        monkeypatch.delenv(_env_key(key), raising=False)
    path = tmp_path / "config.yaml"
    path.write_text("api-url: http://test/api\ntoken: secret\napp-url: https://otter.example\n")
    return path


@pytest.fixture
def remote(service, monkeypatch):
    """Route CLI API calls to the fake service, seeded with one board."""
    service.add_board("b1", "Offsite", make_snapshot(), collaborators=["ana@example.com"])

    def fake_make_client(base_url, token=""):
        assert token == "secret"
        return make_client(base_url, token, httpx.MockTransport(service))

    monkeypatch.setattr(otterboard.cli._common, "make_client", fake_make_client)
    return service


@pytest.fixture
def make_args(config_file):
    def _make_args(**kwargs):
        values = {"config": str(config_file), "api_url": None, "json": False, "verbose": False}
        values.update(kwargs)
        return Namespace(**values)

    return _make_args
