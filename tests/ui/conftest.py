"""Fixtures for UI tests."""

import httpx
import pytest

from otterboard.ui.app import OtterboardApp

from tests.conftest import BASE_URL, make_snapshot

SCREEN_SIZE = (160, 50)


@pytest.fixture
def config():
    return {
        "api_url": BASE_URL,
        "app_url": "https://otter.example",
        "token": "secret",
        "sync_interval": 60,
        "log_file": "",
    }


@pytest.fixture
def board_app(config, service):
    """The app opened straight onto board b1 holding the standard snapshot."""
    service.add_board("b1", "Offsite", make_snapshot())
    return OtterboardApp(config, board_id="b1", transport=httpx.MockTransport(service))


async def wait_for(pilot, predicate, attempts=50):
    """Pause until predicate() holds or attempts run out."""
    for _ in range(attempts):
        if predicate():
            return True
        await pilot.pause(0.01)
    return predicate()


def text_of(widget) -> str:
    return str(widget.render())
