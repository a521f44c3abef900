"""Tests for modal prompts."""

import pytest
from textual.app import App
from textual.widgets import Input, OptionList

from otterboard.ui.dialogs import ConfirmScreen, FrameworkPicker, TextPrompt


class DialogApp(App):
    def __init__(self, screen):
        super().__init__()
        self.dialog = screen
        self.results = []

    def on_mount(self) -> None:
        self.push_screen(self.dialog, self.results.append)


@pytest.mark.asyncio
async def test_text_prompt_returns_stripped_value():
    app = DialogApp(TextPrompt("Title:", value="  Offsite "))
    async with app.run_test() as pilot:
        await pilot.pause()
        app.screen.query_one(Input).focus()
        await pilot.press("enter")
        await pilot.pause()
        assert app.results == ["Offsite"]


@pytest.mark.asyncio
async def test_text_prompt_blank_is_none():
    app = DialogApp(TextPrompt("Title:", value="   "))
    async with app.run_test() as pilot:
        await pilot.pause()
        app.screen.query_one(Input).focus()
        await pilot.press("enter")
        await pilot.pause()
        assert app.results == [None]


@pytest.mark.asyncio
async def test_text_prompt_blank_allowed():
    app = DialogApp(TextPrompt("Context:", value="   ", allow_blank=True))
    async with app.run_test() as pilot:
        await pilot.pause()
        app.screen.query_one(Input).focus()
        await pilot.press("enter")
        await pilot.pause()
        assert app.results == [""]


@pytest.mark.asyncio
async def test_text_prompt_blank_allowed_escape_still_cancels():
    app = DialogApp(TextPrompt("Context:", allow_blank=True))
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("escape")
        await pilot.pause()
        assert app.results == [None]


@pytest.mark.asyncio
async def test_text_prompt_escape_cancels():
    app = DialogApp(TextPrompt("Token:", password=True))
    async with app.run_test() as pilot:
        await pilot.pause()
        assert app.screen.query_one(Input).password is True
        await pilot.press("escape")
        await pilot.pause()
        assert app.results == [None]


@pytest.mark.asyncio
async def test_confirm_yes_and_escape():
    app = DialogApp(ConfirmScreen("Delete?"))
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.click("#yes")
        await pilot.pause()
        assert app.results == [True]

    app = DialogApp(ConfirmScreen("Delete?"))
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("escape")
        await pilot.pause()
        assert app.results == [False]


@pytest.mark.asyncio
async def test_framework_picker_marks_current_and_selects():
    app = DialogApp(FrameworkPicker("swot"))
    async with app.run_test() as pilot:
        await pilot.pause()
        options = app.screen.query_one(OptionList)
        assert str(options.get_option("swot").prompt).startswith("●")
        assert str(options.get_option("clusters").prompt).startswith("○")
        options.focus()
        options.highlighted = 2
        await pilot.press("enter")
        await pilot.pause()
        assert app.results == ["eisenhower"]
