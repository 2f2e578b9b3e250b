"""
Unit tests for MenuSelector.
"""

import logging

import pytest

from i3finder.menu import MenuSelector
from i3finder.models import Choice
from mocks import FakeRunner

CHOICES = [Choice("workspace: 1", 20), Choice("ed: vim", 22), Choice("term", 31)]


@pytest.mark.asyncio
async def test_picker_echo_resolves_to_same_choice():
    for choice in CHOICES:
        runner = FakeRunner(menu_output=f"{choice.display}\n")
        selected = await MenuSelector(runner, ["dmenu"]).choose(CHOICES)
        assert selected is not None
        assert selected.id == choice.id


@pytest.mark.asyncio
async def test_picker_receives_newline_joined_displays():
    runner = FakeRunner(menu_output="term\n")
    await MenuSelector(runner, ["dmenu", "-i", "-l", "20"]).choose(CHOICES)

    [call] = runner.calls
    assert call.command == ["dmenu", "-i", "-l", "20"]
    assert call.input == "workspace: 1\ned: vim\nterm"
    assert call.check is False


@pytest.mark.asyncio
@pytest.mark.parametrize("output", ["", "\n", "something else\n", "ter"])
async def test_no_match_is_no_selection(output):
    runner = FakeRunner(menu_output=output)
    assert await MenuSelector(runner, ["dmenu"]).choose(CHOICES) is None


@pytest.mark.asyncio
async def test_trailing_whitespace_trimmed():
    runner = FakeRunner(menu_output="ed: vim  \n")
    selected = await MenuSelector(runner, ["dmenu"]).choose(CHOICES)
    assert selected == Choice("ed: vim", 22)


@pytest.mark.asyncio
async def test_duplicate_display_first_wins(caplog):
    choices = [Choice("term", 31), Choice("term", 32)]
    runner = FakeRunner(menu_output="term\n")

    with caplog.at_level(logging.WARNING, logger="i3finder.menu"):
        selected = await MenuSelector(runner, ["dmenu"]).choose(choices)

    assert selected.id == 31
    assert "term" in caplog.text


@pytest.mark.asyncio
async def test_empty_choices_skip_picker():
    runner = FakeRunner(menu_output="anything\n")
    assert await MenuSelector(runner, ["dmenu"]).choose([]) is None
    assert runner.calls == []
