"""
Pytest configuration and fixtures for i3finder tests.
"""

import sys
from pathlib import Path

import pytest

# Make the package importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent))

from i3finder.config import FinderConfig  # noqa: E402
from mocks import (  # noqa: E402
    FakeRunner,
    output,
    root,
    split,
    window,
    workspace,
    workspace_reply,
)


@pytest.fixture
def sample_tree():
    """Two outputs, three workspaces, the scratchpad and four windows.

    Flattened (scratchpad hidden):
        ws 1 (20), vim (22), firefox (23, focused), ws 2 (30), term (31),
        ws 3 (50), mpv (51)
    """
    return root(
        output(
            2, "__i3",
            workspace(4, "__i3_scratch"),
        ),
        output(
            10, "eDP-1",
            workspace(
                20, "1",
                split(21, window(22, "vim", mark="ed"), window(23, "firefox", focused=True)),
            ),
            workspace(30, "2", window(31, "term")),
        ),
        output(
            40, "HDMI-1",
            workspace(50, "3", window(51, "mpv")),
        ),
    )


@pytest.fixture
def sample_workspaces():
    return workspace_reply("1", "2", "3", visible=("1", "3"))


@pytest.fixture
def runner(sample_tree, sample_workspaces):
    return FakeRunner(tree=sample_tree, workspaces=sample_workspaces)


@pytest.fixture
def state_file(tmp_path):
    return tmp_path / "state" / "lastState.json"


@pytest.fixture
def config(state_file):
    return FinderConfig(state_file=state_file)
