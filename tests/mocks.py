"""Test doubles for i3finder.

FakeRunner stands in for ProcessRunner: it answers i3-msg queries from an
in-memory tree, plays back a scripted picker selection, and records every
call so tests can assert on commands and their order.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from i3finder.errors import CommandFailedError


@dataclass
class RunnerCall:
    """Captured process invocation."""
    command: List[str]
    input: Optional[str]
    check: Optional[bool]


class FakeRunner:
    """Scripted replacement for ProcessRunner."""

    def __init__(
        self,
        tree: Optional[Dict[str, Any]] = None,
        workspaces: Optional[List[Dict[str, Any]]] = None,
        menu_output: Union[str, Callable[[Optional[str]], str]] = "",
        ipc: str = "i3-msg",
        check_exit_codes: bool = True,
    ):
        self.tree = tree
        self.workspaces = workspaces or []
        self.menu_output = menu_output
        self.ipc = ipc
        self.calls: List[RunnerCall] = []
        self.command_replies: Dict[str, List[Dict[str, Any]]] = {}
        self.raw_outputs: Dict[tuple, str] = {}
        self.exit_codes: Dict[str, int] = {}
        self.check_exit_codes = check_exit_codes

    async def run(self, command: Sequence[str], input: Optional[str] = None, check: Optional[bool] = None) -> str:
        command = list(command)
        self.calls.append(RunnerCall(command=command, input=input, check=check))

        key = tuple(command)
        if key in self.raw_outputs:
            output = self.raw_outputs[key]
        elif command[0] != self.ipc:
            if callable(self.menu_output):
                return self.menu_output(input)
            return self.menu_output
        elif command[1:] == ["-t", "get_tree"]:
            output = json.dumps(self.tree)
        elif command[1:] == ["-t", "get_workspaces"]:
            output = json.dumps(self.workspaces)
        else:
            cmd = command[-1]
            reply = self.command_replies.get(cmd, [{"success": True} for _ in cmd.split(";")])
            output = json.dumps(reply)

        returncode = self.exit_codes.get(command[-1], 0)
        should_check = self.check_exit_codes if check is None else check
        if returncode and should_check:
            raise CommandFailedError(command, returncode, output)
        return output

    @property
    def log(self) -> List[str]:
        """Calls as labels: 'get_tree', 'get_workspaces', 'menu' or the i3 command."""
        labels = []
        for call in self.calls:
            if call.command[0] != self.ipc:
                labels.append("menu")
            elif call.command[1:2] == ["-t"]:
                labels.append(call.command[2])
            else:
                labels.append(call.command[-1])
        return labels

    @property
    def commands(self) -> List[str]:
        """i3 commands sent, excluding queries."""
        return [label for label in self.log if label not in ("menu", "get_tree", "get_workspaces")]

    @property
    def menu_calls(self) -> List[RunnerCall]:
        return [call for call in self.calls if call.command[0] != self.ipc]


# Tree builders producing GET_TREE shaped dicts

def con(
    id: int,
    name: Optional[str],
    type: str = "con",
    window: Optional[int] = None,
    focused: bool = False,
    nodes: Sequence[Dict[str, Any]] = (),
    mark: Optional[str] = None,
    **extra: Any,
) -> Dict[str, Any]:
    data = {
        "id": id,
        "type": type,
        "name": name,
        "window": window,
        "focused": focused,
        "layout": "splith",
        "rect": {"x": 0, "y": 0, "width": 1920, "height": 1080},
        "nodes": list(nodes),
        "floating_nodes": [],
    }
    if mark is not None:
        data["mark"] = mark
    data.update(extra)
    return data


def window(id: int, name: str, focused: bool = False, mark: Optional[str] = None) -> Dict[str, Any]:
    """Container holding an X11 window."""
    return con(id, name, window=10000 + id, focused=focused, mark=mark)


def native_window(id: int, name: str, app_id: Optional[str], focused: bool = False) -> Dict[str, Any]:
    """sway-native (Wayland) window: no X11 ID, app_id and pid instead."""
    return con(id, name, focused=focused, app_id=app_id, pid=20000 + id, shell="xdg_shell")


def split(id: int, *children: Dict[str, Any]) -> Dict[str, Any]:
    """Layout container without a window."""
    return con(id, None, nodes=children)


def workspace(id: int, name: str, *children: Dict[str, Any], focused: bool = False, mark: Optional[str] = None) -> Dict[str, Any]:
    return con(id, name, type="workspace", focused=focused, nodes=children, mark=mark)


def output(id: int, name: str, *workspaces: Dict[str, Any]) -> Dict[str, Any]:
    """Output with its content container."""
    return con(id, name, type="output", nodes=[con(id + 1, "content", nodes=workspaces)])


def root(*outputs: Dict[str, Any]) -> Dict[str, Any]:
    return con(1, "root", type="root", nodes=outputs)


def workspace_reply(*names: str, visible: Sequence[str] = ()) -> List[Dict[str, Any]]:
    """GET_WORKSPACES shaped list."""
    return [
        {"num": i + 1, "name": name, "visible": name in visible, "focused": False, "output": "eDP-1"}
        for i, name in enumerate(names)
    ]
