"""i3 IPC client for querying and commanding the window manager.

Talks to i3 through its command-line IPC tool (i3-msg, or swaymsg on sway):
- Window tree (GET_TREE)
- Workspaces (GET_WORKSPACES)
- Sending commands (RUN_COMMAND)

Replies are validated into models; anything malformed raises ParseError.
"""

import logging
from typing import List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from .errors import CommandFailedError, ParseError
from .models import CommandResult, Node, SavedState, Workspace
from .process import ProcessRunner
from .tree import find_focused, flatten

logger = logging.getLogger("i3finder.i3_client")

_workspace_list = TypeAdapter(List[Workspace])
_command_results = TypeAdapter(List[CommandResult])


class I3Client:
    """Async i3 queries and commands over the i3-msg tool."""

    def __init__(self, runner: ProcessRunner, ipc_command: Sequence[str] = ("i3-msg",)):
        """Initialize i3 client.

        Args:
            runner: Process runner used to invoke the IPC tool
            ipc_command: IPC tool argv prefix (e.g., ["swaymsg"])
        """
        self.runner = runner
        self.ipc_command = list(ipc_command)

    async def get_tree(self) -> Node:
        """Get i3 window tree (GET_TREE).

        Returns:
            Root container with full window hierarchy

        Raises:
            ParseError: If the reply is not a valid tree
        """
        logger.debug("IPC query: GET_TREE")
        output = await self.runner.run(self.ipc_command + ["-t", "get_tree"])
        try:
            return Node.model_validate_json(output)
        except ValidationError as e:
            raise ParseError.from_validation("get_tree reply", e)

    async def get_workspaces(self) -> List[Workspace]:
        """Get all workspaces (GET_WORKSPACES).

        Raises:
            ParseError: If the reply is not a valid workspace list
        """
        logger.debug("IPC query: GET_WORKSPACES")
        output = await self.runner.run(self.ipc_command + ["-t", "get_workspaces"])
        try:
            workspaces = _workspace_list.validate_json(output)
        except ValidationError as e:
            raise ParseError.from_validation("get_workspaces reply", e)
        logger.debug(f"GET_WORKSPACES returned {len(workspaces)} workspace(s)")
        return workspaces

    async def get_visible_workspaces(self) -> List[Workspace]:
        """Workspaces currently shown on some output, in i3 order."""
        workspaces = await self.get_workspaces()
        return [ws for ws in workspaces if ws.visible]

    async def get_nodes(self, show_scratch: bool = False) -> List[Node]:
        """Get the flattened, filtered tree (see tree.flatten)."""
        tree = await self.get_tree()
        nodes = flatten(tree, show_scratch)
        logger.debug(f"Tree flattened to {len(nodes)} node(s)")
        return nodes

    async def get_focused_node(self, show_scratch: bool = False) -> Optional[Node]:
        """Get the focused window or workspace.

        Returns:
            Focused node, or None if no listable node has focus
        """
        return find_focused(await self.get_nodes(show_scratch))

    async def command(self, cmd: str) -> List[CommandResult]:
        """Send command to i3 (RUN_COMMAND).

        Args:
            cmd: i3 command string, may chain several commands with ';'

        Returns:
            One result per chained command. i3-msg exits 2 when a command
            fails; if its reply names the failure, the results are returned
            so the caller can report i3's own error text.

        Raises:
            CommandFailedError: If the tool exits nonzero without reporting
                a failed command
            ParseError: If the reply is not a list of command results
        """
        logger.debug(f"IPC command: {cmd}")
        try:
            output = await self.runner.run(self.ipc_command + [cmd])
        except CommandFailedError as e:
            results = _failed_results(e.output)
            if not results:
                raise
            logger.debug(f"RUN_COMMAND exited {e.context.get('returncode')} with failures reported")
            return results

        try:
            results = _command_results.validate_json(output)
        except ValidationError as e:
            raise ParseError.from_validation("command reply", e)
        success_count = sum(1 for r in results if r.success)
        logger.debug(f"RUN_COMMAND completed: {success_count}/{len(results)} succeeded")
        return results

    # Helper methods for the commands i3finder issues

    async def focus_node(self, node_id: int) -> List[CommandResult]:
        """Focus a container by con_id."""
        return await self.command(focus_command(node_id))

    async def move_node_here(self, node_id: int) -> List[CommandResult]:
        """Move a container to the current workspace."""
        return await self.command(move_command(node_id))

    async def restore(self, state: SavedState) -> List[CommandResult]:
        """Show the saved workspaces, then focus the saved container.

        Sent as one chained command so i3 does not redraw between steps.
        """
        return await self.command(restore_command(state))


def focus_command(node_id: int) -> str:
    return f"[con_id={node_id}] focus"


def move_command(node_id: int) -> str:
    return f"[con_id={node_id}] move workspace current"


def restore_command(state: SavedState) -> str:
    """Chained i3 command that brings back a saved state.

    Example:
        >>> restore_command(SavedState(workspaces=["2", "3"], node=7))
        'workspace 2;workspace 3;[con_id=7] focus'
    """
    steps = [f"workspace {name}" for name in state.workspaces]
    steps.append(focus_command(state.node))
    return ";".join(steps)


def _failed_results(output: str) -> List[CommandResult]:
    """Results from a nonzero-exit reply, or [] unless some command failed."""
    try:
        results = _command_results.validate_json(output)
    except ValidationError:
        return []
    if all(r.success for r in results):
        return []
    return results
