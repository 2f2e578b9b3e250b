"""Top-level i3finder workflow.

Choice mode (focus/move):
    tree -> flatten -> choices -> picker -> save state -> i3 command
Back mode:
    load state -> save current state -> one chained restore command

State is always saved, and the save awaited, before the command that
changes focus is sent.
"""

import logging
from typing import List, Optional, Union

from .choices import to_choices
from .config import FinderConfig
from .errors import CommandError
from .i3_client import I3Client, focus_command, move_command, restore_command
from .logging_config import log_async_performance
from .menu import MenuSelector
from .models import Action, Choice, CommandResult, SavedState
from .state import StateStore
from .tree import without_focused

logger = logging.getLogger("i3finder.dispatcher")


class ActionDispatcher:
    """Runs one i3finder action end to end."""

    def __init__(
        self,
        client: I3Client,
        menu: MenuSelector,
        store: StateStore,
        config: FinderConfig,
    ):
        self.client = client
        self.menu = menu
        self.store = store
        self.config = config

    @log_async_performance
    async def run(self) -> Union[Choice, SavedState, None]:
        """Perform the configured action.

        Returns:
            The Choice acted on, the SavedState restored in back mode, or
            None if the user cancelled the menu
        """
        if self.config.action == Action.BACK:
            return await self.go_back()
        return await self.choose_and_act(self.config.action)

    async def choose_and_act(self, action: Action) -> Optional[Choice]:
        """Prompt for a node, then focus it or move the active window to it."""
        nodes = without_focused(await self.client.get_nodes(self.config.show_scratch))
        choices = to_choices(nodes, self.config.workspace_prefix)
        logger.debug(f"Offering {len(choices)} choice(s)")

        choice = await self.menu.choose(choices)
        if choice is None:
            return None

        await self.store.save()

        if action == Action.MOVE:
            logger.info(f"Moving con_id={choice.id} to current workspace ('{choice.display}')")
            command = move_command(choice.id)
            results = await self.client.move_node_here(choice.id)
        else:
            logger.info(f"Focusing con_id={choice.id} ('{choice.display}')")
            command = focus_command(choice.id)
            results = await self.client.focus_node(choice.id)

        _raise_on_failure(command, results)
        return choice

    async def go_back(self) -> SavedState:
        """Restore the last saved state, saving the current one first."""
        state = await self.store.load()

        await self.store.save()

        logger.info(f"Restoring workspaces={state.workspaces} node={state.node}")
        results = await self.client.restore(state)
        _raise_on_failure(restore_command(state), results)
        return state


def _raise_on_failure(command: str, results: List[CommandResult]) -> None:
    failures = [r.error or "unknown error" for r in results if not r.success]
    if failures:
        raise CommandError(command, failures)
