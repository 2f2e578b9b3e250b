"""Menu selection through an external dmenu-style picker."""

import logging
from typing import Optional, Sequence

from .choices import duplicate_displays
from .models import Choice
from .process import ProcessRunner

logger = logging.getLogger("i3finder.menu")


class MenuSelector:
    """Shows choices in a picker and maps its output back to a Choice.

    The picker reads one choice per line on stdin and prints the selected
    line on stdout. Lines are matched by exact text, so when two choices
    render identically only the first one can be selected.
    """

    def __init__(self, runner: ProcessRunner, command: Sequence[str]):
        """Initialize menu selector.

        Args:
            runner: Process runner used to launch the picker
            command: Picker argv, e.g. ["dmenu", "-i", "-l", "20"]
        """
        self.runner = runner
        self.command = list(command)

    async def choose(self, choices: Sequence[Choice]) -> Optional[Choice]:
        """Prompt the user and return the selected choice.

        Args:
            choices: Choices in display order

        Returns:
            The first choice whose display equals the picker output, or None
            when the user cancelled or typed something that matches nothing
        """
        if not choices:
            logger.info("Nothing to choose from, not launching picker")
            return None

        for display in duplicate_displays(choices):
            logger.warning(f"Several entries are shown as '{display}', only the first can be selected")

        menu_input = "\n".join(c.display for c in choices)

        # dmenu and friends exit nonzero on cancel
        output = await self.runner.run(self.command, input=menu_input, check=False)
        selected = output.rstrip()

        choice = next((c for c in choices if c.display == selected), None)
        if choice is None:
            logger.info("No selection made")
        else:
            logger.debug(f"Selected '{choice.display}' (con_id={choice.id})")
        return choice
