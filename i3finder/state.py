"""
Focus state persistence for i3finder.

A single JSON file holds the last snapshot: which workspaces were visible and
which container had focus. Every save overwrites it, so "back" toggles
between the two most recent states rather than walking a history.

File schema:
{
    "workspaces": ["1", "4"],
    "node": 94285746371232
}
"""

import asyncio
import logging
from pathlib import Path

from pydantic import ValidationError

from .config import atomic_write_json
from .errors import ParseError, StateError, StateFileError, StateNotFoundError
from .i3_client import I3Client
from .models import SavedState

logger = logging.getLogger("i3finder.state")


class StateStore:
    """Saves and loads the focus snapshot."""

    def __init__(
        self,
        client: I3Client,
        state_file: Path,
        enabled: bool = True,
        show_scratch: bool = False,
    ):
        """
        Initialize state store.

        Args:
            client: i3 client used to read the current state
            state_file: Path of the snapshot file
            enabled: When False, save() does nothing
            show_scratch: Scratchpad filtering used when finding focus
        """
        self.client = client
        self.state_file = Path(state_file)
        self.enabled = enabled
        self.show_scratch = show_scratch

    async def capture(self) -> SavedState:
        """
        Read the current visible workspaces and focused container from i3.

        Raises:
            StateError: If no container has focus
        """
        workspaces, focused = await asyncio.gather(
            self.client.get_visible_workspaces(),
            self.client.get_focused_node(self.show_scratch),
        )
        if focused is None:
            raise StateError("no focused window or workspace found in the tree")
        return SavedState(workspaces=[ws.name for ws in workspaces], node=focused.id)

    async def save(self) -> None:
        """
        Capture the current state and overwrite the snapshot file.

        Returns once the file is written, so callers may change focus
        afterwards without affecting what was saved.

        Raises:
            StateError: If no container has focus
            StateFileError: If the file cannot be written
        """
        if not self.enabled:
            logger.debug("State tracking disabled, not saving")
            return

        state = await self.capture()
        try:
            await asyncio.to_thread(atomic_write_json, self.state_file, state.model_dump())
        except OSError as e:
            raise StateFileError(str(self.state_file), "write", e.strerror or str(e))
        logger.info(
            f"Saved state to {self.state_file}: workspaces={state.workspaces} node={state.node}"
        )

    async def load(self) -> SavedState:
        """
        Read the last saved snapshot.

        Raises:
            StateNotFoundError: If nothing has been saved yet
            StateFileError: If the file exists but cannot be read
            ParseError: If the file is corrupt
        """
        try:
            raw = await asyncio.to_thread(self.state_file.read_bytes)
        except FileNotFoundError:
            raise StateNotFoundError(str(self.state_file))
        except OSError as e:
            raise StateFileError(str(self.state_file), "read", e.strerror or str(e))

        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(str(self.state_file), f"not valid UTF-8 ({e.reason} at byte {e.start})")

        try:
            state = SavedState.model_validate_json(content)
        except ValidationError as e:
            raise ParseError.from_validation(str(self.state_file), e)

        logger.debug(f"Loaded state from {self.state_file}: {state.model_dump()}")
        return state
