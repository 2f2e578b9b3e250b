"""Async execution of external programs.

Every interaction with i3 and with the menu picker goes through
ProcessRunner: it spawns the program, feeds it optional stdin, lets its
stderr through to ours and returns everything it wrote to stdout.
"""

import asyncio
import logging
from typing import Optional, Sequence

from .errors import CommandFailedError, ProcessSpawnError
from .logging_config import log_process_result

logger = logging.getLogger("i3finder.process")


class ProcessRunner:
    """Spawns external commands and captures their stdout.

    Independent calls may run concurrently; each one is its own child
    process.
    """

    def __init__(self, check_exit_codes: bool = True):
        """Initialize process runner.

        Args:
            check_exit_codes: Raise CommandFailedError on nonzero exit unless
                a call overrides it with check=False
        """
        self.check_exit_codes = check_exit_codes

    async def run(
        self,
        command: Sequence[str],
        input: Optional[str] = None,
        check: Optional[bool] = None,
    ) -> str:
        """Run a command to completion and return its stdout.

        Args:
            command: Executable followed by its arguments
            input: Text written to the child's stdin before closing it.
                When None, stdin is closed without data.
            check: Per-call override of check_exit_codes

        Returns:
            Everything the child wrote to stdout, decoded as UTF-8

        Raises:
            ProcessSpawnError: If the executable cannot be started
            CommandFailedError: If the child exits nonzero and checking is on
        """
        command = list(command)
        if not command:
            raise ProcessSpawnError(command, "empty command")

        logger.debug(f"Subprocess call: {' '.join(command)}")

        try:
            proc = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                # stderr is inherited so the user sees it as it is written
                stderr=None,
            )
        except OSError as e:
            logger.debug(f"Failed to spawn {command[0]}: {e}")
            raise ProcessSpawnError(command, e.strerror or str(e))

        data = input.encode("utf-8") if input is not None else None
        stdout, _ = await proc.communicate(data)
        output = stdout.decode("utf-8", errors="replace")

        log_process_result(command, proc.returncode, output, logger)

        should_check = self.check_exit_codes if check is None else check
        if proc.returncode != 0:
            if should_check:
                raise CommandFailedError(command, proc.returncode, output)
            logger.debug(f"Ignoring exit status {proc.returncode} of {command[0]}")

        return output
