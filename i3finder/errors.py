"""
Error handling for i3finder.

Every failure that aborts a run is a FinderError carrying a structured code,
a human-readable message and an optional recovery suggestion. A cancelled
menu is not an error and never raises.
"""

from enum import Enum
from typing import Any, Dict, Optional, Sequence

from pydantic import ValidationError


class ErrorCode(Enum):
    """
    Error codes for i3finder.

    - 100-199: External process errors
    - 200-299: Parse errors
    - 300-399: Saved state errors
    - 400-499: i3 IPC errors
    - 500-599: Configuration errors
    """

    # External process errors (100-199)
    SPAWN_FAILED = 100
    PROCESS_EXIT_NONZERO = 101

    # Parse errors (200-299)
    PARSE_ERROR = 200

    # Saved state errors (300-399)
    STATE_NOT_FOUND = 300
    NO_FOCUSED_NODE = 301
    STATE_IO_FAILED = 302

    # i3 IPC errors (400-499)
    IPC_COMMAND_FAILED = 400

    # Configuration errors (500-599)
    CONFIG_LOAD_FAILED = 500


class FinderError(Exception):
    """Base exception for i3finder errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize i3finder error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)


class ProcessSpawnError(FinderError):
    """External program could not be started."""

    def __init__(self, command: Sequence[str], reason: str):
        executable = command[0] if command else ""
        super().__init__(
            code=ErrorCode.SPAWN_FAILED,
            message=f"Failed to run {executable}: {reason}",
            suggestion=f"Check that {executable} is installed and on PATH",
            context={"command": list(command), "reason": reason}
        )


class CommandFailedError(FinderError):
    """External program exited with a nonzero status.

    The child's stdout is kept on the exception as `output`.
    """

    def __init__(self, command: Sequence[str], returncode: int, output: str = ""):
        self.output = output
        super().__init__(
            code=ErrorCode.PROCESS_EXIT_NONZERO,
            message=f"{' '.join(command)} exited with status {returncode}",
            suggestion="Use --ignore-exit-codes to ignore child exit statuses",
            context={"command": list(command), "returncode": returncode}
        )


class ParseError(FinderError):
    """Malformed output from i3 or a corrupt state file."""

    def __init__(self, source: str, reason: str):
        """
        Initialize parse error.

        Args:
            source: What was being parsed (e.g., "get_tree reply", a file path)
            reason: Reason for parse failure
        """
        super().__init__(
            code=ErrorCode.PARSE_ERROR,
            message=f"Failed to parse {source}: {reason}",
            context={"source": source, "reason": reason}
        )

    @classmethod
    def from_validation(cls, source: str, error: ValidationError) -> "ParseError":
        """Build from a pydantic error, keeping only the first problem."""
        errors = error.errors()
        if not errors:
            return cls(source, str(error))
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        reason = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
        return cls(source, reason)


class StateNotFoundError(FinderError):
    """No saved state exists yet."""

    def __init__(self, state_file: str):
        super().__init__(
            code=ErrorCode.STATE_NOT_FOUND,
            message=f"No saved state found at {state_file}",
            suggestion="Focus or move something with i3finder first",
            context={"state_file": state_file}
        )


class StateError(FinderError):
    """Current state could not be captured."""

    def __init__(self, reason: str):
        super().__init__(
            code=ErrorCode.NO_FOCUSED_NODE,
            message=f"Cannot save state: {reason}",
            suggestion="Use --dont-track-state to skip saving state",
            context={"reason": reason}
        )


class StateFileError(FinderError):
    """State file exists but could not be read or written."""

    def __init__(self, state_file: str, operation: str, reason: str):
        """
        Initialize state file error.

        Args:
            state_file: Path of the snapshot file
            operation: "read" or "write"
            reason: OS error message
        """
        super().__init__(
            code=ErrorCode.STATE_IO_FAILED,
            message=f"Failed to {operation} state file {state_file}: {reason}",
            suggestion="Check the path and permissions, or pass --state-file",
            context={"state_file": state_file, "operation": operation, "reason": reason}
        )


class CommandError(FinderError):
    """i3 rejected a command."""

    def __init__(self, command: str, errors: Sequence[str]):
        """
        Initialize i3 command error.

        Args:
            command: i3 command string that was sent
            errors: Error messages reported by i3
        """
        detail = "; ".join(errors) or "unknown error"
        super().__init__(
            code=ErrorCode.IPC_COMMAND_FAILED,
            message=f"i3 command '{command}' failed: {detail}",
            suggestion="The chosen window may have closed, try again",
            context={"command": command, "errors": list(errors)}
        )


class ConfigLoadError(FinderError):
    """Configuration loading error."""

    def __init__(self, file_path: str, reason: str):
        """
        Initialize configuration load error.

        Args:
            file_path: Path to configuration file
            reason: Reason for load failure
        """
        super().__init__(
            code=ErrorCode.CONFIG_LOAD_FAILED,
            message=f"Failed to load configuration from {file_path}: {reason}",
            suggestion="Check file syntax and permissions",
            context={"file_path": file_path, "reason": reason}
        )
