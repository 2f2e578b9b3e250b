"""Configuration for i3finder.

Settings come from an optional JSON file and are overridden by command-line
flags. The resulting FinderConfig is passed explicitly to every component
that needs a setting.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigLoadError
from .models import Action

logger = logging.getLogger("i3finder.config")

DEFAULT_CONFIG_FILE = Path.home() / ".config/i3finder/config.json"


class FinderConfig(BaseModel):
    """Runtime settings for one i3finder invocation."""

    model_config = ConfigDict(extra="forbid")

    action: Action = Field(Action.FOCUS, description="Action to perform on the chosen node")
    menu_command: List[str] = Field(default_factory=lambda: ["dmenu"], description="Picker argv")
    workspace_prefix: str = Field("workspace: ", description="Prefix for workspace menu lines")
    show_scratch: bool = Field(False, description="List the scratchpad workspace")
    track_state: bool = Field(True, description="Save focus state before acting")
    state_file: Path = Field(Path("lastState.json"), description="Where the focus snapshot lives")
    ipc_command: List[str] = Field(default_factory=lambda: ["i3-msg"], description="i3 IPC tool argv")
    check_exit_codes: bool = Field(True, description="Treat nonzero i3-msg exit as an error")

    @field_validator("menu_command", "ipc_command")
    @classmethod
    def validate_argv(cls, v: List[str]) -> List[str]:
        """Command must name an executable."""
        if not v or not v[0]:
            raise ValueError("command must not be empty")
        return v


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> FinderConfig:
    """Load configuration from disk and apply overrides.

    Args:
        config_file: JSON config path (default: ~/.config/i3finder/config.json)
        **overrides: Field values that take precedence over the file;
            None values are ignored

    Returns:
        Validated FinderConfig. Defaults are used when the file doesn't exist.

    Raises:
        ConfigLoadError: If the file or the overrides are invalid
    """
    path = Path(config_file).expanduser() if config_file else DEFAULT_CONFIG_FILE

    data: dict = {}
    if path.exists():
        try:
            with path.open("r") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigLoadError(str(path), str(e))
        if not isinstance(data, dict):
            raise ConfigLoadError(str(path), "top level must be a JSON object")
        logger.debug(f"Loaded configuration from {path}")
    elif config_file:
        logger.warning(f"Config file {path} not found, using defaults")

    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return FinderConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigLoadError(str(path), str(e))


def atomic_write_json(path: Path, data: Any) -> None:
    """Write JSON to path so readers see either the old or the new content.

    Writes to a temp file in the same directory, fsyncs it, then renames it
    over the target.

    Args:
        path: Destination file
        data: JSON-serializable data
    """
    path = Path(path)
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            json.dump(data, f)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
