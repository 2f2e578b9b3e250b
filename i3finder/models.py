"""
Data models for i3finder.

Pydantic models for the parts of i3 IPC replies i3finder reads, plus the
persisted focus snapshot. Validation happens once, at the JSON boundary.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class NodeType(str, Enum):
    """i3 container type, collapsed to the kinds i3finder cares about."""

    CONTAINER = "con"
    WORKSPACE = "workspace"
    OTHER = "other"


class Action(str, Enum):
    """What to do with the chosen node."""

    FOCUS = "focus"
    MOVE = "move"
    BACK = "back"


class Node(BaseModel):
    """A container from the i3 GET_TREE reply."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(..., description="i3 container ID (con_id)")
    type: NodeType = Field(..., description="Container type")
    window: Optional[int] = Field(None, description="X11 window ID, null for split containers")
    app_id: Optional[str] = Field(None, description="Wayland app_id of a sway-native window")
    pid: Optional[int] = Field(None, description="Client process ID, sway reports it for every view")
    name: Optional[str] = Field(None, description="Window title or workspace name")
    mark: Optional[str] = Field(None, description="User mark shown before the name")
    focused: bool = Field(..., description="Whether this container has focus")
    nodes: List["Node"] = Field(..., description="Tiling children in layout order")

    @model_validator(mode="before")
    @classmethod
    def mark_from_marks(cls, data: Any) -> Any:
        """Newer i3 and sway report a 'marks' array instead of 'mark'."""
        if isinstance(data, dict) and data.get("mark") is None:
            marks = data.get("marks")
            if isinstance(marks, list) and marks:
                data = {**data, "mark": marks[0]}
        return data

    @field_validator("type", mode="before")
    @classmethod
    def collapse_type(cls, v: Any) -> Any:
        """Map root/output/floating_con/dockarea to OTHER."""
        if not isinstance(v, str):
            raise ValueError("node type must be a string")
        if v in (NodeType.CONTAINER.value, NodeType.WORKSPACE.value):
            return v
        return NodeType.OTHER.value

    @property
    def is_window(self) -> bool:
        """Container holding an application window.

        i3 and Xwayland windows carry an X11 window ID. sway-native windows
        have a null window and are recognised by app_id or pid instead.
        """
        if self.type != NodeType.CONTAINER:
            return False
        return self.window is not None or self.app_id is not None or self.pid is not None

    @property
    def is_workspace(self) -> bool:
        return self.type == NodeType.WORKSPACE


Node.model_rebuild()


class Workspace(BaseModel):
    """A workspace from the i3 GET_WORKSPACES reply."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    visible: bool


class CommandResult(BaseModel):
    """One entry of the i3 RUN_COMMAND reply."""

    model_config = ConfigDict(extra="ignore")

    success: bool
    error: Optional[str] = None


class SavedState(BaseModel):
    """
    Focus snapshot persisted between runs.

    Attributes:
        workspaces: Names of the workspaces that were visible, in i3 order
        node: Container ID that had focus
    """

    workspaces: List[str]
    node: int


@dataclass(frozen=True)
class Choice:
    """A menu line and the container it stands for."""

    display: str
    id: int
