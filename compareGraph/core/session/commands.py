"""
Commands dispatched to the session controller and their results.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional


class DragPhase(Enum):
    """Pointer drag phase enumeration"""
    START = "start"
    MOVE = "move"
    END = "end"


class NoticeLevel(Enum):
    INFO = "info"
    ERROR = "error"


@dataclass
class LoadTool:
    """Search a tool by id and load its comparisons"""
    tool_id: str


@dataclass
class RemoveTool:
    tool_id: str


@dataclass
class SetFilter:
    """Show only tools of one category ('all' for no filter)"""
    label: str


@dataclass
class DragNode:
    node_id: str
    phase: DragPhase
    x: Optional[float] = None
    y: Optional[float] = None


@dataclass
class SelectNode:
    """Request the details of a clicked node"""
    node_id: str


@dataclass
class CommandResult:
    """Outcome of one dispatched command"""
    ok: bool
    message: str = ""
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Notice:
    """Transient message shown to the user, dismissed after ttl seconds"""
    message: str
    level: NoticeLevel = NoticeLevel.ERROR
    ttl: float = 4.0
    created_at: float = field(default_factory=time.monotonic)

    def expired(self, now: Optional[float] = None) -> bool:
        now = time.monotonic() if now is None else now
        return now - self.created_at >= self.ttl
