"""
Session state and the command-driven controller.
"""

from .commands import (
    CommandResult,
    DragNode,
    DragPhase,
    LoadTool,
    Notice,
    NoticeLevel,
    RemoveTool,
    SelectNode,
    SetFilter
)
from .controller import Session, SessionController

__all__ = [
    'CommandResult',
    'DragNode',
    'DragPhase',
    'LoadTool',
    'Notice',
    'NoticeLevel',
    'RemoveTool',
    'SelectNode',
    'SetFilter',
    'Session',
    'SessionController'
]
