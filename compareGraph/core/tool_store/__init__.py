"""
Tool records and the session tool store.
"""

from .tool_store import ToolRecord, ToolStore

__all__ = ['ToolRecord', 'ToolStore']
