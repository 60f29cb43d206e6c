"""
Shared fixtures for the compareGraph tests.
"""

import sys
import threading
from pathlib import Path
from typing import Dict, Any, List, Optional

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from compareGraph.core.errors import ToolLookupError, ToolNotFoundError
from compareGraph.core.tool_store import ToolRecord, ToolStore


class FakeCatalog:
    """In-memory stand-in for the catalog service."""

    def __init__(self, tools: Optional[Dict[str, Dict[str, Any]]] = None, broken: Optional[List[str]] = None):
        self.tools = dict(tools or {})
        self.broken = set(broken or [])
        self.calls: List[str] = []
        self.closed = False
        self._lock = threading.Lock()

    def fetch_tool(self, tool_id: str) -> ToolRecord:
        with self._lock:
            self.calls.append(tool_id)
        if tool_id in self.broken:
            raise ToolLookupError(tool_id, f"Network error while fetching '{tool_id}'")
        if tool_id not in self.tools:
            raise ToolNotFoundError(tool_id, f"Tool '{tool_id}' not found (HTTP 404)", status_code=404)
        return ToolRecord.from_dict(self.tools[tool_id])

    def close(self):
        self.closed = True


def make_record(tool_id: str, name: Optional[str] = None, categories=None, comparisons=None, **extra) -> ToolRecord:
    payload: Dict[str, Any] = {"toolId": tool_id}
    if name is not None:
        payload["name"] = name
    if categories is not None:
        payload["categories"] = categories
    if comparisons is not None:
        payload["predefinedComparisons"] = comparisons
    payload.update(extra)
    return ToolRecord.from_dict(payload)


def make_store(*records: ToolRecord) -> ToolStore:
    store = ToolStore()
    for record in records:
        store.put(record.tool_id, record)
    return store


@pytest.fixture
def alpha_catalog() -> FakeCatalog:
    """Alpha compares against Beta (available) and C (missing)."""
    return FakeCatalog({
        "A": {"toolId": "A", "name": "Alpha", "predefinedComparisons": ["B", "C"], "categories": ["Web"]},
        "B": {"toolId": "B", "name": "Beta", "categories": ["Data"]},
    })
