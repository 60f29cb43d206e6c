"""
Core modules for compareGraph.
"""

from .tool_store import ToolRecord, ToolStore
from .catalog import CatalogClient, ComparisonResolver
from .build_graph import CategoryIndexer, GraphBuilder, GraphMode
from .layout import ForceSimulation
from .session import SessionController

__all__ = [
    "ToolRecord",
    "ToolStore",
    "CatalogClient",
    "ComparisonResolver",
    "CategoryIndexer",
    "GraphBuilder",
    "GraphMode",
    "ForceSimulation",
    "SessionController"
]
