"""
compareGraph: look up tools in a catalog, pull in their predefined
comparisons and lay the relationships out as an interactive graph.
"""

__version__ = "0.1.0"
__author__ = "compareGraph Team"

from .core import ToolRecord, ToolStore, GraphBuilder, GraphMode, ForceSimulation, SessionController

__all__ = [
    "ToolRecord",
    "ToolStore",
    "GraphBuilder",
    "GraphMode",
    "ForceSimulation",
    "SessionController"
]
