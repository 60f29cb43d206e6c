"""
Graph Building Module

Derives category labels from the loaded tools and projects them into the
node/link structure consumed by the force layout.
"""

from compareGraph.core.build_graph.category_indexer import (
    ALL_CATEGORIES,
    CategoryIndexer,
    matches_filter
)
from compareGraph.core.build_graph.graph_data import (
    GraphData,
    GraphLink,
    GraphNode,
    GhostNode,
    MainNode,
    NodeKind,
    node_details
)
from compareGraph.core.build_graph.graph_builder import GraphBuilder, GraphMode

__all__ = [
    'ALL_CATEGORIES',
    'CategoryIndexer',
    'matches_filter',
    'GraphData',
    'GraphLink',
    'GraphNode',
    'GhostNode',
    'MainNode',
    'NodeKind',
    'node_details',
    'GraphBuilder',
    'GraphMode'
]
