"""
Graph Builder: projects the tool store into nodes and links for the layout.
"""

from enum import Enum
from typing import Dict, List, Optional

from loguru import logger

from compareGraph.core.build_graph.category_indexer import ALL_CATEGORIES, matches_filter
from compareGraph.core.build_graph.graph_data import GraphData, GraphLink, GraphNode, GhostNode, MainNode
from compareGraph.core.tool_store import ToolRecord, ToolStore


class GraphMode(Enum):
    """Graph building mode enumeration"""
    FULL = "full"  # Every visible tool with its own comparisons
    ROOT = "root"  # First loaded tool only, everything else as its direct target


class _GraphAccumulator:
    """Collects nodes and links, deduplicating nodes by id and links by ordered pair."""

    def __init__(self, store: ToolStore):
        self.store = store
        self.nodes: Dict[str, GraphNode] = {}
        self.links: List[GraphLink] = []
        self._pairs = set()

    def add_primary(self, record: ToolRecord) -> None:
        current = self.nodes.get(record.tool_id)
        # Reassigning an existing key keeps its first-seen place in the node order
        if current is None or not getattr(current, 'primary', False):
            self.nodes[record.tool_id] = MainNode(record=record, primary=True)

    def add_target(self, target_id: str) -> None:
        if target_id in self.nodes:
            return
        record = self.store.get(target_id)
        if record is None:
            self.nodes[target_id] = GhostNode(node_id=target_id)
        else:
            self.nodes[target_id] = MainNode(record=record, primary=False)

    def add_link(self, source_id: str, target_id: str) -> None:
        if source_id == target_id:
            logger.debug(f"Ignoring self comparison of '{source_id}'")
            return
        self.add_target(target_id)
        pair = (source_id, target_id)
        if pair in self._pairs:
            return
        self._pairs.add(pair)
        self.links.append(GraphLink(source=source_id, target=target_id))

    def result(self) -> GraphData:
        return GraphData(nodes=list(self.nodes.values()), links=list(self.links))


class GraphBuilder:
    """
    Graph Builder

    Building is a pure function of the store contents, the active category
    filter and the mode: every call allocates a fresh node and link list and
    never mutates the store.
    """

    def __init__(self, mode: GraphMode = GraphMode.FULL):
        self.mode = GraphMode(mode)

    def build(self, store: ToolStore, active_filter: str = ALL_CATEGORIES, mode: Optional[GraphMode] = None) -> GraphData:
        """
        Build nodes and links for the tools that pass the filter.

        Args:
            store: Loaded tools
            active_filter: Category label; unknown labels behave like the catch-all
            mode: Overrides the builder's mode for this call

        Returns:
            Fresh graph data, empty when no tool is visible
        """
        mode = GraphMode(mode) if mode is not None else self.mode
        active_filter = self._effective_filter(store, active_filter)

        if mode == GraphMode.ROOT:
            graph = self._build_root(store, active_filter)
        else:
            graph = self._build_full(store, active_filter)

        logger.debug(
            f"Built {mode.value} graph for filter '{active_filter}': "
            f"{len(graph.nodes)} nodes, {len(graph.links)} links"
        )
        return graph

    def _effective_filter(self, store: ToolStore, active_filter: str) -> str:
        if active_filter == ALL_CATEGORIES:
            return active_filter
        if any(active_filter in record.categories for record in store.values()):
            return active_filter
        logger.debug(f"No loaded tool has category '{active_filter}', showing all tools")
        return ALL_CATEGORIES

    def _build_full(self, store: ToolStore, active_filter: str) -> GraphData:
        accumulator = _GraphAccumulator(store)
        visible = [record for record in store.values() if matches_filter(record, active_filter)]

        for record in visible:
            accumulator.add_primary(record)
            for comparison_id in record.predefined_comparisons:
                accumulator.add_link(record.tool_id, comparison_id)

        return accumulator.result()

    def _build_root(self, store: ToolStore, active_filter: str) -> GraphData:
        accumulator = _GraphAccumulator(store)
        records = store.values()
        if not records:
            return accumulator.result()

        root = records[0]
        if not matches_filter(root, active_filter):
            return accumulator.result()

        accumulator.add_primary(root)
        for comparison_id in root.predefined_comparisons:
            accumulator.add_link(root.tool_id, comparison_id)
        for record in records[1:]:
            accumulator.add_link(root.tool_id, record.tool_id)

        return accumulator.result()
