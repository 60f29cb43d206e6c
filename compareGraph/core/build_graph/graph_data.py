"""
Nodes, links and the graph snapshot produced by the Graph Builder.
"""

import networkx as nx
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Any, Optional, Tuple, Union

from compareGraph.core.tool_store import ToolRecord


class NodeKind(Enum):
    """Node kind enumeration"""
    MAIN = "main"    # Backed by a loaded tool record
    GHOST = "ghost"  # Referenced but never loaded


@dataclass(frozen=True)
class MainNode:
    """Node for a loaded tool"""
    record: ToolRecord
    primary: bool = True  # False when shown only as another tool's comparison

    kind = NodeKind.MAIN

    @property
    def node_id(self) -> str:
        return self.record.tool_id

    @property
    def name(self) -> str:
        return self.record.display_name


@dataclass(frozen=True)
class GhostNode:
    """Node for a comparison id whose record could not be loaded"""
    node_id: str
    name: str = ""

    kind = NodeKind.GHOST

    def __post_init__(self):
        if not self.name:
            object.__setattr__(self, 'name', self.node_id)


GraphNode = Union[MainNode, GhostNode]


@dataclass(frozen=True)
class GraphLink:
    """Directed link: source lists target as a predefined comparison"""
    source: str
    target: str

    def to_dict(self) -> Dict[str, str]:
        return {'source': self.source, 'target': self.target}


@dataclass
class GraphData:
    """Nodes and links of one graph build"""
    nodes: List[GraphNode] = field(default_factory=list)
    links: List[GraphLink] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.nodes

    def node_ids(self) -> List[str]:
        return [node.node_id for node in self.nodes]

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        return None

    def link_pairs(self) -> List[Tuple[str, str]]:
        return [(link.source, link.target) for link in self.links]

    def to_networkx(self) -> nx.DiGraph:
        """Build a directed networkx view of the nodes and links"""
        graph = nx.DiGraph()
        for node in self.nodes:
            graph.add_node(node.node_id, name=node.name, kind=node.kind.value)
        graph.add_edges_from(self.link_pairs())
        return graph

    def to_dict(self, positions: Optional[Dict[str, Tuple[float, float]]] = None) -> Dict[str, Any]:
        """
        Convert to a JSON-ready snapshot

        Args:
            positions: Optional layout positions keyed by node id
        """
        nodes = []
        for node in self.nodes:
            node_data: Dict[str, Any] = {
                'id': node.node_id,
                'name': node.name,
                'kind': node.kind.value
            }
            if isinstance(node, MainNode):
                node_data['primary'] = node.primary
                node_data['record'] = node.record.to_dict()
            if positions and node.node_id in positions:
                x, y = positions[node.node_id]
                node_data['x'] = round(float(x), 3)
                node_data['y'] = round(float(y), 3)
            nodes.append(node_data)

        return {
            'nodes': nodes,
            'links': [link.to_dict() for link in self.links],
            'statistics': {
                'node_count': len(self.nodes),
                'link_count': len(self.links),
                'ghost_count': sum(1 for node in self.nodes if isinstance(node, GhostNode))
            }
        }


# Record attributes shown in a details panel, in display order
DETAIL_FIELDS = [
    ("supportedPlatforms", "platforms"),
    ("learningCurve", "learning_curve"),
    ("documentationQuality", "documentation_quality"),
]


def node_details(node: GraphNode) -> Dict[str, Any]:
    """Describe a node for a details panel; only fields the record carries are included."""
    if isinstance(node, GhostNode):
        return {'id': node.node_id, 'name': node.name, 'ghost': True}

    record = node.record
    details: Dict[str, Any] = {'id': record.tool_id, 'name': record.display_name, 'ghost': False}
    if record.categories:
        details['categories'] = list(record.categories)
    for attribute, label in DETAIL_FIELDS:
        value = record.get(attribute)
        if value:
            details[label] = list(value) if isinstance(value, (list, tuple)) else value
    if record.predefined_comparisons:
        details['comparisons'] = list(record.predefined_comparisons)
    return details
