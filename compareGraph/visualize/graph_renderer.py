"""
Static snapshot of a laid-out comparison graph.
"""

from pathlib import Path
from typing import Dict, Tuple, Union

import matplotlib.patches as mpatches
import matplotlib.pyplot as plt
import networkx as nx
from loguru import logger

from compareGraph.core.build_graph import GraphData, GhostNode


BACKGROUND_COLOR = "#1a1a2e"
LINK_COLOR = "#555b6e"
LABEL_COLOR = "#e0e0e0"

NODE_STYLES = {
    "main": {"fill": "#6c8fff", "edge": "#4c6eef", "radius": 35},
    "ghost": {"fill": "#4a5568", "edge": "#2d3748", "radius": 25},
}


def render_snapshot(
    graph: GraphData,
    positions: Dict[str, Tuple[float, float]],
    output_path: Union[str, Path],
    width: float = 960,
    height: float = 640,
    title: str = ""
) -> bool:
    """
    Draw nodes and links at their layout positions and save the image.

    Args:
        graph: Graph to draw
        positions: Layout positions keyed by node id
        output_path: Image file to write (format from the extension)
        width: Canvas width in layout units
        height: Canvas height in layout units
        title: Optional figure title

    Returns:
        True if an image was written, False for an empty graph
    """
    if graph.empty or not positions:
        logger.info("Nothing to render, graph is empty")
        return False

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    nx_graph = graph.to_networkx()
    # Screen coordinates grow downwards
    pos = {node_id: (x, height - y) for node_id, (x, y) in positions.items() if node_id in nx_graph}

    fig, ax = plt.subplots(figsize=(width / 100, height / 100))
    fig.patch.set_facecolor(BACKGROUND_COLOR)
    ax.set_facecolor(BACKGROUND_COLOR)

    nx.draw_networkx_edges(nx_graph, pos, ax=ax, edge_color=LINK_COLOR, arrows=False, width=1.5)

    for node in graph.nodes:
        if node.node_id not in pos:
            continue
        style = NODE_STYLES["ghost" if isinstance(node, GhostNode) else "main"]
        x, y = pos[node.node_id]
        ax.add_patch(mpatches.Circle(
            (x, y), style["radius"],
            facecolor=style["fill"], edgecolor=style["edge"], linewidth=2, zorder=2
        ))
        ax.text(x, y - style["radius"] - 12, node.name, color=LABEL_COLOR,
                ha="center", va="top", fontsize=8, zorder=3)

    xs = [x for x, _ in pos.values()]
    ys = [y for _, y in pos.values()]
    margin = 80
    ax.set_xlim(min(min(xs) - margin, 0), max(max(xs) + margin, width))
    ax.set_ylim(min(min(ys) - margin, 0), max(max(ys) + margin, height))
    ax.set_aspect("equal")
    ax.axis("off")
    if title:
        ax.set_title(title, color=LABEL_COLOR)

    plt.tight_layout()
    plt.savefig(output_path, dpi=100, facecolor=fig.get_facecolor(), bbox_inches="tight")
    plt.close(fig)

    logger.info(f"Saved graph snapshot to {output_path}")
    return True
