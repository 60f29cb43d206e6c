#!/usr/bin/env python3
"""
Tool exploration script for compareGraph.

Loads one or more tools from the catalog together with their predefined
comparisons, settles the force layout and writes a JSON snapshot and a PNG
image of the resulting graph.
"""

import argparse
import sys
import dotenv
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# load .env file (COMPARE_GRAPH_API_URL)
dotenv.load_dotenv(project_root / ".env")

from compareGraph.core.build_graph import GraphMode
from compareGraph.core.catalog import CatalogClient
from compareGraph.core.session import LoadTool, SetFilter, SessionController
from compareGraph.utils import save_json, setup_logger
from compareGraph.visualize import render_snapshot


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Load tools and their predefined comparisons, then lay them out as a graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example usage:
  python scripts/explore_tools.py react
  python scripts/explore_tools.py react vue --category "Frontend" -o data/graphs/frontend
  python scripts/explore_tools.py pandas --mode root --api-url http://localhost:3000
        """
    )

    parser.add_argument("tool_ids", nargs="+", help="Tool ids to search for, in order")
    parser.add_argument("--category", "-c", default=None, help="Category filter to apply after loading")
    parser.add_argument(
        "--mode", "-m",
        choices=[mode.value for mode in GraphMode],
        default=None,
        help="Graph mode (default: from config)"
    )
    parser.add_argument("--api-url", default=None, help="Catalog base URL (default: from config / .env)")
    parser.add_argument(
        "--output-dir", "-o",
        type=str,
        default="data/graphs/explore_tools",
        help="Directory for graph.json and graph.png"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the initial layout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser.parse_args()


def main():
    """Run the exploration"""
    args = parse_arguments()
    logger = setup_logger("explore_tools", level="DEBUG" if args.verbose else "INFO")

    client = CatalogClient(base_url=args.api_url)
    controller = SessionController(
        client=client,
        mode=GraphMode(args.mode) if args.mode else None,
        seed=args.seed
    )

    try:
        for tool_id in args.tool_ids:
            result = controller.dispatch(LoadTool(tool_id))
            if not result.ok:
                logger.warning(f"Skipping '{tool_id}': {result.message}")

        if args.category:
            result = controller.dispatch(SetFilter(args.category))
            logger.info(f"Active category: {result.data['filter']}")

        session = controller.session
        if session.empty_state:
            logger.error("No tools loaded, nothing to lay out")
            return 1

        ticks = session.simulation.run(show_progress=True)
        logger.info(f"Layout settled after {ticks} ticks")

        positions = controller.positions()
        output_dir = Path(args.output_dir)
        snapshot = session.graph.to_dict(positions)
        snapshot["categories"] = session.categories.labels
        snapshot["active_filter"] = session.categories.active
        save_json(snapshot, str(output_dir / "graph.json"))
        render_snapshot(
            session.graph,
            positions,
            output_dir / "graph.png",
            width=controller.width,
            height=controller.height,
            title=", ".join(args.tool_ids)
        )

        logger.info("=" * 60)
        logger.info(f"Tools loaded: {len(session.store)}")
        logger.info(f"Graph: {len(session.graph.nodes)} nodes, {len(session.graph.links)} links")
        logger.info(f"Outputs saved to {output_dir}")
        logger.info("=" * 60)
        return 0
    finally:
        controller.close()


if __name__ == "__main__":
    sys.exit(main())
