#!/usr/bin/env python3
"""
Example: Component Graph Exploration
This example loads a component graph payload, lays it out with the
force-directed layout, optionally highlights a node's neighbourhood and
writes the resulting session back as a payload.
"""

import sys
import argparse
from pathlib import Path

# Add project root directory to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loguru import logger
from graphExplorer.core.graph_model import GraphModel
from graphExplorer.core.layout import ForceDirectedLayout
from graphExplorer.core.highlight import HighlightEngine
from graphExplorer.core.loader import load_payload, save_payload
from graphExplorer.utils import config_manager, setup_logger


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Load a component graph, lay it out and explore a node's neighbourhood",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example usage:
  python explore_graph_example.py
  python explore_graph_example.py --input-file /path/to/graph.json --output-file /path/to/session.json
  python explore_graph_example.py -i data/payloads/sample_graph.json --highlight vertex-3 --exclude vertex-2
        """
    )

    parser.add_argument(
        "--input-file", "-i",
        type=str,
        default=str(project_root / "data/payloads/sample_graph.json"),
        help="Load payload JSON file (default: data/payloads/sample_graph.json)"
    )

    parser.add_argument(
        "--output-file", "-o",
        type=str,
        default=None,
        help="Where to write the explored session as a payload (default: do not write)"
    )

    parser.add_argument(
        "--iterations",
        type=int,
        default=None,
        help="Layout iterations (default: automatic layout budget from config)"
    )

    parser.add_argument(
        "--highlight",
        type=str,
        default=None,
        help="Node to highlight with its neighbours, e.g. vertex-3 or group-1"
    )

    parser.add_argument(
        "--exclude",
        type=str,
        action="append",
        default=[],
        help="Node to exclude into the sidebar before the layout (repeatable)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Also write a detailed log file into this directory"
    )

    return parser.parse_args()


def main():
    """Run the graph exploration example"""

    args = parse_arguments()
    setup_logger("graph_explorer", level="DEBUG" if args.verbose else config_manager.get_general_config()["log_level"], log_dir=args.log_dir)

    logger.info("=" * 80)
    logger.info("Component Graph Exploration Example")
    logger.info("=" * 80)

    try:
        payload = load_payload(args.input_file)
        model = GraphModel.build(payload)
    except Exception as e:
        logger.error(f"Failed to load graph: {e}")
        return 1

    logger.info(f"Graph: {model}")
    logger.info(f"Components: {model.component_count}")
    logger.info(f"Unconnected: {[node.name for node in model.sidebar.unconnected.nodes]}")

    for unique_id in args.exclude:
        node = model.get_node(unique_id)
        if node is None:
            logger.warning(f"Unknown node: {unique_id}")
            continue
        model.exclude(node)

    layout = ForceDirectedLayout(model)
    if args.iterations is None:
        stats = layout.run_initial()
    else:
        stats = layout.run(args.iterations)
    logger.info(f"Layout statistics: {stats}")

    for node in model.visible_nodes():
        logger.info(f"  {node.unique_id:<12} {node.name:<20} ({node.position.x:.0f}, {node.position.y:.0f})")

    if args.highlight:
        node = model.get_node(args.highlight)
        if node is None:
            logger.warning(f"Unknown node: {args.highlight}")
        else:
            HighlightEngine(model).set_highlighted_with_neighbours(node, True)
            required = [n.name for n in model.vertices if n.highlighted_required]
            provided = [n.name for n in model.vertices if n.highlighted_provided]
            logger.info(f"{node.name} requires: {required}")
            logger.info(f"{node.name} provides to: {provided}")

    visible_graph = model.to_networkx(visible_only=True)
    logger.info(f"Viewport graph: {visible_graph.number_of_nodes()} nodes, {visible_graph.number_of_edges()} edges")

    if args.output_file:
        save_payload(model, args.output_file)

    return 0


if __name__ == "__main__":
    sys.exit(main())
