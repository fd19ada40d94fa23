"""
Neighbourhood highlighting of graph nodes.
"""

from loguru import logger

from graphExplorer.core.graph_model.graph_model import GraphModel
from graphExplorer.core.graph_model.nodes import Edge, Node, NodeKind, check_node


class HighlightEngine:
    """
    Highlights the neighbourhood of a node and dims the rest of the graph.

    Sources of a node's in-edges are marked "required", targets of its
    out-edges "provided". Marks set on a grouped vertex propagate to its group.
    """

    def __init__(self, model: GraphModel):
        self.model = model

    def toggle(self, node: Node) -> bool:
        """
        Select or deselect a node.

        Returns:
            The new highlighted state
        """
        check_node(node)
        self.set_highlighted_with_neighbours(node, not node.highlighted)
        return node.highlighted

    def set_highlighted_with_neighbours(self, node: Node, value: bool) -> None:
        """Highlight a node together with both its neighbour directions"""
        check_node(node)

        with self.model.lock:
            node.highlighted = value
            node.highlighted_required_neighbours = value
            node.highlighted_provided_neighbours = value

            self._highlight_neighbours(node)

        logger.debug(f"{'Highlighted' if value else 'Unhighlighted'} {node.unique_id} with neighbours")

    def toggle_required(self, node: Node) -> bool:
        """
        Show or hide only the requirements of a node.

        Used from the summary controls of an excluded node; the rest of the
        graph keeps its dimming.
        """
        check_node(node)

        with self.model.lock:
            node.highlighted = not node.highlighted
            node.highlighted_required_neighbours = node.highlighted
            node.highlighted_provided_neighbours = False

            for edge in node.in_edges:
                source = edge.from_node
                if source is None or source.is_effectively_excluded():
                    continue

                edge.highlighted_required = node.highlighted
                source.set_highlighted_required(node.highlighted)
                if node.highlighted:
                    edge.hidden = False
                else:
                    edge.recompute_hidden()

        return node.highlighted

    def toggle_provided(self, node: Node) -> bool:
        """Show or hide only the dependents of a node."""
        check_node(node)

        with self.model.lock:
            node.highlighted = not node.highlighted
            node.highlighted_required_neighbours = False
            node.highlighted_provided_neighbours = node.highlighted

            for edge in node.out_edges:
                target = edge.to_node
                if target is None or target.is_effectively_excluded():
                    continue

                edge.highlighted_provided = node.highlighted
                target.set_highlighted_provided(node.highlighted)
                if node.highlighted:
                    edge.hidden = False
                else:
                    edge.recompute_hidden()

        return node.highlighted

    def highlight_edge(self, edge: Edge, value: bool = True) -> None:
        """Highlight an edge together with both of its endpoints"""
        if not isinstance(edge, Edge):
            raise TypeError(f"{edge!r} is not instance of Edge")

        with self.model.lock:
            edge.highlighted = value
            for node in edge.endpoints():
                node.highlighted = value

            self.model.selected_edge = edge if value else None

    def reset(self) -> None:
        """Return every node and edge to the neutral state"""
        with self.model.lock:
            for node in self.model.nodes:
                node.dimmed = False
                node.clear_highlight()

            for edge in self.model.edges:
                edge.recompute_hidden()
                edge.dimmed = False
                edge.clear_highlight()

            self.model.selected_node = None

    def _highlight_neighbours(self, node: Node) -> None:
        node.dimmed = False
        node.set_highlighted_required(False)
        node.set_highlighted_provided(False)

        if not node.highlighted:
            self.reset()
            return

        for other in self.model.nodes:
            if other is node:
                continue
            other.dimmed = True
            other.clear_highlight()

        for edge in self.model.edges:
            edge.recompute_hidden()
            edge.dimmed = True
            edge.clear_highlight()

        # The selected node stays undimmed even if a reset above touched its group
        self._undim(node)

        for edge in node.in_edges:
            edge.hidden = False
            edge.dimmed = False
            edge.highlighted_required = True

            if edge.from_node is not None:
                self._undim(edge.from_node)
                edge.from_node.set_highlighted_required(True)

        for edge in node.out_edges:
            edge.hidden = False
            edge.dimmed = False
            edge.highlighted_provided = True

            if edge.to_node is not None:
                self._undim(edge.to_node)
                edge.to_node.set_highlighted_provided(True)

        self.model.selected_node = node

    @staticmethod
    def _undim(node: Node) -> None:
        node.dimmed = False
        if node.kind is NodeKind.VERTEX and node.group is not None:
            node.group.dimmed = False
