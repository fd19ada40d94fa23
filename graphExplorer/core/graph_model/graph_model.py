"""
Graph model owning the vertices, edges and groups of one exploration session.
"""

import math
import threading
from typing import Any, Dict, List, Optional

import networkx as nx
from loguru import logger

from graphExplorer.core.graph_model.errors import NodeTypeMismatchError
from graphExplorer.core.graph_model.nodes import (
    Coordinates,
    Edge,
    FloatingPoint,
    Group,
    Node,
    NodeKind,
    Vertex,
    check_node,
)
from graphExplorer.core.sidebar.node_list import Sidebar, SidebarBucket


def compute_canvas_size(vertex_count: int, spacing: float = 75, padding: float = 1000) -> float:
    """
    Side length of the square canvas nodes are initially scattered in.

    Area grows sub-linearly so that the average spacing between nodes stays
    roughly constant as graphs get larger.
    """
    if vertex_count <= 0:
        return padding
    return (vertex_count * spacing) / round(math.sqrt(vertex_count)) + padding


class GraphModel:
    """
    Topology and interaction state of a component graph.

    Every mutation (include, exclude, grouping, highlighting, layout) goes
    through this object; callers running it outside a single thread hold
    ``lock`` for the duration of a mutation.
    """

    def __init__(self, sidebar: Optional[Sidebar] = None, canvas_size: float = 0.0):
        self.vertices: List[Vertex] = []
        self.groups: List[Group] = []
        self.edges: List[Edge] = []

        self.sidebar = sidebar if sidebar is not None else Sidebar()
        self.sidebar.attach(self.include)

        self.canvas_size = canvas_size
        self.lock = threading.RLock()

        # Classification metadata passed through from the payload
        self.metadata: Dict[str, Any] = {}

        self.selected_node: Optional[Node] = None
        self.selected_edge: Optional[Edge] = None

    @classmethod
    def build(cls, data: Dict[str, Any], **kwargs) -> 'GraphModel':
        """Construct a model from a load payload, see ``GraphLoader.run``"""
        from graphExplorer.core.loader.graph_loader import GraphLoader

        return GraphLoader(**kwargs).run(data)

    # ------------------------------------------------------------------ #
    # Collections
    # ------------------------------------------------------------------ #

    @property
    def nodes(self) -> List[Node]:
        return [*self.vertices, *self.groups]

    @property
    def floaters(self) -> List[FloatingPoint]:
        return self.sidebar.floaters

    @property
    def component_count(self) -> int:
        return len(self.vertices)

    def add_vertex(self, vertex: Vertex) -> Vertex:
        self.vertices.append(vertex)
        return vertex

    def add_group(self, group: Group) -> Group:
        self.groups.append(group)
        return group

    def add_edge(self, edge: Edge) -> Edge:
        self.edges.append(edge)
        return edge

    def get_vertex(self, vertex_id: Any) -> Optional[Vertex]:
        return next((vertex for vertex in self.vertices if vertex.id == vertex_id), None)

    def get_group(self, group_id: Any) -> Optional[Group]:
        return next((group for group in self.groups if group.id == group_id), None)

    def get_edge(self, edge_id: Any) -> Optional[Edge]:
        return next((edge for edge in self.edges if edge.id == edge_id), None)

    def get_node(self, unique_id: str) -> Optional[Node]:
        """
        Resolve a ``<type>-<id>`` identifier.

        Returns:
            The node, or None if the identifier is malformed or unknown
        """
        if not isinstance(unique_id, str):
            return None

        parts = unique_id.split("-")
        if len(parts) != 2:
            return None

        try:
            kind = NodeKind.from_string(parts[0])
            node_id = int(parts[1])
        except ValueError:
            return None

        if kind is NodeKind.VERTEX:
            return self.get_vertex(node_id)
        return self.get_group(node_id)

    def visible_nodes(self) -> List[Node]:
        """Top-level nodes currently drawn in the viewport"""
        return [node for node in self.nodes if node.is_top_level and not node.excluded]

    # ------------------------------------------------------------------ #
    # Exclusion
    # ------------------------------------------------------------------ #

    def exclude(self, node: Node, bucket: SidebarBucket = SidebarBucket.EXCLUDED) -> None:
        """
        Move a node out of the viewport into a sidebar list.

        A top-level vertex gets a floating point keeping its connections
        drawable; edges touching the node are hidden.
        """
        check_node(node)

        with self.lock:
            if node.excluded:
                logger.debug(f"{node.unique_id} is already excluded")
                return

            node.excluded = True

            if node.kind is NodeKind.VERTEX and node.group is None:
                node.floater = FloatingPoint(node)
                self.sidebar.add_floater(node.floater)

            self._refresh_edges(node)
            self.sidebar.add_node(node, bucket)

        logger.debug(f"Excluded {node.unique_id} into '{bucket.value}' list")

    def include(self, node: Node) -> None:
        """Move a node back from the sidebar into the viewport"""
        check_node(node)

        with self.lock:
            self.sidebar.remove_node(node)

            if not node.excluded:
                return

            node.excluded = False

            if node.kind is NodeKind.VERTEX and node.floater is not None:
                self.sidebar.remove_floater(node.floater)
                node.floater = None

            self._refresh_edges(node)

        logger.debug(f"Included {node.unique_id}")

    def _refresh_edges(self, node: Node) -> None:
        for edge in node.incident_edges():
            edge.recompute_hidden()

    # ------------------------------------------------------------------ #
    # Groups
    # ------------------------------------------------------------------ #

    def add_to_group(self, vertex: Vertex, group: Group) -> None:
        """
        Make a vertex a member of a group.

        An excluded vertex loses its floating point since its exclusion is
        represented by the group from now on.
        """
        check_node(vertex)
        check_node(group)
        if vertex.kind is not NodeKind.VERTEX or group.kind is not NodeKind.GROUP:
            raise NodeTypeMismatchError(f"Cannot add {vertex.unique_id} to {group.unique_id}")

        with self.lock:
            if vertex.group is group:
                return
            if vertex.group is not None:
                logger.warning(f"{vertex.unique_id} moves from {vertex.group.unique_id} to {group.unique_id}")
                self.remove_from_group(vertex)

            group.add_vertex(vertex)

            if vertex.floater is not None:
                self.sidebar.remove_floater(vertex.floater)
                vertex.floater = None

            for edge in vertex.in_edges + vertex.out_edges:
                edge.recompute_hidden()

    def remove_from_group(self, vertex: Vertex) -> None:
        """Detach a vertex from its group, restoring its own exclusion visuals"""
        check_node(vertex)
        if vertex.kind is not NodeKind.VERTEX:
            raise NodeTypeMismatchError(f"{vertex.unique_id} is not a vertex")

        with self.lock:
            group = vertex.group
            if group is None:
                return

            group.remove_vertex(vertex)

            if vertex.excluded and vertex.floater is None:
                vertex.floater = FloatingPoint(vertex)
                self.sidebar.add_floater(vertex.floater)

            for edge in vertex.in_edges + vertex.out_edges:
                edge.recompute_hidden()

    # ------------------------------------------------------------------ #
    # Misc interactions
    # ------------------------------------------------------------------ #

    def move(self, node: Node, coords: Coordinates) -> None:
        """Commit the position a node was dragged to"""
        check_node(node)
        if not isinstance(coords, Coordinates):
            raise TypeError(f"{coords!r} is not instance of Coordinates")

        with self.lock:
            node.position = coords

    def find(self, term: str) -> List[Node]:
        """
        Mark nodes whose name contains the term as found.

        An empty term clears every mark.
        """
        term = (term or "").strip().lower()
        found = []

        with self.lock:
            for node in self.nodes:
                node.found = bool(term) and term in node.name.lower()
                if node.found:
                    found.append(node)

        logger.debug(f"Search for '{term}' matched {len(found)} nodes")
        return found

    def to_networkx(self, visible_only: bool = False) -> nx.MultiDiGraph:
        """
        Export the topology as a multigraph keyed by unique node ids.

        Args:
            visible_only: Export the viewport population only, with member
                edges attached to their groups and hidden edges dropped

        Returns:
            networkx MultiDiGraph
        """
        graph = nx.MultiDiGraph()

        if visible_only:
            nodes = self.visible_nodes()
            for node in nodes:
                graph.add_node(node.unique_id, name=node.name, kind=node.kind.value,
                               x=node.position.x, y=node.position.y)

            for edge in self.edges:
                if not edge.is_attached or edge.hidden:
                    continue
                source, target = edge.from_node.anchor, edge.to_node.anchor
                if source is target or source not in nodes or target not in nodes:
                    continue
                graph.add_edge(source.unique_id, target.unique_id, key=edge.id)
            return graph

        for vertex in self.vertices:
            graph.add_node(
                vertex.unique_id,
                name=vertex.name,
                kind=vertex.kind.value,
                excluded=vertex.excluded,
                group=vertex.group.unique_id if vertex.group is not None else None,
                x=vertex.position.x,
                y=vertex.position.y,
            )

        for edge in self.edges:
            if edge.is_attached:
                graph.add_edge(edge.from_node.unique_id, edge.to_node.unique_id,
                               key=edge.id, hidden=edge.hidden)

        return graph

    def __repr__(self) -> str:
        return (
            f"GraphModel(vertices={len(self.vertices)}, edges={len(self.edges)}, "
            f"groups={len(self.groups)})"
        )
