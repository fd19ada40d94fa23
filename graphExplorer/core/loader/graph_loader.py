"""
Graph Loader building a graph model from a load payload.
"""

import random
from typing import Dict, List, Any, Optional, Tuple

from loguru import logger

from graphExplorer.core.graph_model.errors import InvalidGraphDataError
from graphExplorer.core.graph_model.graph_model import GraphModel, compute_canvas_size
from graphExplorer.core.graph_model.nodes import Coordinates, Edge, Group, Node, NodeKind, Vertex
from graphExplorer.core.highlight.highlight_engine import HighlightEngine
from graphExplorer.core.sidebar.node_list import Sidebar, SidebarBucket
from graphExplorer.utils.config_manager import config_manager


# Payload keys carried through to the model untouched
METADATA_KEYS = ("vertexArchetypes", "edgeArchetypes", "attributeTypes", "possibleEnumValues")


class GraphLoader:
    """Builds a graph model from vertices, edges, groups and sidebar entries of a payload."""

    def __init__(
        self,
        sidebar: Optional[Sidebar] = None,
        rng: Optional[random.Random] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize graph loader

        Args:
            sidebar: Sidebar collaborator receiving exclusion transitions
            rng: Random generator for initial placement (seeded from config if None)
            config: Loader parameters (uses the 'loader' config section if None)
        """
        self.config = config if config is not None else config_manager.get_environment_config("loader")
        self.sidebar = sidebar
        self.rng = rng if rng is not None else random.Random(self.config.get('random_seed'))

        self.spacing = self.config.get('spacing_per_vertex', 75)
        self.padding = self.config.get('canvas_padding', 1000)

    def run(self, data: Dict[str, Any]) -> GraphModel:
        """
        Build a graph model from payload data.

        Args:
            data: Load payload

        Returns:
            Constructed graph model

        Raises:
            InvalidGraphDataError: If vertices or edges are missing
        """
        if not isinstance(data, dict) or data.get('vertices') is None or data.get('edges') is None:
            raise InvalidGraphDataError("Invalid data: payload must contain 'vertices' and 'edges'")

        canvas_size = compute_canvas_size(len(data['vertices']), self.spacing, self.padding)
        model = GraphModel(sidebar=self.sidebar, canvas_size=canvas_size)
        model.metadata = {key: data.get(key) for key in METADATA_KEYS if key in data}

        selected_kind, selected_id = self._parse_unique_id(data.get('selectedVertex'))
        selected_edge_id = self._parse_int(data.get('selectedEdge'))

        vertex_map = self._build_vertices(model, data['vertices'])
        self._build_edges(model, data['edges'], vertex_map)

        # Unconnected vertices go straight to their own sidebar list
        unconnected = [vertex for vertex in model.vertices if vertex.is_unconnected()]
        for vertex in unconnected:
            model.exclude(vertex, SidebarBucket.UNCONNECTED)

        self._build_groups(model, data.get('groups') or [])
        self._apply_sidebar(model, data.get('sideBar') or [])

        logger.info(
            f"Loaded graph: {len(model.vertices)} vertices, {len(model.edges)} edges, "
            f"{len(model.groups)} groups, {len(unconnected)} unconnected, canvas {canvas_size:.1f}"
        )

        highlight_engine = HighlightEngine(model)

        if selected_edge_id is not None:
            selected_edge = model.get_edge(selected_edge_id)
            if selected_edge is not None:
                highlight_engine.highlight_edge(selected_edge)

        if selected_kind is not None:
            if selected_kind is NodeKind.VERTEX:
                selected_node = model.get_vertex(selected_id)
            else:
                selected_node = model.get_group(selected_id)

            if selected_node is not None:
                highlight_engine.set_highlighted_with_neighbours(selected_node, True)

        return model

    def _random_position(self, canvas_size: float) -> Coordinates:
        return Coordinates(
            float(int(self.rng.random() * canvas_size)),
            float(int(self.rng.random() * canvas_size)),
        )

    def _initial_position(self, component: Dict[str, Any], canvas_size: float) -> Coordinates:
        position = component.get('position')
        if position is None:
            return self._random_position(canvas_size)
        return Coordinates(float(position['x']), float(position['y']))

    def _build_vertices(self, model: GraphModel, components: List[Dict[str, Any]]) -> Dict[Any, Vertex]:
        vertex_map = {}

        for component in components:
            vertex = Vertex.from_dict(component)
            vertex.position = self._initial_position(component, model.canvas_size)

            model.add_vertex(vertex)
            vertex_map[component['id']] = vertex

        return vertex_map

    def _build_edges(self, model: GraphModel, components: List[Dict[str, Any]], vertex_map: Dict[Any, Vertex]) -> None:
        for component in components:
            edge = Edge.from_dict(component)

            from_node = vertex_map.get(component.get('from'))
            if from_node is not None:
                from_node.add_out_edge(edge)

            to_node = vertex_map.get(component.get('to'))
            if to_node is not None:
                to_node.add_in_edge(edge)

            if from_node is not None and to_node is not None:
                from_node.increment_related_archetype(to_node.archetype)
                to_node.increment_related_archetype(from_node.archetype)
            else:
                logger.warning(
                    f"Edge {edge.id} references an unknown vertex "
                    f"({component.get('from')} -> {component.get('to')}), left unattached"
                )

            model.add_edge(edge)

    def _build_groups(self, model: GraphModel, components: List[Dict[str, Any]]) -> None:
        for component in components:
            group = Group.from_dict(component)

            member_ids = component.get('verticesId') or []
            for vertex_id in member_ids:
                vertex = model.get_vertex(vertex_id)
                if vertex is None:
                    logger.warning(f"Group {group.id} references unknown vertex {vertex_id}")
                    continue
                model.add_to_group(vertex, group)

            group.position = self._initial_position(component, model.canvas_size)
            model.add_group(group)

    def _apply_sidebar(self, model: GraphModel, entries: List[Dict[str, Any]]) -> None:
        for entry in entries:
            kind, node_id = self._parse_unique_id(entry.get('id') if isinstance(entry, dict) else None)
            if kind is None:
                logger.debug(f"Skipping malformed sidebar entry: {entry!r}")
                continue

            node: Optional[Node]
            if kind is NodeKind.VERTEX:
                node = model.get_vertex(node_id)
            else:
                node = model.get_group(node_id)

            if node is None or not node.is_top_level or node.excluded:
                logger.debug(f"Skipping sidebar entry {entry['id']}: no includable top-level node")
                continue

            model.exclude(node, SidebarBucket.EXCLUDED)
            node.highlighted = bool(entry.get('isHighlighted', False))

    @staticmethod
    def _parse_unique_id(value: Any) -> Tuple[Optional[NodeKind], Optional[int]]:
        """Split a ``<type>-<id>`` string, returning (None, None) when malformed"""
        if not isinstance(value, str):
            return None, None

        parts = value.split("-")
        if len(parts) != 2:
            return None, None

        try:
            return NodeKind.from_string(parts[0]), int(parts[1])
        except ValueError:
            return None, None

    @staticmethod
    def _parse_int(value: Any) -> Optional[int]:
        try:
            return int(value)
        except (TypeError, ValueError):
            return None
