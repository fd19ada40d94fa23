"""
Node, edge and floating point data structures of the component graph.
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from graphExplorer.core.graph_model.errors import NodeTypeMismatchError


# Approximate width in pixels of one character of a vertex name
CHAR_WIDTH = 8.3
VERTEX_MIN_WIDTH = 200
VERTEX_HEIGHT = 30
GROUP_SIZE = 70


class NodeKind(Enum):
    """Node variant discriminant"""
    VERTEX = "vertex"
    GROUP = "group"

    @classmethod
    def from_string(cls, value: str) -> 'NodeKind':
        """
        Create NodeKind from its string prefix

        Raises:
            ValueError: If the prefix is not a known node kind
        """
        for kind in cls:
            if kind.value == value:
                return kind

        valid_values = [kind.value for kind in cls]
        raise ValueError(f"Invalid node kind '{value}'. Valid options: {valid_values}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Coordinates:
    """Immutable 2D position"""
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y}


@dataclass(frozen=True)
class Size:
    width: float
    height: float


def noop() -> None:
    pass


class Node:
    """
    State shared by vertices and groups.

    The view layer reads position, visibility and highlight flags from here;
    the node never holds a reference to any rendering element.
    Subclasses provide the ``in_edges`` and ``out_edges`` properties.
    """

    kind: NodeKind

    def __init__(self, node_id: int, name: str, size: Size):
        self.id = node_id
        self.name = name
        self.position = Coordinates(0, 0)
        self.size = size

        self.excluded = False
        self.found = False
        self.dimmed = False
        self.highlighted = False
        self.highlighted_required = False
        self.highlighted_provided = False
        self.highlighted_required_neighbours = False
        self.highlighted_provided_neighbours = False

        # Invoked when the node leaves the sidebar list it is filed in
        self.on_remove_from_sidebar: Callable[[], None] = noop

    @property
    def unique_id(self) -> str:
        """Identifier unique across node variants, e.g. ``vertex-3``"""
        return f"{self.kind.value}-{self.id}"

    def incident_edges(self) -> List['Edge']:
        """All edges whose visibility depends on this node"""
        return self.in_edges + self.out_edges

    def count_edges(self) -> int:
        return len(self.in_edges) + len(self.out_edges)

    def is_unconnected(self) -> bool:
        return self.count_edges() == 0

    @property
    def anchor(self) -> 'Node':
        """Node that represents this one in the viewport"""
        return self

    @property
    def is_top_level(self) -> bool:
        return True

    def is_effectively_excluded(self) -> bool:
        """True if the node is not drawn in the viewport"""
        return self.excluded

    def center(self) -> Coordinates:
        return Coordinates(
            self.position.x + self.size.width / 2,
            self.position.y + self.size.height / 2,
        )

    def set_highlighted_required(self, value: bool) -> None:
        self.highlighted_required = value

    def set_highlighted_provided(self, value: bool) -> None:
        self.highlighted_provided = value

    def clear_highlight(self) -> None:
        """Reset every highlight flag of the node"""
        self.highlighted = False
        self.set_highlighted_required(False)
        self.set_highlighted_provided(False)
        self.highlighted_required_neighbours = False
        self.highlighted_provided_neighbours = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.unique_id}, {self.name!r})"


class Vertex(Node):
    """A software component."""

    kind = NodeKind.VERTEX

    def __init__(
        self,
        node_id: int,
        name: str,
        symbolic_name: str = "",
        exported_packages: Optional[List[Any]] = None,
        imported_packages: Optional[List[Any]] = None,
        archetype: Optional[int] = None,
        attributes: Optional[List[Any]] = None,
    ):
        width = max(30 + len(name) * CHAR_WIDTH, VERTEX_MIN_WIDTH)
        super().__init__(node_id, name, Size(width, VERTEX_HEIGHT))

        self.symbolic_name = symbolic_name
        self.exported_packages = list(exported_packages or [])
        self.imported_packages = list(imported_packages or [])
        self.archetype = archetype
        self.attributes = list(attributes or [])
        self.related_archetypes: Counter = Counter()

        self.group: Optional['Group'] = None
        self.floater: Optional['FloatingPoint'] = None

        self._in_edges: List['Edge'] = []
        self._out_edges: List['Edge'] = []

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Vertex':
        """Create a vertex from a payload entry"""
        return cls(
            node_id=data['id'],
            name=data.get('name', ''),
            symbolic_name=data.get('symbolicName', ''),
            exported_packages=data.get('exportedPackages'),
            imported_packages=data.get('importedPackages'),
            archetype=data.get('archetype'),
            attributes=data.get('attributes'),
        )

    @property
    def in_edges(self) -> List['Edge']:
        return self._in_edges

    @property
    def out_edges(self) -> List['Edge']:
        return self._out_edges

    def add_in_edge(self, edge: 'Edge') -> None:
        if not isinstance(edge, Edge):
            raise TypeError(f"{edge!r} is not instance of Edge")
        edge.to_node = self
        self._in_edges.append(edge)

    def add_out_edge(self, edge: 'Edge') -> None:
        if not isinstance(edge, Edge):
            raise TypeError(f"{edge!r} is not instance of Edge")
        edge.from_node = self
        self._out_edges.append(edge)

    def increment_related_archetype(self, archetype: Optional[int]) -> None:
        self.related_archetypes[archetype] += 1

    @property
    def anchor(self) -> Node:
        return self.group if self.group is not None else self

    @property
    def is_top_level(self) -> bool:
        return self.group is None

    def is_effectively_excluded(self) -> bool:
        if self.group is not None:
            return self.group.excluded
        return self.excluded

    def set_highlighted_required(self, value: bool) -> None:
        self.highlighted_required = value
        if self.group is not None:
            self.group.set_highlighted_required(value)

    def set_highlighted_provided(self, value: bool) -> None:
        self.highlighted_provided = value
        if self.group is not None:
            self.group.set_highlighted_provided(value)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'name': self.name,
            'symbolicName': self.symbolic_name,
            'exportedPackages': self.exported_packages,
            'importedPackages': self.imported_packages,
            'position': self.position.to_dict(),
        }
        if self.archetype is not None:
            data['archetype'] = self.archetype
        if self.attributes:
            data['attributes'] = self.attributes
        return data


class Group(Node):
    """
    A cluster of vertices drawn as a single node.

    Edges of member vertices crossing the group boundary attach to the group.
    """

    kind = NodeKind.GROUP

    def __init__(self, node_id: int, name: Optional[str] = None):
        super().__init__(node_id, name or f"Group {node_id}", Size(GROUP_SIZE, GROUP_SIZE))
        self.vertices: List[Vertex] = []

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Group':
        return cls(node_id=data['id'], name=data.get('name'))

    def add_vertex(self, vertex: Vertex) -> None:
        if not isinstance(vertex, Vertex):
            raise NodeTypeMismatchError(f"{vertex!r} is not instance of Vertex")
        if vertex in self.vertices:
            return
        vertex.group = self
        self.vertices.append(vertex)

    def remove_vertex(self, vertex: Vertex) -> None:
        if not isinstance(vertex, Vertex):
            raise NodeTypeMismatchError(f"{vertex!r} is not instance of Vertex")
        self.vertices.remove(vertex)
        vertex.group = None

    def _is_internal(self, edge: 'Edge') -> bool:
        return (
            edge.from_node is not None and edge.to_node is not None
            and edge.from_node.anchor is self and edge.to_node.anchor is self
        )

    @property
    def in_edges(self) -> List['Edge']:
        return [
            edge for vertex in self.vertices for edge in vertex.in_edges
            if not self._is_internal(edge)
        ]

    @property
    def out_edges(self) -> List['Edge']:
        return [
            edge for vertex in self.vertices for edge in vertex.out_edges
            if not self._is_internal(edge)
        ]

    def incident_edges(self) -> List['Edge']:
        # Internal edges disappear together with the group
        edges = []
        for vertex in self.vertices:
            for edge in vertex.in_edges + vertex.out_edges:
                if edge not in edges:
                    edges.append(edge)
        return edges

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'verticesId': [vertex.id for vertex in self.vertices],
            'position': self.position.to_dict(),
        }


class Edge:
    """Directed dependency between two vertices."""

    def __init__(self, edge_id: int, archetype: Optional[int] = None,
                 from_id: Any = None, to_id: Any = None):
        self.id = edge_id
        self.archetype = archetype
        # Raw endpoint ids from the payload, kept even when unresolved
        self.from_id = from_id
        self.to_id = to_id

        self.from_node: Optional[Vertex] = None
        self.to_node: Optional[Vertex] = None

        self.hidden = False
        self.dimmed = False
        self.highlighted = False
        self.highlighted_required = False
        self.highlighted_provided = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Edge':
        return cls(
            edge_id=data['id'],
            archetype=data.get('archetype'),
            from_id=data.get('from'),
            to_id=data.get('to'),
        )

    @property
    def is_attached(self) -> bool:
        return self.from_node is not None and self.to_node is not None

    def endpoints(self) -> List[Vertex]:
        return [node for node in (self.from_node, self.to_node) if node is not None]

    def recompute_hidden(self) -> None:
        """An edge is hidden iff one of its endpoints is out of the viewport"""
        self.hidden = any(node.is_effectively_excluded() for node in self.endpoints())

    def clear_highlight(self) -> None:
        self.highlighted = False
        self.highlighted_required = False
        self.highlighted_provided = False

    def to_dict(self) -> Dict[str, Any]:
        data = {'id': self.id, 'from': self.from_id, 'to': self.to_id}
        if self.archetype is not None:
            data['archetype'] = self.archetype
        return data

    def __repr__(self) -> str:
        return f"Edge({self.id}, {self.from_id} -> {self.to_id})"


class FloatingPoint:
    """
    Anchor standing in for an excluded top-level vertex.

    Keeps the vertex's in and out edges so the view can draw connectors from
    the sidebar entry back into the viewport.
    """

    def __init__(self, node: Vertex):
        self.node = node
        self.in_edges: List[Edge] = list(node.in_edges)
        self.out_edges: List[Edge] = list(node.out_edges)
        # Set by the sidebar view once the entry is laid out
        self.position: Optional[Coordinates] = None

    def __repr__(self) -> str:
        return f"FloatingPoint({self.node.unique_id})"


def check_node(node: Any) -> Node:
    """Ensure the argument is a Vertex or a Group"""
    if not isinstance(node, Node) or not isinstance(getattr(node, 'kind', None), NodeKind):
        raise NodeTypeMismatchError(f"{node!r} is instance of neither Vertex nor Group")
    return node
