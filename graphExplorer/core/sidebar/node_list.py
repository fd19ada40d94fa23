"""
Sidebar lists holding nodes excluded from the viewport.
"""

from enum import Enum
from functools import partial
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from graphExplorer.core.graph_model.nodes import FloatingPoint, Node, NodeKind, noop, check_node


class SidebarBucket(Enum):
    """Sidebar list a node is filed in when excluded"""
    EXCLUDED = "excluded"
    UNCONNECTED = "unconnected"


class NodeList:
    """
    Ordered list of excluded nodes shown in the sidebar.

    Adding a node installs its ``on_remove_from_sidebar`` callback so that
    including the node back takes it off the list.
    """

    def __init__(self, list_id: str):
        self.id = list_id
        self.nodes: List[Node] = []
        self.include: Optional[Callable[[Node], None]] = None

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node: Any) -> bool:
        return node in self.nodes

    def add(self, node: Node) -> None:
        check_node(node)
        if node in self.nodes:
            return

        node.on_remove_from_sidebar = partial(self.remove, node)
        self.nodes.append(node)
        logger.debug(f"Added {node.unique_id} to sidebar list '{self.id}'")

    def remove(self, node: Node) -> None:
        check_node(node)

        node.on_remove_from_sidebar = noop
        if node in self.nodes:
            self.nodes.remove(node)
            logger.debug(f"Removed {node.unique_id} from sidebar list '{self.id}'")

    def include_all(self) -> int:
        """
        Include every listed node back into the viewport.

        Returns:
            Number of included nodes
        """
        if self.include is None:
            raise RuntimeError(f"Sidebar list '{self.id}' is not attached to a graph model")

        nodes = list(self.nodes)
        for node in nodes:
            self.include(node)

        logger.info(f"Included {len(nodes)} nodes from sidebar list '{self.id}'")
        return len(nodes)

    def sort_by_name(self, order: int = 1) -> List[Node]:
        """Sort by name, ascending for a positive order and descending otherwise"""
        self.nodes.sort(key=lambda node: node.name.lower(), reverse=order < 0)
        return self.nodes

    def sort_by_count(self, order: int = 1) -> List[Node]:
        """Sort by the number of components a node stands for"""
        def count(node: Node) -> int:
            return len(node.vertices) if node.kind is NodeKind.GROUP else 1

        self.nodes.sort(key=count, reverse=order < 0)
        return self.nodes

    def reset(self) -> None:
        for node in self.nodes:
            node.on_remove_from_sidebar = noop
        self.nodes = []


class Sidebar:
    """
    Sidebar collaborator of the graph model.

    Receives ``add_floater``/``remove_floater`` and ``add_node``/``remove_node``
    on every exclude and include transition.
    """

    def __init__(self):
        self.excluded = NodeList("excludedComponents")
        self.unconnected = NodeList("unconnectedComponents")
        self.floaters: List[FloatingPoint] = []

    @property
    def lists(self) -> Dict[SidebarBucket, NodeList]:
        return {
            SidebarBucket.EXCLUDED: self.excluded,
            SidebarBucket.UNCONNECTED: self.unconnected,
        }

    def attach(self, include: Callable[[Node], None]) -> None:
        """Bind the lists' include-all action to a graph model"""
        for node_list in self.lists.values():
            node_list.include = include

    def add_floater(self, floater: FloatingPoint) -> None:
        self.floaters.append(floater)

    def remove_floater(self, floater: Optional[FloatingPoint]) -> None:
        if floater in self.floaters:
            self.floaters.remove(floater)

    def add_node(self, node: Node, bucket: SidebarBucket = SidebarBucket.EXCLUDED) -> None:
        self.lists[bucket].add(node)

    def remove_node(self, node: Node) -> None:
        node.on_remove_from_sidebar()

    def bucket_of(self, node: Node) -> Optional[SidebarBucket]:
        for bucket, node_list in self.lists.items():
            if node in node_list:
                return bucket
        return None

    def reset(self) -> None:
        for node_list in self.lists.values():
            node_list.reset()
        self.floaters = []
