"""
Graph model module holding the topology and interaction state of a component graph.
"""

from .errors import InvalidGraphDataError, NodeTypeMismatchError
from .nodes import Coordinates, Edge, FloatingPoint, Group, Node, NodeKind, Size, Vertex
from .graph_model import GraphModel, compute_canvas_size

__all__ = [
    'InvalidGraphDataError',
    'NodeTypeMismatchError',
    'Coordinates',
    'Edge',
    'FloatingPoint',
    'Group',
    'Node',
    'NodeKind',
    'Size',
    'Vertex',
    'GraphModel',
    'compute_canvas_size',
]
