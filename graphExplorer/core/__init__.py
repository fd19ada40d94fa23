"""
Core modules for graphExplorer.
"""

from .graph_model import GraphModel, Vertex, Group, Edge, Coordinates
from .sidebar import Sidebar, SidebarBucket
from .layout import ForceDirectedLayout
from .highlight import HighlightEngine
from .loader import GraphLoader

__all__ = [
    "GraphModel",
    "Vertex",
    "Group",
    "Edge",
    "Coordinates",
    "Sidebar",
    "SidebarBucket",
    "ForceDirectedLayout",
    "HighlightEngine",
    "GraphLoader"
]
