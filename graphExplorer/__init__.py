"""
graphExplorer: interactive exploration of component dependency graphs.
"""

__version__ = "0.1.0"
__author__ = "graphExplorer Team"

from .core import GraphModel, ForceDirectedLayout, HighlightEngine, GraphLoader

__all__ = [
    "GraphModel",
    "ForceDirectedLayout",
    "HighlightEngine",
    "GraphLoader"
]
