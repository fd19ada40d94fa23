"""
Neighbourhood highlighting module.
"""

from .highlight_engine import HighlightEngine

__all__ = ['HighlightEngine']
