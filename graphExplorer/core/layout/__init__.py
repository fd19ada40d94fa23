"""
Force-directed layout module.
"""

from .force_directed import ForceDirectedLayout

__all__ = ['ForceDirectedLayout']
