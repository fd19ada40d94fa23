"""
Sidebar lists of nodes excluded from the viewport.
"""

from .node_list import NodeList, Sidebar, SidebarBucket

__all__ = ['NodeList', 'Sidebar', 'SidebarBucket']
