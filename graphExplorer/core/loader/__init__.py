"""
Graph loading module

Builds graph models from load payloads and exports them back.
"""

from graphExplorer.core.loader.graph_loader import GraphLoader
from graphExplorer.core.loader.graph_exporter import (
    export_payload,
    load_payload,
    save_payload
)

__all__ = [
    'GraphLoader',
    'export_payload',
    'load_payload',
    'save_payload'
]
