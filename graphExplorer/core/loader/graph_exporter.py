"""
Export of a graph model back into the load payload format.
"""

from typing import Dict, Any

from loguru import logger

from graphExplorer.core.graph_model.graph_model import GraphModel
from graphExplorer.core.sidebar.node_list import SidebarBucket
from graphExplorer.utils.io_utils import load_json, save_json


def export_payload(model: GraphModel) -> Dict[str, Any]:
    """
    Serialize the current state of a model as a load payload.

    Current positions, group membership and the excluded sidebar list are
    written so that loading the result restores the session.
    """
    payload: Dict[str, Any] = dict(model.metadata)

    payload['vertices'] = [vertex.to_dict() for vertex in model.vertices]
    payload['edges'] = [edge.to_dict() for edge in model.edges]
    payload['groups'] = [group.to_dict() for group in model.groups]

    # Unconnected vertices are re-excluded on load and need no entry
    payload['sideBar'] = [
        {'id': node.unique_id, 'isHighlighted': node.highlighted}
        for node in model.sidebar.lists[SidebarBucket.EXCLUDED].nodes
    ]

    selected = model.selected_node
    if selected is not None:
        payload['selectedVertex'] = selected.unique_id
    if model.selected_edge is not None:
        payload['selectedEdge'] = model.selected_edge.id

    logger.debug(
        f"Exported payload with {len(payload['vertices'])} vertices, "
        f"{len(payload['groups'])} groups and {len(payload['sideBar'])} sidebar entries"
    )
    return payload


def save_payload(model: GraphModel, file_name: str) -> bool:
    """Write the exported payload of a model to a JSON file"""
    return save_json(export_payload(model), file_name)


def load_payload(file_name: str) -> Dict[str, Any]:
    """Read a load payload from a JSON file"""
    payload = load_json(file_name)

    vertex_count = len(payload.get('vertices') or [])
    group_count = len(payload.get('groups') or [])
    logger.info(f"Read payload {file_name}: {vertex_count} vertices, {group_count} groups")
    return payload
