"""
Shared payload fixtures for graphExplorer tests.
"""

import random
import sys
from pathlib import Path

import pytest

# Add project root directory to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from graphExplorer.core.graph_model import GraphModel


def make_vertex(vertex_id, name, position=None):
    vertex = {
        "id": vertex_id,
        "name": name,
        "symbolicName": f"org.example.{name.lower()}",
        "exportedPackages": [],
        "importedPackages": [],
        "archetype": 0,
    }
    if position is not None:
        vertex["position"] = {"x": position[0], "y": position[1]}
    return vertex


def make_edge(edge_id, source, target):
    return {"id": edge_id, "from": source, "to": target, "archetype": 0}


@pytest.fixture
def chain_payload():
    """A -> B -> C"""
    return {
        "vertices": [make_vertex(1, "A"), make_vertex(2, "B"), make_vertex(3, "C")],
        "edges": [make_edge(1, 1, 2), make_edge(2, 2, 3)],
        "groups": [],
        "sideBar": [],
    }


@pytest.fixture
def grouped_payload():
    """
    Five vertices, one of them unconnected, two of them grouped:

        1 -> 2, 1 -> 3, 3 -> 4, group 1 = {2, 3}, vertex 5 unconnected
    """
    return {
        "vertices": [
            make_vertex(1, "api", (100, 100)),
            make_vertex(2, "impl", (300, 100)),
            make_vertex(3, "storage", (300, 300)),
            make_vertex(4, "web", (500, 300)),
            make_vertex(5, "legacy", (700, 700)),
        ],
        "edges": [make_edge(1, 1, 2), make_edge(2, 1, 3), make_edge(3, 3, 4)],
        "groups": [{"id": 1, "name": "backend", "verticesId": [2, 3], "position": {"x": 320, "y": 200}}],
        "vertexArchetypes": [{"name": "Vertex"}],
        "edgeArchetypes": [{"name": "Edge"}],
        "attributeTypes": [],
        "possibleEnumValues": {},
        "sideBar": [],
    }


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def chain_model(chain_payload, rng):
    return GraphModel.build(chain_payload, rng=rng)


@pytest.fixture
def grouped_model(grouped_payload, rng):
    return GraphModel.build(grouped_payload, rng=rng)
