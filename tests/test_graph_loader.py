"""
Tests for building graph models from load payloads.
"""

import math
import random

import pytest

from graphExplorer.core.graph_model import Coordinates, GraphModel, InvalidGraphDataError
from graphExplorer.core.highlight import HighlightEngine
from graphExplorer.core.layout import ForceDirectedLayout
from graphExplorer.core.loader import GraphLoader
from graphExplorer.core.sidebar import Sidebar

from conftest import make_edge, make_vertex


@pytest.mark.parametrize("payload", [
    {"edges": []},
    {"vertices": []},
    {"vertices": None, "edges": []},
    {},
])
def test_missing_collections_are_rejected(payload):
    with pytest.raises(InvalidGraphDataError):
        GraphModel.build(payload)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        GraphLoader().run({"vertices": []})


def test_random_positions_within_canvas(rng):
    payload = {
        "vertices": [make_vertex(i, f"v{i}") for i in range(16)],
        "edges": [make_edge(i, i, (i + 1) % 16) for i in range(16)],
    }

    model = GraphModel.build(payload, rng=rng)

    assert model.canvas_size == 1300
    for vertex in model.vertices:
        assert 0 <= vertex.position.x < 1300
        assert 0 <= vertex.position.y < 1300
        assert vertex.position.x == int(vertex.position.x)


def test_seeded_placement_is_reproducible():
    payload = {"vertices": [make_vertex(i, f"v{i}") for i in range(5)], "edges": []}

    first = GraphModel.build(payload, rng=random.Random(7))
    second = GraphModel.build(payload, rng=random.Random(7))

    assert [v.position for v in first.vertices] == [v.position for v in second.vertices]


def test_stored_positions_are_kept(grouped_model):
    assert grouped_model.get_vertex(1).position == Coordinates(100, 100)
    assert grouped_model.get_group(1).position == Coordinates(320, 200)


def test_edges_attach_to_both_ends(chain_model):
    edge = chain_model.get_edge(1)

    assert edge.from_node is chain_model.get_vertex(1)
    assert edge.to_node is chain_model.get_vertex(2)
    assert edge in chain_model.get_vertex(1).out_edges
    assert edge in chain_model.get_vertex(2).in_edges


def test_unresolved_endpoint_leaves_edge_unattached(rng):
    payload = {
        "vertices": [make_vertex(1, "A"), make_vertex(2, "B")],
        "edges": [make_edge(1, 1, 2), make_edge(2, 1, 99)],
    }

    model = GraphModel.build(payload, rng=rng)
    dangling = model.get_edge(2)

    assert len(model.edges) == 2
    assert dangling.from_node is model.get_vertex(1)
    assert dangling.to_node is None
    assert not dangling.is_attached
    assert dangling in model.get_vertex(1).out_edges
    assert dangling.to_dict()["to"] == 99


def test_dangling_edge_keeps_vertex_connected(rng):
    payload = {"vertices": [make_vertex(1, "A")], "edges": [make_edge(1, 1, 42)]}

    model = GraphModel.build(payload, rng=rng)

    assert not model.get_vertex(1).excluded


def test_related_archetypes_are_counted(rng):
    vertices = [make_vertex(1, "A"), make_vertex(2, "B"), make_vertex(3, "C")]
    vertices[2]["archetype"] = 1
    payload = {
        "vertices": vertices,
        "edges": [make_edge(1, 1, 2), make_edge(2, 1, 3), make_edge(3, 3, 1)],
    }

    model = GraphModel.build(payload, rng=rng)

    assert model.get_vertex(1).related_archetypes == {0: 1, 1: 2}
    assert model.get_vertex(3).related_archetypes == {0: 2}


def test_groups_claim_vertices(grouped_model):
    group = grouped_model.get_group(1)

    assert group.name == "backend"
    assert [vertex.id for vertex in group.vertices] == [2, 3]
    assert grouped_model.get_vertex(2).group is group
    assert grouped_model.get_vertex(1).group is None


def test_group_claims_unconnected_vertex(grouped_payload, rng):
    grouped_payload["groups"][0]["verticesId"].append(5)

    model = GraphModel.build(grouped_payload, rng=rng)
    legacy = model.get_vertex(5)

    assert legacy.excluded
    assert legacy.group is model.get_group(1)
    assert legacy.floater is None
    assert model.floaters == []


def test_unknown_group_members_are_ignored(grouped_payload, rng):
    grouped_payload["groups"][0]["verticesId"].append(77)

    model = GraphModel.build(grouped_payload, rng=rng)

    assert len(model.get_group(1).vertices) == 2


def test_sidebar_entries_are_applied(grouped_payload, rng):
    grouped_payload["sideBar"] = [
        {"id": "vertex-4", "isHighlighted": True},
        {"id": "group-1", "isHighlighted": False},
    ]

    model = GraphModel.build(grouped_payload, rng=rng)
    web, group = model.get_vertex(4), model.get_group(1)

    assert web.excluded and group.excluded
    assert web.highlighted
    assert model.sidebar.excluded.nodes == [web, group]
    assert web.floater in model.floaters
    assert {node.unique_id for node in model.visible_nodes()} == {"vertex-1"}


def test_malformed_sidebar_entries_are_skipped(grouped_payload, rng):
    grouped_payload["sideBar"] = [
        {"id": 4, "isHighlighted": False},
        {"id": "vertex4", "isHighlighted": False},
        {"id": "vertex-4-1", "isHighlighted": False},
        {"id": "vertex-four", "isHighlighted": False},
        {"id": "module-4", "isHighlighted": False},
        {"id": "vertex-404", "isHighlighted": False},
        {"isHighlighted": True},
        "vertex-4",
        {"id": "vertex-2", "isHighlighted": False},
        {"id": "vertex-5", "isHighlighted": False},
        {"id": "vertex-1", "isHighlighted": False},
    ]

    model = GraphModel.build(grouped_payload, rng=rng)

    # Only the top-level, not yet excluded vertex-1 is taken
    assert [node.unique_id for node in model.sidebar.excluded.nodes] == ["vertex-1"]
    assert not model.get_vertex(4).excluded
    assert not model.get_vertex(2).excluded
    assert model.get_vertex(5) in model.sidebar.unconnected


def test_selected_vertex_is_highlighted(grouped_payload, rng):
    grouped_payload["selectedVertex"] = "vertex-4"

    model = GraphModel.build(grouped_payload, rng=rng)
    web = model.get_vertex(4)

    assert web.highlighted
    assert model.selected_node is web
    assert model.get_vertex(3).highlighted_required
    assert model.get_vertex(1).dimmed


def test_selected_group_is_highlighted(grouped_payload, rng):
    grouped_payload["selectedVertex"] = "group-1"

    model = GraphModel.build(grouped_payload, rng=rng)

    assert model.get_group(1).highlighted
    assert model.get_vertex(1).highlighted_required
    assert model.get_vertex(4).highlighted_provided


def test_selected_edge_is_highlighted(grouped_payload, rng):
    grouped_payload["selectedEdge"] = "3"

    model = GraphModel.build(grouped_payload, rng=rng)

    assert model.get_edge(3).highlighted
    assert model.get_vertex(3).highlighted
    assert model.get_vertex(4).highlighted
    assert not model.get_vertex(1).highlighted


def test_malformed_selection_is_ignored(grouped_payload, rng):
    grouped_payload["selectedVertex"] = "vertex"
    grouped_payload["selectedEdge"] = "none"

    model = GraphModel.build(grouped_payload, rng=rng)

    assert model.selected_node is None
    assert not any(node.highlighted for node in model.nodes)


def test_metadata_passes_through(grouped_model):
    assert grouped_model.metadata["vertexArchetypes"] == [{"name": "Vertex"}]
    assert grouped_model.metadata["possibleEnumValues"] == {}
    assert grouped_model.component_count == 5


def test_custom_sidebar_receives_transitions(chain_payload, rng):
    sidebar = Sidebar()

    model = GraphLoader(sidebar=sidebar, rng=rng).run(chain_payload)
    model.exclude(model.get_vertex(1))

    assert model.sidebar is sidebar
    assert sidebar.excluded.nodes == [model.get_vertex(1)]
    assert len(sidebar.floaters) == 1


def test_chain_end_to_end(chain_model):
    a, b, c = (chain_model.get_vertex(i) for i in (1, 2, 3))

    assert not any(vertex.excluded for vertex in (a, b, c))
    assert len(chain_model.sidebar.unconnected) == 0

    layout = ForceDirectedLayout(chain_model)
    layout.run_initial()
    half = chain_model.canvas_size / 2
    for vertex in (a, b, c):
        offset = math.hypot(vertex.position.x - half, vertex.position.y - half)
        assert offset <= layout.max_distance + 1e-6

    HighlightEngine(chain_model).toggle(b)

    assert a.highlighted_required
    assert c.highlighted_provided
    assert not a.dimmed and not b.dimmed and not c.dimmed
    assert [node for node in chain_model.nodes if node.dimmed] == []
