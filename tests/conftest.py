"""
Shared fixtures for the Grapho Canvas tests.
"""

import matplotlib
matplotlib.use("Agg")

import pytest

from grapho_canvas.core.graph import Edge, Graph, Vertex
from grapho_canvas.core.presets import konigsberg_graph, preview_graph, triangle
from grapho_canvas.utils.geometry import Point


def build_graph(positions, pairs, **kwargs):
    """
    Build a Graph from named positions and (start, end) name pairs.

    Vertex ids are the names, so tests can refer to them directly.
    """
    vertices = [Vertex(position=Point(*xy), vertex_id=name, label=name)
                for name, xy in positions.items()]
    edges = [Edge(start, end, edge_id=f"{start}{end}{i}") for i, (start, end) in enumerate(pairs)]
    return Graph(vertices=vertices, edges=edges, **kwargs)


@pytest.fixture
def triangle_graph():
    return triangle()


@pytest.fixture
def preview():
    return preview_graph()


@pytest.fixture
def konigsberg():
    return konigsberg_graph()


@pytest.fixture
def curved_graph():
    """Two vertices joined by an edge whose control points bow upwards."""
    graph = build_graph({"a": (0.2, 0.6), "b": (0.8, 0.5)}, [("a", "b")])
    edge_id = next(iter(graph.edges))
    graph.set_control_point1(edge_id, Point(0.35, 0.3))
    graph.set_control_point2(edge_id, Point(0.6, 0.25))
    graph.init_weight_position(edge_id)
    graph.update_arrow_parameters(edge_id)
    return graph
