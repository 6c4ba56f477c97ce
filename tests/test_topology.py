"""
Tests for connectivity and cycle queries.
"""

import itertools

import networkx as nx
import pytest

from grapho_canvas.core.graph import Directed, Graph
from grapho_canvas.network import topology

from .conftest import build_graph

SQUARE = {"a": (0.2, 0.2), "b": (0.8, 0.2), "c": (0.8, 0.8), "d": (0.2, 0.8)}
TRIANGLE = {"a": (0.5, 0.2), "b": (0.8, 0.8), "c": (0.2, 0.8)}


class TestConnectivity:

    def test_empty_graph(self):
        graph = Graph()
        assert graph.is_connected()
        assert not graph.is_cycle()
        assert not graph.has_cycle()
        assert not graph.is_hamiltonian_cycle()

    def test_single_vertex(self):
        graph = build_graph({"a": (0.5, 0.5)}, [])
        assert graph.is_connected()
        assert not graph.is_cycle()

    def test_isolated_vertices(self):
        graph = build_graph({"a": (0.2, 0.5), "b": (0.8, 0.5)}, [])
        assert not graph.is_connected()
        assert not graph.are_vertices_connected("a", "b")

    def test_two_disjoint_edges(self):
        graph = build_graph(SQUARE, [("a", "b"), ("c", "d")])
        assert not graph.is_connected()
        assert graph.are_vertices_connected("a", "b")
        assert graph.are_vertices_connected("d", "c")
        assert not graph.are_vertices_connected("a", "c")

    def test_path_is_connected_both_ways(self):
        graph = build_graph(SQUARE, [("a", "b"), ("b", "c"), ("c", "d")])
        assert graph.is_connected()
        assert graph.are_vertices_connected("d", "a")
        assert graph.are_vertices_adjacent("b", "a")
        assert not graph.are_vertices_adjacent("a", "c")

    def test_does_edge_exist_ignores_direction(self):
        graph = build_graph(SQUARE, [("a", "b")])
        assert graph.does_edge_exist("a", "b")
        assert graph.does_edge_exist("b", "a")
        assert not graph.does_edge_exist("a", "c")

    def test_self_loop_does_not_connect(self):
        graph = build_graph({"a": (0.2, 0.5), "b": (0.8, 0.5)}, [("a", "a")])
        assert not graph.are_vertices_connected("a", "b")
        assert graph.are_vertices_connected("a", "a")

    def test_does_not_modify_edges(self, triangle_graph):
        edges_before = dict(triangle_graph.edges)
        triangle_graph.is_connected()
        triangle_graph.has_cycle()
        assert triangle_graph.edges == edges_before

    @pytest.mark.parametrize("pairs", [
        [("a", "b"), ("b", "c"), ("c", "d")],
        [("a", "b"), ("c", "d")],
        [("a", "b"), ("b", "a"), ("c", "d"), ("d", "d")],
        [("a", "c"), ("b", "d"), ("a", "d")],
        [],
    ])
    def test_agrees_with_networkx(self, pairs):
        graph = build_graph(SQUARE, pairs)
        G = topology.to_networkx(graph)
        assert graph.is_connected() == nx.is_connected(G)
        for u, v in itertools.combinations(SQUARE, 2):
            assert graph.are_vertices_connected(u, v) == nx.has_path(G, u, v)


class TestCycles:

    def test_triangle(self, triangle_graph):
        assert triangle_graph.is_connected()
        assert triangle_graph.is_cycle()
        assert triangle_graph.is_hamiltonian_cycle()
        assert triangle_graph.has_cycle()

    def test_removing_any_triangle_edge_breaks_the_cycle(self):
        pairs = [("a", "b"), ("b", "c"), ("c", "a")]
        for i in range(len(pairs)):
            graph = build_graph(TRIANGLE, pairs[:i] + pairs[i + 1:])
            assert graph.is_connected()
            assert not graph.is_cycle()
            assert not graph.has_cycle()

    def test_tree_has_no_cycle(self):
        graph = build_graph(SQUARE, [("a", "b"), ("a", "c"), ("a", "d")])
        assert graph.is_connected()
        assert not graph.has_cycle()
        assert not graph.is_cycle()

    def test_triangle_with_tail_has_cycle(self):
        graph = build_graph(SQUARE, [("a", "b"), ("b", "c"), ("c", "a"), ("c", "d")])
        assert graph.has_cycle()
        assert not graph.is_cycle()

    def test_parallel_edges_form_a_cycle(self):
        graph = build_graph({"a": (0.2, 0.5), "b": (0.8, 0.5)}, [("a", "b"), ("b", "a")])
        assert graph.has_cycle()
        assert graph.is_cycle()
        assert graph.is_hamiltonian_cycle()

    def test_disjoint_triangles_pass_the_cycle_test(self):
        positions = {name: (0.1 * i, 0.5) for i, name in enumerate("abcdef")}
        pairs = [("a", "b"), ("b", "c"), ("c", "a"), ("d", "e"), ("e", "f"), ("f", "d")]
        graph = build_graph(positions, pairs)
        # Only the first vertex's cycle is checked, so two disjoint cycles pass
        assert graph.is_cycle()
        assert graph.is_hamiltonian_cycle()
        assert not graph.is_connected()

    def test_square_is_hamiltonian(self):
        graph = build_graph(SQUARE, [("a", "b"), ("b", "c"), ("c", "d"), ("d", "a")])
        assert graph.is_hamiltonian_cycle()

    def test_konigsberg(self, konigsberg):
        assert konigsberg.is_connected()
        assert konigsberg.has_cycle()
        assert not konigsberg.is_cycle()
        assert len(konigsberg.edges) == 7


class TestNetworkxExport:

    def test_multigraph_keeps_parallel_edges(self, konigsberg):
        G = topology.to_networkx(konigsberg)
        assert isinstance(G, nx.MultiGraph)
        assert G.number_of_nodes() == 4
        assert G.number_of_edges() == 7

    def test_directed_export_follows_tags(self):
        graph = build_graph(TRIANGLE, [("a", "b"), ("b", "c"), ("c", "a")])
        ab, bc, ca = graph.edges
        graph.set_edge_direction(ab, Directed.FORWARD)
        graph.set_edge_direction(bc, Directed.REVERSE)
        graph.set_edge_direction(ca, Directed.BOTH)
        G = topology.to_networkx(graph, directed=True)
        assert G.has_edge("a", "b") and not G.has_edge("b", "a")
        assert G.has_edge("c", "b") and not G.has_edge("b", "c")
        assert G.has_edge("c", "a") and G.has_edge("a", "c")

    def test_attributes(self, triangle_graph):
        G = topology.to_networkx(triangle_graph)
        vertex_id, vertex = next(iter(triangle_graph.vertices.items()))
        assert G.nodes[vertex_id]["position"] == vertex.position.to_tuple()


class TestTables:

    def test_degree_table(self, konigsberg):
        table = topology.degree_table(konigsberg)
        degrees = dict(zip(table['label'], table['degree']))
        assert degrees == {"N": 3, "S": 3, "K": 5, "E": 3}
        assert table.index.name == 'vertex_id'

    def test_summarize(self, triangle_graph):
        summary = topology.summarize(triangle_graph)
        assert summary.loc['vertices', 'value'] == 3
        assert summary.loc['edges', 'value'] == 3
        assert bool(summary.loc['is_hamiltonian_cycle', 'value'])

    def test_summarize_empty_graph(self):
        summary = topology.summarize(Graph())
        assert bool(summary.loc['is_connected', 'value'])
        assert not bool(summary.loc['has_cycle', 'value'])
