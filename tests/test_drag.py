"""
Tests for the three-phase vertex drag.
"""

import math

import pytest

from grapho_canvas.canvas_config import DragProtocolError, GraphInvariantError
from grapho_canvas.core.graph import Edge
from grapho_canvas.interaction.drag import DragSession, clamped_share, relative_position
from grapho_canvas.utils.geometry import Point

from .conftest import build_graph

TOL = 1e-7
RENDER_SIZE = Point(600, 300)


def layout(graph):
    """Control points and weight positions of every edge."""
    return {
        edge_id: (graph.edge_control_points1[edge_id], graph.edge_control_points2[edge_id],
                  graph.edge_weight_positions[edge_id])
        for edge_id in graph.edges
    }


def assert_layout_close(before, after):
    assert set(before) == set(after)
    for edge_id, points in before.items():
        for expected, actual in zip(points, after[edge_id]):
            assert actual.is_close(expected, tol=TOL), edge_id


class TestHelpers:

    def test_relative_position(self):
        assert relative_position(Point(0.5, 0.25), Point(0, 0), Point(1, 1)) == (0.5, 0.25)
        assert relative_position(Point(0.5, 0.5), Point(0, 0.5), Point(1, 0.5)) == (0.5, None)

    def test_clamped_share(self):
        assert clamped_share(0.5, -10.0, 0.3) == pytest.approx(-5.0)
        assert clamped_share(3.0, 10.0, 0.3) == pytest.approx(10.0)
        assert clamped_share(-3.0, 10.0, 0.3) == pytest.approx(-10.0)

    @pytest.mark.parametrize("fraction", [None, 0, 0.0, math.nan, math.inf])
    def test_clamped_share_falls_back(self, fraction):
        assert clamped_share(fraction, 10.0, 0.7) == pytest.approx(7.0)


class TestDragIdempotence:

    def test_zero_drag(self, curved_graph):
        before = layout(curved_graph)
        session = DragSession(curved_graph, RENDER_SIZE)
        session.will_move("a")
        session.update(Point.zero())
        session.commit()
        assert_layout_close(before, layout(curved_graph))
        assert curved_graph.get_vertex("a").position == Point(0.2, 0.6)

    def test_drag_returning_to_start(self, curved_graph):
        before = layout(curved_graph)
        session = DragSession(curved_graph, RENDER_SIZE)
        session.will_move("b")
        for translation in (Point(10, 5), Point(80, -40), Point(-30, 120), Point.zero()):
            session.update(translation)
        session.commit()
        assert_layout_close(before, layout(curved_graph))
        assert curved_graph.get_vertex("b").position.is_close(Point(0.8, 0.5))

    @pytest.mark.parametrize("label", list("abcdef"))
    def test_every_preview_vertex(self, preview, label):
        vertex_id = next(vid for vid, v in preview.vertices.items() if v.label == label)
        before = layout(preview)
        session = DragSession(preview, RENDER_SIZE)
        session.will_move(vertex_id)
        session.update(Point(45, -20))
        session.update(Point.zero())
        session.commit()
        assert_layout_close(before, layout(preview))
        preview.check_invariants()

    def test_self_loop_label_keeps_its_place(self):
        graph = build_graph({"a": (0.5, 0.2), "b": (0.5, 0.8)}, [("a", "b"), ("a", "a"), ("b", "a")])
        before = layout(graph)
        session = DragSession(graph, RENDER_SIZE)
        session.will_move("a")
        session.update(Point(40, 70))
        session.update(Point.zero())
        session.commit()
        assert_layout_close(before, layout(graph))

    def test_self_loop_label_follows_vertex(self):
        graph = build_graph({"a": (0.5, 0.2)}, [("a", "a")])
        edge_id = next(iter(graph.edges))
        label = graph.get_weight_position(edge_id)
        session = DragSession(graph, RENDER_SIZE)
        session.will_move("a")
        session.update(Point(60, 30))
        session.commit()
        assert graph.get_weight_position(edge_id).is_close(label + Point(0.1, 0.1), tol=TOL)

    def test_cancel_restores_layout(self, curved_graph):
        before = layout(curved_graph)
        session = DragSession(curved_graph, RENDER_SIZE)
        session.will_move("a")
        session.update(Point(100, 100))
        session.cancel()
        assert not session.is_active
        assert_layout_close(before, layout(curved_graph))
        assert curved_graph.get_vertex("a").offset == Point.zero()

    def test_cancel_without_drag_is_ignored(self, curved_graph):
        DragSession(curved_graph).cancel()


class TestDragUpdate:

    def test_vertex_offset_follows_translation(self, curved_graph):
        session = DragSession(curved_graph, RENDER_SIZE)
        session.will_move("a")
        session.update(Point(60, 0))
        assert curved_graph.get_vertex_offset("a") == Point(60, 0)
        assert curved_graph.get_vertex("a").position == Point(0.2, 0.6)

    def test_offsets_when_dragging_start_vertex(self, curved_graph):
        edge_id = next(iter(curved_graph.edges))
        session = DragSession(curved_graph, RENDER_SIZE)
        session.will_move("a")
        session.update(Point(60, 0))
        offset1, offset2 = curved_graph.get_control_point_offsets(edge_id)
        assert offset1.is_close(Point(40, 0), tol=1e-9)
        assert offset2.is_close(Point(15, 0), tol=1e-9)

    def test_offsets_when_dragging_end_vertex(self, curved_graph):
        edge_id = next(iter(curved_graph.edges))
        session = DragSession(curved_graph, RENDER_SIZE)
        session.will_move("b")
        session.update(Point(60, 0))
        offset1, offset2 = curved_graph.get_control_point_offsets(edge_id)
        assert offset1.is_close(Point(15, 0), tol=1e-9)
        assert offset2.is_close(Point(40, 0), tol=1e-9)

    def test_offsets_never_exceed_translation(self, curved_graph):
        edge_id = next(iter(curved_graph.edges))
        session = DragSession(curved_graph, RENDER_SIZE)
        session.will_move("a")
        session.update(Point(0, 30))
        for offset in curved_graph.get_control_point_offsets(edge_id):
            assert abs(offset.y) <= 30


class TestDragCommit:

    def test_commit_moves_vertex_and_rebuilds_edge(self, curved_graph):
        edge_id = next(iter(curved_graph.edges))
        session = DragSession(curved_graph, RENDER_SIZE)
        session.will_move("a")
        edge = curved_graph.get_edge(edge_id)
        anchor = (edge.weight_position_parameter_t, edge.weight_position_distance)
        session.update(Point(60, 0))
        session.commit()

        assert not session.is_active
        assert curved_graph.get_vertex("a").position.is_close(Point(0.3, 0.6))
        assert curved_graph.get_vertex("a").offset == Point.zero()
        control_point1, control_point2 = curved_graph.get_control_points(edge_id)
        assert control_point1.is_close(Point(0.425, 0.3))
        assert control_point2.is_close(Point(0.3 + 0.5 * 0.4 / 0.6, 0.25))
        assert curved_graph.get_control_point_offsets(edge_id) == (Point.zero(), Point.zero())

        path = curved_graph.edge_path(edge_id)
        t, distance = path.closest_parameter_and_distance(curved_graph.get_weight_position(edge_id))
        assert t == pytest.approx(anchor[0], abs=1e-6)
        assert distance == pytest.approx(anchor[1], abs=1e-6)
        assert curved_graph.get_arrow_parameters(edge_id) == path.arrow_parameters()

    def test_degenerate_axis_keeps_drag_offset(self):
        graph = build_graph({"a": (0.2, 0.5), "b": (0.8, 0.5)}, [("a", "b")])
        edge_id = next(iter(graph.edges))
        session = DragSession(graph, Point(300, 300))
        session.will_move("a")
        session.update(Point(0, 30))
        session.commit()

        assert graph.get_vertex("a").position.is_close(Point(0.2, 0.6))
        control_point1, control_point2 = graph.get_control_points(edge_id)
        assert control_point1.is_close(Point(0.38, 0.57))
        assert control_point2.is_close(Point(0.62, 0.53))

    def test_snapshots_are_recorded(self, curved_graph):
        session = DragSession(curved_graph, RENDER_SIZE)
        session.will_move("a")
        assert set(session.vertex_will_move) == {"a", "b"}
        assert len(session.edges_will_move) == 1
        session.update(Point(10, 10))
        session.commit()
        assert session.vertex_will_move == {}


class TestDragProtocol:

    def test_update_before_will_move(self, curved_graph):
        with pytest.raises(DragProtocolError):
            DragSession(curved_graph).update(Point(1, 1))

    def test_commit_before_will_move(self, curved_graph):
        with pytest.raises(DragProtocolError):
            DragSession(curved_graph).commit()

    def test_one_vertex_at_a_time(self, curved_graph):
        session = DragSession(curved_graph)
        session.will_move("a")
        session.will_move("a")
        with pytest.raises(DragProtocolError):
            session.will_move("b")

    def test_unknown_vertex_leaves_session_idle(self, curved_graph):
        session = DragSession(curved_graph)
        with pytest.raises(GraphInvariantError):
            session.will_move("nope")
        assert not session.is_active
        session.will_move("a")
        assert session.moving_vertex_id == "a"

    def test_missing_weight_position_is_fatal(self, curved_graph):
        del curved_graph.edge_weight_positions[next(iter(curved_graph.edges))]
        session = DragSession(curved_graph)
        with pytest.raises(GraphInvariantError):
            session.will_move("a")
        assert not session.is_active
        assert session.vertex_will_move == {}

    def test_edge_added_during_drag(self, curved_graph):
        session = DragSession(curved_graph)
        session.will_move("a")
        curved_graph.add_edge(Edge("a", "b"))
        with pytest.raises(DragProtocolError):
            session.update(Point(1, 1))
