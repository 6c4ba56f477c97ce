"""
Tests for control point seeding, weight label placement and curve queries.
"""

import pytest

from grapho_canvas.processing.edge_geometry import EdgePath, chord_control_points, initial_weight_position
from grapho_canvas.utils.geometry import Point


class TestControlPoints:

    def test_diagonal_chord(self):
        control_point1, control_point2 = chord_control_points(Point(0, 0), Point(1, 1))
        assert control_point1.is_close(Point(0.3, 0.3))
        assert control_point2.is_close(Point(0.7, 0.7))

    def test_vertical_chord(self):
        control_point1, control_point2 = chord_control_points(Point(0.4, 0.1), Point(0.4, 0.9))
        assert control_point1.x == 0.4 and control_point2.x == 0.4
        assert control_point1.y == pytest.approx(0.34)
        assert control_point2.y == pytest.approx(0.66)

    def test_edge_path_defaults_to_chord(self):
        path = EdgePath(Point(0, 0), Point(1, 1))
        p0, p1, p2, p3 = path.control_quad()
        assert p1.is_close(Point(0.3, 0.3))
        assert p2.is_close(Point(0.7, 0.7))
        assert path.midpoint().is_close(Point(0.5, 0.5))

    def test_offsets_are_scaled_by_render_size(self):
        path = EdgePath(Point(0, 0), Point(1, 1), start_offset=Point(100, 50),
                        control_point1_offset=Point(20, 0), render_size=Point(200, 100))
        p0, p1, _, _ = path.control_quad()
        assert p0.is_close(Point(0.5, 0.5))
        assert p1.is_close(Point(0.4, 0.3))


class TestWeightPosition:

    def test_label_sits_on_chord_perpendicular(self):
        path = EdgePath(Point(0, 0), Point(1, 1))
        above = initial_weight_position(path, 1)
        below = initial_weight_position(path, -1)
        mid = Point(0.5, 0.5)
        assert above.distance_to(mid) == pytest.approx(0.05)
        assert below.distance_to(mid) == pytest.approx(0.05)
        assert above.x > 0.5 > below.x
        # perpendicular to the chord
        assert (above - mid).dot(Point(1, 1)) == pytest.approx(0.0, abs=1e-12)

    def test_horizontal_chord_moves_label_vertically(self):
        path = EdgePath(Point(0, 0.5), Point(1, 0.5))
        assert initial_weight_position(path, 1).is_close(Point(0.5, 0.55))
        assert initial_weight_position(path, -1).is_close(Point(0.5, 0.45))

    def test_vertical_chord_moves_label_vertically(self):
        path = EdgePath(Point(0.5, 0), Point(0.5, 1))
        assert initial_weight_position(path, 1).is_close(Point(0.5, 0.55))


class TestCurveQueries:

    path = EdgePath(Point(0.1, 0.5), Point(0.9, 0.5),
                    control_point1=Point(0.3, 0.2), control_point2=Point(0.7, 0.2))

    def test_tangent_gradient(self):
        assert self.path.bezier_tangent_gradient(0.5) == pytest.approx(0.0, abs=1e-12)
        assert self.path.bezier_tangent_gradient(0.0) == pytest.approx(-1.5)

    def test_vertical_tangent_is_reported(self):
        path = EdgePath(Point(0.5, 0), Point(0.5, 1))
        assert path.bezier_tangent_gradient(0.5) is None

    @pytest.mark.parametrize("t,distance", [(0.4, 0.03), (0.25, -0.02), (0.7, 0.01)])
    def test_anchor_and_closest_point_are_inverse(self, t, distance):
        label = self.path.point_at_anchor(t, distance)
        found_t, found_distance = self.path.closest_parameter_and_distance(label)
        assert found_t == pytest.approx(t, abs=1e-6)
        assert found_distance == pytest.approx(distance, abs=1e-6)

    def test_point_on_curve_has_zero_distance(self):
        point = self.path.point_on_bezier_curve(0.6)
        t, distance = self.path.closest_parameter_and_distance(point)
        assert t == pytest.approx(0.6, abs=1e-6)
        assert distance == pytest.approx(0.0, abs=1e-9)

    def test_point_beyond_end_clamps_to_end(self):
        t, _ = self.path.closest_parameter_and_distance(Point(1.5, 0.6))
        assert t == pytest.approx(1.0)


class TestArrowParameters:

    def test_tips_sit_on_vertex_disks(self):
        path = EdgePath(Point(0.1, 0.5), Point(0.9, 0.5))
        forward, reverse = path.arrow_parameters()
        assert 0.0 < reverse < forward < 1.0
        assert path.point_on_bezier_curve(forward).distance_to(Point(0.9, 0.5)) == pytest.approx(0.02)
        assert path.point_on_bezier_curve(reverse).distance_to(Point(0.1, 0.5)) == pytest.approx(0.02)

    def test_edge_inside_vertex_disk(self):
        path = EdgePath(Point(0.5, 0.5), Point(0.51, 0.5))
        assert path.arrow_parameters() == (1.0, 0.0)

    def test_custom_radius(self):
        path = EdgePath(Point(0.0, 0.0), Point(1.0, 0.0))
        forward, _ = path.arrow_parameters(radius=0.1)
        assert path.point_on_bezier_curve(forward).x == pytest.approx(0.9)
