"""
Edge geometry for curved graph edges.

Every edge is drawn as a cubic Bezier curve whose end points are the
vertex positions and whose two inner control points are stored by the
graph. This module seeds those control points, places weight labels and
answers the curve queries needed to keep a weight label glued to its edge
while the edge is deformed.
"""

import logging

import numpy as np
from scipy.optimize import brentq

from ..canvas_config import EDGE_GEOMETRY_CONFIG
from ..utils.geometry import (
    Point, bezier_point, bezier_derivative, sample_bezier, direction_from_gradient,
    gradient, interpolate_on_chord, perpendicular_gradient, point_on_line
)

__all__ = ['EdgePath', 'chord_control_points', 'initial_weight_position']

logger = logging.getLogger('grapho_canvas.edge_geometry')


def chord_control_points(start, end, fractions=None):
    """
    Default control points of an edge, placed on its straight chord.

    Parameters
    ----------
    start : Point
        Position of the start vertex
    end : Point
        Position of the end vertex
    fractions : tuple of float, optional
        Chord fractions of the two control points
        (defaults to EDGE_GEOMETRY_CONFIG['control_point_fractions'])

    Returns
    -------
    tuple of Point
        (control_point1, control_point2)
    """
    if fractions is None:
        fractions = EDGE_GEOMETRY_CONFIG['control_point_fractions']
    return (interpolate_on_chord(start, end, fractions[0]),
            interpolate_on_chord(start, end, fractions[1]))


class EdgePath:
    """
    The Bezier geometry of one edge, computed from the current graph state.

    Vertex positions and control points are normalized coordinates; the
    offsets are pixel translations from an ongoing drag and are divided by
    `render_size` before being added.
    """

    def __init__(self, start_position, end_position, start_offset=None, end_offset=None,
                 control_point1=None, control_point2=None,
                 control_point1_offset=None, control_point2_offset=None,
                 render_size=None):
        """
        Initialize an EdgePath.

        Parameters
        ----------
        start_position, end_position : Point
            Resting positions of the end vertices
        start_offset, end_offset : Point, optional
            Drag translations of the end vertices (pixels)
        control_point1, control_point2 : Point, optional
            Control points (default to the chord control points)
        control_point1_offset, control_point2_offset : Point, optional
            Drag translations of the control points (pixels)
        render_size : Point, optional
            Size of the render target in pixels (defaults to 1 x 1)
        """
        self.start_position = start_position
        self.end_position = end_position
        self.start_offset = start_offset or Point.zero()
        self.end_offset = end_offset or Point.zero()
        if control_point1 is None or control_point2 is None:
            control_point1, control_point2 = chord_control_points(start_position, end_position)
        self.control_point1 = control_point1
        self.control_point2 = control_point2
        self.control_point1_offset = control_point1_offset or Point.zero()
        self.control_point2_offset = control_point2_offset or Point.zero()
        self.render_size = render_size or Point(1.0, 1.0)

    def control_quad(self):
        """
        The four Bezier control points with every offset applied.

        Returns
        -------
        tuple of Point
            (p0, p1, p2, p3)
        """
        size = self.render_size
        return (self.start_position + self.start_offset / size,
                self.control_point1 + self.control_point1_offset / size,
                self.control_point2 + self.control_point2_offset / size,
                self.end_position + self.end_offset / size)

    def _quad(self, quad):
        if quad is None or any(p is None for p in quad):
            return self.control_quad()
        return quad

    def point_on_bezier_curve(self, t, p0=None, p1=None, p2=None, p3=None):
        """Point of the curve at parameter `t`."""
        return bezier_point(t, *self._quad((p0, p1, p2, p3)))

    def bezier_tangent_gradient(self, t, p0=None, p1=None, p2=None, p3=None):
        """
        Slope of the tangent of the curve at parameter `t`.

        Returns
        -------
        float or None
            dy/dx of the tangent, or None when the tangent is vertical
        """
        derivative = bezier_derivative(t, *self._quad((p0, p1, p2, p3)))
        if derivative.x == 0:
            return None
        return derivative.y / derivative.x

    def midpoint(self):
        return self.point_on_bezier_curve(0.5)

    def chord_gradient(self):
        p0, _, _, p3 = self.control_quad()
        return gradient(p0, p3)

    def perpendicular_gradient(self):
        """Gradient perpendicular to the chord, None if undefined."""
        return perpendicular_gradient(self.chord_gradient())

    def point_on_perpendicular(self, point, perpendicular_gradient, distance):
        """
        Point at signed `distance` from `point` along a line of the given gradient.

        Returns
        -------
        Point
            The new point
        float
            The Euclidean distance actually achieved
        """
        return point_on_line(point, perpendicular_gradient, distance)

    def normal_at(self, t, p0=None, p1=None, p2=None, p3=None):
        """
        Unit normal of the curve at `t`.

        The normal always points towards +x; it is +y when the tangent is
        horizontal and +x when the tangent is vertical or undefined.
        """
        tangent_gradient = self.bezier_tangent_gradient(t, p0, p1, p2, p3)
        if tangent_gradient is None:
            return direction_from_gradient(0.0)
        if tangent_gradient == 0:
            return direction_from_gradient(None)
        return direction_from_gradient(-1.0 / tangent_gradient)

    def point_at_anchor(self, t, distance):
        """
        Re-project a weight-label anchor onto the current curve.

        Parameters
        ----------
        t : float
            Curve parameter of the anchor
        distance : float
            Signed distance from the curve along its normal at `t`

        Returns
        -------
        Point
            Position of the weight label
        """
        curve_point = self.point_on_bezier_curve(t)
        tangent_gradient = self.bezier_tangent_gradient(t)
        if tangent_gradient is None:
            return Point(curve_point.x + distance, curve_point.y)
        if tangent_gradient == 0:
            return Point(curve_point.x, curve_point.y + distance)
        return self.point_on_perpendicular(curve_point, -1.0 / tangent_gradient, distance)[0]

    def closest_parameter_and_distance(self, external_point, p0=None, p1=None, p2=None, p3=None):
        """
        Parameter of the curve point closest to `external_point`.

        The curve is sampled, then the root of (B(t) - q) . B'(t) is refined
        inside the bracket around the best sample.

        Parameters
        ----------
        external_point : Point
            The point to project onto the curve
        p0, p1, p2, p3 : Point, optional
            Control quad (defaults to this path's quad)

        Returns
        -------
        float
            Parameter t in [0, 1]
        float
            Signed distance from B(t) to the point along the normal at t
        """
        quad = self._quad((p0, p1, p2, p3))
        target = external_point.to_array()
        samples = EDGE_GEOMETRY_CONFIG['closest_point_samples']
        ts = np.linspace(0.0, 1.0, samples)
        points = bezier_point(ts, *quad)
        index = int(np.argmin(np.sum((points - target) ** 2, axis=1)))

        def radial_derivative(t):
            return float(np.dot(bezier_point(t, *quad).to_array() - target,
                                bezier_derivative(t, *quad).to_array()))

        a = ts[max(index - 1, 0)]
        b = ts[min(index + 1, samples - 1)]
        fa, fb = radial_derivative(a), radial_derivative(b)
        t = ts[index]
        if fa == 0:
            t = a
        elif fb == 0:
            t = b
        elif fa * fb < 0:
            t = brentq(radial_derivative, a, b, xtol=EDGE_GEOMETRY_CONFIG['closest_point_xtol'])

        t = float(t)
        displacement = external_point - bezier_point(t, *quad)
        return t, displacement.dot(self.normal_at(t, *quad))

    def arrow_parameters(self, radius=None):
        """
        Curve parameters where arrow tips meet the vertex disks.

        Parameters
        ----------
        radius : float, optional
            Vertex radius (defaults to EDGE_GEOMETRY_CONFIG['arrow_vertex_radius'])

        Returns
        -------
        float
            Forward parameter: largest t at `radius` from the end vertex (1.0 if none)
        float
            Reverse parameter: smallest t at `radius` from the start vertex (0.0 if none)
        """
        if radius is None:
            radius = EDGE_GEOMETRY_CONFIG['arrow_vertex_radius']
        quad = self.control_quad()
        p0, p3 = quad[0].to_array(), quad[3].to_array()
        ts = np.linspace(0.0, 1.0, EDGE_GEOMETRY_CONFIG['closest_point_samples'])
        points = bezier_point(ts, *quad)

        def crossing(center, order):
            distances = np.linalg.norm(points - center, axis=1) - radius
            for i in order:
                j = i + 1 if order[0] < order[-1] else i - 1
                if distances[i] < 0 <= distances[j]:
                    return float(brentq(
                        lambda t: float(np.linalg.norm(bezier_point(t, *quad).to_array() - center)) - radius,
                        min(ts[i], ts[j]), max(ts[i], ts[j])))
            return None

        forward = crossing(p3, range(len(ts) - 1, 0, -1))
        reverse = crossing(p0, range(0, len(ts) - 1))
        return (1.0 if forward is None else forward,
                0.0 if reverse is None else reverse)

    def sample(self, n=60):
        """Sample `n` points of the curve as an (n, 2) array."""
        return sample_bezier(*self.control_quad(), n=n)


def initial_weight_position(edge_path, sign, distance=None):
    """
    Default position of an edge's weight label.

    The label sits at the curve midpoint, moved by `sign * distance` along
    the perpendicular to the chord. When no perpendicular gradient exists
    the label is moved vertically instead.

    Parameters
    ----------
    edge_path : EdgePath
        Geometry of the edge
    sign : int
        +1 or -1, selects the side of the edge
    distance : float, optional
        Distance from the midpoint
        (defaults to EDGE_GEOMETRY_CONFIG['default_weight_distance'])

    Returns
    -------
    Point
        Position of the weight label
    """
    if distance is None:
        distance = EDGE_GEOMETRY_CONFIG['default_weight_distance']
    mid = edge_path.midpoint()
    perpendicular = edge_path.perpendicular_gradient()
    if perpendicular is not None:
        return edge_path.point_on_perpendicular(mid, perpendicular, sign * distance)[0]
    return Point(mid.x, mid.y + (distance if sign == 1 else -distance))
