"""
Geometric primitives for graph drawing.

This module provides a small immutable 2D point/vector type, straight-line
equations and cubic Bezier evaluation. Positions of vertices are normalized
coordinates in [0, 1] x [0, 1]; translations coming from the rendering layer
are in pixels and are divided by the render size before being combined with
positions.
"""

import math

import numpy as np

__all__ = ['Point', 'Vector', 'midpoint', 'gradient', 'y_intercept', 'interpolate_on_chord', 'perpendicular_gradient', 'direction_from_gradient', 'point_on_line', 'bezier_point', 'bezier_derivative', 'sample_bezier']


class Point:
    """
    An immutable 2D point, also used as a displacement vector.

    Arithmetic with another Point is component-wise; arithmetic with a
    number scales both components.
    """

    __slots__ = ("_x", "_y")

    def __init__(self, x=0.0, y=0.0):
        object.__setattr__(self, "_x", float(x))
        object.__setattr__(self, "_y", float(y))

    def __setattr__(self, name, value):
        raise AttributeError("Point is immutable")

    @property
    def x(self):
        return self._x

    @property
    def y(self):
        return self._y

    @classmethod
    def zero(cls):
        return cls(0.0, 0.0)

    @classmethod
    def from_array(cls, values):
        """Create a Point from any length-2 sequence or numpy array."""
        return cls(values[0], values[1])

    def to_array(self):
        return np.array([self._x, self._y], dtype=float)

    def to_tuple(self):
        return (self._x, self._y)

    def __iter__(self):
        yield self._x
        yield self._y

    def _components(self, other):
        if isinstance(other, Point):
            return other._x, other._y
        return other, other

    def __add__(self, other):
        ox, oy = self._components(other)
        return Point(self._x + ox, self._y + oy)

    def __sub__(self, other):
        ox, oy = self._components(other)
        return Point(self._x - ox, self._y - oy)

    def __mul__(self, other):
        ox, oy = self._components(other)
        return Point(self._x * ox, self._y * oy)

    __rmul__ = __mul__

    def __truediv__(self, other):
        ox, oy = self._components(other)
        return Point(self._x / ox, self._y / oy)

    def __neg__(self):
        return Point(-self._x, -self._y)

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return self._x == other._x and self._y == other._y

    def __hash__(self):
        return hash((self._x, self._y))

    def __repr__(self):
        return f"Point({self._x!r}, {self._y!r})"

    def dot(self, other):
        return self._x * other.x + self._y * other.y

    def norm(self):
        return math.hypot(self._x, self._y)

    def distance_to(self, other):
        return math.hypot(self._x - other.x, self._y - other.y)

    def is_close(self, other, tol=1e-9):
        return abs(self._x - other.x) <= tol and abs(self._y - other.y) <= tol


# Vectors (offsets, translations, render sizes) share the Point type
Vector = Point


def midpoint(p1, p2):
    """Midpoint of the segment p1-p2."""
    return Point((p1.x + p2.x) / 2.0, (p1.y + p2.y) / 2.0)


def gradient(p1, p2):
    """
    Gradient (slope) of the line through p1 and p2.

    Returns
    -------
    float or None
        dy / dx, or None when the line is vertical
    """
    dx = p2.x - p1.x
    if dx == 0:
        return None
    return (p2.y - p1.y) / dx


def y_intercept(p1, p2):
    """
    y-intercept of the line through p1 and p2.

    Returns
    -------
    float or None
        The intercept, or None when the line is vertical
    """
    m = gradient(p1, p2)
    if m is None:
        return None
    return p1.y - m * p1.x


def interpolate_on_chord(p1, p2, fraction):
    """
    Point at `fraction` of the way along the straight chord p1-p2.

    The x coordinate is interpolated and y is read off the line equation;
    a vertical chord keeps x fixed and interpolates y instead.

    Parameters
    ----------
    p1 : Point
        Start of the chord
    p2 : Point
        End of the chord
    fraction : float
        Interpolation fraction (0 at p1, 1 at p2)

    Returns
    -------
    Point
        The interpolated point
    """
    m = gradient(p1, p2)
    if m is not None:
        b = y_intercept(p1, p2)
        new_x = p1.x + fraction * (p2.x - p1.x)
        return Point(new_x, m * new_x + b)
    return Point(p1.x, p1.y + fraction * (p2.y - p1.y))


def perpendicular_gradient(m):
    """
    Gradient of a line perpendicular to a line of gradient `m`.

    Returns
    -------
    float or None
        -1 / m, or None when `m` is None (vertical line, horizontal
        perpendicular is reported separately) or zero (vertical perpendicular)
    """
    if m is None or m == 0:
        return None
    return -1.0 / m


def direction_from_gradient(m):
    """
    Unit direction vector of a line with gradient `m`.

    The direction always has a positive x component; a vertical line
    (`m` is None) points towards +y.
    """
    if m is None:
        return Point(0.0, 1.0)
    length = math.sqrt(1.0 + m * m)
    return Point(1.0 / length, m / length)


def point_on_line(point, m, distance):
    """
    Point at signed `distance` from `point` along the line of gradient `m`.

    Parameters
    ----------
    point : Point
        Start point
    m : float or None
        Gradient of the line (None for vertical)
    distance : float
        Signed distance; positive moves towards +x (+y for vertical lines)

    Returns
    -------
    Point
        The displaced point
    float
        The Euclidean distance actually achieved
    """
    new_point = point + direction_from_gradient(m) * distance
    return new_point, new_point.distance_to(point)


def _as_xy(point):
    if isinstance(point, Point):
        return point.to_array()
    return np.asarray(point, dtype=float)


def bezier_point(t, p0, p1, p2, p3):
    """
    Evaluate a cubic Bezier curve.

    Parameters
    ----------
    t : float or numpy.ndarray
        Curve parameter(s) in [0, 1]
    p0, p1, p2, p3 : Point
        Control quad of the curve

    Returns
    -------
    Point or numpy.ndarray
        A Point for a scalar `t`, otherwise an array of shape (n, 2)
    """
    scalar = np.ndim(t) == 0
    t_arr = np.atleast_1d(np.asarray(t, dtype=float)).reshape(-1, 1)
    u = 1.0 - t_arr
    points = (u ** 3) * _as_xy(p0) + 3 * (u ** 2) * t_arr * _as_xy(p1) \
        + 3 * u * (t_arr ** 2) * _as_xy(p2) + (t_arr ** 3) * _as_xy(p3)
    if scalar:
        return Point.from_array(points[0])
    return points


def bezier_derivative(t, p0, p1, p2, p3):
    """
    First derivative B'(t) of a cubic Bezier curve.

    Returns
    -------
    Point or numpy.ndarray
        A Point for a scalar `t`, otherwise an array of shape (n, 2)
    """
    scalar = np.ndim(t) == 0
    t_arr = np.atleast_1d(np.asarray(t, dtype=float)).reshape(-1, 1)
    u = 1.0 - t_arr
    a0, a1, a2, a3 = (_as_xy(p) for p in (p0, p1, p2, p3))
    derivative = 3 * (u ** 2) * (a1 - a0) + 6 * u * t_arr * (a2 - a1) \
        + 3 * (t_arr ** 2) * (a3 - a2)
    if scalar:
        return Point.from_array(derivative[0])
    return derivative


def sample_bezier(p0, p1, p2, p3, n=60):
    """Sample `n` evenly spaced parameters along a cubic Bezier curve."""
    return bezier_point(np.linspace(0.0, 1.0, n), p0, p1, p2, p3)
