"""
Drag handling for vertices.

Dragging a vertex happens in three phases:
1. will_move: the vertex, its incident edges and their other endpoints are
   snapshotted, and each edge's weight label is anchored to its curve as a
   (parameter t, signed distance) pair
2. update: for every drag delta the control points of the incident edges
   receive offsets proportional to their relative position on the edge
3. commit: the vertex is moved to its resting position, control points are
   rebuilt from their relative positions and the weight labels are
   re-projected from their anchors

A drag that ends where it started leaves control points and weight labels
where they were.
"""

import logging

import numpy as np

from ..canvas_config import EDGE_GEOMETRY_CONFIG, DragProtocolError, GraphInvariantError
from ..utils.geometry import Point

__all__ = ['DragSession', 'relative_position', 'clamped_share']

logger = logging.getLogger('grapho_canvas.drag')


def relative_position(point, start, end):
    """
    Position of `point` as a fraction of the span between `start` and `end`.

    Each axis is computed independently; an axis on which `start` and `end`
    coincide has no defined fraction.

    Returns
    -------
    tuple
        (fraction_x, fraction_y), each a float or None
    """
    fractions = []
    for p, s, e in ((point.x, start.x, end.x), (point.y, start.y, end.y)):
        span = e - s
        fractions.append(None if span == 0 else (p - s) / span)
    return tuple(fractions)


def clamped_share(fraction, translation, fallback_share):
    """
    Share of a translation given to a control point on one axis.

    The share is `fraction * translation` limited to the magnitude of the
    translation. A zero or undefined fraction gets `fallback_share` of the
    translation.
    """
    if fraction is None or fraction == 0 or not np.isfinite(fraction):
        return fallback_share * translation
    limit = abs(translation)
    return float(np.clip(fraction * translation, -limit, limit))


class DragSession:
    """
    The state of a vertex drag on a Graph.

    Only one vertex may be moving at a time. Translations are cumulative
    since the start of the drag and are expressed in pixels of a render
    target of size `render_size`.
    """

    def __init__(self, graph, render_size=None):
        """
        Initialize a DragSession.

        Parameters
        ----------
        graph : Graph
            Graph whose vertices are dragged
        render_size : Point, optional
            Size of the render target in pixels (defaults to 1 x 1)
        """
        self.graph = graph
        self.render_size = render_size or Point(1.0, 1.0)
        self.moving_vertex_id = None
        self.vertex_will_move = {}
        self.vertex_did_move = {}
        self.edges_will_move = {}
        self.edges_did_move = {}
        self.relative_control_points = {}
        self.weight_displacements = {}

    @property
    def is_active(self):
        return self.moving_vertex_id is not None

    def will_move(self, vertex_id):
        """
        Snapshot a vertex and its incident edges before they move.

        Calling this again for the vertex already being dragged does nothing.
        A weight label that cannot be anchored to its curve (a self-loop
        collapses to a point) keeps its displacement from the vertex instead.

        Raises
        ------
        DragProtocolError
            If another vertex is already being dragged
        GraphInvariantError
            If the vertex or a layout entry of its edges is missing
        """
        if self.moving_vertex_id is not None:
            if self.moving_vertex_id != vertex_id:
                raise DragProtocolError(
                    f"Vertex {self.moving_vertex_id} is already moving, cannot drag {vertex_id}")
            return

        self.reset()
        try:
            self._snapshot(vertex_id)
        except GraphInvariantError:
            self.reset()
            raise
        self.moving_vertex_id = vertex_id

    def _snapshot(self, vertex_id):
        vertex = self.graph._require_vertex(vertex_id)
        self.vertex_will_move[vertex_id] = vertex.copy()
        logger.debug(f"Vertex {vertex_id} will move")
        tolerance = EDGE_GEOMETRY_CONFIG['anchor_tolerance']

        for edge in self.graph.get_connected_edges(vertex_id):
            other_id = edge.traverse(vertex_id)
            if other_id not in self.vertex_will_move:
                self.vertex_will_move[other_id] = self.graph._require_vertex(other_id).copy()
            if edge.id in self.edges_will_move:
                continue

            path = self.graph.edge_path(edge.id, include_offsets=False)
            weight_position = self.graph._derived('edge_weight_positions', edge.id)
            t, distance = path.closest_parameter_and_distance(weight_position)
            edge.weight_position_parameter_t = t
            edge.weight_position_distance = distance
            if not path.point_at_anchor(t, distance).is_close(weight_position, tol=tolerance):
                self.weight_displacements[edge.id] = weight_position - vertex.position
            self.edges_will_move[edge.id] = edge.copy()

            start = self.vertex_will_move[edge.start_vertex_id].position
            end = self.vertex_will_move[edge.end_vertex_id].position
            control_point1, control_point2 = self.graph.get_control_points(edge.id)
            self.relative_control_points[edge.id] = (
                relative_position(control_point1, start, end),
                relative_position(control_point2, start, end),
            )
            logger.debug(f"Edge {edge.id} anchored weight at t={t:.4f}, distance={distance:.4f}")

    def update(self, translation, render_size=None):
        """
        Apply the current drag translation.

        Parameters
        ----------
        translation : Point
            Translation of the dragged vertex since the drag started (pixels)
        render_size : Point, optional
            Size of the render target, if it changed since the drag started

        Raises
        ------
        DragProtocolError
            If no vertex is being dragged
        """
        if self.moving_vertex_id is None:
            raise DragProtocolError("update() called before will_move()")
        if render_size is not None:
            self.render_size = render_size

        vertex_id = self.moving_vertex_id
        self.graph.set_vertex_offset(vertex_id, translation)
        share1, share2 = EDGE_GEOMETRY_CONFIG['drag_fallback_shares']

        for edge in self.graph.get_connected_edges(vertex_id):
            if edge.id not in self.relative_control_points:
                raise DragProtocolError(f"Edge {edge.id} was not snapshotted before moving")
            relative1, relative2 = self.relative_control_points[edge.id]
            offset1 = Point(clamped_share(relative1[0], translation.x, share1),
                            clamped_share(relative1[1], translation.y, share1))
            offset2 = Point(clamped_share(relative2[0], translation.x, share2),
                            clamped_share(relative2[1], translation.y, share2))
            if vertex_id == edge.end_vertex_id:
                self.graph.set_control_point1_offset(edge.id, offset1)
                self.graph.set_control_point2_offset(edge.id, offset2)
            else:
                self.graph.set_control_point1_offset(edge.id, offset2)
                self.graph.set_control_point2_offset(edge.id, offset1)

    def _rebuilt_control_point(self, control_point, offset, relative, start, end):
        # Axes without a relative position keep the offset shown during the drag
        coordinates = []
        for fraction, c, o, size, s, e in zip(relative, control_point, offset,
                                              self.render_size, start, end):
            if fraction is None:
                coordinates.append(c + o / size)
            else:
                coordinates.append(s + fraction * (e - s))
        return Point(*coordinates)

    def commit(self):
        """
        Finish the drag: settle the vertex, its edges and their weight labels.

        Raises
        ------
        DragProtocolError
            If no vertex is being dragged
        """
        if self.moving_vertex_id is None:
            raise DragProtocolError("commit() called before will_move()")

        graph = self.graph
        vertex_id = self.moving_vertex_id
        vertex = graph._require_vertex(vertex_id)
        self.vertex_did_move[vertex_id] = vertex.copy()

        vertex.position = vertex.position + vertex.offset / self.render_size
        vertex.offset = Point.zero()

        for edge in graph.get_connected_edges(vertex_id):
            if edge.id not in self.relative_control_points:
                raise DragProtocolError(f"Edge {edge.id} was not snapshotted before moving")
            self.edges_did_move[edge.id] = edge.copy()
            start, end = graph.get_endpoints(edge.id)
            control_point1, control_point2 = graph.get_control_points(edge.id)
            offset1, offset2 = graph.get_control_point_offsets(edge.id)
            relative1, relative2 = self.relative_control_points[edge.id]

            graph.edge_control_points1[edge.id] = self._rebuilt_control_point(
                control_point1, offset1, relative1, start.position, end.position)
            graph.edge_control_points2[edge.id] = self._rebuilt_control_point(
                control_point2, offset2, relative2, start.position, end.position)
            graph.edge_control_point1_offsets[edge.id] = Point.zero()
            graph.edge_control_point2_offsets[edge.id] = Point.zero()

            path = graph.edge_path(edge.id, include_offsets=False)
            if edge.id in self.weight_displacements:
                graph.edge_weight_positions[edge.id] = vertex.position + self.weight_displacements[edge.id]
            else:
                graph.edge_weight_positions[edge.id] = path.point_at_anchor(
                    edge.weight_position_parameter_t, edge.weight_position_distance)
            graph.update_arrow_parameters(edge.id)

        logger.debug(f"Vertex {vertex_id} committed at ({vertex.position.x:.4f}, {vertex.position.y:.4f})")
        self.reset()
        graph._notify('drag_commit')

    def cancel(self):
        """Abandon the drag, leaving the graph as it was before will_move."""
        if self.moving_vertex_id is None:
            return
        logger.debug(f"Drag of vertex {self.moving_vertex_id} cancelled")
        self.update(Point.zero())
        self.commit()

    def reset(self):
        """Forget every snapshot of the current drag."""
        self.moving_vertex_id = None
        self.vertex_will_move = {}
        self.vertex_did_move = {}
        self.edges_will_move = {}
        self.edges_did_move = {}
        self.relative_control_points = {}
        self.weight_displacements = {}
