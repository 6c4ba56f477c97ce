"""
Graph data structures for interactive graph drawing.

This module provides the vertex, edge and graph classes. Besides its
vertices and edges, a Graph owns the per-edge layout data derived from
them (control points, control point offsets, weight label positions and
arrow parameters), which are always created and removed together with the
edge they belong to.
"""

import copy
import logging
import uuid
from enum import Enum

from ..canvas_config import GRAPH_CONFIG, GraphInvariantError
from ..network import topology
from ..processing.edge_geometry import EdgePath, chord_control_points, initial_weight_position
from ..utils.geometry import Point, gradient, interpolate_on_chord, y_intercept
from .color import Color, LabelColor

__all__ = ['new_id', 'Directed', 'Mode', 'ResetPolicy', 'Algorithm', 'Vertex', 'Edge', 'Graph', 'DERIVED_MAPS']

logger = logging.getLogger('grapho_canvas.graph')


def new_id():
    """Generate a unique identifier for a vertex, edge or graph."""
    return str(uuid.uuid4())


class Directed(Enum):
    """Direction tag of an edge."""

    NONE = "none"
    FORWARD = "forward"
    REVERSE = "reverse"
    BOTH = "both"


class Mode(Enum):
    """Interaction mode of a graph."""

    EDIT = "edit"
    EXPLORE = "explore"
    ICOSIAN = "icosian"
    ALGORITHM = "algorithm"


class ResetPolicy(Enum):
    """What `Graph.clear` does."""

    RESET_TO_ZERO = "reset_to_zero"
    RESTORE_TO_ORIGINAL = "restore_to_original"


class Algorithm(Enum):
    """Algorithm shown by an algorithm view."""

    NONE = "none"
    KRUSKAL = "kruskal"
    PRIM = "prim"


class Vertex:
    """
    A vertex placed on the canvas.
    """

    def __init__(self, position=None, vertex_id=None, offset=None, color=None,
                 stroke_color=None, label="", label_color=None):
        """
        Initialize a Vertex.

        Parameters
        ----------
        position : Point, optional
            Normalized position in [0, 1] x [0, 1]
        vertex_id : str, optional
            Unique identifier (generated when omitted)
        offset : Point, optional
            Transient drag translation in pixels
        color : Color, optional
            Fill color
        stroke_color : Color, optional
            Outline color
        label : str, optional
            Text label
        label_color : LabelColor, optional
            Color of the label text
        """
        self.id = vertex_id or new_id()
        self.position = position or Point.zero()
        self.offset = offset or Point.zero()
        self.color = color or Color.from_hex(GRAPH_CONFIG['vertex_color'])
        self.stroke_color = stroke_color or Color.from_hex(GRAPH_CONFIG['vertex_stroke_color'])
        self.label = label
        self.label_color = label_color or LabelColor(GRAPH_CONFIG['label_color'])

    def copy(self):
        return copy.copy(self)

    def __eq__(self, other):
        if not isinstance(other, Vertex):
            return NotImplemented
        return (self.id == other.id and self.position == other.position
                and self.offset == other.offset and self.color == other.color
                and self.stroke_color == other.stroke_color
                and self.label == other.label and self.label_color == other.label_color)

    __hash__ = None

    def __repr__(self):
        return f"Vertex(id={self.id}, position=({self.position.x:.3f}, {self.position.y:.3f}))"


class Edge:
    """
    An edge connecting two vertices of a Graph.

    Parallel edges and self-loops are allowed.
    """

    def __init__(self, start_vertex_id, end_vertex_id, edge_id=None, weight=0.0, sign=1,
                 directed=Directed.NONE, color=None):
        """
        Initialize an Edge.

        Parameters
        ----------
        start_vertex_id : str
            ID of the start vertex
        end_vertex_id : str
            ID of the end vertex
        edge_id : str, optional
            Unique identifier (generated when omitted)
        weight : float, optional
            Weight of the edge
        sign : int, optional
            +1 or -1, side of the edge on which the weight label starts
        directed : Directed, optional
            Direction tag
        color : Color, optional
            Stroke color
        """
        if sign not in (1, -1):
            raise ValueError(f"Edge sign must be 1 or -1, got {sign}")
        self.id = edge_id or new_id()
        self.start_vertex_id = start_vertex_id
        self.end_vertex_id = end_vertex_id
        self.weight = weight
        self.sign = sign
        self.directed = directed
        self.color = color or Color.from_hex(GRAPH_CONFIG['edge_color'])
        # Weight label anchor, cached when a drag starts
        self.weight_position_parameter_t = 0.5
        self.weight_position_distance = 0.0
        self.weight_position_offset = Point.zero()

    def traverse(self, from_vertex_id):
        """
        The opposite endpoint of this edge.

        Parameters
        ----------
        from_vertex_id : str
            ID of one endpoint

        Returns
        -------
        str or None
            ID of the other endpoint, or None if `from_vertex_id` is not an endpoint
        """
        if from_vertex_id == self.start_vertex_id:
            return self.end_vertex_id
        if from_vertex_id == self.end_vertex_id:
            return self.start_vertex_id
        return None

    def is_incident_to(self, vertex_id):
        return vertex_id == self.start_vertex_id or vertex_id == self.end_vertex_id

    def copy(self):
        return copy.copy(self)

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return (self.id == other.id and self.start_vertex_id == other.start_vertex_id
                and self.end_vertex_id == other.end_vertex_id and self.weight == other.weight
                and self.sign == other.sign and self.directed == other.directed
                and self.color == other.color
                and self.weight_position_parameter_t == other.weight_position_parameter_t
                and self.weight_position_distance == other.weight_position_distance
                and self.weight_position_offset == other.weight_position_offset)

    __hash__ = None

    def __repr__(self):
        return (f"Edge(id={self.id}, start={self.start_vertex_id}, end={self.end_vertex_id}, "
                f"directed={self.directed.value})")


# Per-edge layout maps owned by a Graph, created and removed with each edge
DERIVED_MAPS = (
    'edge_weight_positions',
    'edge_control_points1',
    'edge_control_points2',
    'edge_control_point1_offsets',
    'edge_control_point2_offsets',
    'edge_forward_arrow_parameters',
    'edge_reverse_arrow_parameters',
)


class Graph:
    """
    A graph drawn on a normalized canvas.

    A snapshot of the vertices, edges and layout maps is taken when the
    graph is constructed; `clear` either empties the graph or restores that
    snapshot, depending on `reset_policy`.
    """

    def __init__(self, vertices=None, edges=None, graph_id=None, reset_policy=None, mode=None,
                 algorithm=Algorithm.NONE):
        """
        Initialize a Graph.

        Parameters
        ----------
        vertices : list of Vertex, optional
            Initial vertices
        edges : list of Edge, optional
            Initial edges (their endpoints must be among `vertices`)
        graph_id : str, optional
            Unique identifier (generated when omitted)
        reset_policy : ResetPolicy, optional
            Behaviour of `clear` (defaults to GRAPH_CONFIG['reset_policy'])
        mode : Mode, optional
            Interaction mode (defaults to GRAPH_CONFIG['mode'])
        algorithm : Algorithm, optional
            Algorithm shown by algorithm views
        """
        self.id = graph_id or new_id()
        self.vertices = {}
        self.edges = {}
        for name in DERIVED_MAPS:
            setattr(self, name, {})
        self.reset_policy = reset_policy or ResetPolicy(GRAPH_CONFIG['reset_policy'])
        self.mode = mode or Mode(GRAPH_CONFIG['mode'])
        self.algorithm = algorithm
        self._listeners = []

        for vertex in vertices or []:
            self.vertices[vertex.id] = vertex
        for edge in edges or []:
            self._insert_edge(edge)

        self.save_as_original()

    # ------------------------------------------------------------------
    # Change notification

    def add_listener(self, callback):
        """
        Register a callback invoked as `callback(graph, event)` after every mutation.
        """
        self._listeners.append(callback)

    def remove_listener(self, callback):
        self._listeners.remove(callback)

    def _notify(self, event):
        for callback in list(self._listeners):
            callback(self, event)

    # ------------------------------------------------------------------
    # Original snapshot and reset

    def save_as_original(self):
        """Freeze the current state as the state `restore_to_original` returns to."""
        self.original_vertices = {vid: v.copy() for vid, v in self.vertices.items()}
        self.original_edges = {eid: e.copy() for eid, e in self.edges.items()}
        for name in DERIVED_MAPS:
            setattr(self, 'original_' + name, dict(getattr(self, name)))

    def clear(self):
        """Reset the graph according to its reset policy."""
        if self.reset_policy == ResetPolicy.RESTORE_TO_ORIGINAL:
            self.restore_to_original()
        else:
            self.reset_to_zero()

    def reset_to_zero(self):
        """Remove every vertex, edge and layout entry."""
        self.vertices = {}
        self.edges = {}
        for name in DERIVED_MAPS:
            getattr(self, name).clear()
        logger.debug(f"Graph {self.id} reset to zero")
        self._notify('clear')

    def restore_to_original(self):
        """Replace the current state with the snapshot taken at construction."""
        self.vertices = {vid: v.copy() for vid, v in self.original_vertices.items()}
        self.edges = {eid: e.copy() for eid, e in self.original_edges.items()}
        for name in DERIVED_MAPS:
            setattr(self, name, dict(getattr(self, 'original_' + name)))
        logger.debug(f"Graph {self.id} restored to original")
        self._notify('clear')

    # ------------------------------------------------------------------
    # Vertices

    def add_vertex(self, vertex):
        self.vertices[vertex.id] = vertex
        logger.debug(f"Added {vertex}")
        self._notify('add_vertex')

    def remove_vertex(self, vertex):
        """
        Remove a vertex and every edge incident to it.

        Parameters
        ----------
        vertex : Vertex or str
            The vertex or its ID
        """
        vertex_id = getattr(vertex, 'id', vertex)
        self.remove_edges_connected_to(vertex_id)
        if self.vertices.pop(vertex_id, None) is not None:
            logger.debug(f"Removed vertex {vertex_id}")
            self._notify('remove_vertex')

    def get_vertex(self, vertex_id):
        return self.vertices.get(vertex_id)

    def get_vertex_offset(self, vertex_id):
        vertex = self.vertices.get(vertex_id)
        return vertex.offset if vertex is not None else None

    def _require_vertex(self, vertex_id):
        vertex = self.vertices.get(vertex_id)
        if vertex is None:
            raise GraphInvariantError(f"Vertex {vertex_id} is not part of graph {self.id}")
        return vertex

    def set_vertex_position(self, vertex_id, position):
        self._require_vertex(vertex_id).position = position
        self._notify('vertex_position')

    def set_vertex_offset(self, vertex_id, offset):
        self._require_vertex(vertex_id).offset = offset
        self._notify('vertex_offset')

    def set_vertex_color(self, vertex_id, color):
        self._require_vertex(vertex_id).color = color
        self._notify('vertex_color')

    def set_vertex_stroke_color(self, vertex_id, color):
        self._require_vertex(vertex_id).stroke_color = color
        self._notify('vertex_color')

    def set_vertex_label(self, vertex_id, label):
        self._require_vertex(vertex_id).label = label
        self._notify('vertex_label')

    def set_vertex_label_color(self, vertex_id, label_color):
        self._require_vertex(vertex_id).label_color = label_color
        self._notify('vertex_label')

    # ------------------------------------------------------------------
    # Edges

    def _insert_edge(self, edge):
        self._require_vertex(edge.start_vertex_id)
        self._require_vertex(edge.end_vertex_id)
        self.edges[edge.id] = edge
        self.set_control_points(edge.id)
        self.init_weight_position(edge.id)
        self.update_arrow_parameters(edge.id)

    def add_edge(self, edge):
        """
        Add an edge and create its layout data.

        Raises
        ------
        GraphInvariantError
            If either endpoint is not a vertex of the graph
        """
        self._insert_edge(edge)
        logger.debug(f"Added {edge}")
        self._notify('add_edge')

    def remove_edge(self, edge):
        """
        Remove an edge together with its layout data.

        Parameters
        ----------
        edge : Edge or str
            The edge or its ID
        """
        edge_id = getattr(edge, 'id', edge)
        if self.edges.pop(edge_id, None) is None:
            return
        for name in DERIVED_MAPS:
            getattr(self, name).pop(edge_id, None)
        logger.debug(f"Removed edge {edge_id}")
        self._notify('remove_edge')

    def remove_edges_connected_to(self, vertex_id):
        for edge in self.get_connected_edges(vertex_id):
            self.remove_edge(edge.id)

    def get_edge(self, edge_id):
        return self.edges.get(edge_id)

    def get_connected_edges(self, vertex_id):
        """Edges incident to a vertex, in insertion order."""
        return topology.connected_edges(self.edges, vertex_id)

    def _require_edge(self, edge_id):
        edge = self.edges.get(edge_id)
        if edge is None:
            raise GraphInvariantError(f"Edge {edge_id} is not part of graph {self.id}")
        return edge

    def _derived(self, name, edge_id):
        try:
            return getattr(self, name)[edge_id]
        except KeyError:
            raise GraphInvariantError(f"Missing {name} entry for edge {edge_id}")

    def get_endpoints(self, edge_id):
        """
        The two vertices of an edge.

        Returns
        -------
        tuple of Vertex
            (start_vertex, end_vertex)
        """
        edge = self._require_edge(edge_id)
        return self._require_vertex(edge.start_vertex_id), self._require_vertex(edge.end_vertex_id)

    def set_edge_color(self, edge_id, color):
        self._require_edge(edge_id).color = color
        self._notify('edge_color')

    def set_edge_weight(self, edge_id, weight):
        self._require_edge(edge_id).weight = weight
        self._notify('edge_weight')

    def get_edge_direction(self, edge_id):
        edge = self.edges.get(edge_id)
        return edge.directed if edge is not None else Directed.NONE

    def set_edge_direction(self, edge_id, directed):
        self._require_edge(edge_id).directed = directed
        self._notify('edge_direction')

    # ------------------------------------------------------------------
    # Control points

    def gradient(self, edge_id):
        """Gradient of the chord of an edge, None if vertical."""
        start, end = self.get_endpoints(edge_id)
        return gradient(start.position, end.position)

    def y_intercept(self, edge_id):
        start, end = self.get_endpoints(edge_id)
        return y_intercept(start.position, end.position)

    def calculate_control_point(self, edge_id, fraction):
        """Point at `fraction` along the chord of an edge."""
        start, end = self.get_endpoints(edge_id)
        return interpolate_on_chord(start.position, end.position, fraction)

    def set_control_points(self, edge_id):
        """Place both control points on the chord and zero their offsets."""
        start, end = self.get_endpoints(edge_id)
        control_point1, control_point2 = chord_control_points(start.position, end.position)
        self.edge_control_points1[edge_id] = control_point1
        self.edge_control_points2[edge_id] = control_point2
        self.edge_control_point1_offsets[edge_id] = Point.zero()
        self.edge_control_point2_offsets[edge_id] = Point.zero()

    def reset_control_points_and_offsets(self, edge_id):
        self.set_control_points(edge_id)
        self._notify('control_points')

    def get_control_points(self, edge_id):
        return (self._derived('edge_control_points1', edge_id),
                self._derived('edge_control_points2', edge_id))

    def get_control_point_offsets(self, edge_id):
        return (self._derived('edge_control_point1_offsets', edge_id),
                self._derived('edge_control_point2_offsets', edge_id))

    def set_control_point1(self, edge_id, point):
        self._require_edge(edge_id)
        self.edge_control_points1[edge_id] = point
        self._notify('control_points')

    def set_control_point2(self, edge_id, point):
        self._require_edge(edge_id)
        self.edge_control_points2[edge_id] = point
        self._notify('control_points')

    def set_control_point1_offset(self, edge_id, offset):
        self._require_edge(edge_id)
        self.edge_control_point1_offsets[edge_id] = offset
        self._notify('control_point_offsets')

    def set_control_point2_offset(self, edge_id, offset):
        self._require_edge(edge_id)
        self.edge_control_point2_offsets[edge_id] = offset
        self._notify('control_point_offsets')

    def update_control_point1(self, edge_id, translation):
        self.set_control_point1(edge_id, self._derived('edge_control_points1', edge_id) + translation)

    def update_control_point2(self, edge_id, translation):
        self.set_control_point2(edge_id, self._derived('edge_control_points2', edge_id) + translation)

    def edge_path(self, edge_id, render_size=None, include_offsets=True):
        """
        Bezier geometry of an edge in its current state.

        Parameters
        ----------
        edge_id : str
            ID of the edge
        render_size : Point, optional
            Render size in pixels, used to scale the offsets
        include_offsets : bool, optional
            Whether to apply vertex and control point drag offsets

        Returns
        -------
        EdgePath
            The edge geometry
        """
        start, end = self.get_endpoints(edge_id)
        control_point1, control_point2 = self.get_control_points(edge_id)
        if include_offsets:
            offset1, offset2 = self.get_control_point_offsets(edge_id)
            return EdgePath(start.position, end.position, start.offset, end.offset,
                            control_point1, control_point2, offset1, offset2, render_size)
        return EdgePath(start.position, end.position, None, None,
                        control_point1, control_point2, None, None, render_size)

    # ------------------------------------------------------------------
    # Weight labels and arrows

    def init_weight_position(self, edge_id):
        edge = self._require_edge(edge_id)
        path = self.edge_path(edge_id, include_offsets=False)
        self.edge_weight_positions[edge_id] = initial_weight_position(path, edge.sign)

    def get_weight_position(self, edge_id):
        return self.edge_weight_positions.get(edge_id)

    def set_weight_position(self, edge_id, position):
        self._require_edge(edge_id)
        self.edge_weight_positions[edge_id] = position
        self._notify('weight_position')

    def get_weight_offset(self, edge_id):
        edge = self.edges.get(edge_id)
        return edge.weight_position_offset if edge is not None else None

    def set_weight_offset(self, edge_id, offset):
        self._require_edge(edge_id).weight_position_offset = offset
        self._notify('weight_position')

    def update_arrow_parameters(self, edge_id, radius=None):
        """Recompute where the arrow tips of an edge meet its vertex disks."""
        forward, reverse = self.edge_path(edge_id, include_offsets=False).arrow_parameters(radius)
        self.edge_forward_arrow_parameters[edge_id] = forward
        self.edge_reverse_arrow_parameters[edge_id] = reverse

    def get_arrow_parameters(self, edge_id):
        return (self._derived('edge_forward_arrow_parameters', edge_id),
                self._derived('edge_reverse_arrow_parameters', edge_id))

    def set_forward_arrow_parameter(self, edge_id, parameter):
        self._require_edge(edge_id)
        self.edge_forward_arrow_parameters[edge_id] = parameter
        self._notify('arrow_parameters')

    def set_reverse_arrow_parameter(self, edge_id, parameter):
        self._require_edge(edge_id)
        self.edge_reverse_arrow_parameters[edge_id] = parameter
        self._notify('arrow_parameters')

    # ------------------------------------------------------------------
    # Mode

    def set_mode(self, mode):
        self.mode = mode
        self._notify('mode')

    def set_algorithm(self, algorithm):
        self.algorithm = algorithm
        self._notify('algorithm')

    def set_reset_policy(self, reset_policy):
        self.reset_policy = reset_policy

    # ------------------------------------------------------------------
    # Topology queries

    def does_edge_exist(self, vertex1_id, vertex2_id):
        return topology.does_edge_exist(self.edges, vertex1_id, vertex2_id)

    def are_vertices_adjacent(self, vertex1_id, vertex2_id):
        return topology.are_vertices_adjacent(self.edges, vertex1_id, vertex2_id)

    def are_vertices_connected(self, vertex1_id, vertex2_id):
        return topology.are_vertices_connected(self.edges, vertex1_id, vertex2_id)

    def is_connected(self):
        return topology.is_connected(self.vertices, self.edges)

    def is_cycle(self):
        return topology.is_cycle(self.vertices, self.edges)

    def is_hamiltonian_cycle(self):
        return topology.is_hamiltonian_cycle(self.vertices, self.edges)

    def has_cycle(self):
        return topology.has_cycle(self.vertices, self.edges)

    # ------------------------------------------------------------------
    # Invariants

    def check_invariants(self):
        """
        Verify that edges and layout maps are consistent with the vertices.

        Raises
        ------
        GraphInvariantError
            On the first violation found
        """
        for edge in self.edges.values():
            self._require_vertex(edge.start_vertex_id)
            self._require_vertex(edge.end_vertex_id)
        for name in DERIVED_MAPS:
            mapping = getattr(self, name)
            if set(mapping) != set(self.edges):
                raise GraphInvariantError(f"{name} keys do not match the edge map")

    def __repr__(self):
        return f"Graph(id={self.id}, vertices={len(self.vertices)}, edges={len(self.edges)})"
