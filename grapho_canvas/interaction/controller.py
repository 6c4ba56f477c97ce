"""
Interaction controller for a graph canvas.

The controller turns discrete input events (tap, double tap, long press,
drag) into graph mutations, according to the graph's mode. It holds the
selection state and the explore-mode edge counters; the graph itself stays
the single source of truth.
"""

import logging

from ..canvas_config import GRAPH_CONFIG, GraphModeError
from ..core.color import Color
from ..core.graph import Directed, Edge, Mode, Vertex
from .drag import DragSession

__all__ = ['GraphController']

logger = logging.getLogger('grapho_canvas.controller')


class GraphController:
    """
    Selection, gestures and drags for one Graph.
    """

    def __init__(self, graph, show_weights=False, render_size=None):
        """
        Initialize a GraphController.

        Parameters
        ----------
        graph : Graph
            The graph being edited
        show_weights : bool, optional
            Whether weight labels are displayed
        render_size : Point, optional
            Size of the render target in pixels
        """
        self.graph = graph
        self.show_weights = show_weights
        self.selected_vertex_id = None
        self.selected_edge_id = None
        self.edge_direction = Directed.NONE
        self.default_color = Color.from_hex(GRAPH_CONFIG['vertex_color'])
        self.times_edge_selected = {edge_id: 0 for edge_id in graph.edges}
        self.drag = DragSession(graph, render_size)

    # ------------------------------------------------------------------
    # Mode

    @property
    def mode(self):
        return self.graph.mode

    def set_mode(self, mode):
        if self.drag.is_active:
            self.drag.cancel()
        self.graph.set_mode(mode)

    def require_mode(self, *modes):
        """
        Raises
        ------
        GraphModeError
            If the graph is not in one of `modes`
        """
        if self.graph.mode not in modes:
            allowed = ', '.join(m.value for m in modes)
            raise GraphModeError(f"Operation needs mode {allowed}, graph is in {self.graph.mode.value}")

    # ------------------------------------------------------------------
    # Building

    def add_vertex(self, position, label=""):
        """Place a new vertex at a normalized position (edit mode only)."""
        self.require_mode(Mode.EDIT)
        vertex = Vertex(position=position, color=self.default_color, label=label)
        self.graph.add_vertex(vertex)
        return vertex

    def add_edge(self, start_vertex_id, end_vertex_id, weight=0.0):
        """Connect two vertices with the current direction tag (edit mode only)."""
        self.require_mode(Mode.EDIT)
        edge = Edge(start_vertex_id, end_vertex_id, weight=weight, directed=self.edge_direction)
        self.graph.add_edge(edge)
        self.times_edge_selected[edge.id] = 0
        return edge

    def remove_vertex(self, vertex_id):
        if self.selected_edge_id is not None and any(
                edge.id == self.selected_edge_id for edge in self.graph.get_connected_edges(vertex_id)):
            self.selected_edge_id = None
        for edge in self.graph.get_connected_edges(vertex_id):
            self.times_edge_selected.pop(edge.id, None)
        self.graph.remove_vertex(vertex_id)
        if self.selected_vertex_id == vertex_id:
            self.selected_vertex_id = None

    # ------------------------------------------------------------------
    # Vertex gestures

    def tap_vertex(self, vertex_id):
        """
        Select a vertex, or connect the selected vertex to it in edit mode.

        Returns
        -------
        Edge or None
            The edge created by the tap, if any
        """
        if self.mode not in (Mode.EDIT, Mode.EXPLORE):
            return None
        self.selected_edge_id = None
        if self.selected_vertex_id is None:
            self.selected_vertex_id = vertex_id
            return None
        if self.selected_vertex_id == vertex_id:
            self.selected_vertex_id = None
            return None

        edge = None
        if self.mode == Mode.EDIT:
            edge = self.add_edge(self.selected_vertex_id, vertex_id)
        self.selected_vertex_id = None
        return edge

    def double_tap_vertex(self, vertex_id):
        """Delete a vertex and its edges (edit mode)."""
        if self.mode != Mode.EDIT:
            return
        self.remove_vertex(vertex_id)
        self.selected_vertex_id = None

    def drag_vertex(self, vertex_id, translation, render_size=None):
        """
        Move a vertex by `translation` pixels since the drag started (edit mode).

        Returns
        -------
        bool
            Whether the drag was applied
        """
        if self.mode != Mode.EDIT:
            return False
        self.drag.will_move(vertex_id)
        self.drag.update(translation, render_size)
        return True

    def end_drag(self, vertex_id):
        """Commit the drag of a vertex (edit mode)."""
        if self.mode != Mode.EDIT or self.drag.moving_vertex_id != vertex_id:
            return False
        self.drag.commit()
        return True

    def cancel_drag(self):
        self.drag.cancel()

    # ------------------------------------------------------------------
    # Edge gestures

    def tap_edge(self, edge_id):
        """
        Select an edge (edit, icosian) or color it along a walk (explore).
        """
        self.selected_vertex_id = None
        if self.mode == Mode.EDIT:
            if self.selected_edge_id != edge_id:
                self.selected_edge_id = edge_id
                self.edge_direction = self.graph.get_edge_direction(edge_id)
            else:
                self.selected_edge_id = None
        elif self.mode == Mode.EXPLORE:
            self.times_edge_selected[edge_id] = self.times_edge_selected.get(edge_id, 0) + 1
            palette = GRAPH_CONFIG['explore_edge_colors']
            color = palette[(self.times_edge_selected[edge_id] - 1) % len(palette)]
            self.graph.set_edge_color(edge_id, Color.from_hex(color))
        elif self.mode == Mode.ICOSIAN:
            self.selected_edge_id = edge_id

    def double_tap_edge(self, edge_id):
        if self.mode == Mode.EDIT:
            self.selected_edge_id = None

    def long_press_edge(self, edge_id):
        """Straighten an edge (edit) or clear its walk color (explore)."""
        if self.mode == Mode.EDIT:
            self.graph.reset_control_points_and_offsets(edge_id)
        elif self.mode == Mode.EXPLORE:
            self.times_edge_selected[edge_id] = 0
            self.graph.set_edge_color(edge_id, Color.from_hex(GRAPH_CONFIG['edge_color']))

    # ------------------------------------------------------------------
    # Styling

    def set_direction(self, directed):
        """Set the direction used for new edges and for the selected edge."""
        self.edge_direction = directed
        if self.selected_edge_id is not None:
            self.graph.set_edge_direction(self.selected_edge_id, directed)

    def set_color(self, color):
        """Color the selected edge or vertex, or set the color of new vertices."""
        if self.selected_edge_id is not None:
            self.graph.set_edge_color(self.selected_edge_id, color)
        elif self.selected_vertex_id is not None:
            self.graph.set_vertex_color(self.selected_vertex_id, color)
        else:
            self.default_color = color

    def clear(self):
        """Deselect everything and clear the graph per its reset policy."""
        if self.drag.is_active:
            self.drag.cancel()
        self.selected_vertex_id = None
        self.selected_edge_id = None
        self.default_color = Color.from_hex(GRAPH_CONFIG['vertex_color'])
        self.graph.clear()
        self.times_edge_selected = {edge_id: 0 for edge_id in self.graph.edges}
        logger.debug(f"Cleared graph {self.graph.id}")
