"""
Functions for drawing graphs with curved edges.
"""

import matplotlib.pyplot as plt
from matplotlib.patches import PathPatch
from matplotlib.path import Path

from ..canvas_config import EDGE_GEOMETRY_CONFIG
from ..core.graph import Directed
from ..utils.geometry import Point

__all__ = ['plot_graph', 'plot_drag_preview']

ARROW_BACKOFF = 0.05


def _edge_patch(path, color, edge_width):
    p0, p1, p2, p3 = path.control_quad()
    bezier = Path([p0.to_tuple(), p1.to_tuple(), p2.to_tuple(), p3.to_tuple()],
                  [Path.MOVETO, Path.CURVE4, Path.CURVE4, Path.CURVE4])
    return PathPatch(bezier, facecolor='none', edgecolor=color, linewidth=edge_width)


def _draw_arrow(ax, path, tip_t, back_t, color, edge_width):
    tip = path.point_on_bezier_curve(tip_t)
    tail = path.point_on_bezier_curve(min(max(back_t, 0.0), 1.0))
    ax.annotate('', xy=tip.to_tuple(), xytext=tail.to_tuple(),
                arrowprops=dict(arrowstyle='-|>', color=color, linewidth=edge_width))


def plot_graph(graph, figsize=(8, 8), vertex_size=200, edge_width=2, show_weights=False,
               show_labels=True, render_size=None, background='#202020', title=None, ax=None):
    """
    Plot a Graph with Bezier edges, arrows, weight labels and vertex labels.

    The canvas is the unit square with y growing downwards, like the
    interactive surface. Vertex and control point offsets of a drag in
    progress are applied.

    Parameters
    ----------
    graph : Graph
        Graph to plot
    figsize : tuple, optional
        Figure size (width, height) in inches
    vertex_size : int or float, optional
        Marker size of vertices
    edge_width : int or float, optional
        Width of edges
    show_weights : bool, optional
        Whether to draw the weight labels
    show_labels : bool, optional
        Whether to draw the vertex labels
    render_size : Point, optional
        Render size in pixels used to scale drag offsets
    background : str, optional
        Background color of the canvas
    title : str, optional
        Plot title
    ax : matplotlib.axes.Axes, optional
        Axes to plot on

    Returns
    -------
    matplotlib.axes.Axes
        The axes containing the plot
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    size = render_size or Point(1.0, 1.0)

    # Edges
    for edge_id, edge in graph.edges.items():
        path = graph.edge_path(edge_id, render_size=size)
        color = edge.color.to_rgba()
        ax.add_patch(_edge_patch(path, color, edge_width))

        forward, reverse = graph.get_arrow_parameters(edge_id)
        if edge.directed in (Directed.FORWARD, Directed.BOTH):
            _draw_arrow(ax, path, forward, forward - ARROW_BACKOFF, color, edge_width)
        if edge.directed in (Directed.REVERSE, Directed.BOTH):
            _draw_arrow(ax, path, reverse, reverse + ARROW_BACKOFF, color, edge_width)

        if show_weights:
            position = graph.get_weight_position(edge_id) + edge.weight_position_offset / size
            ax.text(position.x, position.y, f"{edge.weight:g}", color=color,
                    ha='center', va='center')

    # Vertices
    for vertex in graph.vertices.values():
        position = vertex.position + vertex.offset / size
        ax.scatter([position.x], [position.y], s=vertex_size, c=[vertex.color.to_rgba()],
                   edgecolors=[vertex.stroke_color.to_rgba()], zorder=3)
        if show_labels and vertex.label:
            ax.text(position.x, position.y, vertex.label, color=vertex.label_color.to_color().to_rgba(),
                    ha='center', va='center', zorder=4)

    ax.set_facecolor(background)
    ax.set_xlim(0, 1)
    ax.set_ylim(1, 0)
    ax.set_aspect('equal')
    ax.set_xticks([])
    ax.set_yticks([])

    if title:
        ax.set_title(title)
    else:
        ax.set_title(f'Graph: {len(graph.vertices)} vertices, {len(graph.edges)} edges')

    return ax


def plot_drag_preview(graph, session, figsize=(8, 8), ax=None, **kwargs):
    """
    Plot a graph during a drag, highlighting the moving vertex's edges.

    Parameters
    ----------
    graph : Graph
        Graph to plot
    session : DragSession
        The drag in progress
    figsize : tuple, optional
        Figure size (width, height) in inches
    ax : matplotlib.axes.Axes, optional
        Axes to plot on
    **kwargs
        Passed to `plot_graph`

    Returns
    -------
    matplotlib.axes.Axes
        The axes containing the plot
    """
    ax = plot_graph(graph, figsize=figsize, render_size=session.render_size, ax=ax, **kwargs)
    if session.moving_vertex_id is None:
        return ax

    radius = EDGE_GEOMETRY_CONFIG['arrow_vertex_radius']
    for edge in graph.get_connected_edges(session.moving_vertex_id):
        path = graph.edge_path(edge.id, render_size=session.render_size)
        _, p1, p2, _ = path.control_quad()
        ax.scatter([p1.x, p2.x], [p1.y, p2.y], s=radius * 2000, marker='x', c='yellow', zorder=5)
    return ax
