"""
Configuration for the Grapho Canvas graph engine.

This module defines the settings shared by the graph model, the
edge-geometry subsystem and the drag protocol:
1. Edge geometry (control point fractions, weight label distance, sampling)
2. Graph defaults (reset policy, mode, colors)
3. Logging
"""

# Settings for control points, weight labels and arrow tips
EDGE_GEOMETRY_CONFIG = {
    # Fractions of the chord used to seed the two control points
    'control_point_fractions': (0.3, 0.7),

    # Distance of a new weight label from the edge midpoint (normalized units)
    'default_weight_distance': 0.05,

    # Closest-point search on a Bezier curve
    'closest_point_samples': 201,
    'closest_point_xtol': 1e-14,

    # A weight label farther than this from its re-projected anchor keeps
    # its displacement from the dragged vertex instead
    'anchor_tolerance': 1e-8,

    # Radius of a vertex disk, used to place arrow tips (normalized units)
    'arrow_vertex_radius': 0.02,

    # Share of the translation given to each control point when its
    # relative position is zero or undefined
    'drag_fallback_shares': (0.3, 0.7),
}

# Defaults for new graphs, vertices and edges
GRAPH_CONFIG = {
    'reset_policy': 'reset_to_zero',  # reset_to_zero, restore_to_original
    'mode': 'edit',  # edit, explore, icosian, algorithm
    'vertex_color': '#000000ff',
    'vertex_stroke_color': '#808080ff',
    'edge_color': '#ffffffff',
    'label_color': 'white',

    # Colors cycled through when an edge is tapped in explore mode
    'explore_edge_colors': ['#00ff00ff', '#00ceffff', '#e600e6ff'],
}

LOGGING_CONFIG = {
    'level': 'INFO',
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    'console': True,
}

CONFIG_SECTIONS = {
    'edge_geometry': EDGE_GEOMETRY_CONFIG,
    'graph': GRAPH_CONFIG,
    'logging': LOGGING_CONFIG,
}


def get_config(section, key):
    """
    Read a single configuration value.

    Parameters
    ----------
    section : str
        Name of the section ('edge_geometry', 'graph' or 'logging')
    key : str
        Key inside the section

    Returns
    -------
    object
        The configured value
    """
    try:
        return CONFIG_SECTIONS[section][key]
    except KeyError:
        raise GraphCanvasConfigError(f"Unknown configuration entry: {section}.{key}")


# Error classes for the graph engine
class GraphCanvasError(Exception):
    """Base class for graph engine errors."""
    pass

class GraphCanvasConfigError(GraphCanvasError):
    """Missing or invalid configuration entry."""
    pass

class GraphInvariantError(GraphCanvasError):
    """The graph model is in a state its invariants forbid."""
    pass

class GraphModeError(GraphCanvasError):
    """An interaction was requested in a mode that does not allow it."""
    pass

class DragProtocolError(GraphCanvasError):
    """The will-move / update / commit sequence was not respected."""
    pass

class GraphDecodeError(GraphCanvasError):
    """A persisted record or color string could not be decoded."""
    pass
