"""
Functions for loading graphs from saved records.
"""

import json
import logging

from ..canvas_config import GraphDecodeError
from ..core.color import Color, LabelColor
from ..core.graph import DERIVED_MAPS, Algorithm, Directed, Edge, Graph, Mode, ResetPolicy, Vertex
from ..utils.geometry import Point

__all__ = ['vertex_from_dict', 'edge_from_dict', 'graph_from_dict', 'load_graph_json']

logger = logging.getLogger('grapho_canvas.io')

LAYOUT_KEYS = {
    'weight_positions': 'edge_weight_positions',
    'control_points1': 'edge_control_points1',
    'control_points2': 'edge_control_points2',
    'control_point1_offsets': 'edge_control_point1_offsets',
    'control_point2_offsets': 'edge_control_point2_offsets',
    'forward_arrow_parameters': 'edge_forward_arrow_parameters',
    'reverse_arrow_parameters': 'edge_reverse_arrow_parameters',
}

POINT_LAYOUT_KEYS = {
    'weight_positions', 'control_points1', 'control_points2',
    'control_point1_offsets', 'control_point2_offsets',
}


def _point(values):
    if values is None:
        return Point.zero()
    if len(values) != 2:
        raise GraphDecodeError(f"Expected a 2D point, got {values!r}")
    return Point(values[0], values[1])


def vertex_from_dict(record):
    """
    Decode a Vertex from a record made by `vertex_to_dict`.

    Only 'id' and 'position' are required.

    Raises
    ------
    GraphDecodeError
        If the record is malformed
    """
    try:
        return Vertex(
            vertex_id=record['id'],
            position=_point(record['position']),
            offset=_point(record.get('offset')),
            color=Color.from_hex(record['color']) if 'color' in record else None,
            stroke_color=Color.from_hex(record['stroke_color']) if 'stroke_color' in record else None,
            label=record.get('label', ''),
            label_color=LabelColor(record['label_color']) if 'label_color' in record else None,
        )
    except (KeyError, ValueError, TypeError) as e:
        raise GraphDecodeError(f"Invalid vertex record: {e}")


def edge_from_dict(record):
    """
    Decode an Edge from a record made by `edge_to_dict`.

    Raises
    ------
    GraphDecodeError
        If the record is malformed
    """
    try:
        edge = Edge(
            record['start_vertex_id'],
            record['end_vertex_id'],
            edge_id=record['id'],
            weight=record.get('weight', 0.0),
            sign=record.get('sign', 1),
            directed=Directed(record.get('directed', Directed.NONE.value)),
            color=Color.from_hex(record['color']) if 'color' in record else None,
        )
        edge.weight_position_parameter_t = record.get('weight_position_parameter_t', 0.5)
        edge.weight_position_distance = record.get('weight_position_distance', 0.0)
        edge.weight_position_offset = _point(record.get('weight_position_offset'))
    except (KeyError, ValueError, TypeError) as e:
        raise GraphDecodeError(f"Invalid edge record: {e}")
    return edge


def _apply_layout(graph, layout, prefix=''):
    edges = getattr(graph, prefix + 'edges')
    for key, name in LAYOUT_KEYS.items():
        if key not in layout:
            continue
        target = getattr(graph, prefix + name)
        for edge_id, value in layout[key].items():
            if edge_id not in edges:
                raise GraphDecodeError(f"Layout entry {key} references unknown edge {edge_id}")
            target[edge_id] = _point(value) if key in POINT_LAYOUT_KEYS else float(value)


def graph_from_dict(record):
    """
    Decode a Graph from a record made by `graph_to_dict`.

    Layout maps missing from the record are recomputed from the vertex
    positions, as when the edges are first added.

    Parameters
    ----------
    record : dict
        The encoded graph

    Returns
    -------
    Graph
        The decoded graph

    Raises
    ------
    GraphDecodeError
        If the record is malformed or an edge references a missing vertex
    """
    try:
        vertices = [vertex_from_dict(v) for v in record.get('vertices', [])]
        edges = [edge_from_dict(e) for e in record.get('edges', [])]
        vertex_ids = {v.id for v in vertices}
        for edge in edges:
            if edge.start_vertex_id not in vertex_ids or edge.end_vertex_id not in vertex_ids:
                raise GraphDecodeError(f"Edge {edge.id} references a missing vertex")

        graph = Graph(
            vertices=vertices,
            edges=edges,
            graph_id=record.get('id'),
            reset_policy=ResetPolicy(record.get('reset_policy', ResetPolicy.RESET_TO_ZERO.value)),
            mode=Mode(record.get('mode', Mode.EDIT.value)),
            algorithm=Algorithm(record.get('algorithm', Algorithm.NONE.value)),
        )
        _apply_layout(graph, record.get('layout', {}))

        original = record.get('original')
        if original is None:
            graph.save_as_original()
        else:
            graph.original_vertices = {v.id: v for v in
                                       (vertex_from_dict(r) for r in original.get('vertices', []))}
            graph.original_edges = {e.id: e for e in
                                    (edge_from_dict(r) for r in original.get('edges', []))}
            for name in DERIVED_MAPS:
                setattr(graph, 'original_' + name, {})
            _apply_layout(graph, original.get('layout', {}), prefix='original_')
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise GraphDecodeError(f"Invalid graph record: {e}")

    return graph


def load_graph_json(filepath):
    """
    Load a Graph from a JSON file written by `save_graph_json`.

    Parameters
    ----------
    filepath : str
        Path to the file

    Returns
    -------
    Graph
        The loaded graph
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        try:
            record = json.load(f)
        except json.JSONDecodeError as e:
            raise GraphDecodeError(f"{filepath} is not valid JSON: {e}")
    graph = graph_from_dict(record)
    logger.info(f"Loaded graph {graph.id} from {filepath}: "
                f"{len(graph.vertices)} vertices, {len(graph.edges)} edges")
    return graph
