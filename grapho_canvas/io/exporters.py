"""
Functions for exporting graphs to various formats.
"""

import json
import logging
import os

import geopandas as gpd
from shapely.geometry import LineString, Point as ShapelyPoint

__all__ = ['vertex_to_dict', 'edge_to_dict', 'graph_to_dict', 'save_graph_json', 'graph_to_geodataframes', 'export_graph']

logger = logging.getLogger('grapho_canvas.io')

FORMAT_VERSION = 1


def _point(point):
    return [point.x, point.y]


def vertex_to_dict(vertex):
    """
    Encode a Vertex as a plain record.

    Parameters
    ----------
    vertex : Vertex
        Vertex to encode

    Returns
    -------
    dict
        Record with hex-encoded colors
    """
    return {
        'id': vertex.id,
        'position': _point(vertex.position),
        'offset': _point(vertex.offset),
        'color': vertex.color.to_hex(),
        'stroke_color': vertex.stroke_color.to_hex(),
        'label': vertex.label,
        'label_color': vertex.label_color.value,
    }


def edge_to_dict(edge):
    """
    Encode an Edge as a plain record.

    Parameters
    ----------
    edge : Edge
        Edge to encode

    Returns
    -------
    dict
        Record with a hex-encoded color and the direction tag as a string
    """
    return {
        'id': edge.id,
        'start_vertex_id': edge.start_vertex_id,
        'end_vertex_id': edge.end_vertex_id,
        'weight': edge.weight,
        'sign': edge.sign,
        'directed': edge.directed.value,
        'color': edge.color.to_hex(),
        'weight_position_parameter_t': edge.weight_position_parameter_t,
        'weight_position_distance': edge.weight_position_distance,
        'weight_position_offset': _point(edge.weight_position_offset),
    }


def _layout_to_dict(graph, prefix=''):
    return {
        'weight_positions': {eid: _point(p) for eid, p in getattr(graph, prefix + 'edge_weight_positions').items()},
        'control_points1': {eid: _point(p) for eid, p in getattr(graph, prefix + 'edge_control_points1').items()},
        'control_points2': {eid: _point(p) for eid, p in getattr(graph, prefix + 'edge_control_points2').items()},
        'control_point1_offsets': {eid: _point(p) for eid, p in
                                   getattr(graph, prefix + 'edge_control_point1_offsets').items()},
        'control_point2_offsets': {eid: _point(p) for eid, p in
                                   getattr(graph, prefix + 'edge_control_point2_offsets').items()},
        'forward_arrow_parameters': dict(getattr(graph, prefix + 'edge_forward_arrow_parameters')),
        'reverse_arrow_parameters': dict(getattr(graph, prefix + 'edge_reverse_arrow_parameters')),
    }


def graph_to_dict(graph):
    """
    Encode a Graph, its layout maps and its original snapshot.

    Parameters
    ----------
    graph : Graph
        Graph to encode

    Returns
    -------
    dict
        JSON-compatible record
    """
    return {
        'format_version': FORMAT_VERSION,
        'id': graph.id,
        'reset_policy': graph.reset_policy.value,
        'mode': graph.mode.value,
        'algorithm': graph.algorithm.value,
        'vertices': [vertex_to_dict(v) for v in graph.vertices.values()],
        'edges': [edge_to_dict(e) for e in graph.edges.values()],
        'layout': _layout_to_dict(graph),
        'original': {
            'vertices': [vertex_to_dict(v) for v in graph.original_vertices.values()],
            'edges': [edge_to_dict(e) for e in graph.original_edges.values()],
            'layout': _layout_to_dict(graph, prefix='original_'),
        },
    }


def save_graph_json(graph, filepath):
    """
    Save a Graph to a JSON file.

    Parameters
    ----------
    graph : Graph
        Graph to save
    filepath : str
        Path to the output file
    """
    directory = os.path.dirname(os.path.abspath(filepath))
    os.makedirs(directory, exist_ok=True)
    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(graph_to_dict(graph), f, indent=2)
    logger.info(f"Saved graph {graph.id} to {filepath}")


def graph_to_geodataframes(graph, samples=30):
    """
    Convert a Graph to GeoDataFrames.

    Edge geometries are polylines sampled along each edge's Bezier curve.

    Parameters
    ----------
    graph : Graph
        Graph to convert
    samples : int, optional
        Number of points sampled along each edge

    Returns
    -------
    tuple of GeoDataFrame
        (vertices_gdf, edges_gdf)
    """
    vertices_data = []
    for vertex_id, vertex in graph.vertices.items():
        vertices_data.append({
            'id': vertex_id,
            'label': vertex.label,
            'color': vertex.color.to_hex(),
            'geometry': ShapelyPoint(vertex.position.x, vertex.position.y),
        })

    edges_data = []
    for edge_id, edge in graph.edges.items():
        curve = graph.edge_path(edge_id, include_offsets=False).sample(samples)
        edges_data.append({
            'id': edge_id,
            'source': edge.start_vertex_id,
            'target': edge.end_vertex_id,
            'weight': edge.weight,
            'directed': edge.directed.value,
            'color': edge.color.to_hex(),
            'geometry': LineString([tuple(p) for p in curve]),
        })

    vertices_gdf = gpd.GeoDataFrame(vertices_data, columns=['id', 'label', 'color', 'geometry'],
                                    geometry='geometry')
    edges_gdf = gpd.GeoDataFrame(edges_data,
                                 columns=['id', 'source', 'target', 'weight', 'directed', 'color', 'geometry'],
                                 geometry='geometry')
    return vertices_gdf, edges_gdf


def export_graph(graph, output_dir, base_name=None):
    """
    Export a Graph to files: a JSON record and GeoJSON vertex/edge layers.

    Parameters
    ----------
    graph : Graph
        Graph to export
    output_dir : str
        Directory to save the output files
    base_name : str, optional
        Base name for output files (default is 'graph')
    """
    os.makedirs(output_dir, exist_ok=True)
    if base_name is None:
        base_name = 'graph'

    save_graph_json(graph, os.path.join(output_dir, f"{base_name}.json"))

    vertices_gdf, edges_gdf = graph_to_geodataframes(graph)
    if len(vertices_gdf):
        vertices_gdf.to_file(os.path.join(output_dir, f"{base_name}_vertices.geojson"), driver='GeoJSON')
    if len(edges_gdf):
        edges_gdf.to_file(os.path.join(output_dir, f"{base_name}_edges.geojson"), driver='GeoJSON')
