"""
Topological queries on graphs.

The functions in this module are pure: they read a vertex map and/or an
edge map (id -> Edge) and never modify them. Connectivity is decided by
recursive reduction: a search that leaves a vertex through an edge
continues on a copy of the edge map without that edge, so every level of
recursion has strictly fewer edges and the search terminates without any
visited-vertex bookkeeping. This gives the same answers on multigraphs
with parallel edges and self-loops as the drawing surface expects.

Edges are explored in the insertion order of the edge map.
"""

import itertools

import networkx as nx
import pandas as pd

__all__ = [
    'connected_edges', 'does_edge_exist', 'are_vertices_adjacent', 'are_vertices_connected',
    'is_connected', 'is_cycle', 'is_hamiltonian_cycle', 'has_cycle', 'to_networkx',
    'degree_table', 'summarize',
]


def _without(edges, edge_id):
    remaining = dict(edges)
    del remaining[edge_id]
    return remaining


def connected_edges(edges, vertex_id):
    """
    Edges incident to a vertex.

    Parameters
    ----------
    edges : dict
        Edge map (id -> Edge)
    vertex_id : str
        ID of the vertex

    Returns
    -------
    list of Edge
        Incident edges in map order (a self-loop appears once)
    """
    return [edge for edge in edges.values()
            if edge.start_vertex_id == vertex_id or edge.end_vertex_id == vertex_id]


def does_edge_exist(edges, vertex1_id, vertex2_id):
    """True if some edge joins the two vertices, in either direction."""
    for edge in edges.values():
        if (edge.start_vertex_id == vertex1_id and edge.end_vertex_id == vertex2_id) or \
                (edge.start_vertex_id == vertex2_id and edge.end_vertex_id == vertex1_id):
            return True
    return False


def are_vertices_adjacent(edges, vertex1_id, vertex2_id):
    """True if a single edge leads from vertex1 to vertex2."""
    return any(edge.traverse(vertex1_id) == vertex2_id
               for edge in connected_edges(edges, vertex1_id))


def are_vertices_connected(edges, vertex1_id, vertex2_id):
    """
    True if a path of edges leads from vertex1 to vertex2.

    Parameters
    ----------
    edges : dict
        Edge map (id -> Edge)
    vertex1_id : str
        ID of the vertex the path starts from
    vertex2_id : str
        ID of the vertex to reach

    Returns
    -------
    bool
        Whether vertex2 can be reached from vertex1
    """
    incident = connected_edges(edges, vertex1_id)
    if not incident:
        return False
    for edge in incident:
        if edge.traverse(vertex1_id) == vertex2_id:
            return True

    for edge in incident:
        next_vertex_id = edge.traverse(vertex1_id)
        if next_vertex_id is not None:
            if are_vertices_connected(_without(edges, edge.id), next_vertex_id, vertex2_id):
                return True
    return False


def is_connected(vertices, edges):
    """True if every pair of distinct vertices is connected (vacuous for < 2 vertices)."""
    for vertex1_id, vertex2_id in itertools.permutations(vertices, 2):
        if not are_vertices_connected(edges, vertex1_id, vertex2_id):
            return False
    return True


def is_cycle(vertices, edges):
    """
    True if the graph is exactly one cycle.

    Every vertex must lie on exactly two edges; then one edge of the first
    vertex is removed and its endpoints must still be connected, which
    rules out a union of disjoint cycles.
    """
    if not vertices:
        return False
    for vertex_id in vertices:
        if len(connected_edges(edges, vertex_id)) != 2:
            return False

    start_vertex_id = next(iter(vertices))
    first_edge = connected_edges(edges, start_vertex_id)[0]
    second_vertex_id = first_edge.traverse(start_vertex_id)
    return are_vertices_connected(_without(edges, first_edge.id), start_vertex_id, second_vertex_id)


def is_hamiltonian_cycle(vertices, edges):
    """True if the graph is a single cycle through all of its vertices."""
    return is_cycle(vertices, edges) and len(vertices) == len(edges)


def has_cycle(vertices, edges):
    """
    True if some edge lies on a cycle.

    An edge lies on a cycle when its endpoints stay connected after the
    edge is removed.
    """
    for vertex_id in vertices:
        for edge in connected_edges(edges, vertex_id):
            next_vertex_id = edge.traverse(vertex_id)
            if next_vertex_id is not None:
                if are_vertices_connected(_without(edges, edge.id), vertex_id, next_vertex_id):
                    return True
    return False


def to_networkx(graph, directed=False):
    """
    Convert a Graph into a networkx multigraph for read-only algorithm views.

    Parameters
    ----------
    graph : Graph
        Graph to convert
    directed : bool, optional
        Build a MultiDiGraph following each edge's direction tag; undirected
        edges and edges tagged 'both' get one arc in each direction

    Returns
    -------
    networkx.MultiGraph or networkx.MultiDiGraph
        A new graph with 'position', 'label' and 'weight' attributes
    """
    G = nx.MultiDiGraph() if directed else nx.MultiGraph()
    G.graph['id'] = graph.id

    for vertex_id, vertex in graph.vertices.items():
        G.add_node(vertex_id, position=vertex.position.to_tuple(), label=vertex.label)

    for edge_id, edge in graph.edges.items():
        start, end = edge.start_vertex_id, edge.end_vertex_id
        attrs = {'weight': edge.weight, 'directed': edge.directed.value}
        if not directed:
            G.add_edge(start, end, key=edge_id, **attrs)
            continue
        direction = edge.directed.value
        if direction in ('none', 'forward', 'both'):
            G.add_edge(start, end, key=edge_id, **attrs)
        if direction in ('none', 'reverse', 'both'):
            G.add_edge(end, start, key=edge_id, **attrs)

    return G


def degree_table(graph):
    """
    Degree of every vertex as a DataFrame.

    A self-loop counts once, as in `connected_edges`.

    Parameters
    ----------
    graph : Graph
        Graph to describe

    Returns
    -------
    pandas.DataFrame
        Indexed by vertex ID, with 'label', 'x', 'y' and 'degree' columns
    """
    rows = {
        vertex_id: {
            'label': vertex.label,
            'x': vertex.position.x,
            'y': vertex.position.y,
            'degree': len(connected_edges(graph.edges, vertex_id)),
        }
        for vertex_id, vertex in graph.vertices.items()
    }
    df = pd.DataFrame.from_dict(rows, orient='index', columns=['label', 'x', 'y', 'degree'])
    df.index.name = 'vertex_id'
    return df


def summarize(graph):
    """
    Results of the topological queries on a graph.

    Parameters
    ----------
    graph : Graph
        Graph to describe

    Returns
    -------
    pandas.DataFrame
        One row per query, in a single 'value' column
    """
    vertices, edges = graph.vertices, graph.edges
    results = {
        'vertices': len(vertices),
        'edges': len(edges),
        'is_connected': is_connected(vertices, edges),
        'is_cycle': is_cycle(vertices, edges),
        'is_hamiltonian_cycle': is_hamiltonian_cycle(vertices, edges),
        'has_cycle': has_cycle(vertices, edges),
    }
    df = pd.DataFrame.from_dict(results, orient='index', columns=['value'])
    df.index.name = 'query'
    return df
