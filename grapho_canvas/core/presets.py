"""
Ready-made graphs for demonstrations and lessons.
"""

from ..utils.geometry import Point
from .graph import Edge, Graph, ResetPolicy, Vertex

__all__ = ['preview_graph', 'konigsberg_graph', 'triangle']


def preview_graph():
    """
    Six vertices on a hexagon joined by its sides and three long diagonals.

    The graph restores itself to this layout when cleared.

    Returns
    -------
    Graph
        The preview graph
    """
    positions = [(0.35, 0.2), (0.65, 0.2), (0.8, 0.5), (0.65, 0.8), (0.35, 0.8), (0.2, 0.5)]
    vertices = [Vertex(position=Point(x, y), label=label)
                for (x, y), label in zip(positions, "abcdef")]
    a, b, c, d, e, f = (v.id for v in vertices)
    pairs = [(a, b), (b, c), (c, d), (d, e), (e, f), (f, a), (c, f), (a, d), (b, e)]
    edges = [Edge(start, end) for start, end in pairs]
    return Graph(vertices=vertices, edges=edges, reset_policy=ResetPolicy.RESTORE_TO_ORIGINAL)


def konigsberg_graph():
    """
    The seven bridges of Königsberg as a multigraph.

    The four land masses are the north bank, the south bank, the Kneiphof
    island and the eastern island; parallel edges are separate bridges.

    Returns
    -------
    Graph
        Four vertices and seven edges
    """
    north = Vertex(position=Point(0.4, 0.15), label="N")
    south = Vertex(position=Point(0.4, 0.85), label="S")
    island = Vertex(position=Point(0.35, 0.5), label="K")
    east = Vertex(position=Point(0.8, 0.5), label="E")
    bridges = [
        (north.id, island.id), (island.id, north.id),
        (south.id, island.id), (island.id, south.id),
        (north.id, east.id), (south.id, east.id), (island.id, east.id),
    ]
    edges = [Edge(start, end, sign=1 if i % 2 == 0 else -1)
             for i, (start, end) in enumerate(bridges)]
    return Graph(vertices=[north, south, island, east], edges=edges,
                 reset_policy=ResetPolicy.RESTORE_TO_ORIGINAL)


def triangle():
    """Three vertices joined pairwise."""
    vertices = [Vertex(position=Point(x, y)) for x, y in ((0.5, 0.2), (0.8, 0.8), (0.2, 0.8))]
    a, b, c = (v.id for v in vertices)
    return Graph(vertices=vertices, edges=[Edge(a, b), Edge(b, c), Edge(c, a)])
