"""
Example script for dragging vertices of a graph.

This script demonstrates how to:
1. Build a graph through the gesture controller
2. Drag a vertex in several steps and commit the move
3. Follow the control points and the weight label through the drag
4. Plot the graph before, during and after the drag
"""

import os
import sys

import matplotlib.pyplot as plt

# Add the parent directory to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from grapho_canvas import Directed, Graph, Point
from grapho_canvas.interaction.controller import GraphController
from grapho_canvas.utils.log import setup_logger
from grapho_canvas.visualization.canvas import plot_drag_preview, plot_graph

RENDER_SIZE = Point(800, 800)


def build(controller):
    """Place four vertices and connect them with taps."""
    labels = "abcd"
    positions = [Point(0.2, 0.3), Point(0.7, 0.2), Point(0.8, 0.7), Point(0.3, 0.8)]
    vertices = [controller.add_vertex(p, label) for p, label in zip(positions, labels)]
    controller.set_direction(Directed.FORWARD)
    for start, end in zip(vertices, vertices[1:] + vertices[:1]):
        controller.tap_vertex(start.id)
        controller.tap_vertex(end.id)
    for i, edge_id in enumerate(controller.graph.edges):
        controller.graph.set_edge_weight(edge_id, 2 * i + 1)
    return vertices


def describe(graph, vertex_id):
    for edge in graph.get_connected_edges(vertex_id):
        control_point1, control_point2 = graph.get_control_points(edge.id)
        weight = graph.get_weight_position(edge.id)
        print(f"  edge {edge.weight:g}: cp1=({control_point1.x:.3f}, {control_point1.y:.3f}) "
              f"cp2=({control_point2.x:.3f}, {control_point2.y:.3f}) "
              f"weight=({weight.x:.3f}, {weight.y:.3f})")


def main():
    """Run the drag example."""
    setup_logger(config={'level': 'DEBUG', 'format': '%(name)s - %(message)s', 'console': True})
    print("Grapho Canvas - Example Script for Vertex Drags")
    print("-----------------------------------------------")

    controller = GraphController(Graph(), show_weights=True, render_size=RENDER_SIZE)
    graph = controller.graph
    a, b, c, d = build(controller)
    print(f"\n1. Built graph: {graph}, cycle: {graph.is_cycle()}")
    describe(graph, c.id)

    fig, axes = plt.subplots(1, 3, figsize=(18, 6))
    plot_graph(graph, ax=axes[0], show_weights=True, title="Before")

    print("\n2. Dragging vertex c...")
    for step in range(1, 5):
        controller.drag_vertex(c.id, Point(-30 * step, 20 * step))
    plot_drag_preview(graph, controller.drag, ax=axes[1], show_weights=True, title="During")
    controller.end_drag(c.id)
    describe(graph, c.id)

    print("\n3. Dragging vertex c there and back...")
    controller.drag_vertex(c.id, Point(100, 100))
    controller.drag_vertex(c.id, Point(0, 0))
    controller.end_drag(c.id)
    describe(graph, c.id)
    plot_graph(graph, ax=axes[2], show_weights=True, title="After")

    plt.tight_layout()
    output_dir = os.path.join(os.path.dirname(__file__), "..", "output")
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, "drag.png")
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    print(f"\nFigure saved to: {output_path}")
    print("\nExample completed successfully!")
    return graph


if __name__ == "__main__":
    main()
