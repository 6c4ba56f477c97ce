"""
Example script for topological queries on preset graphs.

This script demonstrates how to:
1. Build the Königsberg bridges multigraph and the preview graph
2. Run the connectivity and cycle queries
3. Tabulate vertex degrees with pandas
4. Plot the graphs with curved, weighted edges
5. Export a graph to JSON and GeoJSON
"""

import os
import sys

import matplotlib.pyplot as plt

# Add the parent directory to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import grapho_canvas as gc
from grapho_canvas.core.presets import konigsberg_graph, preview_graph
from grapho_canvas.io.exporters import export_graph
from grapho_canvas.network.topology import degree_table, summarize
from grapho_canvas.utils.log import setup_logger
from grapho_canvas.visualization.canvas import plot_graph


def main():
    """Run the Königsberg example."""
    setup_logger()
    print("Grapho Canvas - Example Script for Topological Queries")
    print("------------------------------------------------------")

    print("\n1. Building graphs...")
    konigsberg = konigsberg_graph()
    preview = preview_graph()
    print(f"Königsberg: {len(konigsberg.vertices)} land masses, {len(konigsberg.edges)} bridges")
    print(f"Preview: {len(preview.vertices)} vertices, {len(preview.edges)} edges")

    print("\n2. Running queries...")
    for name, graph in (("Königsberg", konigsberg), ("Preview", preview)):
        print(f"{name}:")
        print(summarize(graph).to_string())

    print("\n3. Vertex degrees of Königsberg...")
    degrees = degree_table(konigsberg)
    print(degrees.to_string())
    odd = int((degrees['degree'] % 2 == 1).sum())
    print(f"{odd} land masses have an odd number of bridges, so no walk crosses each bridge once")

    print("\n4. Creating visualizations...")
    for i, edge_id in enumerate(konigsberg.edges):
        konigsberg.set_edge_weight(edge_id, i + 1)
    konigsberg.set_edge_direction(next(iter(konigsberg.edges)), gc.Directed.FORWARD)

    fig, axes = plt.subplots(1, 2, figsize=(16, 8))
    plot_graph(konigsberg, ax=axes[0], show_weights=True, title="Seven bridges of Königsberg")
    plot_graph(preview, ax=axes[1], title="Preview graph")
    plt.tight_layout()

    output_dir = os.path.join(os.path.dirname(__file__), "..", "output")
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, "konigsberg.png")
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    print(f"Figure saved to: {output_path}")

    print("\n5. Exporting...")
    export_graph(konigsberg, output_dir, base_name="konigsberg")

    print("\nExample completed successfully!")
    return konigsberg, preview


if __name__ == "__main__":
    main()
