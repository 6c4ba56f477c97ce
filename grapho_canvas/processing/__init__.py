"""
Edge geometry processing.

This module provides Bezier curve queries, control point placement and
weight label placement for edges.
"""

from .edge_geometry import *
