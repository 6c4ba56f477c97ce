"""
Core functionality for Grapho Canvas.

This module contains the vertex, edge and graph data structures, the
color type and a few ready-made graphs.
"""

from .color import *
from .graph import *
from .presets import *
