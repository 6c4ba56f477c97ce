"""
Visualization functions for graphs.

This module provides matplotlib drawing of graphs with curved,
directed and weighted edges.
"""

from .canvas import *
