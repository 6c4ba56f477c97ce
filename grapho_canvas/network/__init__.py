"""
Topological analysis of graphs.

This module provides the connectivity and cycle queries and the
conversion to networkx for algorithm views.
"""

from .topology import *
