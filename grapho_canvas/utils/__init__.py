"""
Utility functions for the Grapho Canvas package.

This module provides the geometric primitives and the logger setup used
throughout the package.
"""

from .geometry import *
from .log import *
