"""
Input/output operations for graphs.

This module provides functions for saving and loading graphs and for
exporting them to geospatial formats.
"""

from .loaders import *
from .exporters import *
