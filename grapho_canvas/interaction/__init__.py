"""
Interaction with a graph canvas.

This module provides the vertex drag protocol and the gesture controller.
"""

from .drag import *
from .controller import *
