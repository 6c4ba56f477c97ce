"""
Grapho Canvas - graph topology and edge geometry for interactive graph drawing.
"""

__version__ = '0.1.0'

# Import main submodules for easy access
from . import utils
from . import core
from . import network
from . import processing
from . import interaction
from . import io
from . import visualization

from .core.graph import Algorithm, Directed, Edge, Graph, Mode, ResetPolicy, Vertex
from .core.color import Color, LabelColor
from .utils.geometry import Point
