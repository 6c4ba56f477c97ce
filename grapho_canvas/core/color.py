"""
Color values for vertices and edges.

Colors are stored as RGBA floats and persisted as hex strings, so that a
saved graph never depends on a platform color object.
"""

from enum import Enum

import matplotlib.colors as mcolors

from ..canvas_config import GraphDecodeError

__all__ = ['Color', 'LabelColor']


class Color:
    """
    An RGBA color with a hex-string codec.
    """

    __slots__ = ("r", "g", "b", "a")

    def __init__(self, r, g, b, a=1.0):
        """
        Initialize a Color.

        Parameters
        ----------
        r, g, b : float
            Channels in [0, 1]
        a : float, optional
            Alpha channel in [0, 1]
        """
        self.r = float(r)
        self.g = float(g)
        self.b = float(b)
        self.a = float(a)

    @classmethod
    def from_hex(cls, value):
        """
        Decode a color from a hex string ('#rrggbb' or '#rrggbbaa').

        Named matplotlib colors ('white', 'red', ...) are accepted too.

        Raises
        ------
        GraphDecodeError
            If the string is not a valid color
        """
        try:
            r, g, b, a = mcolors.to_rgba(value)
        except (ValueError, TypeError) as e:
            raise GraphDecodeError(f"Invalid color string {value!r}: {e}")
        return cls(r, g, b, a)

    def to_hex(self):
        """Encode the color as '#rrggbbaa'."""
        return mcolors.to_hex(self.to_rgba(), keep_alpha=True)

    def to_rgba(self):
        return (self.r, self.g, self.b, self.a)

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self.to_hex() == other.to_hex()

    def __hash__(self):
        return hash(self.to_hex())

    def __repr__(self):
        return f"Color({self.to_hex()})"


class LabelColor(Enum):
    """Colors available for vertex labels."""

    WHITE = "white"
    BLUE = "blue"
    RED = "red"
    GREEN = "green"
    BLACK = "black"

    def to_color(self):
        return Color.from_hex(self.value)
