"""A tile-based 2D escape game played on .ber maps, with a pygame window."""

__version__ = "0.1.0"