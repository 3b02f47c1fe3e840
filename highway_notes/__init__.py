"""Highway Notes web frontend."""

__version__ = "0.1.0"
