"""filecat: print file contents with headers."""

__version__ = "0.1.0"
