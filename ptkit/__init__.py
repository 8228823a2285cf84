"""Protocol toolkit core: typed byte buffers, error codes, time and interrupt helpers, and threading primitives."""

__version__ = "0.1.0"
__all__ = ["buf", "errors", "thread", "utils"]