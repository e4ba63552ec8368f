"""A status line monitor, its component readers and box-drawing geometry."""

__version__ = "1.0"