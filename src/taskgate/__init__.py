"""Access-control core for the task manager UI."""

__version__ = "0.1.0"
