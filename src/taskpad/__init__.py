"""taskpad: a single-window to-do list (PySide6)."""

__version__ = "0.1.0"
