"""Keyboard-driven terminal launcher built around a ``menu.csv`` entry file."""

__version__ = "0.3.0"

__all__ = ["__version__"]
