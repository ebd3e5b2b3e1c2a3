"""Wireframe viewer for height-map files, with projection, line drawing and XPM reading."""

__version__ = "0.1.0"
__all__ = ["__version__"]