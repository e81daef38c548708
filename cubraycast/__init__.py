"""A first-person raycasting viewer for .cub scene files with XPM textures."""

__version__ = "0.1.0"
__all__ = ["__version__"]