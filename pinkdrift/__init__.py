"""A small 3D drift racing game with lap timing, drift scoring and a window-free simulation."""

__version__ = "0.1.0"