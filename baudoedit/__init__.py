"""Interactive editor for placing model instances in a 3D scene, with scene and mesh file I/O."""

__version__ = "0.1.0"