"""Keyframed sphere animation, interpolation, camera, buffer layout and raw frame output for a ray-marching renderer."""

__version__ = "0.1.0"