"""A duck swimming along random spline paths on a simulated water surface, drawn with OpenGL."""

__version__ = "0.1.0"