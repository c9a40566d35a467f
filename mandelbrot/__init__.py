"""Public API for Mandelbrot rendering utilities."""

from .escape import escape_count, quantize
from .geometry import CanvasSize, Viewport, map_pixel_to_point, sample_grid
from .output import generate_mandelbrot, write_image
from .parsing import parse_complex, parse_pair
from .renderer import BACKENDS, MAX_LIMIT, BufferSizeError, render, render_pixels

__all__ = [
    "BACKENDS",
    "BufferSizeError",
    "CanvasSize",
    "MAX_LIMIT",
    "Viewport",
    "escape_count",
    "generate_mandelbrot",
    "map_pixel_to_point",
    "parse_complex",
    "parse_pair",
    "quantize",
    "render",
    "render_pixels",
    "sample_grid",
    "write_image",
]
