"""Rendering of the Mandelbrot set into a flat grayscale buffer."""

from __future__ import annotations

from typing import MutableSequence, Optional

import numpy as np

from .escape import escape_count, quantize
from .geometry import CanvasSize, map_pixel_to_point

MAX_LIMIT = 255
BACKENDS = ("python", "tensorflow")


class BufferSizeError(ValueError):
    """The pixel buffer does not hold exactly one byte per canvas pixel."""


def _check_contract(buffer: MutableSequence[int], canvas_size: CanvasSize, limit: int, backend: str) -> None:
    if len(buffer) != canvas_size.pixel_count:
        raise BufferSizeError(
            f"buffer holds {len(buffer)} bytes but a {canvas_size.width}x{canvas_size.height} "
            f"canvas needs {canvas_size.pixel_count}"
        )
    if not 0 <= limit <= MAX_LIMIT:
        raise ValueError(f"iteration limit must be between 0 and {MAX_LIMIT}, got {limit}")
    if backend not in BACKENDS:
        raise ValueError(f"unknown backend '{backend}'. Valid choices: {', '.join(BACKENDS)}.")


def render(
    buffer: MutableSequence[int],
    canvas_size: CanvasSize,
    upper_left: complex,
    lower_right: complex,
    radius: float,
    limit: int,
    *,
    backend: str = "python",
    device: Optional[str] = None,
) -> None:
    """Fill ``buffer`` row by row with the grayscale escape time of each pixel.

    ``buffer`` is any writable sequence of ``width * height`` bytes, such as a
    ``bytearray`` or a one-dimensional ``uint8`` array. Escaping points get
    ``limit - index``; points that never escape are black.
    """

    _check_contract(buffer, canvas_size, limit, backend)

    if backend == "tensorflow":
        if canvas_size.pixel_count == 0:
            return
        from .accelerated import render_tensorflow

        pixels = render_tensorflow(canvas_size, upper_left, lower_right, radius, limit, device=device)
        buffer[:] = pixels.tolist()
        return

    width = canvas_size.width
    for row in range(canvas_size.height):
        for column in range(width):
            point = map_pixel_to_point((row, column), canvas_size, upper_left, lower_right)
            buffer[row * width + column] = quantize(escape_count(point, limit, radius), limit)


def render_pixels(
    canvas_size: CanvasSize,
    upper_left: complex,
    lower_right: complex,
    radius: float,
    limit: int,
    *,
    backend: str = "python",
    device: Optional[str] = None,
) -> np.ndarray:
    """Render into a freshly allocated flat ``uint8`` array and return it."""

    pixels = np.zeros(canvas_size.pixel_count, dtype=np.uint8)
    render(pixels, canvas_size, upper_left, lower_right, radius, limit, backend=backend, device=device)
    return pixels
