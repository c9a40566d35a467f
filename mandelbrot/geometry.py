"""Mapping between the pixel canvas and the complex plane."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class CanvasSize:
    """Dimensions of the output raster in pixels."""

    width: int
    height: int

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class Viewport:
    """Rectangle of the complex plane spread over the canvas.

    The upper-left corner lands on pixel ``(0, 0)``; the lower-right corner is
    one step past the last pixel on each axis.
    """

    upper_left: complex
    lower_right: complex

    def point_at(self, pixel: tuple[int, int], canvas_size: CanvasSize) -> complex:
        return map_pixel_to_point(pixel, canvas_size, self.upper_left, self.lower_right)

    def grid(self, canvas_size: CanvasSize) -> tuple[np.ndarray, np.ndarray]:
        return sample_grid(canvas_size, self.upper_left, self.lower_right)


def _steps(canvas_size: CanvasSize, upper_left: complex, lower_right: complex) -> tuple[float, float]:
    dx = (lower_right.real - upper_left.real) / canvas_size.width
    dy = (lower_right.imag - upper_left.imag) / canvas_size.height
    return dx, dy


def map_pixel_to_point(
    pixel: tuple[int, int],
    canvas_size: CanvasSize,
    upper_left: complex,
    lower_right: complex,
) -> complex:
    """Return the complex point sampled by ``pixel``, given as ``(row, column)``.

    Rows grow downwards while the imaginary axis grows upwards, so the row
    offset is subtracted.
    """

    row, column = pixel
    dx, dy = _steps(canvas_size, upper_left, lower_right)
    return complex(upper_left.real + column * dx, upper_left.imag - row * dy)


def sample_grid(
    canvas_size: CanvasSize,
    upper_left: complex,
    lower_right: complex,
) -> tuple[np.ndarray, np.ndarray]:
    """Real and imaginary parts of every pixel as ``(height, width)`` arrays.

    Uses the same element-wise operations as :func:`map_pixel_to_point`.
    """

    dx, dy = _steps(canvas_size, upper_left, lower_right)
    columns = np.arange(canvas_size.width, dtype=np.float64)
    rows = np.arange(canvas_size.height, dtype=np.float64)
    re = np.float64(upper_left.real) + columns * np.float64(dx)
    im = np.float64(upper_left.imag) - rows * np.float64(dy)
    re_grid, im_grid = np.meshgrid(re, im)
    return re_grid, im_grid
