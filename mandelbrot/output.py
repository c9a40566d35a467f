"""Writing rendered buffers to disk."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import numpy as np
import PIL.Image

from .geometry import CanvasSize
from .renderer import render_pixels


def write_image(filename: Union[str, Path], pixels, canvas_size: CanvasSize) -> None:
    """Save a flat grayscale buffer as a single-channel PNG at ``filename``."""

    array = np.asarray(pixels, dtype=np.uint8).reshape(canvas_size.height, canvas_size.width)
    image = PIL.Image.fromarray(array)
    output_path = Path(filename).expanduser()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output_path), format="PNG")


def generate_mandelbrot(
    filename: Union[str, Path],
    canvas_size: CanvasSize,
    upper_left: complex,
    lower_right: complex,
    radius: float,
    limit: int,
    *,
    backend: str = "python",
    device: Optional[str] = None,
) -> np.ndarray:
    """Render the viewport and write it to ``filename``.

    The file is only touched once the whole canvas has been computed. Returns
    the rendered buffer.
    """

    pixels = render_pixels(canvas_size, upper_left, lower_right, radius, limit, backend=backend, device=device)
    write_image(filename, pixels, canvas_size)
    return pixels
