import numpy as np
import PIL.Image
import pytest

from mandelbrot.geometry import CanvasSize
from mandelbrot.output import generate_mandelbrot, write_image


def test_write_image_is_single_channel_png(tmp_path):
    canvas = CanvasSize(4, 3)
    pixels = bytearray(range(canvas.pixel_count))
    path = tmp_path / "nested" / "gradient.png"

    write_image(path, pixels, canvas)

    with PIL.Image.open(path) as image:
        assert image.format == "PNG"
        assert image.mode == "L"
        assert image.size == (4, 3)
        assert image.getpixel((1, 2)) == pixels[2 * canvas.width + 1]


def test_write_image_rejects_wrong_buffer_length(tmp_path):
    with pytest.raises(ValueError):
        write_image(tmp_path / "bad.png", bytearray(5), CanvasSize(2, 2))


def test_write_failure_propagates(tmp_path):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("")
    with pytest.raises(OSError):
        generate_mandelbrot(blocker / "out.png", CanvasSize(4, 4), complex(-2, 1), complex(1, -1), 2.0, 16)


def test_generate_mandelbrot_writes_rendered_buffer(tmp_path):
    canvas = CanvasSize(16, 12)
    path = tmp_path / "small.png"

    pixels = generate_mandelbrot(path, canvas, complex(-2.0, -1.2), complex(1.0, 1.2), 2.0, 64)

    with PIL.Image.open(path) as image:
        assert np.array_equal(np.asarray(image).reshape(-1), pixels)


@pytest.mark.slow
def test_generate_reference_image(tmp_path):
    path = tmp_path / "mandelbrot.png"

    generate_mandelbrot(path, CanvasSize(1024, 780), complex(-1.20, 0.1), complex(-1.75, 0.5), 2.0, 255)

    with PIL.Image.open(path) as image:
        assert image.format == "PNG"
        assert image.mode == "L"
        assert image.size == (1024, 780)
