"""Command line entry point: render one grayscale PNG of the Mandelbrot set."""

from __future__ import annotations

import math
import os
import re
import sys
import time
from argparse import ArgumentParser, ArgumentTypeError
from typing import NoReturn, Optional, Sequence

from .geometry import CanvasSize
from .output import generate_mandelbrot
from .parsing import parse_complex, parse_pair
from .renderer import BACKENDS, MAX_LIMIT

EXAMPLE = "mandelbrot.png 1024x780 -1.20,0.1 -1.75,0.5 2.0 255"

_NEGATIVE_VALUE = re.compile(r"^-\.?\d")

VERBOSE = False


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


class UsageParser(ArgumentParser):
    """Argument parser that reports bad input with the usage text and exit status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\nExample: {self.prog} {EXAMPLE}\n")

    def _parse_optional(self, arg_string):
        # "-1.20,0.1" is a corner, not an option. argparse only exempts plain
        # negative numbers and has no public hook for this, so the check runs
        # ahead of its private option lookup (None means positional).
        if _NEGATIVE_VALUE.match(arg_string):
            return None
        return super()._parse_optional(arg_string)


def canvas_size(value: str) -> CanvasSize:
    pair = parse_pair(value, "x", int)
    if pair is None:
        raise ArgumentTypeError(f"invalid canvas size '{value}', expected WIDTHxHEIGHT")
    width, height = pair
    if width <= 0 or height <= 0:
        raise ArgumentTypeError(f"canvas size must be positive, got {width}x{height}")
    return CanvasSize(width, height)


def complex_point(value: str) -> complex:
    point = parse_complex(value)
    if point is None:
        raise ArgumentTypeError(f"invalid complex point '{value}', expected RE,IM")
    return point


def escape_radius(value: str) -> float:
    try:
        radius = float(value)
    except ValueError:
        raise ArgumentTypeError(f"invalid radius '{value}'") from None
    if not math.isfinite(radius) or radius <= 0:
        raise ArgumentTypeError(f"radius must be a positive number, got {value}")
    return radius


def iteration_limit(value: str) -> int:
    try:
        limit = int(value)
    except ValueError:
        raise ArgumentTypeError(f"invalid limit '{value}'") from None
    if not 0 <= limit <= MAX_LIMIT:
        raise ArgumentTypeError(f"limit must be between 0 and {MAX_LIMIT}, got {limit}")
    return limit


def build_parser() -> UsageParser:
    parser = UsageParser(
        prog="mandelbrot",
        description="Render a region of the Mandelbrot set as a grayscale PNG.",
        epilog=f"Example: mandelbrot {EXAMPLE}",
    )

    parser.add_argument('filename', help='path of the PNG file to write', metavar='FILENAME')

    parser.add_argument('canvas_size', type=canvas_size,
                        help='image size in pixels, e.g. 1024x780', metavar='WIDTHxHEIGHT')

    parser.add_argument('upper_left', type=complex_point,
                        help='complex point at the upper-left corner, e.g. -1.20,0.1', metavar='UPPER_LEFT')

    parser.add_argument('lower_right', type=complex_point,
                        help='complex point at the lower-right corner, e.g. -1.75,0.5', metavar='LOWER_RIGHT')

    parser.add_argument('radius', type=escape_radius,
                        help='escape radius, e.g. 2.0', metavar='RADIUS')

    parser.add_argument('limit', type=iteration_limit,
                        help=f'maximum number of iterations per point (0-{MAX_LIMIT})', metavar='LIMIT')

    parser.add_argument('--backend', choices=BACKENDS, default='python',
                        help='"python" iterates pixel by pixel; "tensorflow" evaluates the whole canvas at once.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def _quiet_tensorflow() -> None:
    os.environ.setdefault("TF_CPP_MIN_LOG_LEVEL", "3")

    import tensorflow as tf

    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    device = None
    if opt.backend == "tensorflow":
        try:
            if not VERBOSE:
                _quiet_tensorflow()
            from .accelerated import select_device
        except ImportError as exc:
            print(f"{parser.prog}: error: the tensorflow backend needs TensorFlow "
                  f"(pip install mandelbrot-escape[tensorflow]): {exc}", file=sys.stderr)
            return 1

        device = select_device()
        log("Using TensorFlow device %s" % device)

    size = opt.canvas_size
    log("Rendering {0}x{1} from {2} to {3} (radius {4}, limit {5})".format(
        size.width, size.height, opt.upper_left, opt.lower_right, opt.radius, opt.limit))

    started = time.perf_counter()
    try:
        generate_mandelbrot(
            opt.filename,
            size,
            opt.upper_left,
            opt.lower_right,
            opt.radius,
            opt.limit,
            backend=opt.backend,
            device=device,
        )
    except OSError as exc:
        print(f"{parser.prog}: error: could not write {opt.filename}: {exc}", file=sys.stderr)
        return 1

    log("Wrote %s in %.2fs" % (opt.filename, time.perf_counter() - started))
    return 0


if __name__ == '__main__':
    sys.exit(main())
