"""Escape-time evaluation of the quadratic recurrence ``z <- z**2 + c``."""

from __future__ import annotations

from typing import Optional


def escape_count(c: complex, limit: int, radius: float) -> Optional[int]:
    """Return the iteration index at which the orbit of ``c`` leaves the disk.

    Each iteration first tests ``|z|**2 > radius**2`` and only then updates
    ``z``, so index 0 always sees ``z = 0``. Returns ``None`` if the orbit is
    still inside after ``limit`` iterations.
    """

    radius_sq = radius * radius
    c_re = c.real
    c_im = c.imag
    z_re = 0.0
    z_im = 0.0
    for i in range(limit):
        if z_re * z_re + z_im * z_im > radius_sq:
            return i
        z_re, z_im = (z_re * z_re - z_im * z_im) + c_re, (z_re * z_im + z_im * z_re) + c_im
    return None


def quantize(count: Optional[int], limit: int) -> int:
    """Grayscale intensity for an escape result: bounded points are black."""

    if count is None:
        return 0
    return limit - count
