"""Parsers for the ``AxB`` style arguments accepted on the command line."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

T = TypeVar("T")


def parse_pair(s: str, separator: str, convert: Callable[[str], T]) -> Optional[tuple[T, T]]:
    """Split ``s`` at the first ``separator`` and convert both halves.

    Returns ``None`` if the separator is missing or either half does not
    convert as written (no padding, no digit separators), e.g. ``parse_pair("640x480", "x", int) == (640, 480)``.
    """

    left, found, right = s.partition(separator)
    if not found:
        return None
    # int() and float() would also take " 32" and "1_000"
    for half in (left, right):
        if half != half.strip() or "_" in half:
            return None
    try:
        return convert(left), convert(right)
    except ValueError:
        return None


def parse_complex(s: str) -> Optional[complex]:
    """Parse ``"re,im"`` into a complex number, or ``None``."""

    pair = parse_pair(s, ",", float)
    if pair is None:
        return None
    re, im = pair
    return complex(re, im)
