"""Vectorized escape-time kernel running on TensorFlow."""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf

from .geometry import CanvasSize, Viewport


@tf.function
def _escape_step(
    i: tf.Tensor,
    z_re: tf.Tensor,
    z_im: tf.Tensor,
    c_re: tf.Tensor,
    c_im: tf.Tensor,
    counts: tf.Tensor,
    active: tf.Tensor,
    radius_sq: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Test every still-active point at iteration ``i``, then advance it."""

    escaped = tf.logical_and(active, z_re * z_re + z_im * z_im > radius_sq)
    counts = tf.where(escaped, i, counts)
    active = tf.logical_and(active, tf.logical_not(escaped))

    new_re = (z_re * z_re - z_im * z_im) + c_re
    new_im = (z_re * z_im + z_im * z_re) + c_im
    z_re = tf.where(active, new_re, z_re)
    z_im = tf.where(active, new_im, z_im)
    return z_re, z_im, counts, active


@tf.function
def _escape_run(c_re: tf.Tensor, c_im: tf.Tensor, limit: tf.Tensor, radius_sq: tf.Tensor) -> tf.Tensor:
    """Iterate until ``limit`` or until every point has escaped.

    Returns the escape index per point, ``-1`` for points that stayed bounded.
    """

    i = tf.constant(0, dtype=tf.int32)
    z_re = tf.zeros_like(c_re)
    z_im = tf.zeros_like(c_im)
    counts = tf.fill(tf.shape(c_re), tf.constant(-1, dtype=tf.int32))
    active = tf.ones_like(counts, tf.bool)

    def cond(i, z_re, z_im, counts, active):
        return tf.logical_and(tf.less(i, limit), tf.reduce_any(active))

    def body(i, z_re, z_im, counts, active):
        z_re, z_im, counts, active = _escape_step(i, z_re, z_im, c_re, c_im, counts, active, radius_sq)
        return i + 1, z_re, z_im, counts, active

    _, _, _, counts, _ = tf.while_loop(cond, body, (i, z_re, z_im, counts, active))
    return counts


def select_device() -> str:
    """Return ``/GPU:0`` when a GPU is visible, otherwise ``/CPU:0``."""

    gpus = tf.config.list_physical_devices("GPU")
    if not gpus:
        return "/CPU:0"
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
    except RuntimeError:
        # memory growth must be set before the GPU is initialized
        return "/CPU:0"
    return "/GPU:0"


def render_tensorflow(
    canvas_size: CanvasSize,
    upper_left: complex,
    lower_right: complex,
    radius: float,
    limit: int,
    *,
    device: Optional[str] = None,
) -> np.ndarray:
    """Render the canvas into a flat ``uint8`` array using TensorFlow."""

    re_grid, im_grid = Viewport(upper_left, lower_right).grid(canvas_size)
    radius_sq = np.float64(radius) * np.float64(radius)

    with tf.device(device if device is not None else "/CPU:0"):
        c_re = tf.convert_to_tensor(re_grid, dtype=tf.float64)
        c_im = tf.convert_to_tensor(im_grid, dtype=tf.float64)
        counts = _escape_run(
            c_re,
            c_im,
            tf.constant(limit, dtype=tf.int32),
            tf.constant(radius_sq, dtype=tf.float64),
        )
        pixels = tf.where(counts >= 0, limit - counts, tf.zeros_like(counts))

    return pixels.numpy().astype(np.uint8).reshape(-1)
