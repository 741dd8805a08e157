"""Rendering primitives for escape-time fractal frames."""

from __future__ import annotations

import cmath
from dataclasses import dataclass
from typing import Optional

import numpy as np
import tensorflow as tf

from .grid import SamplingMetadata, compute_metadata, sample_axes
from .iteration import BOUNDED, ESCAPE_RADIUS, MAX_ITERATIONS, IterationKind, Julia, Mandelbrot
from .palette import DEFAULT_STOPS, ColorStops, colorize


@dataclass(frozen=True)
class RenderParameters:
    """Parameters that describe a single render of a fractal."""

    width: int
    height: int
    degree: int = 2
    max_corner: complex = complex(2.0, 2.0)
    min_corner: complex = complex(-2.0, -2.0)
    kind: IterationKind = Mandelbrot()

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"image dimensions must be positive, got {self.width}x{self.height}")
        if self.degree < 2:
            raise ValueError(f"degree must be at least 2, got {self.degree}")
        if not (cmath.isfinite(self.max_corner) and cmath.isfinite(self.min_corner)):
            raise ValueError(f"region corners must be finite, got {self.max_corner} and {self.min_corner}")
        if not self.max_corner.real > self.min_corner.real:
            raise ValueError("region maximum must exceed the minimum on the real axis")
        if not self.max_corner.imag > self.min_corner.imag:
            raise ValueError("region maximum must exceed the minimum on the imaginary axis")
        if isinstance(self.kind, Julia) and not cmath.isfinite(self.kind.constant):
            raise ValueError(f"Julia constant must be finite, got {self.kind.constant}")


@dataclass(frozen=True)
class RenderResult:
    """Container for the numerical results of a fractal render."""

    escape: np.ndarray
    colors: np.ndarray
    metadata: SamplingMetadata

    @property
    def bounded(self) -> np.ndarray:
        return self.escape < 0


def _squared_modulus(zs: tf.Tensor) -> tf.Tensor:
    re = tf.math.real(zs)
    im = tf.math.imag(zs)
    return re * re + im * im


def _power(zs: tf.Tensor, degree: int) -> tf.Tensor:
    result = tf.ones_like(zs)
    for _ in range(degree):
        result = result * zs
    return result


@tf.function
def _escape_step(
    zs: tf.Tensor, cs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor, degree: int
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every point that is still inside the escape radius by one step."""

    zs_new = _power(zs, degree) + cs
    zs = tf.where(active, zs_new, zs)
    ns = ns + tf.cast(active, tf.int32)
    limit = tf.constant(ESCAPE_RADIUS * ESCAPE_RADIUS, dtype=tf.float64)
    new_active = tf.logical_and(active, _squared_modulus(zs) <= limit)
    return zs, ns, new_active


@tf.function
def _escape_run(
    zs: tf.Tensor, cs: tf.Tensor, degree: int, max_iterations: tf.Tensor
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Iterate until every point escaped or the iteration budget is spent."""

    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    ns = tf.zeros(tf.shape(zs), dtype=tf.int32)
    limit = tf.constant(ESCAPE_RADIUS * ESCAPE_RADIUS, dtype=tf.float64)
    active = _squared_modulus(zs) <= limit

    def cond(i: tf.Tensor, zs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tf.Tensor:
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i: tf.Tensor, zs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
        zs, ns, active = _escape_step(zs, cs, ns, active, degree)
        return i + 1, zs, ns, active

    return tf.while_loop(cond, body, (i, zs, ns, active))


def escape_values(points: tf.Tensor, kind: IterationKind, degree: int) -> tf.Tensor:
    """Smoothed escape values for a tensor of complex sample points."""

    zs, cs = kind.seed(points)
    zs = tf.cast(zs, tf.complex128)
    cs = tf.broadcast_to(tf.cast(cs, tf.complex128), tf.shape(zs))
    max_iterations = tf.constant(MAX_ITERATIONS, dtype=tf.int32)

    _, zs, ns, _ = _escape_run(zs, cs, degree, max_iterations)

    modulus = _squared_modulus(zs)
    limit = tf.constant(ESCAPE_RADIUS * ESCAPE_RADIUS, dtype=tf.float64)
    ns_float = tf.cast(ns, tf.float64)
    smooth = tf.abs(tf.truncatemod((ns_float - tf.math.log(modulus)) / MAX_ITERATIONS, 1.0))
    # Overflowed iterates escape with value 0, as in escape_value.
    smooth = tf.where(tf.math.is_finite(modulus), smooth, tf.zeros_like(smooth))
    bounded = tf.fill(tf.shape(smooth), tf.constant(BOUNDED, dtype=tf.float64))
    return tf.where(modulus <= limit, bounded, smooth)


def render_frame(
    params: RenderParameters,
    *,
    stops: ColorStops = DEFAULT_STOPS,
    device: Optional[str] = None,
) -> RenderResult:
    """Render a fractal frame given the supplied parameters."""

    metadata = compute_metadata(params)
    re, im = sample_axes(metadata)

    with tf.device(device if device is not None else "/CPU:0"):
        re_tf = tf.convert_to_tensor(re, dtype=tf.float64)
        im_tf = tf.convert_to_tensor(im, dtype=tf.float64)
        RE, IM = tf.meshgrid(re_tf, im_tf)
        points = tf.complex(RE, IM)
        escape = escape_values(points, params.kind, params.degree)

    escape = escape.numpy()
    return RenderResult(
        escape=escape,
        colors=colorize(escape, stops),
        metadata=metadata,
    )
