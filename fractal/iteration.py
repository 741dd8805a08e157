"""Escape-time iteration for Mandelbrot and Julia sets of arbitrary degree."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Union

MAX_ITERATIONS = 250
ESCAPE_RADIUS = 2

# Escape value of points that never leave the escape radius.
BOUNDED = -1.0


@dataclass(frozen=True)
class Mandelbrot:
    """Use the sample point both as the starting value and as ``c``.

    This couples ``z0`` to the pixel instead of starting at the origin, which
    differs from the textbook Mandelbrot iteration.
    """

    def seed(self, point: Any) -> tuple[Any, Any]:
        return point, point


@dataclass(frozen=True)
class Julia:
    """Start at the sample point and add a fixed constant on every step."""

    constant: complex

    def seed(self, point: Any) -> tuple[Any, Any]:
        return point, self.constant


IterationKind = Union[Mandelbrot, Julia]


def complex_power(z: complex, degree: int) -> complex:
    """Raise ``z`` to ``degree`` by repeated complex multiplication."""

    result = complex(1.0, 0.0)
    for _ in range(degree):
        result = complex(
            result.real * z.real - result.imag * z.imag,
            result.real * z.imag + result.imag * z.real,
        )
    return result


def squared_modulus(z: complex) -> float:
    return z.real * z.real + z.imag * z.imag


def escape_value(degree: int, z0: complex, c: complex) -> float:
    """Iterate ``z -> z**degree + c`` from ``z0`` and return a smoothed escape value.

    Returns a value in ``[0, 1]`` for points that escape within
    ``MAX_ITERATIONS`` steps and :data:`BOUNDED` for the others. An iterate
    whose squared modulus overflows escapes with value ``0.0``.
    """

    limit = ESCAPE_RADIUS * ESCAPE_RADIUS
    z = z0
    count = 0
    while count < MAX_ITERATIONS and squared_modulus(z) <= limit:
        z = complex_power(z, degree) + c
        count += 1

    modulus = squared_modulus(z)
    if modulus <= limit:
        return BOUNDED
    if not math.isfinite(modulus):
        return 0.0
    return abs(math.fmod((count - math.log(modulus)) / MAX_ITERATIONS, 1.0))


def escape_value_at(kind: IterationKind, degree: int, point: complex) -> float:
    z0, c = kind.seed(point)
    return escape_value(degree, z0, c)
