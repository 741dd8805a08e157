"""Quadratic Bézier colour gradient used to shade escape values."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

Color = tuple[int, int, int]


@dataclass(frozen=True)
class ColorStops:
    """Start, control and end colours of the gradient."""

    start: Color
    control: Color
    end: Color

    def as_array(self) -> np.ndarray:
        return np.array([self.start, self.control, self.end], dtype=np.float64)


BLACK: Color = (0, 0, 0)
BLUE: Color = (0, 127, 255)
WHITE: Color = (255, 255, 255)

DEFAULT_STOPS = ColorStops(start=BLACK, control=BLUE, end=WHITE)


def bezier_color(p: float, stops: ColorStops = DEFAULT_STOPS) -> Color:
    """Blend the three stops at parameter ``p``.

    Negative parameters, the bounded sentinel included, map to black. Channels
    are truncated toward zero and not clamped.
    """

    if p < 0:
        return BLACK
    q = 1.0 - p
    return tuple(
        int(q * q * start + 2.0 * q * p * ctl + p * p * end)
        for start, ctl, end in zip(stops.start, stops.control, stops.end)
    )


def colorize(values: np.ndarray, stops: ColorStops = DEFAULT_STOPS) -> np.ndarray:
    """Apply :func:`bezier_color` to every element of ``values``.

    Returns an integer array with a trailing channel axis of length 3.
    """

    p = np.asarray(values, dtype=np.float64)[..., np.newaxis]
    start, ctl, end = stops.as_array()
    q = 1.0 - p
    blended = q * q * start + 2.0 * q * p * ctl + p * p * end
    channels = np.trunc(blended).astype(np.int64)
    return np.where(p < 0, 0, channels)
