"""Public API for escape-time fractal rendering."""

from .grid import SamplingMetadata, compute_metadata, pixel_to_complex, sample_axes
from .iteration import (
    BOUNDED,
    ESCAPE_RADIUS,
    MAX_ITERATIONS,
    IterationKind,
    Julia,
    Mandelbrot,
    complex_power,
    escape_value,
    escape_value_at,
)
from .palette import DEFAULT_STOPS, ColorStops, bezier_color, colorize
from .ppm import encode_ppm, write_ppm
from .renderer import RenderParameters, RenderResult, escape_values, render_frame

__all__ = [
    "BOUNDED",
    "ColorStops",
    "DEFAULT_STOPS",
    "ESCAPE_RADIUS",
    "IterationKind",
    "Julia",
    "MAX_ITERATIONS",
    "Mandelbrot",
    "RenderParameters",
    "RenderResult",
    "SamplingMetadata",
    "bezier_color",
    "colorize",
    "complex_power",
    "compute_metadata",
    "encode_ppm",
    "escape_value",
    "escape_value_at",
    "escape_values",
    "pixel_to_complex",
    "render_frame",
    "sample_axes",
    "write_ppm",
]
