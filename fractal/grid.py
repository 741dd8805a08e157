"""Mapping between pixel positions and points of the complex plane."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .renderer import RenderParameters


@dataclass(frozen=True)
class SamplingMetadata:
    """Metadata describing the sampling grid for a rendered frame."""

    min_re: float
    min_im: float
    re_step: float
    im_step: float
    width: int
    height: int


def compute_metadata(params: RenderParameters) -> SamplingMetadata:
    width = int(params.width)
    height = int(params.height)

    min_re = np.float64(params.min_corner.real)
    min_im = np.float64(params.min_corner.imag)
    re_step = (np.float64(params.max_corner.real) - min_re) / width
    im_step = (np.float64(params.max_corner.imag) - min_im) / height

    return SamplingMetadata(
        min_re=float(min_re),
        min_im=float(min_im),
        re_step=float(re_step),
        im_step=float(im_step),
        width=width,
        height=height,
    )


def sample_axes(metadata: SamplingMetadata) -> tuple[np.ndarray, np.ndarray]:
    """Return the real and imaginary coordinates of every column and row."""

    re = np.arange(metadata.width, dtype=np.float64) * metadata.re_step + metadata.min_re
    im = np.arange(metadata.height, dtype=np.float64) * metadata.im_step + metadata.min_im
    return re, im


def pixel_to_complex(metadata: SamplingMetadata, row: int, col: int) -> complex:
    re = np.float64(col) * np.float64(metadata.re_step) + np.float64(metadata.min_re)
    im = np.float64(row) * np.float64(metadata.im_step) + np.float64(metadata.min_im)
    return complex(float(re), float(im))
