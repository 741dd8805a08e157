"""Binary PPM (P6) serialization."""

from __future__ import annotations

import os
from pathlib import Path

import numpy as np

MAX_VALUE = 255


def ppm_header(width: int, height: int) -> bytes:
    return f"P6 {width} {height} {MAX_VALUE}\n".encode("ascii")


def encode_ppm(colors: np.ndarray) -> bytes:
    """Encode a ``height x width x 3`` colour array as a P6 byte stream.

    Pixels are emitted row by row, three bytes each. Channel values outside
    ``[0, 255]`` wrap around as unsigned bytes.
    """

    colors = np.asarray(colors)
    if colors.ndim != 3 or colors.shape[2] != 3:
        raise ValueError(f"expected an array of shape (height, width, 3), got {colors.shape}")
    height, width, _ = colors.shape
    pixels = np.ascontiguousarray(colors.astype(np.uint8))
    return ppm_header(width, height) + pixels.tobytes()


def write_ppm(path: Path, colors: np.ndarray) -> Path:
    """Write ``colors`` to ``path``, replacing any existing file in one step."""

    path = Path(path)
    data = encode_ppm(colors)
    path.parent.mkdir(parents=True, exist_ok=True)
    partial = path.with_name(f".{path.name}.partial")
    try:
        with partial.open("wb") as handle:
            handle.write(data)
        os.replace(partial, path)
    finally:
        if partial.exists():
            partial.unlink()
    return path
