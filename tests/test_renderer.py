"""
test_renderer.py
"""
import numpy as np
import pytest

from fractal.grid import pixel_to_complex
from fractal.iteration import BOUNDED, Julia, Mandelbrot, escape_value_at
from fractal.palette import bezier_color
from fractal.ppm import encode_ppm
from fractal.renderer import RenderParameters, render_frame


def _scalar_escape(params, metadata):
    """
    Reference escape values computed one pixel at a time.
    """
    values = np.empty((metadata.height, metadata.width), dtype=np.float64)
    for row in range(metadata.height):
        for col in range(metadata.width):
            point = pixel_to_complex(metadata, row, col)
            values[row, col] = escape_value_at(params.kind, params.degree, point)
    return values


@pytest.mark.parametrize(
    'params',
    [
        RenderParameters(width=9, height=7),
        RenderParameters(width=8, height=6, degree=3),
        RenderParameters(width=6, height=6, kind=Julia(complex(-0.3, 0.7)),
                         max_corner=complex(1.6, 1.2), min_corner=complex(-1.6, -1.2)),
        RenderParameters(width=5, height=4, degree=4, kind=Julia(complex(0.2, -0.1))),
    ],
)
def test_frame_agrees_with_scalar_iteration(params):
    """
    The vectorized render reproduces the per-pixel escape values.
    """
    result = render_frame(params)
    expected = _scalar_escape(params, result.metadata)

    assert result.escape.shape == (params.height, params.width)
    assert np.array_equal(result.bounded, expected == BOUNDED)
    np.testing.assert_allclose(result.escape, expected, rtol=1e-9, atol=1e-9)


def test_colors_follow_escape_values():
    """
    Each pixel colour is the gradient colour of its escape value.
    """
    result = render_frame(RenderParameters(width=6, height=5))
    assert result.colors.shape == (5, 6, 3)
    for index in np.ndindex(result.escape.shape):
        assert tuple(result.colors[index]) == bezier_color(float(result.escape[index]))


def test_bounded_pixels_are_black():
    """
    Interior points render as black.
    """
    params = RenderParameters(width=4, height=4, max_corner=complex(0.1, 0.1), min_corner=complex(-0.1, -0.1))
    result = render_frame(params)
    assert result.bounded.all()
    assert not result.colors.any()


def test_two_by_two_mandelbrot_stream():
    """
    A 2x2 render produces the header and exactly twelve bytes.
    """
    result = render_frame(RenderParameters(width=2, height=2, degree=2))
    data = encode_ppm(result.colors)
    header = b"P6 2 2 255\n"
    assert data.startswith(header)
    assert len(data) == len(header) + 12


def test_single_pixel_render():
    """
    A 1x1 render yields exactly one pixel record.
    """
    result = render_frame(RenderParameters(width=1, height=1))
    data = encode_ppm(result.colors)
    assert len(data) == len(b"P6 1 1 255\n") + 3
    # The single sample sits at -2-2i, outside the escape radius.
    assert not result.bounded[0, 0]


def test_rendering_is_repeatable():
    """
    Identical configurations produce identical bytes.
    """
    params = RenderParameters(width=12, height=9, degree=3, kind=Julia(complex(-0.4, 0.6)))
    first = encode_ppm(render_frame(params).colors)
    second = encode_ppm(render_frame(params).colors)
    assert first == second


def test_overflowing_iterates_escape_with_zero():
    """
    A huge but finite constant overflows the modulus and still renders black.
    """
    params = RenderParameters(width=2, height=2, kind=Julia(complex(1e200, 0.0)),
                              max_corner=complex(0.5, 0.5), min_corner=complex(-0.5, -0.5))
    result = render_frame(params)
    assert np.array_equal(result.escape, np.zeros((2, 2)))
    assert not result.colors.any()


@pytest.mark.parametrize(
    'kwargs',
    [
        {"width": 0, "height": 4},
        {"width": 4, "height": -1},
        {"width": 4, "height": 4, "degree": 1},
        {"width": 4, "height": 4, "max_corner": complex(-2, 2)},
        {"width": 4, "height": 4, "max_corner": complex(2, -2)},
        {"width": 4, "height": 4, "max_corner": complex(float("nan"), 1)},
        {"width": 4, "height": 4, "max_corner": complex(float("inf"), 1)},
        {"width": 4, "height": 4, "min_corner": complex(-2, float("nan"))},
        {"width": 4, "height": 4, "kind": Julia(complex(float("nan"), 0))},
    ],
)
def test_invalid_parameters_are_rejected(kwargs):
    """
    Degenerate configurations fail before any rendering happens.
    """
    with pytest.raises(ValueError):
        RenderParameters(**kwargs)


def test_default_kind_is_mandelbrot():
    assert RenderParameters(width=1, height=1).kind == Mandelbrot()
