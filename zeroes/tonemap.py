"""Tone mapping of root densities and image output."""

from __future__ import annotations

from typing import BinaryIO, Sequence

import numpy as np

from .rasterizer import Histogram

FULL_SCALE = 0xFFFF

try:
    from matplotlib import colormaps as _mpl_colormaps
except ImportError:  # Matplotlib < 3.5
    from matplotlib import cm as _mpl_colormaps  # type: ignore


def get_colormap(name):
    return _mpl_colormaps.get_cmap(name)


def tone_map(histogram: Histogram) -> np.ndarray:
    """Scale counts logarithmically so that the peak count maps to ``FULL_SCALE``.

    Empty cells are always 0. When the peak count is 1 the logarithmic scale
    collapses, so every non-empty cell is drawn at full scale.
    """

    counts = histogram.counts
    intensity = np.zeros(counts.shape, dtype=np.uint16)
    if histogram.max_count < 1:
        return intensity
    filled = counts > 0
    if histogram.max_count == 1:
        intensity[filled] = FULL_SCALE
        return intensity
    scale = FULL_SCALE / np.log(np.float64(histogram.max_count))
    levels = np.rint(scale * np.log(counts[filled].astype(np.float64)))
    intensity[filled] = np.clip(levels, 0, FULL_SCALE).astype(np.uint16)
    return intensity


def _format_list(values: Sequence, fmt: str) -> str:
    return ", ".join(fmt % v for v in values)


def ppm_header(histogram: Histogram, coefficients: Sequence[float], degrees: Sequence[int]) -> bytes:
    window = histogram.window
    comment = "# Zeroes, xmin=%f, xmax=%f, ymin=%f, ymax=%f, max_count=%d, coeffs=[%s],degrees = [%s]," % (
        window.xmin,
        window.xmax,
        window.ymin,
        window.ymax,
        histogram.max_count,
        _format_list(coefficients, "%f"),
        _format_list(degrees, "%d"),
    )
    return ("P6\n%s\n%d\n%d\n%d\n" % (comment, window.xres, window.yres, FULL_SCALE)).encode("ascii")


def ppm_pixels(histogram: Histogram) -> bytes:
    """Grey 16-bit pixels: each intensity as three equal big-endian channels."""

    intensity = tone_map(histogram)
    rgb = np.repeat(intensity[..., np.newaxis], 3, axis=-1)
    return rgb.astype(">u2").tobytes()


def write_ppm(
    stream: BinaryIO,
    histogram: Histogram,
    coefficients: Sequence[float],
    degrees: Sequence[int],
) -> int:
    """Write the density image to ``stream`` and return the number of bytes written."""

    header = ppm_header(histogram, coefficients, degrees)
    pixels = ppm_pixels(histogram)
    stream.write(header)
    stream.write(pixels)
    stream.flush()
    return len(header) + len(pixels)


def to_preview(histogram: Histogram, cmap, *, invert: bool = False) -> np.ndarray:
    """Colourise the tone-mapped density as an 8-bit RGB array; empty cells stay black."""

    v = tone_map(histogram).astype(np.float64) / FULL_SCALE
    empty = histogram.counts == 0
    cmap_input = 1.0 - v if invert else v
    rgba = np.array(cmap(cmap_input), copy=True)
    for k in (0, 1, 2):
        rgba[..., k] = np.where(empty, 0.0, rgba[..., k])
    return np.uint8(np.clip(rgba[..., :3] * 255, 0, 255))
