"""Public API for polynomial root density plots."""

from .driver import RenderResult, RenderStats, render, report_progress
from .enumerator import CoefficientEnumerator, enumerate_polynomials
from .rasterizer import COUNT_BOUND, EPSILON, REAL_CUTOFF, Histogram, RootRasterizer
from .solver import NumpySolver, RootSolver
from .tonemap import FULL_SCALE, get_colormap, ppm_header, to_preview, tone_map, write_ppm
from .window import Window

__all__ = [
    "COUNT_BOUND",
    "CoefficientEnumerator",
    "EPSILON",
    "FULL_SCALE",
    "Histogram",
    "NumpySolver",
    "REAL_CUTOFF",
    "RenderResult",
    "RenderStats",
    "RootRasterizer",
    "RootSolver",
    "Window",
    "enumerate_polynomials",
    "get_colormap",
    "ppm_header",
    "render",
    "report_progress",
    "to_preview",
    "tone_map",
    "write_ppm",
]
