"""Accumulation of roots into a saturating density histogram."""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from .window import Window

EPSILON = 1.0e-20
REAL_CUTOFF = 0.5
COUNT_DTYPE = np.uint32
COUNT_BOUND = int(np.iinfo(COUNT_DTYPE).max)


class Histogram:
    """Per-pixel root counts for a window, with the running peak count."""

    def __init__(self, window: Window):
        self.window = window
        self.counts = np.zeros(window.shape, dtype=COUNT_DTYPE)
        self.max_count = 0

    def increment(self, x: int, y: int) -> bool:
        """Add one to cell ``(x, y)`` unless it is saturated."""

        count = int(self.counts[y, x])
        if count >= COUNT_BOUND:
            return False
        count += 1
        self.counts[y, x] = count
        if count > self.max_count:
            self.max_count = count
        return True

    @property
    def total(self) -> int:
        return int(self.counts.sum(dtype=np.uint64))


class RootRasterizer:
    """Map roots to pixels of ``histogram`` and count them.

    Real roots (``|im| < epsilon``) outside ``[-real_cutoff, real_cutoff]``
    are dropped; they pile up on the real axis and would wash out the rest of
    the picture.
    """

    def __init__(self, histogram: Histogram, *, epsilon: float = EPSILON, real_cutoff: float = REAL_CUTOFF):
        self.histogram = histogram
        self.window = histogram.window
        self.epsilon = epsilon
        self.real_cutoff = real_cutoff

    def is_excluded(self, re: float, im: float) -> bool:
        return -self.epsilon < im < self.epsilon and (re < -self.real_cutoff or re > self.real_cutoff)

    def record(self, root: complex) -> bool:
        """Count ``root`` in the histogram. Returns whether it was recorded."""

        re, im = float(root.real), float(root.imag)
        if not (math.isfinite(re) and math.isfinite(im)):
            return False
        if self.is_excluded(re, im):
            return False
        pixel = self.window.to_pixel(re, im)
        if pixel is None or not self.window.contains(*pixel):
            return False
        x, y = pixel
        return self.histogram.increment(x, y)

    def record_all(self, roots: Iterable[complex]) -> int:
        recorded = 0
        for root in roots:
            if self.record(root):
                recorded += 1
        return recorded
