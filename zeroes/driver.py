"""Per-degree orchestration of enumeration, root finding and rasterization."""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from .enumerator import CoefficientEnumerator
from .rasterizer import EPSILON, REAL_CUTOFF, Histogram, RootRasterizer
from .solver import RootSolver
from .window import Window


@dataclass
class RenderStats:
    """Counters collected over a whole run."""

    enumerated: int = 0
    skipped: int = 0
    failures: int = 0
    roots: int = 0
    recorded: int = 0

    @property
    def solved(self) -> int:
        return self.enumerated - self.skipped - self.failures


@dataclass(frozen=True)
class RenderResult:
    histogram: Histogram
    stats: RenderStats
    degrees: tuple[int, ...] = field(default=())


def report_progress(message: str) -> None:
    print(message, file=sys.stderr)


def render(
    window: Window,
    coefficients: Sequence[float],
    degrees: Sequence[int],
    solver: RootSolver,
    *,
    epsilon: float = EPSILON,
    real_cutoff: float = REAL_CUTOFF,
    progress: Optional[Callable[[str], None]] = report_progress,
    on_degree: Optional[Callable[[int, Histogram], None]] = None,
) -> RenderResult:
    """Accumulate the roots of every polynomial of each degree in ``degrees``.

    Polynomials whose leading coefficient is within ``epsilon`` of zero are
    not of the requested degree and are never handed to the solver. Solver
    failures are counted and otherwise ignored.
    """

    histogram = Histogram(window)
    rasterizer = RootRasterizer(histogram, epsilon=epsilon, real_cutoff=real_cutoff)
    stats = RenderStats()
    start = time.monotonic()

    for d in degrees:
        if progress is not None:
            progress("Degree %d (%.2f seconds)" % (d, time.monotonic() - start))
        for poly in CoefficientEnumerator(coefficients, d):
            stats.enumerated += 1
            if -epsilon <= poly[d] <= epsilon:
                stats.skipped += 1
                continue
            roots = solver.solve(poly)
            if roots is None:
                stats.failures += 1
                continue
            stats.roots += len(roots)
            stats.recorded += rasterizer.record_all(roots)
        if on_degree is not None:
            on_degree(d, histogram)

    return RenderResult(histogram=histogram, stats=stats, degrees=tuple(int(d) for d in degrees))
