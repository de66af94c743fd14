"""Mixed-radix enumeration of polynomials with coefficients from a fixed set."""

from __future__ import annotations

from typing import Iterator, Sequence

import numpy as np


class CoefficientEnumerator:
    """Iterate over every polynomial of a given degree with coefficients drawn from ``coefficients``.

    Polynomials are stored constant term first. The enumeration behaves like
    an odometer whose digit ``j`` selects the value of coefficient ``j``:
    slot 0 turns fastest and every slot starts at ``coefficients[0]``.

    Each yielded polynomial is a read-only view of the enumerator's buffer and
    is overwritten in place by the next call to ``next()``; copy it if it has
    to outlive the iteration step.
    """

    def __init__(self, coefficients: Sequence[float], degree: int):
        if len(coefficients) == 0:
            raise ValueError("At least one coefficient value is required.")
        if int(degree) != degree or degree < 0:
            raise ValueError(f"degree must be a non-negative integer, got {degree!r}.")
        self.coefficients = np.asarray(coefficients, dtype=np.float64)
        self.degree = int(degree)
        self._poly = np.empty(self.degree + 1, dtype=np.float64)
        self._digits = np.empty(self.degree + 1, dtype=np.int64)
        self._view = self._poly.view()
        self._view.flags.writeable = False
        self.reset()

    def reset(self) -> None:
        """Restart the enumeration from the all-fill-value polynomial."""
        self._poly.fill(self.coefficients[0])
        self._digits.fill(0)
        self._started = False
        self._exhausted = False

    def __len__(self) -> int:
        return len(self.coefficients) ** (self.degree + 1)

    def __iter__(self) -> Iterator[np.ndarray]:
        return self

    def __next__(self) -> np.ndarray:
        if self._exhausted:
            raise StopIteration
        if self._started and not self._advance():
            self._exhausted = True
            raise StopIteration
        self._started = True
        return self._view

    def _advance(self) -> bool:
        top = len(self.coefficients) - 1
        j = 0
        while j <= self.degree and self._digits[j] == top:
            self._digits[j] = 0
            self._poly[j] = self.coefficients[0]
            j += 1
        if j > self.degree:
            return False
        self._digits[j] += 1
        self._poly[j] = self.coefficients[self._digits[j]]
        return True


def enumerate_polynomials(coefficients: Sequence[float], degree: int) -> Iterator[tuple[float, ...]]:
    """Yield every polynomial of ``degree`` as an independent tuple of floats."""

    for poly in CoefficientEnumerator(coefficients, degree):
        yield tuple(float(c) for c in poly)
