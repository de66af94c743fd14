"""Root solvers for real polynomials."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

import numpy as np


class RootSolver(Protocol):
    """Compute the complex roots of a polynomial given constant term first.

    ``solve`` returns exactly ``len(coeffs) - 1`` roots, or ``None`` when the
    polynomial could not be solved. It must not raise on difficult input.
    """

    name: str

    def solve(self, coeffs: Sequence[float]) -> Optional[np.ndarray]:
        ...


def check_roots(roots: np.ndarray, degree: int) -> Optional[np.ndarray]:
    """Return ``roots`` as a complex array if it is a complete, finite solution."""

    roots = np.asarray(roots, dtype=np.complex128).reshape(-1)
    if roots.shape[0] != degree or not np.all(np.isfinite(roots)):
        return None
    return roots


class NumpySolver:
    """Eigenvalues of the companion matrix, computed by :func:`numpy.roots`."""

    name = "numpy"

    def solve(self, coeffs: Sequence[float]) -> Optional[np.ndarray]:
        coeffs = np.asarray(coeffs, dtype=np.float64)
        degree = coeffs.shape[0] - 1
        if degree < 1:
            return np.empty(0, dtype=np.complex128)
        if coeffs[-1] == 0 or not np.all(np.isfinite(coeffs)):
            return None
        try:
            # numpy.roots expects the leading coefficient first.
            roots = np.roots(coeffs[::-1])
        except np.linalg.LinAlgError:
            return None
        return check_roots(roots, degree)


def companion_matrix(coeffs: np.ndarray) -> np.ndarray:
    """Companion matrix of a monic-normalised polynomial (constant term first)."""

    degree = coeffs.shape[0] - 1
    monic = coeffs[:-1] / coeffs[-1]
    matrix = np.zeros((degree, degree), dtype=np.float64)
    if degree > 1:
        matrix[1:, :-1] = np.eye(degree - 1, dtype=np.float64)
    matrix[:, -1] = -monic
    return matrix
