"""TensorFlow root solver: companion-matrix eigenvalues on the selected device."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import tensorflow as tf

from .solver import check_roots, companion_matrix


def select_device(log=None) -> str:
    """Return the first GPU with memory growth enabled, or the CPU."""

    gpus = tf.config.list_physical_devices('GPU')
    if gpus:
        try:
            for gpu in gpus:
                tf.config.experimental.set_memory_growth(gpu, True)
            if log is not None:
                log("GPU found, using %s" % gpus[0].name)
            return '/GPU:0'
        except RuntimeError as e:
            if log is not None:
                log(str(e))
            return '/CPU:0'
    if log is not None:
        log("No GPU found, using CPU")
    return '/CPU:0'


@tf.function(reduce_retracing=True)
def _eigvals(matrix: tf.Tensor) -> tf.Tensor:
    return tf.linalg.eigvals(matrix)


class TensorFlowSolver:
    """Solve polynomials as eigenvalue problems with :func:`tf.linalg.eigvals`."""

    name = "tensorflow"

    def __init__(self, device: Optional[str] = None):
        self.device = device if device is not None else '/CPU:0'

    def solve(self, coeffs: Sequence[float]) -> Optional[np.ndarray]:
        coeffs = np.asarray(coeffs, dtype=np.float64)
        degree = coeffs.shape[0] - 1
        if degree < 1:
            return np.empty(0, dtype=np.complex128)
        if coeffs[-1] == 0 or not np.all(np.isfinite(coeffs)):
            return None
        matrix = companion_matrix(coeffs)
        try:
            with tf.device(self.device):
                roots = _eigvals(tf.convert_to_tensor(matrix, dtype=tf.float64))
        except tf.errors.InvalidArgumentError:
            return None
        return check_roots(roots.numpy(), degree)
