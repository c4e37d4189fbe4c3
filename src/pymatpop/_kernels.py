"""Numba JIT-compiled kernels for PyMatPop.

This module contains the loops that run once per time step or once per
vertex pair. All functions use `@njit(cache=True)` to cache compiled code to
disk, avoiding recompilation overhead.
"""

from __future__ import annotations

import numpy as np
from numba import njit, prange


# =============================================================================
# POPULATION PROJECTION
# =============================================================================


@njit(cache=True)
def project_batch_serial(
    matrix: np.ndarray,
    initial: np.ndarray,
    steps: np.int64,
) -> np.ndarray:
    """
    Project k initial vectors through `steps` applications of `matrix`.

    Args:
        matrix: n x n projection matrix (float64, contiguous)
        initial: n x k matrix, one initial vector per column
        steps: Number of time steps T

    Returns:
        (T+1) x n x k array; out[t, :, c] is column c at time t
    """
    n = initial.shape[0]
    k = initial.shape[1]
    out = np.empty((steps + 1, n, k), dtype=np.float64)
    out[0] = initial

    for t in range(1, steps + 1):
        for c in range(k):
            for i in range(n):
                acc = 0.0
                for j in range(n):
                    acc += matrix[i, j] * out[t - 1, j, c]
                out[t, i, c] = acc

    return out


@njit(cache=True, parallel=True)
def project_batch_parallel(
    matrix: np.ndarray,
    initial: np.ndarray,
    steps: np.int64,
) -> np.ndarray:
    """
    Parallel version of project_batch_serial for large batches.

    Columns are independent, so each worker owns a disjoint slice of the
    output and no state is shared between them.
    """
    n = initial.shape[0]
    k = initial.shape[1]
    out = np.empty((steps + 1, n, k), dtype=np.float64)
    out[0] = initial

    for c in prange(k):
        for t in range(1, steps + 1):
            for i in range(n):
                acc = 0.0
                for j in range(n):
                    acc += matrix[i, j] * out[t - 1, j, c]
                out[t, i, c] = acc

    return out


# =============================================================================
# TRANSITION GRAPH REACHABILITY
# =============================================================================


@njit(cache=True)
def reachability_closure(adjacency: np.ndarray) -> np.ndarray:
    """
    Floyd-Warshall transitive closure of a transition graph.

    result[i, j] is True when stage j can be reached from stage i through a
    path of one or more transitions. Unlike a reflexive closure, the diagonal
    is True only for stages lying on a cycle.

    Args:
        adjacency: n x n boolean matrix of direct transitions

    Returns:
        n x n boolean reachability matrix
    """
    n = adjacency.shape[0]
    closure = adjacency.copy()

    for k in range(n):
        for i in range(n):
            if closure[i, k]:
                for j in range(n):
                    if closure[k, j]:
                        closure[i, j] = True

    return closure


@njit(cache=True)
def boolean_matrix_power(adjacency: np.ndarray, exponent: np.int64) -> np.ndarray:
    """
    Boolean matrix power by repeated squaring.

    result[i, j] is True when there is a walk of exactly `exponent` steps
    from i to j.
    """
    n = adjacency.shape[0]
    result = np.zeros((n, n), dtype=np.bool_)
    for i in range(n):
        result[i, i] = True
    base = adjacency.copy()

    e = exponent
    while e > 0:
        if e & 1:
            result = _boolean_product(result, base)
        base = _boolean_product(base, base)
        e >>= 1

    return result


@njit(cache=True)
def _boolean_product(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    n = a.shape[0]
    out = np.zeros((n, n), dtype=np.bool_)
    for i in range(n):
        for k in range(n):
            if a[i, k]:
                for j in range(n):
                    if b[k, j]:
                        out[i, j] = True
    return out
