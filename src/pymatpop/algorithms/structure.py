"""Structural properties of the transition graph.

Perron-Frobenius guarantees a unique, real, positive dominant eigenvalue
with positive eigenvectors when the matrix is irreducible, and convergence
to the stable stage distribution when it is also primitive. These checks
tell a caller whether the asymptotic results can be read at face value.
"""

from __future__ import annotations

import numpy as np

from pymatpop._kernels import boolean_matrix_power, reachability_closure
from pymatpop.core.model import MatrixModel


def check_irreducibility(model: MatrixModel) -> bool:
    """
    True if every stage can be reached from every other stage.

    Uses the transitive closure of the transition graph (an edge j -> i for
    every A[i, j] > 0). A 1x1 model is irreducible when its single entry is
    positive.

    Example:
        >>> check_irreducibility(MatrixModel(np.array([[0.0, 2.0], [0.5, 0.0]])))
        True
    """
    adjacency = np.ascontiguousarray(model.matrix.T > 0)
    if model.dimension == 1:
        return bool(adjacency[0, 0])
    return bool(np.all(reachability_closure(adjacency)))


def check_primitivity(model: MatrixModel) -> bool:
    """
    True if the model is irreducible and some power of it is strictly positive.

    By Wielandt's theorem a primitive n x n matrix has A^k > 0 for
    k = n^2 - 2n + 2, so a single boolean power decides the question.
    Imprimitive (periodic) matrices, such as Leslie matrices with a single
    reproductive age class, oscillate instead of converging.
    """
    if not check_irreducibility(model):
        return False
    n = model.dimension
    adjacency = np.ascontiguousarray(model.matrix > 0)
    exponent = n * n - 2 * n + 2
    return bool(np.all(boolean_matrix_power(adjacency, np.int64(exponent))))
