"""Asymptotic analysis: growth rate, stable structure, reproductive value."""

from __future__ import annotations

import logging
import time
import warnings

import numpy as np
import scipy.linalg
from numpy.typing import NDArray

from pymatpop.core.config import (
    COMPLEX_TOLERANCE,
    DEGENERATE_SUM_TOLERANCE,
    EIGEN_TIE_TOLERANCE,
)
from pymatpop.core.exceptions import (
    ComplexDominantEigenvalueWarning,
    DegenerateVectorError,
)
from pymatpop.core.model import MatrixModel
from pymatpop.core.result import EigenResult

logger = logging.getLogger(__name__)


def analyze_eigen(
    model: MatrixModel,
    tolerance: float = DEGENERATE_SUM_TOLERANCE,
) -> EigenResult:
    """
    Compute the dominant eigenvalue and eigenvectors of a projection matrix.

    The dominant eigenvalue is the one with the largest magnitude. Ties
    (periodic or reducible matrices) are broken by the largest real part,
    then by preferring a real-valued right eigenvector. For irreducible
    primitive matrices Perron-Frobenius guarantees a unique, real, positive
    dominant eigenvalue, so ties only arise for imprimitive inputs.

    The right eigenvector is normalized to sum to 1 (stable stage
    distribution) and the left eigenvector is scaled so that v @ w = 1
    (reproductive value). The damping ratio is |lambda_1| / |lambda_2|;
    a 1x1 matrix has no second eigenvalue and its damping ratio is 1.

    Args:
        model: MatrixModel to analyse
        tolerance: Sums (and v @ w) at or below this are treated as zero

    Returns:
        EigenResult with growth rate, eigenvectors and damping ratio

    Raises:
        DegenerateVectorError: If the right eigenvector sums to ~0, or the
            left and right eigenvectors are orthogonal (defective matrix)

    Warns:
        ComplexDominantEigenvalueWarning: If the dominant eigenvalue has a
            non-negligible imaginary part (the real part is used)

    Example:
        >>> import numpy as np
        >>> from pymatpop import MatrixModel, analyze_eigen
        >>> model = MatrixModel(np.array([[1.0, 2.0], [0.5, 0.0]]))
        >>> result = analyze_eigen(model)
        >>> print(f"lambda = {result.growth_rate:.4f}")
        lambda = 1.6180
    """
    start_time = time.perf_counter()

    eigenvalues, left, right = scipy.linalg.eig(model.matrix, left=True, right=True)
    index = _dominant_index(eigenvalues, right)
    dominant = eigenvalues[index]
    is_complex = _warn_if_complex(dominant)

    w = np.real(right[:, index])
    total = w.sum()
    if abs(total) <= tolerance:
        raise DegenerateVectorError(
            f"Dominant right eigenvector sums to {total:.3g}; the stable stage "
            f"distribution cannot be normalized. This happens for reducible or "
            f"periodic matrices whose leading eigenvector has cancelling entries."
        )
    w = w / total

    v = np.real(left[:, index])
    overlap = float(v @ w)
    if abs(overlap) <= tolerance:
        raise DegenerateVectorError(
            f"Left and right dominant eigenvectors are orthogonal (v @ w = {overlap:.3g}); "
            f"the reproductive value cannot be normalized. The matrix is likely "
            f"defective at its dominant eigenvalue."
        )
    v = v / overlap

    order = np.argsort(-np.abs(eigenvalues), kind="stable")
    computation_time = (time.perf_counter() - start_time) * 1000

    return EigenResult(
        growth_rate=float(np.real(dominant)),
        stable_stage_distribution=w,
        reproductive_value=v,
        damping_ratio=_damping_ratio(eigenvalues, index),
        eigenvalues=eigenvalues[order].astype(np.complex128),
        is_complex=is_complex,
        stage_labels=model.stage_labels,
        computation_time_ms=computation_time,
    )


def dominant_eigenvalue(
    matrix: NDArray[np.float64],
    warn: bool = True,
) -> float:
    """
    Dominant eigenvalue of a raw square array, using the same tie-breaking
    rule as analyze_eigen.

    Used where only lambda is needed (net reproductive rate, perturbation
    sweeps) and no eigenvectors are required.

    Args:
        matrix: Square array
        warn: Emit ComplexDominantEigenvalueWarning for a complex result

    Returns:
        Real part of the dominant eigenvalue
    """
    eigenvalues = scipy.linalg.eigvals(matrix)
    dominant = eigenvalues[_dominant_index(eigenvalues)]
    if warn:
        _warn_if_complex(dominant)
    return float(np.real(dominant))


def compute_growth_rate(model: MatrixModel) -> float:
    """Asymptotic growth rate lambda of a model."""
    return dominant_eigenvalue(model.matrix)


def compute_damping_ratio(model: MatrixModel) -> float:
    """Damping ratio |lambda_1| / |lambda_2| of a model (1 for a 1x1 model)."""
    eigenvalues = scipy.linalg.eigvals(model.matrix)
    return _damping_ratio(eigenvalues, _dominant_index(eigenvalues))


def _dominant_index(
    eigenvalues: NDArray[np.complex128],
    right_vectors: NDArray[np.complex128] | None = None,
) -> int:
    """
    Index of the dominant eigenvalue.

    Largest magnitude first; among eigenvalues of equal magnitude the largest
    real part; among those, the one with the most nearly real eigenvector.
    """
    magnitudes = np.abs(eigenvalues)
    top = magnitudes.max()
    scale = max(float(top), 1.0)

    candidates = np.flatnonzero(magnitudes >= top - EIGEN_TIE_TOLERANCE * scale)
    if candidates.size == 1:
        return int(candidates[0])

    real_parts = eigenvalues.real[candidates]
    candidates = candidates[real_parts >= real_parts.max() - EIGEN_TIE_TOLERANCE * scale]

    if candidates.size > 1 and right_vectors is not None:
        imaginary = np.array([np.abs(right_vectors[:, k].imag).max() for k in candidates])
        candidates = candidates[np.argsort(imaginary, kind="stable")]

    logger.debug(
        "Dominant eigenvalue tie between %d eigenvalues of magnitude %.6g; chose %s",
        int(np.sum(magnitudes >= top - EIGEN_TIE_TOLERANCE * scale)),
        top,
        eigenvalues[candidates[0]],
    )
    return int(candidates[0])


def _warn_if_complex(value: complex) -> bool:
    """Warn and return True if `value` has a non-negligible imaginary part."""
    if abs(np.imag(value)) > COMPLEX_TOLERANCE * max(abs(value), 1.0):
        warnings.warn(
            f"Dominant eigenvalue {value:.6g} is complex; using its real part "
            f"{np.real(value):.6g}. The matrix is likely reducible or imprimitive.",
            ComplexDominantEigenvalueWarning,
            stacklevel=3,
        )
        return True
    return False


def _damping_ratio(eigenvalues: NDArray[np.complex128], dominant_index: int) -> float:
    """|lambda_1| / |lambda_2|, with 1 for n = 1 and inf for a zero lambda_2."""
    if len(eigenvalues) == 1:
        return 1.0

    leading = float(np.abs(eigenvalues[dominant_index]))
    second = float(np.delete(np.abs(eigenvalues), dominant_index).max())
    if second <= EIGEN_TIE_TOLERANCE * max(leading, 1.0):
        return float("inf")

    # Equal magnitudes can differ in the last bits; the ratio is never below 1
    return max(1.0, leading / second)
