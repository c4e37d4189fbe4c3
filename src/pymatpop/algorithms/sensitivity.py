"""Sensitivity and elasticity of the asymptotic growth rate."""

from __future__ import annotations

import time

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatpop.algorithms.eigen import analyze_eigen, dominant_eigenvalue
from pymatpop.core.config import DEGENERATE_SUM_TOLERANCE
from pymatpop.core.exceptions import InvalidArgumentError
from pymatpop.core.model import MatrixModel
from pymatpop.core.result import EigenResult, PerturbationResult, SensitivityResult


def compute_sensitivity(
    model: MatrixModel,
    zero_structural_zeros: bool = False,
    eigen_result: EigenResult | None = None,
) -> NDArray[np.float64]:
    """
    Sensitivity of lambda to each matrix entry.

    S[i, j] = v[i] * w[j], where w is the stable stage distribution and v the
    reproductive value scaled so that v @ w = 1 (Caswell 2001, eq. 9.10).
    Sensitivities are defined for every entry, including transitions that
    are currently impossible (A[i, j] = 0).

    Args:
        model: MatrixModel to analyse
        zero_structural_zeros: Set entries where A[i, j] = 0 to 0
        eigen_result: Precomputed analyze_eigen(model)

    Returns:
        n x n sensitivity matrix
    """
    if eigen_result is None:
        eigen_result = analyze_eigen(model)
    sensitivity = np.outer(eigen_result.reproductive_value, eigen_result.stable_stage_distribution)
    if zero_structural_zeros:
        sensitivity[model.matrix == 0] = 0.0
    return sensitivity


def compute_elasticity(
    model: MatrixModel,
    zero_structural_zeros: bool = True,
    eigen_result: EigenResult | None = None,
) -> NDArray[np.float64]:
    """
    Elasticity (proportional sensitivity) of lambda to each matrix entry.

    E[i, j] = S[i, j] * A[i, j] / lambda. Elasticities sum to 1 when the
    leading eigenpair is well defined.

    Args:
        model: MatrixModel to analyse
        zero_structural_zeros: Force entries where A[i, j] = 0 to exactly 0
        eigen_result: Precomputed analyze_eigen(model)

    Returns:
        n x n elasticity matrix

    Raises:
        InvalidArgumentError: If lambda is zero (elasticity undefined)

    Example:
        >>> E = compute_elasticity(model)
        >>> float(E.sum())
        1.0
    """
    if eigen_result is None:
        eigen_result = analyze_eigen(model)
    growth_rate = eigen_result.growth_rate
    if abs(growth_rate) <= DEGENERATE_SUM_TOLERANCE:
        raise InvalidArgumentError(
            "Elasticity is undefined for a growth rate of zero."
        )

    sensitivity = compute_sensitivity(model, eigen_result=eigen_result)
    elasticity = sensitivity * model.matrix / growth_rate
    if zero_structural_zeros:
        elasticity[model.matrix == 0] = 0.0
    return elasticity


def analyze_sensitivity(
    model: MatrixModel,
    zero_structural_zeros: bool = True,
    eigen_result: EigenResult | None = None,
) -> SensitivityResult:
    """
    Sensitivity and elasticity matrices with summary statistics.

    When the model has a survival/fecundity decomposition, elasticities are
    also split by process: the U part and the F part of each entry
    contribute S * U / lambda and S * F / lambda, which together sum to 1.

    Args:
        model: MatrixModel to analyse
        zero_structural_zeros: Force elasticities of entries where A[i, j] = 0
            to exactly 0. Sensitivities are always reported for every entry.
        eigen_result: Precomputed analyze_eigen(model)

    Returns:
        SensitivityResult
    """
    start_time = time.perf_counter()

    if eigen_result is None:
        eigen_result = analyze_eigen(model)
    sensitivity = compute_sensitivity(model, eigen_result=eigen_result)
    elasticity = compute_elasticity(model, zero_structural_zeros, eigen_result)

    survival_elasticity = fecundity_elasticity = None
    if model.has_decomposition:
        survival_elasticity = float((sensitivity * model.survival).sum() / eigen_result.growth_rate)
        fecundity_elasticity = float((sensitivity * model.fecundity).sum() / eigen_result.growth_rate)

    computation_time = (time.perf_counter() - start_time) * 1000

    return SensitivityResult(
        sensitivity=sensitivity,
        elasticity=elasticity,
        growth_rate=eigen_result.growth_rate,
        zero_structural_zeros=zero_structural_zeros,
        survival_elasticity=survival_elasticity,
        fecundity_elasticity=fecundity_elasticity,
        stage_labels=model.stage_labels,
        computation_time_ms=computation_time,
    )


def sensitivity_by_simulation(
    model: MatrixModel,
    multipliers: ArrayLike,
) -> PerturbationResult:
    """
    Recompute lambda after multiplying one matrix entry at a time.

    A brute-force cross-check of the analytic sensitivities: for every
    non-zero entry A[i, j] and every multiplier m, lambda is recomputed for
    the matrix with A[i, j] replaced by m * A[i, j]. Structural zeros are
    left unperturbed and reported as NaN.

    Args:
        model: MatrixModel to perturb
        multipliers: 1D array of non-negative multipliers (1 = unperturbed)

    Returns:
        PerturbationResult with an n x n x k grid of growth rates

    Raises:
        InvalidArgumentError: If multipliers are empty, not 1D, or negative

    Example:
        >>> result = sensitivity_by_simulation(model, np.linspace(0.5, 1.5, 11))
        >>> result.growth_rates_for(2, 2)
    """
    start_time = time.perf_counter()

    factors = np.asarray(multipliers, dtype=np.float64)
    if factors.ndim != 1 or factors.size == 0:
        raise InvalidArgumentError(
            f"multipliers must be a non-empty 1D array, got shape {factors.shape}."
        )
    if np.any(factors < 0) or not np.all(np.isfinite(factors)):
        raise InvalidArgumentError(
            "multipliers must be finite and non-negative so the perturbed "
            "matrix stays a valid projection matrix."
        )

    base = model.entries
    n = model.dimension
    growth_rates = np.full((n, n, factors.size), np.nan)

    for i, j in np.argwhere(base != 0):
        original = base[i, j]
        for m, factor in enumerate(factors):
            base[i, j] = original * factor
            growth_rates[i, j, m] = dominant_eigenvalue(base, warn=False)
        base[i, j] = original

    computation_time = (time.perf_counter() - start_time) * 1000

    return PerturbationResult(
        multipliers=factors,
        growth_rates=growth_rates,
        baseline_growth_rate=dominant_eigenvalue(model.matrix),
        computation_time_ms=computation_time,
    )
