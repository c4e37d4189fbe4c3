"""Transient dynamics: amplification and attenuation of initial structure.

All indices are computed on the standardized projection: the initial vector
is normalized to sum 1 and the matrix is divided by lambda, so asymptotic
growth is removed and the total population at t = 0 is exactly 1. Values
above 1 are amplification, values below 1 attenuation.
"""

from __future__ import annotations

import time
from numbers import Integral

import numpy as np

from pymatpop.algorithms.eigen import analyze_eigen
from pymatpop.algorithms.projection import project
from pymatpop.core.config import HORIZON_MULTIPLIER, TRANSIENT_TOLERANCE
from pymatpop.core.exceptions import InvalidArgumentError
from pymatpop.core.model import MatrixModel
from pymatpop.core.result import (
    EigenResult,
    ProjectionSeries,
    TransientBound,
    TransientResult,
)
from pymatpop.core.types import VectorLike


def max_amplification(
    model: MatrixModel,
    initial_vector: VectorLike,
    horizon: int | None = None,
    tolerance: float = TRANSIENT_TOLERANCE,
) -> TransientBound:
    """
    Largest standardized population size over the projection horizon.

    A vector that never rises above 1 (for example the stable stage
    distribution itself) reports the neutral value 1 at t = 0.

    Args:
        model: MatrixModel to analyse
        initial_vector: Length-n non-negative stage vector (any scale)
        horizon: Time steps to project (default 10 x n)
        tolerance: Ratios within this distance of 1 count as neutral

    Returns:
        TransientBound with the maximum ratio (>= 1) and its time step

    Example:
        >>> bound = max_amplification(model, [0.0, 0.0, 1.0])
        >>> print(f"{bound.value:.3f} at t={bound.time_step}")
    """
    series = _standardized_series(model, initial_vector, horizon)
    return _amplification(series, tolerance)


def max_attenuation(
    model: MatrixModel,
    initial_vector: VectorLike,
    horizon: int | None = None,
    tolerance: float = TRANSIENT_TOLERANCE,
) -> TransientBound:
    """
    Smallest standardized population size over the projection horizon.

    A vector that never falls below 1 reports the neutral value 1 at t = 0.

    Args:
        model: MatrixModel to analyse
        initial_vector: Length-n non-negative stage vector (any scale)
        horizon: Time steps to project (default 10 x n)
        tolerance: Ratios within this distance of 1 count as neutral

    Returns:
        TransientBound with the minimum ratio (<= 1) and its time step
    """
    series = _standardized_series(model, initial_vector, horizon)
    return _attenuation(series, tolerance)


def compute_transient_dynamics(
    model: MatrixModel,
    initial_vector: VectorLike,
    horizon: int | None = None,
    tolerance: float = TRANSIENT_TOLERANCE,
) -> TransientResult:
    """
    Full set of transient indices for one initial stage structure.

    Besides the amplification and attenuation bounds this reports
    reactivity (standardized size after one step) and inertia
    (v @ n0 for n0 normalized to sum 1, with v @ w = 1), the long-run
    population size relative to a population started at the stable
    stage distribution.

    Args:
        model: MatrixModel to analyse
        initial_vector: Length-n non-negative stage vector (any scale)
        horizon: Time steps to project (default 10 x n)
        tolerance: Ratios within this distance of 1 count as neutral

    Returns:
        TransientResult
    """
    start_time = time.perf_counter()

    eigen = analyze_eigen(model)
    series = _standardized_series(model, initial_vector, horizon, eigen)

    reactivity = float(series.total_population[1]) if series.num_steps >= 1 else 1.0
    inertia = float(eigen.reproductive_value @ series.initial_vector)

    computation_time = (time.perf_counter() - start_time) * 1000

    return TransientResult(
        amplification=_amplification(series, tolerance),
        attenuation=_attenuation(series, tolerance),
        reactivity=reactivity,
        inertia=inertia,
        horizon=series.num_steps,
        series=series,
        computation_time_ms=computation_time,
    )


def _standardized_series(
    model: MatrixModel,
    initial_vector: VectorLike,
    horizon: int | None,
    eigen_result: EigenResult | None = None,
) -> ProjectionSeries:
    if horizon is None:
        horizon = HORIZON_MULTIPLIER * model.dimension
    elif isinstance(horizon, bool) or not isinstance(horizon, Integral) or horizon < 1:
        raise InvalidArgumentError(f"horizon must be a positive integer, got {horizon!r}.")

    return project(
        model,
        initial_vector,
        steps=int(horizon),
        normalize_initial_vector=True,
        scale_matrix_by_growth_rate=True,
        eigen_result=eigen_result,
    )


def _amplification(series: ProjectionSeries, tolerance: float) -> TransientBound:
    totals = series.total_population
    t = int(np.argmax(totals))
    if totals[t] <= 1.0 + tolerance:
        return TransientBound(value=1.0, time_step=0)
    return TransientBound(value=float(totals[t]), time_step=t)


def _attenuation(series: ProjectionSeries, tolerance: float) -> TransientBound:
    totals = series.total_population
    t = int(np.argmin(totals))
    if totals[t] >= 1.0 - tolerance:
        return TransientBound(value=1.0, time_step=0)
    return TransientBound(value=float(totals[t]), time_step=t)
