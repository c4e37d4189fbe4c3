"""Deterministic projection of stage vectors through a projection matrix."""

from __future__ import annotations

import logging
from numbers import Integral

import numpy as np
from numpy.typing import NDArray

from pymatpop._kernels import project_batch_parallel, project_batch_serial
from pymatpop.core.config import DEGENERATE_SUM_TOLERANCE, PARALLEL_BATCH_THRESHOLD
from pymatpop.core.exceptions import (
    DegenerateVectorError,
    DomainError,
    InvalidArgumentError,
    NaNInfError,
    ShapeError,
)
from pymatpop.core.model import MatrixModel
from pymatpop.core.result import EigenResult, ProjectionSeries
from pymatpop.core.types import VectorLike

logger = logging.getLogger(__name__)


def project(
    model: MatrixModel,
    initial_vector: VectorLike,
    steps: int,
    normalize_initial_vector: bool = False,
    scale_matrix_by_growth_rate: bool = False,
    eigen_result: EigenResult | None = None,
) -> ProjectionSeries:
    """
    Project a population vector forward through `steps` time steps.

    n(t) = A @ n(t-1), with n(0) the (optionally normalized) initial vector.
    Without scaling the series grows or decays geometrically at rate lambda,
    which is what reveals asymptotic growth. With scale_matrix_by_growth_rate
    the matrix is divided by lambda first, leaving only transient dynamics.

    Args:
        model: MatrixModel to project with
        initial_vector: Length-n non-negative stage vector
        steps: Number of time steps T (>= 0); the series has T+1 entries
        normalize_initial_vector: Divide the initial vector by its sum first
        scale_matrix_by_growth_rate: Project with A / lambda instead of A
        eigen_result: Precomputed analyze_eigen(model) used for scaling;
            computed on demand when scaling is requested and this is None

    Returns:
        ProjectionSeries with stage vectors and totals for t = 0..T

    Raises:
        ShapeError: If the vector length differs from the matrix dimension
        DomainError: If the vector has negative entries
        DegenerateVectorError: If normalization is requested for a vector
            summing to ~0, or scaling is requested with lambda = 0
        InvalidArgumentError: If steps is negative or not an integer

    Example:
        >>> import numpy as np
        >>> from pymatpop import MatrixModel, project
        >>> model = MatrixModel(np.array([[0.0, 2.0], [0.5, 0.5]]))
        >>> series = project(model, [10.0, 0.0], steps=5)
        >>> series.total_population[0]
        10.0
    """
    vector = np.asarray(initial_vector, dtype=np.float64)
    if vector.ndim != 1:
        raise ShapeError(
            f"initial_vector must be 1D, got shape {vector.shape}. "
            f"Hint: use project_batch() for several initial vectors."
        )
    return project_batch(
        model,
        vector[:, None],
        steps,
        normalize_initial_vector=normalize_initial_vector,
        scale_matrix_by_growth_rate=scale_matrix_by_growth_rate,
        eigen_result=eigen_result,
    )[0]


def project_batch(
    model: MatrixModel,
    initial_vectors: VectorLike,
    steps: int,
    normalize_initial_vector: bool = False,
    scale_matrix_by_growth_rate: bool = False,
    eigen_result: EigenResult | None = None,
) -> list[ProjectionSeries]:
    """
    Project several initial vectors at once, one series per column.

    Columns are processed independently; normalization applies to each
    column separately. Large batches run on the parallel kernel.

    Args:
        model: MatrixModel to project with
        initial_vectors: n x k array, one initial vector per column
        steps: Number of time steps T (>= 0)
        normalize_initial_vector: Divide each column by its own sum first
        scale_matrix_by_growth_rate: Project with A / lambda instead of A
        eigen_result: Precomputed analyze_eigen(model) used for scaling

    Returns:
        List of k ProjectionSeries, in column order

    Raises:
        Same as project().
    """
    _check_steps(steps)
    vectors = _validate_vectors(model, initial_vectors)

    if normalize_initial_vector:
        totals = vectors.sum(axis=0)
        degenerate = np.flatnonzero(np.abs(totals) <= DEGENERATE_SUM_TOLERANCE)
        if degenerate.size:
            raise DegenerateVectorError(
                f"Cannot normalize initial vector(s) at column(s) "
                f"{degenerate[:5].tolist()}: they sum to zero."
            )
        vectors = vectors / totals

    matrix = model.matrix
    growth_rate = None
    if scale_matrix_by_growth_rate:
        if eigen_result is None:
            from pymatpop.algorithms.eigen import analyze_eigen

            eigen_result = analyze_eigen(model)
        growth_rate = eigen_result.growth_rate
        if abs(growth_rate) <= DEGENERATE_SUM_TOLERANCE:
            raise DegenerateVectorError(
                "Cannot scale the matrix by a growth rate of zero. "
                "Hint: the matrix is nilpotent; project without scaling."
            )
        matrix = matrix / growth_rate

    matrix_c = np.ascontiguousarray(matrix, dtype=np.float64)
    vectors_c = np.ascontiguousarray(vectors, dtype=np.float64)

    num_vectors = vectors_c.shape[1]
    if num_vectors >= PARALLEL_BATCH_THRESHOLD:
        logger.debug("Projecting %d vectors on the parallel kernel", num_vectors)
        trajectory = project_batch_parallel(matrix_c, vectors_c, np.int64(steps))
    else:
        trajectory = project_batch_serial(matrix_c, vectors_c, np.int64(steps))

    series = []
    for c in range(num_vectors):
        stage_vectors = np.ascontiguousarray(trajectory[:, :, c])
        series.append(
            ProjectionSeries(
                stage_vectors=stage_vectors,
                total_population=stage_vectors.sum(axis=1),
                normalized_initial=normalize_initial_vector,
                scaled=scale_matrix_by_growth_rate,
                growth_rate=growth_rate,
                stage_labels=model.stage_labels,
            )
        )
    return series


def _check_steps(steps: int) -> None:
    if isinstance(steps, bool) or not isinstance(steps, Integral):
        raise InvalidArgumentError(f"steps must be an integer, got {steps!r}.")
    if steps < 0:
        raise InvalidArgumentError(f"steps must be non-negative, got {steps}.")


def _validate_vectors(model: MatrixModel, initial_vectors: VectorLike) -> NDArray[np.float64]:
    """Return initial vectors as an n x k float array after validation."""
    vectors = np.array(initial_vectors, dtype=np.float64)
    if vectors.ndim == 1:
        vectors = vectors[:, None]
    if vectors.ndim != 2 or vectors.shape[0] != model.dimension:
        raise ShapeError(
            f"Initial vector(s) of shape {vectors.shape} do not match a "
            f"{model.dimension}-stage matrix. Expected shape ({model.dimension},) "
            f"or ({model.dimension}, k)."
        )
    if vectors.shape[1] < 1:
        raise ShapeError("Need at least one initial vector.")
    if not np.all(np.isfinite(vectors)):
        raise NaNInfError("Initial vector(s) contain NaN or Inf values.")
    if np.any(vectors < 0):
        bad = np.argwhere(vectors < 0)
        raise DomainError(
            f"Found {len(bad)} negative entries in initial vector(s). "
            f"Population counts and proportions must be non-negative."
        )
    return vectors
