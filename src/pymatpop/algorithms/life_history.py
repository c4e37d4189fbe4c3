"""Life-history traits from the survival/fecundity decomposition.

Survival matrix U is treated as the transient part of an absorbing Markov
chain (death being the absorbing state). The quantities follow Caswell
(2001, ch. 5):

    N  = (I - U)^-1          fundamental matrix, expected visits per stage
    R  = F @ N               next-generation matrix
    R0 = dominant eig of R   net reproductive rate
    T  = log(R0) / log(lambda)

Age at first reproduction uses a second chain in which entering a
reproductive stage is absorbing, conditioned on eventually being absorbed
there. Stages that can never reach reproduction make the conditioning
matrix singular, so Moore-Penrose pseudo-inverses are used throughout that
part of the calculation.
"""

from __future__ import annotations

import logging
import time
import warnings
from numbers import Integral

import numpy as np
import scipy.linalg
from numpy.typing import NDArray

from pymatpop._kernels import reachability_closure
from pymatpop.algorithms.eigen import dominant_eigenvalue
from pymatpop.core.config import DEGENERATE_SUM_TOLERANCE, GENERATION_TIME_TOLERANCE
from pymatpop.core.exceptions import (
    InvalidArgumentError,
    LifeHistoryWarning,
    NumericalInstabilityWarning,
    SingularMatrixError,
    UndefinedGenerationTimeError,
)
from pymatpop.core.model import MatrixModel
from pymatpop.core.result import LifeHistoryResult

logger = logging.getLogger(__name__)


def compute_fundamental_matrix(model: MatrixModel) -> NDArray[np.float64]:
    """
    Fundamental matrix N = (I - U)^-1.

    N[i, j] is the expected number of time steps an individual now in stage
    j will spend in stage i before death.

    Args:
        model: MatrixModel with a survival/fecundity decomposition

    Returns:
        n x n fundamental matrix

    Raises:
        InvalidArgumentError: If the model has no decomposition
        SingularMatrixError: If I - U is singular, i.e. some set of stages
            has no mortality and life expectancy is infinite
    """
    survival, _ = model.decomposition
    identity = np.eye(model.dimension)
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("error", scipy.linalg.LinAlgWarning)
            return scipy.linalg.solve(identity - survival, identity)
    except (np.linalg.LinAlgError, scipy.linalg.LinAlgWarning) as e:
        immortal = np.flatnonzero(survival.sum(axis=0) >= 1.0 - model.tolerance)
        names = ", ".join(model.stage_label(j) for j in immortal[:5]) or "none"
        raise SingularMatrixError(
            f"I - U is singular: some stages form a closed class with no "
            f"mortality, so life expectancy is infinite. Stages with survival "
            f"1: {names}."
        ) from e


def compute_life_expectancy(model: MatrixModel) -> NDArray[np.float64]:
    """Expected lifespan (in time steps) from each stage: column sums of N."""
    return compute_fundamental_matrix(model).sum(axis=0)


def compute_net_reproductive_rate(model: MatrixModel) -> float:
    """
    Net reproductive rate R0, the dominant eigenvalue of R = F @ N.

    R0 is the mean number of offspring an individual produces over its
    lifetime.

    Raises:
        InvalidArgumentError: If the model has no decomposition
        SingularMatrixError: If I - U is singular
    """
    _, fecundity = model.decomposition
    return dominant_eigenvalue(fecundity @ compute_fundamental_matrix(model))


def compute_generation_time(
    model: MatrixModel,
    tolerance: float = GENERATION_TIME_TOLERANCE,
) -> float:
    """
    Generation time T = log(R0) / log(lambda).

    The time required for the population to grow by a factor of R0.

    Args:
        model: MatrixModel with a survival/fecundity decomposition
        tolerance: |log(lambda)| at or below this is treated as zero

    Returns:
        Generation time in model time steps

    Raises:
        InvalidArgumentError: If the model has no decomposition
        UndefinedGenerationTimeError: If lambda = 1 (log(lambda) = 0),
            lambda <= 0, or R0 <= 0
        SingularMatrixError: If I - U is singular

    Example:
        >>> model = MatrixModel.from_components(U, F)
        >>> print(f"T = {compute_generation_time(model):.2f} years")
    """
    if not model.has_decomposition:
        raise InvalidArgumentError(
            "Generation time requires a survival/fecundity decomposition. "
            "Hint: build the model with MatrixModel.from_components(U, F)."
        )
    growth_rate = dominant_eigenvalue(model.matrix)
    if growth_rate <= 0:
        raise UndefinedGenerationTimeError(
            f"Generation time is undefined for lambda = {growth_rate:.6g} <= 0."
        )
    log_lambda = np.log(growth_rate)
    if abs(log_lambda) <= tolerance:
        raise UndefinedGenerationTimeError(
            "Generation time is undefined for lambda = 1: log(lambda) is zero "
            "and the population never grows by a factor of R0."
        )

    r0 = compute_net_reproductive_rate(model)
    if r0 <= 0:
        raise UndefinedGenerationTimeError(
            f"Generation time is undefined for a net reproductive rate of {r0:.6g}. "
            f"Hint: check that the fecundity matrix is reachable from surviving stages."
        )
    return float(np.log(r0) / log_lambda)


def compute_life_history(
    model: MatrixModel,
    start_stage: int = 0,
) -> LifeHistoryResult:
    """
    Maturation and life expectancy metrics for an individual in `start_stage`.

    Algorithm:
        1. Reproductive stages are the columns of F with a positive sum.
        2. U' is U with the columns of reproductive stages zeroed, so that
           entering a reproductive stage leads to an absorbing "reproduced"
           state at the next step, while other stages die with probability
           1 - sum(U[:, j]).
        3. B = M' pinv(I - U') gives the probability of absorption by
           reproduction from each stage. Conditioning U' on that outcome,
           U_c = D U' pinv(D) with D = diag(B[reproduced]), the column sums
           of pinv(I - U_c) are the expected times to first reproduction.
        4. Life expectancy is the column sum of N = (I - U)^-1. When I - U
           is singular, stages that can reach a stage with no route to
           mortality get infinite life expectancy instead.
        5. Remaining mature life expectancy is the life expectancy from the
           start stage minus the age at first reproduction.

    Age at first reproduction counts time steps spent in every stage
    visited, including the step in which first reproduction occurs, so a
    start stage that is itself reproductive has age 1.

    Args:
        model: MatrixModel with a survival/fecundity decomposition
        start_stage: Index of the stage individuals start in (usually newborns)

    Returns:
        LifeHistoryResult

    Raises:
        InvalidArgumentError: If the model has no decomposition, F is all
            zero, or start_stage is out of range
        SingularMatrixError: If a pseudo-inverse cannot be computed

    Warns:
        NumericalInstabilityWarning: If I - U' is singular, meaning some
            non-reproductive stages never die (malformed input)
        LifeHistoryWarning: If the start stage can never reach reproduction
        LifeHistoryWarning: If I - U is singular, so some life expectancies
            are infinite
    """
    start_time = time.perf_counter()

    survival, fecundity = model.decomposition
    n = model.dimension
    if not np.any(fecundity > 0):
        raise InvalidArgumentError(
            "Fecundity matrix is entirely zero; life-history metrics that depend "
            "on reproduction are undefined."
        )
    if isinstance(start_stage, bool) or not isinstance(start_stage, Integral) \
            or not 0 <= start_stage < n:
        raise InvalidArgumentError(
            f"start_stage must be an integer in [0, {n - 1}], got {start_stage!r}."
        )
    start_stage = int(start_stage)

    reproductive = fecundity.sum(axis=0) > 0
    reproductive_stages = np.flatnonzero(reproductive)
    identity = np.eye(n)

    # Absorbing chain: death (row 0) and first reproduction (row 1)
    survival_prime = survival.copy()
    survival_prime[:, reproductive] = 0.0
    absorption = np.zeros((2, n))
    absorption[0, ~reproductive] = 1.0 - survival[:, ~reproductive].sum(axis=0)
    absorption[1, reproductive] = 1.0

    transient = identity - survival_prime
    if np.linalg.matrix_rank(transient) < n:
        warnings.warn(
            "I - U' is singular: some non-reproductive stages have no mortality "
            "and no route to reproduction. The survival matrix is likely "
            "malformed; maturation metrics use a pseudo-inverse.",
            NumericalInstabilityWarning,
            stacklevel=2,
        )
    absorbed = absorption @ _pinv(transient)
    prob_reproduce = np.clip(absorbed[1], 0.0, 1.0)

    # Stages with zero probability make D singular; expected, not an error
    reachable = prob_reproduce > DEGENERATE_SUM_TOLERANCE
    unreachable_stages = tuple(int(j) for j in np.flatnonzero(~reachable))
    if unreachable_stages:
        logger.debug(
            "Conditioning on reproduction: stages %s cannot reproduce; "
            "using pseudo-inverse of D",
            unreachable_stages,
        )
    d_pinv = np.zeros(n)
    d_pinv[reachable] = 1.0 / prob_reproduce[reachable]
    survival_cond = (prob_reproduce[:, None] * survival_prime) * d_pinv[None, :]
    time_to_reproduction = _pinv(identity - survival_cond).sum(axis=0)

    try:
        life_expectancy = compute_life_expectancy(model)
    except SingularMatrixError:
        life_expectancy = _life_expectancy_with_immortal_stages(model)
    first_reproductive = int(reproductive_stages[0])

    if reachable[start_stage]:
        age = float(time_to_reproduction[start_stage])
    else:
        warnings.warn(
            f"{model.stage_label(start_stage)} can never reach a reproductive "
            f"stage; age at first reproduction is undefined (NaN).",
            LifeHistoryWarning,
            stacklevel=2,
        )
        age = float("nan")

    computation_time = (time.perf_counter() - start_time) * 1000

    return LifeHistoryResult(
        prob_survive_to_reproduction=float(prob_reproduce[start_stage]),
        age_at_first_reproduction=age,
        mean_life_expectancy_from_reproductive_stage=float(life_expectancy[first_reproductive]),
        remaining_mature_life_expectancy=float(life_expectancy[start_stage]) - age,
        life_expectancy_from_start=float(life_expectancy[start_stage]),
        start_stage=start_stage,
        first_reproductive_stage=first_reproductive,
        reproductive_stages=tuple(int(j) for j in reproductive_stages),
        unreachable_stages=unreachable_stages,
        stage_labels=model.stage_labels,
        computation_time_ms=computation_time,
    )


def _life_expectancy_with_immortal_stages(model: MatrixModel) -> NDArray[np.float64]:
    """
    Life expectancy when I - U is singular.

    A stage is immortal when no path through U leads to a stage with
    mortality. Every stage that can reach an immortal stage has infinite
    life expectancy; the remaining stages never leave their own block, so
    their expectancy comes from the fundamental matrix of that block.
    """
    survival, _ = model.decomposition
    n = model.dimension
    mortal = 1.0 - survival.sum(axis=0) > DEGENERATE_SUM_TOLERANCE

    # reaches[j, i]: stage i is reachable from stage j in zero or more steps
    reaches = reachability_closure(np.ascontiguousarray(survival.T > 0)) | np.eye(n, dtype=bool)
    immortal = ~(reaches & mortal[None, :]).any(axis=1)
    infinite = (reaches & immortal[None, :]).any(axis=1)

    names = ", ".join(model.stage_label(j) for j in np.flatnonzero(immortal)[:5])
    warnings.warn(
        f"I - U is singular: stages with no route to mortality ({names or 'none'}) "
        f"give infinite life expectancy to {int(infinite.sum())} stage(s).",
        LifeHistoryWarning,
        stacklevel=3,
    )

    life_expectancy = np.full(n, np.inf)
    finite = np.flatnonzero(~infinite)
    if finite.size:
        block = survival[np.ix_(finite, finite)]
        life_expectancy[finite] = _pinv(np.eye(finite.size) - block).sum(axis=0)
    return life_expectancy


def _pinv(matrix: NDArray[np.float64]) -> NDArray[np.float64]:
    """Moore-Penrose pseudo-inverse, raising SingularMatrixError on failure."""
    try:
        return scipy.linalg.pinv(matrix)
    except (np.linalg.LinAlgError, ValueError) as e:
        raise SingularMatrixError(
            f"Pseudo-inverse could not be computed ({e}). This signals a "
            f"malformed input matrix."
        ) from e
