"""High-level API: every metric for one projection matrix in a single call.

This module provides the one-stop analysis a batch caller runs per matrix.
Errors propagate unchanged, so a caller iterating over a database should
wrap each call and catch MatPopError per item.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import numpy as np

from pymatpop.algorithms.eigen import analyze_eigen
from pymatpop.algorithms.life_history import (
    compute_generation_time,
    compute_life_history,
    compute_net_reproductive_rate,
)
from pymatpop.algorithms.sensitivity import analyze_sensitivity
from pymatpop.algorithms.structure import check_irreducibility, check_primitivity
from pymatpop.algorithms.transient import compute_transient_dynamics
from pymatpop.core.config import GENERATION_TIME_TOLERANCE
from pymatpop.core.exceptions import SingularMatrixError
from pymatpop.core.mixins import ResultSummaryMixin
from pymatpop.core.model import MatrixModel
from pymatpop.core.result import (
    EigenResult,
    LifeHistoryResult,
    SensitivityResult,
    TransientResult,
)
from pymatpop.core.types import VectorLike


@dataclass(frozen=True)
class PopulationReport:
    """
    Comprehensive demographic report for one projection matrix.

    Attributes:
        eigen: Asymptotic analysis
        sensitivity: Sensitivity and elasticity analysis
        is_irreducible: Every stage reachable from every other stage
        is_primitive: Irreducible and aperiodic (converges to w)
        transient: Transient dynamics (None if no initial vector was given)
        life_history: Life-history metrics (None without decomposition or
            reproduction)
        net_reproductive_rate: R0 (None without decomposition or reproduction,
            or when I - U is singular)
        generation_time: log(R0)/log(lambda) (None whenever R0 is None, and
            when lambda is 1 or 0)
        computation_time_ms: Total time in milliseconds
    """

    eigen: EigenResult
    sensitivity: SensitivityResult
    is_irreducible: bool
    is_primitive: bool
    transient: TransientResult | None
    life_history: LifeHistoryResult | None
    net_reproductive_rate: float | None
    generation_time: float | None
    computation_time_ms: float

    @property
    def growth_rate(self) -> float:
        """Asymptotic growth rate lambda."""
        return self.eigen.growth_rate

    def summary(self) -> str:
        """Return human-readable report covering every computed metric."""
        m = ResultSummaryMixin
        lines = [m._format_header("POPULATION ANALYSIS REPORT")]

        lines.append(f"\nTrend: {m._format_growth(self.growth_rate)}")

        lines.append(m._format_section("Structure"))
        lines.append(m._format_metric("Irreducible", self.is_irreducible))
        lines.append(m._format_metric("Primitive", self.is_primitive))

        lines.append(m._format_section("Asymptotic Dynamics"))
        lines.append(m._format_metric("Growth Rate (lambda)", self.growth_rate))
        lines.append(m._format_metric("Damping Ratio", self.eigen.damping_ratio))
        lines.append(m._format_metric("Most Elastic Transition", m._transition_name(
            self.sensitivity.most_elastic_transition, self.eigen.stage_labels
        )))
        if self.sensitivity.survival_elasticity is not None:
            lines.append(m._format_metric("Survival Elasticity",
                                          self.sensitivity.survival_elasticity))
            lines.append(m._format_metric("Fecundity Elasticity",
                                          self.sensitivity.fecundity_elasticity))

        if self.transient is not None:
            lines.append(m._format_section("Transient Dynamics"))
            lines.append(m._format_metric("Max Amplification", self.transient.max_amplification))
            lines.append(m._format_metric("Max Attenuation", self.transient.max_attenuation))
            lines.append(m._format_metric("Inertia", self.transient.inertia))

        if self.life_history is not None:
            lh = self.life_history
            lines.append(m._format_section("Life History"))
            lines.append(m._format_metric("Net Reproductive Rate (R0)", self.net_reproductive_rate))
            lines.append(m._format_metric("Generation Time", self.generation_time))
            lines.append(m._format_metric("P(survive to reproduction)",
                                          lh.prob_survive_to_reproduction))
            lines.append(m._format_metric("Age at First Reproduction",
                                          lh.age_at_first_reproduction))
            lines.append(m._format_metric("Remaining Mature Life Exp.",
                                          lh.remaining_mature_life_expectancy))

        lines.append(m._format_footer(self.computation_time_ms))
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "eigen": self.eigen.to_dict(),
            "sensitivity": self.sensitivity.to_dict(),
            "is_irreducible": self.is_irreducible,
            "is_primitive": self.is_primitive,
            "transient": self.transient.to_dict() if self.transient else None,
            "life_history": self.life_history.to_dict() if self.life_history else None,
            "net_reproductive_rate": self.net_reproductive_rate,
            "generation_time": self.generation_time,
            "computation_time_ms": self.computation_time_ms,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        return (
            f"PopulationReport(lambda={self.growth_rate:.4f}, "
            f"primitive={self.is_primitive}, {self.computation_time_ms:.2f}ms)"
        )


def analyze_population(
    model: MatrixModel,
    initial_vector: VectorLike | None = None,
    start_stage: int = 0,
    horizon: int | None = None,
    zero_structural_zeros: bool = True,
) -> PopulationReport:
    """
    Run every applicable analysis on one projection matrix.

    Asymptotic, sensitivity and structural analyses always run. Transient
    dynamics run when an initial vector is given. Life-history metrics,
    R0 and generation time run when the model has a survival/fecundity
    decomposition with some reproduction. R0 and generation time are left as
    None when I - U is singular (some stage never dies), and generation time
    also when lambda is 1 (or 0), where it is undefined by construction.

    Args:
        model: MatrixModel to analyse
        initial_vector: Optional initial stage vector for transient analysis
        start_stage: Start stage for life-history metrics
        horizon: Transient projection horizon (default 10 x n)
        zero_structural_zeros: Elasticity policy for structural zeros

    Returns:
        PopulationReport

    Example:
        >>> from pymatpop import MatrixModel, analyze_population
        >>> model = MatrixModel.from_components(U, F, stage_labels=labels)
        >>> report = analyze_population(model, initial_vector=[100, 0, 0])
        >>> print(report.summary())
    """
    start_time = time.perf_counter()

    eigen = analyze_eigen(model)
    sensitivity = analyze_sensitivity(
        model, zero_structural_zeros=zero_structural_zeros, eigen_result=eigen
    )
    is_irreducible = check_irreducibility(model)
    is_primitive = is_irreducible and check_primitivity(model)

    transient = None
    if initial_vector is not None:
        transient = compute_transient_dynamics(model, initial_vector, horizon=horizon)

    life_history = net_reproductive_rate = generation_time = None
    if model.has_reproduction:
        life_history = compute_life_history(model, start_stage=start_stage)
        try:
            net_reproductive_rate = compute_net_reproductive_rate(model)
        except SingularMatrixError:
            # Infinite lifetimes; life_history has already warned
            net_reproductive_rate = None
        growth_rate = eigen.growth_rate
        if net_reproductive_rate is not None and growth_rate > 0 \
                and abs(np.log(growth_rate)) > GENERATION_TIME_TOLERANCE:
            generation_time = compute_generation_time(model)

    computation_time = (time.perf_counter() - start_time) * 1000

    return PopulationReport(
        eigen=eigen,
        sensitivity=sensitivity,
        is_irreducible=is_irreducible,
        is_primitive=is_primitive,
        transient=transient,
        life_history=life_history,
        net_reproductive_rate=net_reproductive_rate,
        generation_time=generation_time,
        computation_time_ms=computation_time,
    )
