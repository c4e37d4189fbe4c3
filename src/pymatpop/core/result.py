"""Result dataclasses for matrix population model analysis.

This module provides result containers for the analysis algorithms:

    - EigenResult: asymptotic growth rate, stable stage distribution,
      reproductive value and damping ratio
    - ProjectionSeries: stage vectors and total population over time
    - TransientBound / TransientResult: amplification and attenuation
    - SensitivityResult: sensitivity and elasticity matrices
    - PerturbationResult: growth rates under multiplicative perturbations
    - LifeHistoryResult: maturation and life expectancy metrics

All results are immutable and expose summary(), to_dict() and a compact
__repr__.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray

from pymatpop.core.mixins import ResultSummaryMixin
from pymatpop.core.types import Transition


def _float_or_none(value: float | None) -> float | None:
    if value is None:
        return None
    value = float(value)
    return None if np.isnan(value) else value


@dataclass(frozen=True)
class EigenResult:
    """
    Result of the eigenanalysis of a projection matrix.

    The dominant eigenvalue lambda is the asymptotic growth rate. Its right
    eigenvector w (normalized to sum to 1) is the stable stage distribution
    and its left eigenvector v (normalized so that v @ w = 1) is the
    reproductive value.

    Attributes:
        growth_rate: Dominant eigenvalue lambda (real part)
        stable_stage_distribution: Right eigenvector w, sums to 1
        reproductive_value: Left eigenvector v, with v @ w = 1
        damping_ratio: |lambda_1| / |lambda_2|; 1 for a 1x1 matrix and
            inf when every subdominant eigenvalue is zero
        eigenvalues: All eigenvalues ordered by decreasing magnitude
        is_complex: True if the dominant eigenvalue had a non-negligible
            imaginary part that was discarded
        stage_labels: Stage labels of the source model (if any)
        computation_time_ms: Time taken in milliseconds
    """

    growth_rate: float
    stable_stage_distribution: NDArray[np.float64]
    reproductive_value: NDArray[np.float64]
    damping_ratio: float
    eigenvalues: NDArray[np.complex128]
    is_complex: bool
    stage_labels: tuple[str, ...] | None
    computation_time_ms: float

    @property
    def intrinsic_rate(self) -> float:
        """Intrinsic rate of increase r = log(lambda); -inf when lambda <= 0."""
        if self.growth_rate <= 0:
            return float("-inf")
        return float(np.log(self.growth_rate))

    @property
    def is_increasing(self) -> bool:
        """True if the population grows asymptotically (lambda > 1)."""
        return self.growth_rate > 1.0

    @property
    def dimension(self) -> int:
        """Number of stages."""
        return len(self.stable_stage_distribution)

    def summary(self) -> str:
        """Return human-readable summary report."""
        m = ResultSummaryMixin
        lines = [m._format_header("EIGENANALYSIS REPORT")]

        lines.append(f"\nTrend: {m._format_growth(self.growth_rate)}")

        lines.append(m._format_section("Asymptotic Metrics"))
        lines.append(m._format_metric("Growth Rate (lambda)", self.growth_rate))
        lines.append(m._format_metric("Intrinsic Rate (log lambda)", self.intrinsic_rate))
        lines.append(m._format_metric("Damping Ratio", self.damping_ratio))
        lines.append(m._format_metric("Complex Dominant Eigenvalue", self.is_complex))
        lines.append(m._format_metric("Stages", self.dimension))

        lines.append(m._format_section("Stable Stage Distribution"))
        lines.extend(m._format_vector(self.stable_stage_distribution, self.stage_labels))

        lines.append(m._format_section("Reproductive Value"))
        lines.extend(m._format_vector(self.reproductive_value, self.stage_labels))

        lines.append(m._format_footer(self.computation_time_ms))
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "growth_rate": self.growth_rate,
            "intrinsic_rate": self.intrinsic_rate,
            "damping_ratio": self.damping_ratio,
            "stable_stage_distribution": self.stable_stage_distribution.tolist(),
            "reproductive_value": self.reproductive_value.tolist(),
            "is_complex": self.is_complex,
            "computation_time_ms": self.computation_time_ms,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        return (
            f"EigenResult(lambda={self.growth_rate:.4f}, "
            f"damping={self.damping_ratio:.4f}, {self.computation_time_ms:.2f}ms)"
        )


@dataclass(frozen=True)
class ProjectionSeries:
    """
    Deterministic projection of a population vector over discrete time steps.

    Row t of `stage_vectors` is the population at time t (t = 0..T), and
    `total_population[t]` is its sum. Iterating yields
    (total_population, stage_vector) pairs in time order.

    Attributes:
        stage_vectors: (T+1) x n array of stage vectors
        total_population: Length T+1 array of total population size
        normalized_initial: True if the initial vector was divided by its sum
        scaled: True if the matrix was divided by lambda before projecting
        growth_rate: lambda used for scaling (None if not scaled)
        stage_labels: Stage labels of the source model (if any)
    """

    stage_vectors: NDArray[np.float64]
    total_population: NDArray[np.float64]
    normalized_initial: bool
    scaled: bool
    growth_rate: float | None
    stage_labels: tuple[str, ...] | None

    def __len__(self) -> int:
        return len(self.total_population)

    def __iter__(self) -> Iterator[tuple[float, NDArray[np.float64]]]:
        for total, vector in zip(self.total_population, self.stage_vectors):
            yield float(total), vector

    @property
    def num_steps(self) -> int:
        """Number of projection steps T (the series has T+1 entries)."""
        return len(self.total_population) - 1

    @property
    def time_steps(self) -> NDArray[np.int64]:
        """Time indices 0..T."""
        return np.arange(len(self.total_population))

    @property
    def initial_vector(self) -> NDArray[np.float64]:
        """Stage vector at t = 0 (after normalization, if requested)."""
        return self.stage_vectors[0]

    @property
    def final_vector(self) -> NDArray[np.float64]:
        """Stage vector at t = T."""
        return self.stage_vectors[-1]

    @property
    def stage_proportions(self) -> NDArray[np.float64]:
        """Stage vectors divided by their totals (NaN where the total is 0)."""
        totals = self.total_population[:, None]
        return np.divide(
            self.stage_vectors,
            totals,
            out=np.full_like(self.stage_vectors, np.nan),
            where=totals != 0,
        )

    @property
    def growth_ratios(self) -> NDArray[np.float64]:
        """One-step ratios N(t+1) / N(t), length T (NaN where N(t) is 0)."""
        previous = self.total_population[:-1]
        return np.divide(
            self.total_population[1:],
            previous,
            out=np.full_like(previous, np.nan),
            where=previous != 0,
        )

    def summary(self) -> str:
        """Return human-readable summary report."""
        m = ResultSummaryMixin
        lines = [m._format_header("POPULATION PROJECTION")]

        lines.append(m._format_section("Settings"))
        lines.append(m._format_metric("Time Steps", self.num_steps))
        lines.append(m._format_metric("Initial Vector Normalized", self.normalized_initial))
        lines.append(m._format_metric("Matrix Scaled by lambda", self.scaled))
        if self.growth_rate is not None:
            lines.append(m._format_metric("Scaling Growth Rate", self.growth_rate))

        lines.append(m._format_section("Total Population"))
        lines.append(m._format_metric("At t = 0", float(self.total_population[0])))
        lines.append(m._format_metric(f"At t = {self.num_steps}", float(self.total_population[-1])))
        lines.append(m._format_metric("Maximum", float(self.total_population.max())))
        lines.append(m._format_metric("Minimum", float(self.total_population.min())))

        lines.append(m._format_section("Final Stage Vector"))
        lines.extend(m._format_vector(self.final_vector, self.stage_labels))
        lines.append("=" * 80)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "total_population": self.total_population.tolist(),
            "stage_vectors": self.stage_vectors.tolist(),
            "normalized_initial": self.normalized_initial,
            "scaled": self.scaled,
            "growth_rate": self.growth_rate,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        flags = []
        if self.normalized_initial:
            flags.append("normalized")
        if self.scaled:
            flags.append("scaled")
        flag_str = f", {'+'.join(flags)}" if flags else ""
        return f"ProjectionSeries(steps={self.num_steps}{flag_str})"


@dataclass(frozen=True)
class TransientBound:
    """
    Extreme transient ratio and the time step at which it occurs.

    Attributes:
        value: Population size relative to asymptotic growth (1 = neutral)
        time_step: Time step achieving the value (0 if none deviates from 1)
    """

    value: float
    time_step: int

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {"value": self.value, "time_step": self.time_step}

    def __repr__(self) -> str:
        """Compact string representation."""
        return f"TransientBound({self.value:.4f} at t={self.time_step})"


@dataclass(frozen=True)
class TransientResult:
    """
    Transient dynamics of an initial stage structure.

    All ratios come from projecting the initial vector, normalized to sum 1,
    with the matrix scaled by 1/lambda, so that asymptotic growth is removed
    and the value at t = 0 is exactly 1.

    Attributes:
        amplification: Maximum ratio and its time step
        attenuation: Minimum ratio and its time step
        reactivity: Scaled population size after one time step
        inertia: Long-run scaled population size, v @ n0 with sum(n0) = 1
        horizon: Number of time steps projected
        series: The scaled, normalized projection
        computation_time_ms: Time taken in milliseconds
    """

    amplification: TransientBound
    attenuation: TransientBound
    reactivity: float
    inertia: float
    horizon: int
    series: ProjectionSeries
    computation_time_ms: float

    @property
    def max_amplification(self) -> float:
        """Maximum amplification value."""
        return self.amplification.value

    @property
    def max_attenuation(self) -> float:
        """Maximum attenuation value."""
        return self.attenuation.value

    @property
    def is_amplifying(self) -> bool:
        """True if the population rises above asymptotic growth at some step."""
        return self.amplification.time_step > 0

    @property
    def is_attenuating(self) -> bool:
        """True if the population falls below asymptotic growth at some step."""
        return self.attenuation.time_step > 0

    def summary(self) -> str:
        """Return human-readable summary report."""
        m = ResultSummaryMixin
        lines = [m._format_header("TRANSIENT DYNAMICS REPORT")]

        lines.append(m._format_section("Bounds"))
        lines.append(m._format_metric("Max Amplification", self.max_amplification))
        lines.append(m._format_metric("  at time step", self.amplification.time_step))
        lines.append(m._format_metric("Max Attenuation", self.max_attenuation))
        lines.append(m._format_metric("  at time step", self.attenuation.time_step))
        lines.append(m._format_metric("Reactivity (t = 1)", self.reactivity))
        lines.append(m._format_metric("Inertia", self.inertia))
        lines.append(m._format_metric("Horizon", self.horizon))

        lines.append(m._format_section("Interpretation"))
        if not (self.is_amplifying or self.is_attenuating):
            lines.append("  Initial structure equals the stable stage distribution.")
            lines.append("  No transient deviation from asymptotic growth.")
        else:
            if self.is_amplifying:
                pct = (self.max_amplification - 1.0) * 100
                lines.append(f"  Population rises up to {pct:.1f}% above asymptotic growth.")
            if self.is_attenuating:
                pct = (1.0 - self.max_attenuation) * 100
                lines.append(f"  Population falls up to {pct:.1f}% below asymptotic growth.")

        lines.append(m._format_footer(self.computation_time_ms))
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "max_amplification": self.amplification.to_dict(),
            "max_attenuation": self.attenuation.to_dict(),
            "reactivity": self.reactivity,
            "inertia": self.inertia,
            "horizon": self.horizon,
            "computation_time_ms": self.computation_time_ms,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        return (
            f"TransientResult(amp={self.max_amplification:.4f}@{self.amplification.time_step}, "
            f"att={self.max_attenuation:.4f}@{self.attenuation.time_step})"
        )


@dataclass(frozen=True)
class SensitivityResult:
    """
    Sensitivity and elasticity of lambda to each matrix entry.

    Attributes:
        sensitivity: n x n matrix, d(lambda) / d(A[i, j]) = v[i] * w[j]
        elasticity: n x n matrix, sensitivity * A / lambda
        growth_rate: lambda of the analysed matrix
        zero_structural_zeros: Whether elasticities with A[i, j] = 0 were forced to 0
        survival_elasticity: Summed elasticity of the U component (None if
            the model has no decomposition)
        fecundity_elasticity: Summed elasticity of the F component
        stage_labels: Stage labels of the source model (if any)
        computation_time_ms: Time taken in milliseconds
    """

    sensitivity: NDArray[np.float64]
    elasticity: NDArray[np.float64]
    growth_rate: float
    zero_structural_zeros: bool
    survival_elasticity: float | None
    fecundity_elasticity: float | None
    stage_labels: tuple[str, ...] | None
    computation_time_ms: float

    @property
    def elasticity_sum(self) -> float:
        """Sum of all elasticities (1 for a well-defined leading eigenpair)."""
        return float(self.elasticity.sum())

    @property
    def most_elastic_transition(self) -> Transition:
        """(row, column) of the entry with the largest elasticity."""
        i, j = np.unravel_index(int(np.argmax(self.elasticity)), self.elasticity.shape)
        return int(i), int(j)

    def ranked_transitions(self, top: int | None = None) -> list[tuple[Transition, float]]:
        """Non-zero elasticities as ((row, column), value), largest first."""
        positions = np.argwhere(self.elasticity != 0)
        ranked = [((int(i), int(j)), float(self.elasticity[i, j])) for i, j in positions]
        ranked.sort(key=lambda item: item[1], reverse=True)
        return ranked if top is None else ranked[:top]

    def summary(self) -> str:
        """Return human-readable summary report."""
        m = ResultSummaryMixin
        lines = [m._format_header("SENSITIVITY & ELASTICITY REPORT")]

        lines.append(m._format_section("Metrics"))
        lines.append(m._format_metric("Growth Rate (lambda)", self.growth_rate))
        lines.append(m._format_metric("Elasticity Sum", self.elasticity_sum))
        lines.append(m._format_metric("Max Sensitivity", float(self.sensitivity.max())))
        lines.append(m._format_metric("Structural Zeros Forced", self.zero_structural_zeros))
        if self.survival_elasticity is not None:
            lines.append(m._format_metric("Survival Elasticity", self.survival_elasticity))
            lines.append(m._format_metric("Fecundity Elasticity", self.fecundity_elasticity))

        lines.append(m._format_section("Most Elastic Transitions"))
        ranked = [
            f"{m._transition_name(t, self.stage_labels)}: {value:.4f}"
            for t, value in self.ranked_transitions(top=5)
        ]
        lines.append(m._format_names(ranked, noun="transition"))

        lines.append(m._format_footer(self.computation_time_ms))
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "growth_rate": self.growth_rate,
            "sensitivity": self.sensitivity.tolist(),
            "elasticity": self.elasticity.tolist(),
            "elasticity_sum": self.elasticity_sum,
            "survival_elasticity": self.survival_elasticity,
            "fecundity_elasticity": self.fecundity_elasticity,
            "computation_time_ms": self.computation_time_ms,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        i, j = self.most_elastic_transition
        return (
            f"SensitivityResult(lambda={self.growth_rate:.4f}, "
            f"max_elasticity=a[{i},{j}], {self.computation_time_ms:.2f}ms)"
        )


@dataclass(frozen=True)
class PerturbationResult:
    """
    Growth rates obtained by multiplying single matrix entries.

    Attributes:
        multipliers: Length k array of multipliers applied to each entry
        growth_rates: n x n x k array; growth_rates[i, j, m] is lambda when
            A[i, j] is multiplied by multipliers[m]. Structural zeros are NaN.
        baseline_growth_rate: lambda of the unperturbed matrix
        computation_time_ms: Time taken in milliseconds
    """

    multipliers: NDArray[np.float64]
    growth_rates: NDArray[np.float64]
    baseline_growth_rate: float
    computation_time_ms: float

    @property
    def transitions(self) -> list[Transition]:
        """Perturbed (row, column) positions."""
        perturbed = ~np.all(np.isnan(self.growth_rates), axis=2)
        return [(int(i), int(j)) for i, j in np.argwhere(perturbed)]

    def growth_rates_for(self, row: int, column: int) -> NDArray[np.float64]:
        """Growth rates across multipliers for one transition."""
        return self.growth_rates[row, column]

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "multipliers": self.multipliers.tolist(),
            "baseline_growth_rate": self.baseline_growth_rate,
            "growth_rates": {
                f"{i},{j}": self.growth_rates[i, j].tolist() for i, j in self.transitions
            },
            "computation_time_ms": self.computation_time_ms,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        return (
            f"PerturbationResult({len(self.transitions)} transitions x "
            f"{len(self.multipliers)} multipliers)"
        )


@dataclass(frozen=True)
class LifeHistoryResult:
    """
    Life-history metrics from the survival/fecundity decomposition.

    Attributes:
        prob_survive_to_reproduction: Probability that an individual in the
            start stage reaches a reproductive stage before dying
        age_at_first_reproduction: Expected number of time steps, counted
            from the start stage and including the step of first
            reproduction, conditional on reproducing (NaN if impossible)
        mean_life_expectancy_from_reproductive_stage: Expected lifespan of an
            individual in the first reproductive stage
        remaining_mature_life_expectancy: Life expectancy from the start stage
            minus age at first reproduction
        life_expectancy_from_start: Expected lifespan from the start stage
        start_stage: Index of the start stage
        first_reproductive_stage: Index of the first reproductive stage
        reproductive_stages: Indices of stages with positive fecundity
        unreachable_stages: Stages from which reproduction is impossible
        stage_labels: Stage labels of the source model (if any)
        computation_time_ms: Time taken in milliseconds
    """

    prob_survive_to_reproduction: float
    age_at_first_reproduction: float
    mean_life_expectancy_from_reproductive_stage: float
    remaining_mature_life_expectancy: float
    life_expectancy_from_start: float
    start_stage: int
    first_reproductive_stage: int
    reproductive_stages: tuple[int, ...]
    unreachable_stages: tuple[int, ...]
    stage_labels: tuple[str, ...] | None
    computation_time_ms: float

    @property
    def reaches_reproduction(self) -> bool:
        """True if the start stage has a positive chance of reproducing."""
        return self.prob_survive_to_reproduction > 0

    def summary(self) -> str:
        """Return human-readable summary report."""
        m = ResultSummaryMixin
        lines = [m._format_header("LIFE HISTORY REPORT")]

        labels = self.stage_labels
        lines.append(m._format_section("Stages"))
        lines.append(m._format_metric("Start Stage", m._stage_name(self.start_stage, labels)))
        lines.append(m._format_metric(
            "First Reproductive Stage", m._stage_name(self.first_reproductive_stage, labels)
        ))
        lines.append(m._format_metric("Reproductive Stages", len(self.reproductive_stages)))

        lines.append(m._format_section("Metrics"))
        lines.append(m._format_metric("P(survive to reproduction)",
                                      self.prob_survive_to_reproduction))
        lines.append(m._format_metric("Age at First Reproduction",
                                      self.age_at_first_reproduction))
        lines.append(m._format_metric("Life Expectancy (start)",
                                      self.life_expectancy_from_start))
        lines.append(m._format_metric("Life Expectancy (reproductive)",
                                      self.mean_life_expectancy_from_reproductive_stage))
        lines.append(m._format_metric("Remaining Mature Life Exp.",
                                      self.remaining_mature_life_expectancy))

        if self.unreachable_stages:
            lines.append(m._format_section("Stages That Cannot Reproduce"))
            names = [m._stage_name(i, self.stage_labels) for i in self.unreachable_stages]
            lines.append(m._format_names(names))

        lines.append(m._format_footer(self.computation_time_ms))
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "prob_survive_to_reproduction": self.prob_survive_to_reproduction,
            "age_at_first_reproduction": _float_or_none(self.age_at_first_reproduction),
            "mean_life_expectancy_from_reproductive_stage":
                self.mean_life_expectancy_from_reproductive_stage,
            "remaining_mature_life_expectancy":
                _float_or_none(self.remaining_mature_life_expectancy),
            "life_expectancy_from_start": self.life_expectancy_from_start,
            "start_stage": self.start_stage,
            "first_reproductive_stage": self.first_reproductive_stage,
            "reproductive_stages": list(self.reproductive_stages),
            "unreachable_stages": list(self.unreachable_stages),
            "computation_time_ms": self.computation_time_ms,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        return (
            f"LifeHistoryResult(p_repro={self.prob_survive_to_reproduction:.4f}, "
            f"age={self.age_at_first_reproduction:.4f}, "
            f"{self.computation_time_ms:.2f}ms)"
        )
