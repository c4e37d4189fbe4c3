"""
EVAL: Singular, defective and ill-conditioned matrices.

These tests exercise the linear algebra paths: eigenvector normalization,
the fundamental matrix (I - U)^-1 and the pseudo-inverses used when
conditioning on reproduction.
"""

import warnings

import numpy as np
import pytest

from pymatpop import (
    DegenerateVectorError,
    LifeHistoryWarning,
    SingularMatrixError,
    analyze_eigen,
    analyze_population,
    analyze_sensitivity,
    compute_fundamental_matrix,
    compute_generation_time,
    compute_life_expectancy,
    compute_life_history,
    compute_net_reproductive_rate,
    project_batch,
)


class TestDefectiveEigenproblem:
    """EVAL: Matrices whose dominant eigenvectors cannot be normalized."""

    def test_nilpotent_left_right_orthogonal(self, nilpotent_model):
        """EVAL: every eigenvalue is zero and v @ w = 0."""
        with pytest.raises(DegenerateVectorError):
            analyze_eigen(nilpotent_model)

    def test_nilpotent_projection_dies_out(self, nilpotent_model):
        """EVAL: projection still works without any eigen information."""
        from pymatpop import project

        series = project(nilpotent_model, [1.0, 0.0], steps=3)
        np.testing.assert_allclose(series.total_population, [1.0, 1.0, 0.0, 0.0])


class TestImmortalStages:
    """EVAL: Survival of exactly 1 makes I - U singular."""

    def test_fundamental_matrix_raises(self, immortal_adult_model):
        with pytest.raises(SingularMatrixError, match="adult"):
            compute_fundamental_matrix(immortal_adult_model)

    def test_life_expectancy_raises(self, immortal_adult_model):
        with pytest.raises(SingularMatrixError):
            compute_life_expectancy(immortal_adult_model)

    def test_net_reproductive_rate_raises(self, immortal_adult_model):
        with pytest.raises(SingularMatrixError):
            compute_net_reproductive_rate(immortal_adult_model)

    def test_life_history_still_defined(self, immortal_adult_model):
        """EVAL: the immortal stage is reproductive, so maturation is unaffected."""
        with pytest.warns(LifeHistoryWarning, match="infinite"):
            result = compute_life_history(immortal_adult_model)
        assert result.prob_survive_to_reproduction == pytest.approx(0.6)
        assert result.age_at_first_reproduction == pytest.approx(2.0)
        assert result.life_expectancy_from_start == float("inf")

    def test_population_report_completes(self, immortal_adult_model):
        with pytest.warns(LifeHistoryWarning):
            report = analyze_population(immortal_adult_model, initial_vector=[1.0, 0.0])
        assert report.life_history.age_at_first_reproduction == pytest.approx(2.0)
        assert report.net_reproductive_rate is None
        assert report.generation_time is None
        assert report.transient is not None

    def test_asymptotic_analysis_unaffected(self, immortal_adult_model):
        """EVAL: eigen and sensitivity analysis do not need (I - U)^-1."""
        result = analyze_sensitivity(immortal_adult_model)
        assert result.elasticity_sum == pytest.approx(1.0)
        assert result.survival_elasticity + result.fecundity_elasticity == pytest.approx(1.0)


class TestUnreachableStages:
    """EVAL: Post-reproductive stages make the conditioning matrix singular."""

    def test_expected_singularity_is_silent(self, post_reproductive_model):
        """EVAL: stages that cannot reproduce are reported, not warned about."""
        with warnings.catch_warnings():
            warnings.simplefilter("error", UserWarning)
            result = compute_life_history(post_reproductive_model)
        assert result.unreachable_stages == (3,)

    def test_metrics_from_seed(self, post_reproductive_model):
        result = compute_life_history(post_reproductive_model)
        # seed -> juvenile (0.4), juvenile -> adult (0.3 of 0.5 leaving)
        assert result.prob_survive_to_reproduction == pytest.approx(0.24)
        # 1 step as seed, 2 expected steps as juvenile, 1 step as adult
        assert result.age_at_first_reproduction == pytest.approx(4.0)

    def test_senescent_start_warns(self, post_reproductive_model):
        with pytest.warns(LifeHistoryWarning, match="senescent"):
            result = compute_life_history(post_reproductive_model, start_stage=3)
        assert np.isnan(result.age_at_first_reproduction)
        assert result.life_expectancy_from_start == pytest.approx(1.0 / 0.3)


class TestIllConditioned:
    """EVAL: Extreme but valid vital rates."""

    def test_near_immortal_life_expectancy(self, near_immortal_model):
        """EVAL: condition number ~1e9 is still solvable."""
        life_expectancy = compute_life_expectancy(near_immortal_model)
        assert life_expectancy[1] == pytest.approx(1e9, rel=1e-5)

    def test_near_immortal_generation_time_finite(self, near_immortal_model):
        generation_time = compute_generation_time(near_immortal_model)
        assert np.isfinite(generation_time)
        assert generation_time > 0

    def test_huge_fecundity_growth_rate(self, huge_fecundity_model):
        """EVAL: lambda^3 - 0.9 lambda^2 - 5 = 0."""
        roots = np.roots([1.0, -0.9, 0.0, -5.0])
        expected = max(r.real for r in roots if abs(r.imag) < 1e-12)
        assert analyze_eigen(huge_fecundity_model).growth_rate == pytest.approx(expected, rel=1e-10)

    def test_huge_fecundity_elasticities(self, huge_fecundity_model):
        result = analyze_sensitivity(huge_fecundity_model)
        assert result.elasticity_sum == pytest.approx(1.0, abs=1e-6)
        assert np.all(result.elasticity >= -1e-12)

    def test_huge_fecundity_life_history(self, huge_fecundity_model):
        result = compute_life_history(huge_fecundity_model)
        assert result.prob_survive_to_reproduction == pytest.approx(5e-6, rel=1e-8)
        assert result.age_at_first_reproduction == pytest.approx(3.0)
        assert compute_net_reproductive_rate(huge_fecundity_model) == pytest.approx(50.0)


class TestLargeModels:
    """EVAL: 50-stage dense matrices."""

    def test_elasticities_sum_to_one(self, large_random_model):
        assert analyze_sensitivity(large_random_model).elasticity_sum == pytest.approx(1.0)

    def test_life_history_bounded(self, large_random_model):
        result = compute_life_history(large_random_model)
        assert 0.0 <= result.prob_survive_to_reproduction <= 1.0
        assert np.isfinite(result.age_at_first_reproduction)
        assert result.age_at_first_reproduction >= 1.0

    def test_parallel_batch(self, large_random_model):
        rng = np.random.default_rng(11)
        vectors = rng.uniform(0.0, 1.0, size=(50, 128))
        batch = project_batch(large_random_model, vectors, steps=20, normalize_initial_vector=True)
        totals = np.array([series.total_population[0] for series in batch])
        np.testing.assert_allclose(totals, 1.0)
        expected = np.linalg.matrix_power(large_random_model.matrix, 20) @ (
            vectors[:, 5] / vectors[:, 5].sum()
        )
        np.testing.assert_allclose(batch[5].final_vector, expected, rtol=1e-10)
