"""
EVAL: Minimal and degenerate inputs.

Single-stage models, all-zero matrices and vectors, reducible matrices and
tolerance boundaries.
"""

import numpy as np
import pytest

from pymatpop import (
    MatrixModel,
    DecompositionError,
    DegenerateVectorError,
    InvalidArgumentError,
    analyze_eigen,
    analyze_population,
    check_irreducibility,
    check_primitivity,
    compute_elasticity,
    compute_transient_dynamics,
    max_amplification,
    project,
    project_batch,
)


class TestSingleStage:
    """EVAL: n = 1 - no second eigenvalue, no off-diagonal structure."""

    def test_zero_matrix_eigen(self):
        result = analyze_eigen(MatrixModel(np.array([[0.0]])))
        assert result.growth_rate == 0.0
        assert result.damping_ratio == 1.0
        assert result.intrinsic_rate == float("-inf")

    def test_zero_matrix_elasticity_undefined(self):
        with pytest.raises(InvalidArgumentError):
            compute_elasticity(MatrixModel(np.array([[0.0]])))

    def test_zero_matrix_transient_undefined(self):
        with pytest.raises(DegenerateVectorError):
            max_amplification(MatrixModel(np.array([[0.0]])), [1.0])

    def test_single_stage_transient_is_neutral(self):
        result = compute_transient_dynamics(MatrixModel(np.array([[1.7]])), [42.0])
        assert result.max_amplification == 1.0
        assert result.max_attenuation == 1.0
        assert result.inertia == pytest.approx(1.0)

    def test_single_stage_report(self):
        model = MatrixModel.from_components(np.array([[0.6]]), np.array([[0.8]]))
        report = analyze_population(model, initial_vector=[5.0])
        assert report.growth_rate == pytest.approx(1.4)
        assert report.net_reproductive_rate == pytest.approx(2.0)
        assert report.life_history.age_at_first_reproduction == pytest.approx(1.0)
        assert report.generation_time == pytest.approx(np.log(2.0) / np.log(1.4))


class TestZeroInputs:
    """EVAL: All-zero matrices and vectors."""

    def test_zero_matrix(self):
        result = analyze_eigen(MatrixModel(np.zeros((3, 3))))
        assert result.growth_rate == 0.0
        assert result.stable_stage_distribution.sum() == pytest.approx(1.0)

    def test_zero_matrix_structure(self):
        model = MatrixModel(np.zeros((3, 3)))
        assert not check_irreducibility(model)
        assert not check_primitivity(model)

    def test_zero_vector_transient(self, giraffe_model):
        with pytest.raises(DegenerateVectorError):
            compute_transient_dynamics(giraffe_model, [0.0, 0.0, 0.0])

    def test_zero_steps_batch(self, giraffe_model):
        batch = project_batch(giraffe_model, np.eye(3), steps=0)
        assert [len(series) for series in batch] == [1, 1, 1]
        np.testing.assert_allclose(batch[2].stage_vectors, [[0.0, 0.0, 1.0]])

    def test_tiny_vector_normalizes(self, giraffe_model):
        series = project(giraffe_model, [1e-9, 0.0, 3e-9], steps=1, normalize_initial_vector=True)
        np.testing.assert_allclose(series.initial_vector, [0.25, 0.0, 0.75])


class TestReducible:
    """EVAL: Reducible matrices still produce normalized eigenvectors."""

    def test_identity(self):
        result = analyze_eigen(MatrixModel(np.eye(4)))
        assert result.growth_rate == pytest.approx(1.0)
        assert result.damping_ratio == pytest.approx(1.0)
        overlap = result.reproductive_value @ result.stable_stage_distribution
        assert overlap == pytest.approx(1.0)

    def test_block_diagonal_picks_larger_block(self):
        A = np.zeros((4, 4))
        A[:2, :2] = [[0.0, 1.0], [0.5, 0.5]]
        A[2:, 2:] = [[0.0, 3.0], [0.5, 0.5]]
        result = analyze_eigen(MatrixModel(A))
        assert result.growth_rate == pytest.approx(np.max(np.abs(np.linalg.eigvals(A))))
        np.testing.assert_allclose(result.stable_stage_distribution[:2], 0.0, atol=1e-12)


class TestToleranceBoundaries:
    """EVAL: Decomposition tolerance is honored in both directions."""

    def test_custom_tolerance_accepts(self):
        U = np.array([[0.2, 0.0], [0.5, 0.9]])
        F = np.array([[0.0, 1.5], [0.0, 0.0]])
        model = MatrixModel(matrix=U + F + 0.05, survival=U, fecundity=F, tolerance=0.1)
        assert model.has_decomposition

    def test_default_tolerance_rejects(self):
        U = np.array([[0.2, 0.0], [0.5, 0.9]])
        F = np.array([[0.0, 1.5], [0.0, 0.0]])
        with pytest.raises(DecompositionError):
            MatrixModel(matrix=U + F + 1e-6, survival=U, fecundity=F)
