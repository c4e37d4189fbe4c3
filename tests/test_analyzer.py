"""Tests for the one-call population report."""

import json

import numpy as np
import pytest

from pymatpop import (
    DegenerateVectorError,
    LifeHistoryWarning,
    PopulationReport,
    analyze_eigen,
    analyze_population,
    compute_net_reproductive_rate,
)


class TestAnalyzePopulation:
    """analyze_population runs every applicable analysis."""

    def test_undecomposed_model(self, giraffe_model):
        report = analyze_population(giraffe_model)
        assert isinstance(report, PopulationReport)
        assert report.growth_rate == pytest.approx(analyze_eigen(giraffe_model).growth_rate)
        assert report.is_irreducible
        assert report.is_primitive
        assert report.transient is None
        assert report.life_history is None
        assert report.net_reproductive_rate is None
        assert report.generation_time is None

    def test_transient_with_initial_vector(self, giraffe_model):
        report = analyze_population(giraffe_model, initial_vector=[0.0, 0.0, 10.0], horizon=12)
        assert report.transient is not None
        assert report.transient.horizon == 12

    def test_decomposed_model(self, plant_model):
        report = analyze_population(plant_model)
        assert report.life_history.age_at_first_reproduction == pytest.approx(3.25)
        assert report.net_reproductive_rate == pytest.approx(1.875)
        lam = report.growth_rate
        assert report.generation_time == pytest.approx(np.log(1.875) / np.log(lam))
        assert report.sensitivity.survival_elasticity is not None

    def test_start_stage_forwarded(self, plant_model):
        report = analyze_population(plant_model, start_stage=1)
        assert report.life_history.start_stage == 1

    def test_stationary_model_has_no_generation_time(self, stationary_model):
        report = analyze_population(stationary_model)
        assert report.growth_rate == pytest.approx(1.0)
        assert report.generation_time is None
        assert report.net_reproductive_rate == pytest.approx(compute_net_reproductive_rate(
            stationary_model
        ))

    def test_no_reproduction_skips_life_history(self, no_reproduction_model):
        report = analyze_population(no_reproduction_model)
        assert report.life_history is None
        assert report.generation_time is None

    def test_imprimitive_model(self, periodic_leslie_model):
        report = analyze_population(periodic_leslie_model)
        assert report.is_irreducible
        assert not report.is_primitive

    def test_zero_structural_zeros_forwarded(self, giraffe_model):
        report = analyze_population(giraffe_model, zero_structural_zeros=False)
        assert not report.sensitivity.zero_structural_zeros
        assert report.sensitivity.sensitivity[0, 0] > 0

    def test_errors_propagate(self):
        from pymatpop import MatrixModel

        # Nilpotent: left and right eigenvectors are orthogonal
        model = MatrixModel(np.array([[0.0, 0.0], [1.0, 0.0]]))
        with pytest.raises(DegenerateVectorError):
            analyze_population(model)

    def test_immortal_stage_leaves_r0_undefined(self):
        from pymatpop import MatrixModel

        model = MatrixModel.from_components(np.array([[1.0]]), np.array([[0.5]]))
        with pytest.warns(LifeHistoryWarning, match="infinite"):
            report = analyze_population(model)
        assert report.growth_rate == pytest.approx(1.5)
        assert report.life_history.age_at_first_reproduction == pytest.approx(1.0)
        assert report.life_history.life_expectancy_from_start == float("inf")
        assert report.net_reproductive_rate is None
        assert report.generation_time is None
        assert "Life History" in report.summary()

    def test_sensitivity_keeps_structural_zeros(self, giraffe_model):
        report = analyze_population(giraffe_model)
        assert report.sensitivity.sensitivity[0, 0] > 0
        assert report.sensitivity.elasticity[0, 0] == 0.0


class TestPopulationReportMethods:
    """summary(), to_dict() and __repr__()."""

    def test_summary_sections(self, plant_model):
        summary = analyze_population(plant_model, initial_vector=[1.0, 0.0, 0.0]).summary()
        assert "POPULATION ANALYSIS REPORT" in summary
        assert "Structure" in summary
        assert "Transient Dynamics" in summary
        assert "Life History" in summary
        assert "Net Reproductive Rate (R0)" in summary

    def test_summary_without_optional_sections(self, giraffe_model):
        summary = analyze_population(giraffe_model).summary()
        assert "Transient Dynamics" not in summary
        assert "Life History" not in summary

    def test_to_dict_is_json_serializable(self, plant_model):
        d = analyze_population(plant_model, initial_vector=[1.0, 0.0, 0.0]).to_dict()
        json.dumps(d)
        assert d["is_primitive"] is True
        assert d["life_history"]["reproductive_stages"] == [2]

    def test_repr(self, golden_model):
        assert repr(analyze_population(golden_model)).startswith(
            "PopulationReport(lambda=1.6180, primitive=True"
        )
