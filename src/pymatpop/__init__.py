"""
PyMatPop: Matrix Population Model Analysis.

Asymptotic, transient, perturbation and life-history analysis of stage- and
age-structured population projection matrices.
"""

import logging as _logging

from pymatpop.core.model import MatrixModel
from pymatpop.core.result import (
    EigenResult,
    ProjectionSeries,
    TransientBound,
    TransientResult,
    SensitivityResult,
    PerturbationResult,
    LifeHistoryResult,
)
from pymatpop.core.exceptions import (
    MatPopError,
    DataValidationError,
    ShapeError,
    DomainError,
    NaNInfError,
    DecompositionError,
    InvalidArgumentError,
    DegenerateVectorError,
    SingularMatrixError,
    UndefinedGenerationTimeError,
    NumericalInstabilityWarning,
    ComplexDominantEigenvalueWarning,
    LifeHistoryWarning,
)
from pymatpop.algorithms.eigen import (
    analyze_eigen,
    dominant_eigenvalue,
    compute_growth_rate,
    compute_damping_ratio,
)
from pymatpop.algorithms.projection import project, project_batch
from pymatpop.algorithms.transient import (
    max_amplification,
    max_attenuation,
    compute_transient_dynamics,
)
from pymatpop.algorithms.sensitivity import (
    compute_sensitivity,
    compute_elasticity,
    analyze_sensitivity,
    sensitivity_by_simulation,
)
from pymatpop.algorithms.life_history import (
    compute_fundamental_matrix,
    compute_life_expectancy,
    compute_net_reproductive_rate,
    compute_generation_time,
    compute_life_history,
)
from pymatpop.algorithms.structure import check_irreducibility, check_primitivity
from pymatpop.analyzer import PopulationReport, analyze_population

__version__ = "0.1.0"

__all__ = [
    # Data structures
    "MatrixModel",
    # Result types
    "EigenResult",
    "ProjectionSeries",
    "TransientBound",
    "TransientResult",
    "SensitivityResult",
    "PerturbationResult",
    "LifeHistoryResult",
    "PopulationReport",
    # Exceptions
    "MatPopError",
    "DataValidationError",
    "ShapeError",
    "DomainError",
    "NaNInfError",
    "DecompositionError",
    "InvalidArgumentError",
    "DegenerateVectorError",
    "SingularMatrixError",
    "UndefinedGenerationTimeError",
    # Warnings
    "NumericalInstabilityWarning",
    "ComplexDominantEigenvalueWarning",
    "LifeHistoryWarning",
    # Asymptotic analysis
    "analyze_eigen",
    "dominant_eigenvalue",
    "compute_growth_rate",
    "compute_damping_ratio",
    # Projection
    "project",
    "project_batch",
    # Transient dynamics
    "max_amplification",
    "max_attenuation",
    "compute_transient_dynamics",
    # Perturbation analysis
    "compute_sensitivity",
    "compute_elasticity",
    "analyze_sensitivity",
    "sensitivity_by_simulation",
    # Life history
    "compute_fundamental_matrix",
    "compute_life_expectancy",
    "compute_net_reproductive_rate",
    "compute_generation_time",
    "compute_life_history",
    # Structure
    "check_irreducibility",
    "check_primitivity",
    # Convenience
    "analyze_population",
]

# Library logging stays silent unless the application configures it
_logging.getLogger(__name__).addHandler(_logging.NullHandler())
