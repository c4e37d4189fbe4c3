"""Core data structures for PyMatPop."""

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

__all__ = [
    "MatrixModel",
    "EigenResult",
    "ProjectionSeries",
    "TransientBound",
    "TransientResult",
    "SensitivityResult",
    "PerturbationResult",
    "LifeHistoryResult",
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
]
