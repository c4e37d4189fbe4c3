"""Custom exceptions and warnings for PyMatPop.

This module provides a hierarchy of exceptions for specific error types,
all inheriting from ValueError so that callers who already catch ValueError
around numerical code keep working.

Exception Hierarchy:
    MatPopError (ValueError)
    ├── DataValidationError
    │   ├── ShapeError
    │   ├── DomainError
    │   ├── NaNInfError
    │   └── DecompositionError
    ├── InvalidArgumentError
    ├── DegenerateVectorError
    ├── SingularMatrixError
    └── UndefinedGenerationTimeError

Warning Classes:
    NumericalInstabilityWarning (UserWarning)
    └── ComplexDominantEigenvalueWarning
    LifeHistoryWarning (UserWarning)
"""

from __future__ import annotations


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class MatPopError(ValueError):
    """Base exception for all PyMatPop errors.

    Every failure is local to the analysis of a single matrix. Batch callers
    looping over many matrices should catch this class per item and continue.

    Example:
        >>> for name, model in models.items():
        ...     try:
        ...         results[name] = analyze_eigen(model)
        ...     except MatPopError as e:
        ...         failures[name] = str(e)
    """

    pass


# =============================================================================
# DATA VALIDATION EXCEPTIONS
# =============================================================================


class DataValidationError(MatPopError):
    """Raised when an input matrix or vector fails validation checks.

    This is the base class for all input-related errors. They are fatal:
    the caller must fix the input, re-running will not help.
    """

    pass


class ShapeError(DataValidationError):
    """Raised when matrix or vector dimensions are incompatible.

    Common causes:
        - Projection matrix is not square
        - Survival and fecundity matrices differ in shape
        - Initial vector length differs from the matrix dimension
        - Number of stage labels differs from the matrix dimension

    Example:
        >>> MatrixModel(np.array([[0.1, 0.2, 0.3]]))
        ShapeError: Projection matrix must be square, got shape (1, 3)...
    """

    pass


class DomainError(DataValidationError):
    """Raised when values fall outside their biological domain.

    Common causes:
        - Negative transition rates or fecundities
        - A survival matrix column summing to more than 1
        - Negative entries in a population vector
    """

    pass


class NaNInfError(DataValidationError):
    """Raised when NaN or Inf values are detected in an input matrix.

    Common causes:
        - Missing vital rates encoded as NaN in a database export
        - Division by zero while building the matrix upstream
    """

    pass


class DecompositionError(DataValidationError):
    """Raised when survival and fecundity matrices do not sum to the full matrix.

    The check is elementwise: |U + F - A| must not exceed the model tolerance
    anywhere.

    Example:
        >>> MatrixModel(matrix=A, survival=U, fecundity=F)
        DecompositionError: survival + fecundity differs from matrix at 2
        positions (max deviation 0.05)...
    """

    pass


# =============================================================================
# COMPUTATION EXCEPTIONS
# =============================================================================


class InvalidArgumentError(MatPopError):
    """Raised when an argument makes the requested metric undefined.

    Common causes:
        - Life-history analysis on a fecundity matrix that is all zero
        - Start stage index out of range
        - Negative number of projection steps or non-positive horizon
        - Life-history analysis on a model built without U/F decomposition
    """

    pass


class DegenerateVectorError(MatPopError):
    """Raised when a vector cannot be normalized because it sums to ~0.

    Common causes:
        - Normalizing an all-zero initial population vector
        - A dominant eigenvector whose entries cancel out (reducible or
          periodic matrices)
        - Scaling a projection by a growth rate of zero
    """

    pass


class SingularMatrixError(MatPopError):
    """Raised when a required inverse or pseudo-inverse cannot be computed.

    For the fundamental matrix N = (I - U)^-1 this means some stages form a
    closed class with no mortality. For the pseudo-inverse used in
    age-at-maturity calculations it means the SVD did not converge, which
    signals a malformed input matrix.
    """

    pass


class UndefinedGenerationTimeError(MatPopError):
    """Raised when generation time log(R0) / log(lambda) is undefined.

    Common causes:
        - lambda equal to 1, so log(lambda) is zero
        - Net reproductive rate R0 of zero (no reproduction)
    """

    pass


# =============================================================================
# WARNINGS
# =============================================================================


class NumericalInstabilityWarning(UserWarning):
    """Warning for numerical issues that do not prevent computation.

    Emitted when:
        - A sub-chain used in life-history analysis is singular for a reason
          other than stages that cannot reproduce
        - Eigen results are close to a degenerate case

    Results may be less reliable when this warning appears.
    """

    pass


class ComplexDominantEigenvalueWarning(NumericalInstabilityWarning):
    """Warning emitted when the dominant eigenvalue has an imaginary part.

    Non-primitive or reducible matrices can yield a complex or non-unique
    dominant eigenvalue. The real part is used and this warning surfaces the
    discarded information.

    Example:
        >>> import warnings
        >>> warnings.filterwarnings('error', category=ComplexDominantEigenvalueWarning)
    """

    pass


class LifeHistoryWarning(UserWarning):
    """Warning for life-history metrics that are undefined for the chosen stage.

    Emitted when the start stage has zero probability of ever reaching a
    reproductive stage, in which case age at first reproduction is NaN.
    """

    pass
