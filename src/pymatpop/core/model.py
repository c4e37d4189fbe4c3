"""The matrix abstraction shared by every analysis.

A MatrixModel wraps one population projection matrix A and, optionally, its
decomposition into a survival matrix U and a fecundity matrix F with
A = U + F. All validation happens up front so downstream routines can assume
a square, finite, non-negative matrix.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pymatpop.core.config import DEFAULT_TOLERANCE
from pymatpop.core.exceptions import (
    DecompositionError,
    DomainError,
    InvalidArgumentError,
    NaNInfError,
    ShapeError,
)
from pymatpop.core.types import MatrixLike, StageLabels


def _position_preview(positions: NDArray[np.intp], limit: int = 5) -> str:
    preview = positions[:limit].tolist()
    return str(preview) + ("..." if len(positions) > limit else "")


@dataclass(frozen=True, eq=False)
class MatrixModel:
    """
    A validated population projection matrix, optionally split into U and F.

    Construct from the full matrix, from the survival/fecundity pair, or from
    all three (in which case U + F must reproduce the full matrix within
    `tolerance`). The stored arrays are read-only copies, so a model can be
    shared between threads without locking.

    Attributes:
        matrix: n x n projection matrix A
        survival: Optional n x n survival matrix U (column sums <= 1)
        fecundity: Optional n x n fecundity matrix F
        stage_labels: Optional stage names, used only in messages and summaries
        tolerance: Tolerance for the decomposition and survival checks

    Raises:
        NaNInfError: If any matrix contains NaN or Inf
        ShapeError: If a matrix is not square or the sizes disagree
        DomainError: If an entry is negative or a U column sum exceeds 1
        DecompositionError: If U + F differs from the supplied matrix
        InvalidArgumentError: If only one of U/F is supplied, or nothing is

    Example:
        >>> import numpy as np
        >>> model = MatrixModel(np.array([[0.0, 0.0, 0.24],
        ...                               [0.57, 0.0, 0.0],
        ...                               [0.0, 0.79, 0.84]]),
        ...                     stage_labels=["calf", "juvenile", "adult"])
        >>> model.dimension
        3
    """

    matrix: NDArray[np.float64] | None = None
    survival: NDArray[np.float64] | None = None
    fecundity: NDArray[np.float64] | None = None
    stage_labels: tuple[str, ...] | None = None
    tolerance: float = field(default=DEFAULT_TOLERANCE, repr=False)

    def __post_init__(self) -> None:
        """Convert inputs to read-only float64 arrays and validate them."""
        if (self.survival is None) != (self.fecundity is None):
            raise InvalidArgumentError(
                "survival and fecundity must be supplied together. "
                "Hint: pass a zero matrix for the missing component if it is "
                "genuinely absent."
            )
        if self.matrix is None and self.survival is None:
            raise InvalidArgumentError(
                "Must provide a projection matrix or a survival/fecundity pair."
            )

        matrix = self._as_square("matrix", self.matrix) if self.matrix is not None else None
        survival = fecundity = None
        if self.survival is not None:
            survival = self._as_square("survival", self.survival)
            fecundity = self._as_square("fecundity", self.fecundity)
            if survival.shape != fecundity.shape:
                raise ShapeError(
                    f"survival shape {survival.shape} does not match "
                    f"fecundity shape {fecundity.shape}."
                )
            if matrix is None:
                matrix = survival + fecundity
            elif matrix.shape != survival.shape:
                raise ShapeError(
                    f"matrix shape {matrix.shape} does not match "
                    f"survival/fecundity shape {survival.shape}."
                )

        for name, arr in (("matrix", matrix), ("survival", survival), ("fecundity", fecundity)):
            if arr is not None:
                arr.flags.writeable = False
                object.__setattr__(self, name, arr)

        if self.stage_labels is not None:
            labels = tuple(str(label) for label in self.stage_labels)
            if len(labels) != self.dimension:
                raise ShapeError(
                    f"Got {len(labels)} stage labels for a {self.dimension}-stage matrix."
                )
            object.__setattr__(self, "stage_labels", labels)

        if survival is not None:
            self._validate_decomposition()

    @staticmethod
    def _as_square(name: str, data: MatrixLike) -> NDArray[np.float64]:
        """Return a float64 copy of `data`, checked for shape and domain."""
        arr = np.array(data, dtype=np.float64)
        if arr.ndim != 2:
            raise ShapeError(
                f"{name} must be a 2D array, got {arr.ndim}D with shape {arr.shape}."
            )
        if arr.shape[0] != arr.shape[1]:
            raise ShapeError(
                f"{name} must be square, got shape {arr.shape}. "
                f"Hint: projection matrices map n stages to n stages."
            )
        if arr.shape[0] < 1:
            raise ShapeError(f"{name} must have at least one stage.")
        if not np.all(np.isfinite(arr)):
            bad = np.argwhere(~np.isfinite(arr))
            raise NaNInfError(
                f"Found {len(bad)} NaN/Inf values in {name} at positions: "
                f"{_position_preview(bad)}."
            )
        if np.any(arr < 0):
            bad = np.argwhere(arr < 0)
            raise DomainError(
                f"Found {len(bad)} negative entries in {name} at positions: "
                f"{_position_preview(bad)}. Transition rates and fecundities "
                f"must be non-negative."
            )
        return arr

    def _validate_decomposition(self) -> None:
        """Check U + F == A and that U columns are survival probabilities."""
        deviation = np.abs(self.survival + self.fecundity - self.matrix)
        if np.any(deviation > self.tolerance):
            bad = np.argwhere(deviation > self.tolerance)
            raise DecompositionError(
                f"survival + fecundity differs from matrix at {len(bad)} positions "
                f"(max deviation {deviation.max():.3g}, tolerance {self.tolerance:g}): "
                f"{_position_preview(bad)}."
            )

        col_sums = self.survival.sum(axis=0)
        over = np.flatnonzero(col_sums > 1.0 + self.tolerance)
        if over.size:
            stages = ", ".join(
                f"{self.stage_label(j)} ({col_sums[j]:.4f})" for j in over[:5]
            )
            raise DomainError(
                f"Survival column sums exceed 1 for {over.size} stage(s): {stages}. "
                f"Each column of U is the probability of surviving out of a stage "
                f"and cannot exceed 1."
            )

    @classmethod
    def from_components(
        cls,
        survival: MatrixLike,
        fecundity: MatrixLike,
        stage_labels: StageLabels | None = None,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> MatrixModel:
        """Create a model from U and F; the full matrix is their sum."""
        return cls(
            survival=survival,
            fecundity=fecundity,
            stage_labels=stage_labels,
            tolerance=tolerance,
        )

    @classmethod
    def from_dataframe(
        cls,
        df: Any,  # pandas.DataFrame
        fecundity_df: Any | None = None,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> MatrixModel:
        """
        Create a model from a square pandas DataFrame.

        Stage labels are taken from the index. When `fecundity_df` is given,
        `df` is read as the survival matrix U and the full matrix is U + F.

        Args:
            df: Square DataFrame (projection matrix, or U if fecundity_df given)
            fecundity_df: Optional square DataFrame with the fecundity matrix
            tolerance: Decomposition tolerance

        Returns:
            MatrixModel instance

        Example:
            >>> import pandas as pd
            >>> stages = ["juvenile", "adult"]
            >>> df = pd.DataFrame([[0.0, 1.5], [0.4, 0.8]], index=stages, columns=stages)
            >>> MatrixModel.from_dataframe(df).stage_labels
            ('juvenile', 'adult')
        """
        labels = [str(label) for label in df.index]
        if list(df.columns) != list(df.index):
            raise ShapeError(
                "DataFrame columns must match its index (stage labels). "
                f"Got index {labels[:5]} and columns {[str(c) for c in df.columns[:5]]}."
            )
        if fecundity_df is None:
            return cls(matrix=df.to_numpy(dtype=np.float64), stage_labels=labels,
                       tolerance=tolerance)
        fecundity = fecundity_df.reindex(index=df.index, columns=df.columns)
        return cls(
            survival=df.to_numpy(dtype=np.float64),
            fecundity=fecundity.to_numpy(dtype=np.float64),
            stage_labels=labels,
            tolerance=tolerance,
        )

    @property
    def dimension(self) -> int:
        """Number of stages n."""
        return self.matrix.shape[0]

    @property
    def entries(self) -> NDArray[np.float64]:
        """Writable copy of the projection matrix."""
        return self.matrix.copy()

    @property
    def has_decomposition(self) -> bool:
        """True if the model was built with survival and fecundity matrices."""
        return self.survival is not None

    @property
    def decomposition(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """
        The (U, F) pair.

        Raises:
            InvalidArgumentError: If the model has no decomposition
        """
        if not self.has_decomposition:
            raise InvalidArgumentError(
                "This model has no survival/fecundity decomposition. "
                "Hint: build it with MatrixModel.from_components(U, F)."
            )
        return self.survival, self.fecundity

    @property
    def has_reproduction(self) -> bool:
        """True if the fecundity matrix has at least one positive entry."""
        return self.has_decomposition and bool(np.any(self.fecundity > 0))

    def stage_label(self, index: int) -> str:
        """Label of stage `index`, or a positional name if unlabeled."""
        if self.stage_labels is not None:
            return self.stage_labels[index]
        return f"stage {index}"

    def __repr__(self) -> str:
        """Compact string representation."""
        kind = "U+F" if self.has_decomposition else "A"
        return f"MatrixModel(n={self.dimension}, {kind})"
