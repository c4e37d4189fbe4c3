"""Type aliases for PyMatPop."""

from typing import Sequence, TypeAlias

import numpy as np
from numpy.typing import ArrayLike, NDArray

# Matrix types
FloatArray: TypeAlias = NDArray[np.float64]
BoolArray: TypeAlias = NDArray[np.bool_]
ComplexArray: TypeAlias = NDArray[np.complex128]

# Anything np.asarray turns into a float matrix or vector
MatrixLike: TypeAlias = ArrayLike
VectorLike: TypeAlias = ArrayLike

StageLabels: TypeAlias = Sequence[str]

# (row, column) position of a transition in the projection matrix
Transition: TypeAlias = tuple[int, int]
