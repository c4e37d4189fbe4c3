"""Pytest fixtures for PyMatPop tests."""

import numpy as np
import pytest

from pymatpop import MatrixModel


@pytest.fixture
def golden_model() -> MatrixModel:
    """
    2x2 matrix with closed-form eigenvalues.

    Characteristic polynomial lambda^2 - lambda - 1 = 0, so the growth rate
    is the golden ratio phi = (1 + sqrt(5)) / 2 and the subdominant eigenvalue is -1/phi.
    """
    return MatrixModel(np.array([
        [1.0, 2.0],
        [0.5, 0.0],
    ]))


@pytest.fixture
def triangular_model() -> MatrixModel:
    """
    Upper-triangular 3x3 matrix: eigenvalues are the diagonal (0.9, 0.5, 0.4).

    Reducible: stage 0 can never move to the later stages, so the stable
    stage distribution is concentrated on stage 0.
    """
    return MatrixModel(np.array([
        [0.9, 0.2, 0.1],
        [0.0, 0.5, 0.3],
        [0.0, 0.0, 0.4],
    ]))


@pytest.fixture
def periodic_leslie_model() -> MatrixModel:
    """
    Leslie matrix with reproduction only in the last age class.

    Irreducible but imprimitive (period 3): lambda^3 = 8 * 0.5 * 0.5 = 2, so
    three eigenvalues share the magnitude 2^(1/3).
    """
    return MatrixModel(np.array([
        [0.0, 0.0, 8.0],
        [0.5, 0.0, 0.0],
        [0.0, 0.5, 0.0],
    ]))


@pytest.fixture
def giraffe_model() -> MatrixModel:
    """Three-stage giraffe matrix (calf, juvenile, adult)."""
    return MatrixModel(
        np.array([
            [0.0, 0.0, 0.24],
            [0.57, 0.0, 0.0],
            [0.0, 0.79, 0.84],
        ]),
        stage_labels=["calf", "juvenile", "adult"],
    )


@pytest.fixture
def tortoise_model() -> MatrixModel:
    """Eight-stage desert tortoise matrix (Doak et al. 1994)."""
    return MatrixModel(
        np.array([
            [0.0, 0.0, 0.0, 0.0, 0.0, 1.3, 1.98, 2.57],
            [0.716, 0.567, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
            [0.0, 0.149, 0.567, 0.0, 0.0, 0.0, 0.0, 0.0],
            [0.0, 0.0, 0.149, 0.604, 0.0, 0.0, 0.0, 0.0],
            [0.0, 0.0, 0.0, 0.235, 0.56, 0.0, 0.0, 0.0],
            [0.0, 0.0, 0.0, 0.0, 0.225, 0.678, 0.0, 0.0],
            [0.0, 0.0, 0.0, 0.0, 0.0, 0.249, 0.851, 0.0],
            [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.016, 0.86],
        ]),
        stage_labels=[
            "yearling", "juvenile 1", "juvenile 2", "immature 1",
            "immature 2", "subadult", "adult 1", "adult 2",
        ],
    )


@pytest.fixture
def plant_model() -> MatrixModel:
    """
    Three-stage model with U/F decomposition and hand-computable life history.

    Seedlings (0) survive to juveniles with probability 0.5. Juveniles stay
    with 0.2 and mature with 0.3. Adults survive with 0.8 and produce 2
    seedlings each.

        P(reach adult | seedling)   = 0.5 * 0.3 / 0.8   = 0.1875
        age at first reproduction   = 1 + 1.25 + 1      = 3.25
        life expectancy (seedling)  = 1 + 0.5 * 3.125   = 2.5625
        life expectancy (adult)     = 1 / 0.2           = 5
        R0                          = 2 * N[2, 0]       = 1.875
    """
    survival = np.array([
        [0.0, 0.0, 0.0],
        [0.5, 0.2, 0.0],
        [0.0, 0.3, 0.8],
    ])
    fecundity = np.array([
        [0.0, 0.0, 2.0],
        [0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0],
    ])
    return MatrixModel.from_components(
        survival, fecundity, stage_labels=["seedling", "juvenile", "adult"]
    )


@pytest.fixture
def stationary_model() -> MatrixModel:
    """1x1 model with U = 0.5 and F = 0.5, so lambda is exactly 1."""
    return MatrixModel.from_components(np.array([[0.5]]), np.array([[0.5]]))


@pytest.fixture
def no_reproduction_model() -> MatrixModel:
    """Decomposed model whose fecundity matrix is entirely zero."""
    survival = np.array([
        [0.3, 0.0],
        [0.4, 0.7],
    ])
    return MatrixModel.from_components(survival, np.zeros((2, 2)))
