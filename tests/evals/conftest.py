"""
Pathological fixtures for EVALs - matrices that stress the numerics.

Each fixture creates a model that targets a specific numerical or
structural weakness.
"""

import numpy as np
import pytest

from pymatpop import MatrixModel


# =============================================================================
# SINGULAR AND DEFECTIVE MATRICES
# =============================================================================


@pytest.fixture
def nilpotent_model():
    """Strictly lower-triangular: every eigenvalue is zero, eigenvectors orthogonal."""
    return MatrixModel(np.array([
        [0.0, 0.0],
        [1.0, 0.0],
    ]))


@pytest.fixture
def immortal_adult_model():
    """Adults survive with probability 1: I - U is singular."""
    survival = np.array([
        [0.0, 0.0],
        [0.6, 1.0],
    ])
    fecundity = np.array([
        [0.0, 0.5],
        [0.0, 0.0],
    ])
    return MatrixModel.from_components(survival, fecundity, stage_labels=["juvenile", "adult"])


@pytest.fixture
def post_reproductive_model():
    """
    Senescent stage 3 is reached from adults but never reproduces again.

    Stage 3 cannot reach reproduction, so the conditioning matrix D is
    singular in that column.
    """
    survival = np.array([
        [0.0, 0.0, 0.0, 0.0],
        [0.4, 0.5, 0.0, 0.0],
        [0.0, 0.3, 0.6, 0.0],
        [0.0, 0.0, 0.2, 0.7],
    ])
    fecundity = np.array([
        [0.0, 0.0, 3.0, 0.0],
        [0.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 0.0],
    ])
    return MatrixModel.from_components(
        survival, fecundity, stage_labels=["seed", "juvenile", "adult", "senescent"]
    )


# =============================================================================
# EXTREME VALUES
# =============================================================================


@pytest.fixture
def huge_fecundity_model():
    """Fecundity of 1e6 (fish, trees): lambda spans many orders of magnitude."""
    survival = np.array([
        [0.0, 0.0, 0.0],
        [1e-4, 0.0, 0.0],
        [0.0, 0.05, 0.9],
    ])
    fecundity = np.array([
        [0.0, 0.0, 1e6],
        [0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0],
    ])
    return MatrixModel.from_components(survival, fecundity)


@pytest.fixture
def near_immortal_model():
    """Survival within 1e-9 of 1: life expectancy ~1e9 but finite."""
    survival = np.array([
        [0.0, 0.0],
        [0.5, 1.0 - 1e-9],
    ])
    fecundity = np.array([
        [0.0, 1e-9],
        [0.0, 0.0],
    ])
    return MatrixModel.from_components(survival, fecundity)


@pytest.fixture
def large_random_model():
    """50-stage dense random matrix."""
    rng = np.random.default_rng(2024)
    survival = rng.uniform(0.0, 1.0, size=(50, 50))
    survival = survival / survival.sum(axis=0) * rng.uniform(0.3, 0.95, size=50)
    fecundity = np.zeros((50, 50))
    fecundity[0, 25:] = rng.uniform(0.5, 5.0, size=25)
    return MatrixModel.from_components(survival, fecundity)
