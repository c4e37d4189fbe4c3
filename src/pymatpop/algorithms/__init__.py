"""Core algorithms for matrix population model analysis."""

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

__all__ = [
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
]
