"""Example: Analysing many matrices with per-matrix error handling.

Demographic databases mix well-formed matrices with ones that are
incomplete or biologically inconsistent. Every PyMatPop error derives from
MatPopError, so a batch loop can record the failure for one matrix and move
on to the next.
"""

import logging
import warnings

import numpy as np
from pymatpop import (
    MatPopError,
    MatrixModel,
    NumericalInstabilityWarning,
    analyze_population,
)

# Library diagnostics are silent by default; opt in to see them
logging.basicConfig(level=logging.WARNING)
logging.getLogger("pymatpop").setLevel(logging.DEBUG)

# =============================================================================
# A small "database" of (U, F) pairs
# =============================================================================

database = {
    "orchid": (
        np.array([[0.2, 0.0, 0.0], [0.3, 0.6, 0.1], [0.0, 0.2, 0.8]]),
        np.array([[0.0, 0.0, 1.2], [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]]),
    ),
    "stationary_herb": (
        np.array([[0.5]]),
        np.array([[0.5]]),
    ),
    "bad_export": (
        np.array([[0.2, np.nan], [0.5, 0.9]]),
        np.array([[0.0, 1.5], [0.0, 0.0]]),
    ),
    "overcounted_survival": (
        np.array([[0.7, 0.0], [0.6, 0.9]]),
        np.array([[0.0, 2.0], [0.0, 0.0]]),
    ),
    "immortal_adults": (
        np.array([[0.0, 0.0], [0.5, 1.0]]),
        np.array([[0.0, 0.8], [0.0, 0.0]]),
    ),
    "senescent_class": (
        np.array([[0.0, 0.0, 0.0], [0.4, 0.6, 0.0], [0.0, 0.2, 0.5]]),
        np.array([[0.0, 2.0, 0.0], [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]]),
    ),
}

# =============================================================================
# Analyse each matrix independently
# =============================================================================

results = {}
failures = {}

with warnings.catch_warnings():
    warnings.simplefilter("always", NumericalInstabilityWarning)
    for name, (survival, fecundity) in database.items():
        try:
            model = MatrixModel.from_components(survival, fecundity)
            results[name] = analyze_population(model)
        except MatPopError as e:
            failures[name] = f"{type(e).__name__}: {e}"

print("=" * 60)
print(f"Analysed {len(results)} of {len(database)} matrices")
print("=" * 60)


def _or_undefined(value, spec):
    return format(value, spec) if value is not None else "undefined"


for name, report in results.items():
    # R0 and T are None when some stage never dies (immortal_adults)
    print(f"  {name:<18} lambda={report.growth_rate:.4f} "
          f"R0={_or_undefined(report.net_reproductive_rate, '.3f')} "
          f"T={_or_undefined(report.generation_time, '.2f')} "
          f"primitive={report.is_primitive}")

print()
print("Failures:")
for name, message in failures.items():
    print(f"  {name:<18} {message[:70]}")
