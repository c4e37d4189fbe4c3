"""Example: Population analysis of a single projection matrix.

Walks through the analyses for one stage-structured model:
- Asymptotic growth rate, stable stage distribution and reproductive value
- Transient amplification of a skewed initial population
- Sensitivity and elasticity of the growth rate
- Life-history traits from the survival/fecundity decomposition
"""

import numpy as np
from pymatpop import (
    MatrixModel,
    analyze_eigen,
    analyze_population,
    analyze_sensitivity,
    compute_life_history,
    compute_transient_dynamics,
    project,
)

# =============================================================================
# Example 1: Asymptotic Dynamics
# =============================================================================

print("=" * 60)
print("Example 1: Asymptotic Dynamics")
print("=" * 60)

# A perennial plant with seed, juvenile and adult stages.
# Columns are the stage at time t, rows the stage at time t+1.
survival = np.array([
    [0.10, 0.00, 0.00],   # Seeds remaining dormant
    [0.30, 0.40, 0.00],   # Germination, juveniles staying juvenile
    [0.00, 0.35, 0.85],   # Maturation, adult survival
])
fecundity = np.array([
    [0.00, 0.00, 4.50],   # Seeds produced per adult
    [0.00, 0.00, 0.00],
    [0.00, 0.00, 0.00],
])

model = MatrixModel.from_components(
    survival, fecundity, stage_labels=["seed", "juvenile", "adult"]
)
eigen = analyze_eigen(model)

print(f"Model: {model}")
print(f"  Growth Rate (lambda): {eigen.growth_rate:.4f}")
print(f"  Damping Ratio: {eigen.damping_ratio:.4f}")
for label, w, v in zip(model.stage_labels, eigen.stable_stage_distribution,
                       eigen.reproductive_value):
    print(f"  {label:>8}: stable proportion {w:.3f}, reproductive value {v:.3f}")
print()

# =============================================================================
# Example 2: Projection and Transient Dynamics
# =============================================================================

print("=" * 60)
print("Example 2: Projection and Transient Dynamics")
print("=" * 60)

# A restoration planting of 100 adults only
initial = np.array([0.0, 0.0, 100.0])
series = project(model, initial, steps=10)

for t, (total, _) in enumerate(series):
    print(f"  t={t:2d}: N = {total:8.1f}")

transient = compute_transient_dynamics(model, initial)
print(f"\n  Max Amplification: {transient.max_amplification:.3f} "
      f"at t={transient.amplification.time_step}")
print(f"  Max Attenuation: {transient.max_attenuation:.3f} "
      f"at t={transient.attenuation.time_step}")
print(f"  Inertia: {transient.inertia:.3f}")
print()

# =============================================================================
# Example 3: Sensitivity and Elasticity
# =============================================================================

print("=" * 60)
print("Example 3: Which Vital Rates Matter Most?")
print("=" * 60)

sensitivity = analyze_sensitivity(model)
for (i, j), value in sensitivity.ranked_transitions(top=3):
    print(f"  {model.stage_label(j):>8} -> {model.stage_label(i):<8} elasticity {value:.3f}")
print(f"  Survival share of lambda: {sensitivity.survival_elasticity:.3f}")
print(f"  Fecundity share of lambda: {sensitivity.fecundity_elasticity:.3f}")
print()

# =============================================================================
# Example 4: Life History
# =============================================================================

print("=" * 60)
print("Example 4: Life History of a Seed")
print("=" * 60)

life_history = compute_life_history(model, start_stage=0)
print(f"  P(reach reproduction): {life_history.prob_survive_to_reproduction:.4f}")
print(f"  Age at first reproduction: {life_history.age_at_first_reproduction:.2f}")
print(f"  Adult life expectancy: "
      f"{life_history.mean_life_expectancy_from_reproductive_stage:.2f}")
print()

# =============================================================================
# Example 5: Everything at Once
# =============================================================================

report = analyze_population(model, initial_vector=initial)
print(report.summary())
