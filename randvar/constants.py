"""
Constants for randvar.

Centralises numeric limits, default distribution parameters, and the
sampling-method / output-kind labels accepted by ``SimulationSettings``.
"""

import sys

# ── Floating-point limits ────────────────────────────────────────────────
# Smallest positive normal double; icdf(0) and icdf(1) are clamped onto it.
DBL_MIN = sys.float_info.min
# Probabilities this close to 0 or 1 are treated as the boundary itself.
PROBABILITY_TOLERANCE = 2.0 * sys.float_info.epsilon

# ── Default parametric parameters ────────────────────────────────────────
DEFAULT_MU = 0.0
DEFAULT_SIGMA = 0.1

# ── Sampling methods (same labels as the analysis settings) ──────────────
SAMPLING_MC = "Monte Carlo (Random)"
SAMPLING_LHS = "Latin Hypercube (LHS)"
SAMPLING_METHODS = [SAMPLING_MC, SAMPLING_LHS]

# ── Empirical output representations ─────────────────────────────────────
OUTPUT_UNWEIGHTED = "Unweighted"
OUTPUT_WEIGHTED = "Weighted"
OUTPUT_KINDS = [OUTPUT_UNWEIGHTED, OUTPUT_WEIGHTED]

# ── Default simulation configuration ─────────────────────────────────────
DEFAULT_N_TRIALS = 100000
DEFAULT_COVERAGE = 0.95
