"""
randvar v1.0.0

Parametric and empirical random variables with Monte Carlo and Latin
Hypercube propagation through user-supplied combining functions.

Uncertain scalar quantities are held either in closed form (``Normal``,
``Lognormal``) or as observed samples (``Unweighted``, ``Weighted``).
``translation`` converts between the two and propagates a
``RandomVariableContainer`` into a derived empirical distribution.
"""

APP_NAME = "randvar"
APP_VERSION = "1.0.0"
APP_DATE = "2026-10-19"
__version__ = APP_VERSION

from .audit import AuditLog, audit_log
from .container import RandomVariableContainer
from .data_model import SimulationResults, SimulationSettings, Statistics
from .errors import (
    NotFoundError,
    OutOfRangeError,
    QuantileClampWarning,
    RandomVariableError,
    UnsupportedOperationError,
    ValidationError,
)
from .nonparametric import NonParametric, Unweighted, Weighted
from .parametric import Lognormal, Normal, Parametric
from .random_variable import RandomVariable
from .simulation import run_simulation, summarize_samples
from .translation import (
    fit,
    fit_lognormal,
    fit_normal,
    sample,
    sample_lh,
    sample_mc,
    sample_unweighted,
    sample_weighted,
)

__all__ = [
    "AuditLog",
    "audit_log",
    "RandomVariable",
    "Parametric",
    "Normal",
    "Lognormal",
    "NonParametric",
    "Unweighted",
    "Weighted",
    "RandomVariableContainer",
    "Statistics",
    "SimulationSettings",
    "SimulationResults",
    "RandomVariableError",
    "ValidationError",
    "NotFoundError",
    "OutOfRangeError",
    "UnsupportedOperationError",
    "QuantileClampWarning",
    "sample",
    "sample_unweighted",
    "sample_weighted",
    "fit",
    "fit_normal",
    "fit_lognormal",
    "sample_mc",
    "sample_lh",
    "run_simulation",
    "summarize_samples",
]
