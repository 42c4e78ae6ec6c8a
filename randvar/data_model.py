"""
Data model for randvar.

``Statistics`` is the lossy ``{mean, mode, std}`` snapshot used to seed a
moment fit.  ``SimulationSettings`` and ``SimulationResults`` carry the
configuration and the summary of one ``run_simulation`` call, mirroring
the settings/results split used by the analysis tools.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Optional, TYPE_CHECKING

from .constants import (
    DEFAULT_COVERAGE, DEFAULT_N_TRIALS, OUTPUT_KINDS, OUTPUT_UNWEIGHTED,
    SAMPLING_MC, SAMPLING_METHODS,
)
from .errors import ValidationError

if TYPE_CHECKING:
    from .nonparametric import NonParametric


@dataclass(frozen=True)
class Statistics:
    """Summary of a distribution used to seed a moment fit.

    Parameters
    ----------
    mean : float
        Arithmetic mean.
    mode : float
        Most frequent value (or the analytic mode for parametric shapes).
    std : float
        Standard deviation.
    """
    mean: float
    mode: float
    std: float


@dataclass
class SimulationSettings:
    """All simulation configuration settings."""
    n_trials: int = DEFAULT_N_TRIALS
    seed: Optional[int] = None
    sampling_method: str = SAMPLING_MC
    output_kind: str = OUTPUT_UNWEIGHTED
    coverage: float = DEFAULT_COVERAGE
    one_sided: bool = False

    def validate(self):
        """Raise ``ValidationError`` if any setting is out of range."""
        if int(self.n_trials) != self.n_trials or self.n_trials < 0:
            raise ValidationError(
                f"n_trials must be a non-negative integer, got {self.n_trials!r}"
            )
        if self.sampling_method not in SAMPLING_METHODS:
            raise ValidationError(
                f"Unknown sampling method {self.sampling_method!r}; "
                f"expected one of {SAMPLING_METHODS}"
            )
        if self.output_kind not in OUTPUT_KINDS:
            raise ValidationError(
                f"Unknown output kind {self.output_kind!r}; "
                f"expected one of {OUTPUT_KINDS}"
            )
        if not 0.0 < self.coverage < 1.0:
            raise ValidationError(
                f"coverage must lie strictly between 0 and 1, got {self.coverage}"
            )

    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def from_dict(d: dict) -> 'SimulationSettings':
        return SimulationSettings(**{k: v for k, v in d.items()
                                     if k in SimulationSettings.__dataclass_fields__})


@dataclass
class SimulationResults:
    """Stores the summary of one simulation run."""
    n_trials: int = 0
    sampling_method: str = SAMPLING_MC
    combined_mean: float = 0.0
    combined_std: float = 0.0
    lower_bound: float = 0.0
    upper_bound: float = 0.0
    # Coverage-matched percentiles (computed from settings)
    lower_pct: float = 2.5
    upper_pct: float = 97.5
    distribution: Optional['NonParametric'] = None
    notes: List[str] = field(default_factory=list)
    computed: bool = False

    def to_dict(self) -> dict:
        d = {}
        for k, v in self.__dict__.items():
            if k == 'distribution':
                continue  # Don't carry the sample set itself
            d[k] = list(v) if isinstance(v, list) else v
        return d
