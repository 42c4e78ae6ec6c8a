"""
Abstract random-variable interface.

The variant set is closed: ``Normal`` and ``Lognormal`` (parametric),
``Unweighted`` and ``Weighted`` (nonparametric).  All four expose the same
summary accessors and sampling entry points so a
``RandomVariableContainer`` can hold any mix of them.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np

from .data_model import Statistics


class RandomVariable(ABC):
    """Capability set shared by every random variable."""

    # ── Summary statistics ───────────────────────────────────────────────

    @abstractmethod
    def mean(self) -> float:
        pass

    @abstractmethod
    def median(self) -> float:
        pass

    @abstractmethod
    def std(self) -> float:
        pass

    @abstractmethod
    def mode(self) -> float:
        pass

    def variance(self) -> float:
        """Variance, ``std() ** 2`` unless a subclass knows better."""
        sd = self.std()
        return sd * sd

    def stats(self) -> Statistics:
        """Return the ``{mean, mode, std}`` snapshot used for moment fitting."""
        return Statistics(mean=self.mean(), mode=self.mode(), std=self.std())

    # ── Sampling ─────────────────────────────────────────────────────────

    @abstractmethod
    def sample(self, n: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """Draw *n* values using the variable's own sampler."""
        pass

    @abstractmethod
    def sample_single(self, rng: Optional[np.random.Generator] = None) -> float:
        """Draw one value using the variable's own sampler."""
        pass

    @abstractmethod
    def sample_icdf(self, n: int, v: Sequence[float]) -> np.ndarray:
        """Map *n* externally supplied probabilities through the quantile function."""
        pass

    @abstractmethod
    def sample_single_icdf(self, p: float) -> float:
        """Map one probability through the quantile function."""
        pass
