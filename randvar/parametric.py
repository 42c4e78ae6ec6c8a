"""
Parametric (closed-form) distributions.

``Normal`` and ``Lognormal`` are both described by a location ``mu`` and a
strictly positive scale ``sigma``.  For ``Normal`` these are the mean and
standard deviation of the variable itself; for ``Lognormal`` they are the
mean and standard deviation of ``ln(X)``.

Density and cumulative functions come from :mod:`scipy.stats`; the
quantile function is the AS241 approximation in :mod:`randvar.quantile`.
Native sampling draws from a ``numpy.random.Generator`` supplied by the
caller (a fresh one is created when none is given).
"""

import math
from abc import abstractmethod
from typing import Optional, Sequence

import numpy as np
from scipy.stats import lognorm, norm

from .constants import DEFAULT_MU, DEFAULT_SIGMA
from .data_model import Statistics
from .errors import ValidationError
from .quantile import standard_normal_icdf
from .random_variable import RandomVariable


class Parametric(RandomVariable):
    """Two-parameter distribution with analytic pdf/cdf/icdf."""

    def __init__(self, mu: float = DEFAULT_MU, sigma: float = DEFAULT_SIGMA):
        self._mu = float(mu)
        self.set_sigma(sigma)

    @classmethod
    def from_params(cls, params: Sequence[float]):
        """Build from a ``[mu, sigma]`` parameter vector."""
        params = list(params)
        if len(params) != 2:
            raise ValidationError(
                f"{cls.__name__} can only be created from a size 2 parameter "
                f"vector, got {len(params)} value(s)"
            )
        return cls(params[0], params[1])

    @classmethod
    @abstractmethod
    def from_statistics(cls, s: Statistics):
        """Build the distribution whose moments match *s*."""

    # ── Parameters ───────────────────────────────────────────────────────

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def sigma(self) -> float:
        return self._sigma

    def set_mu(self, mu: float):
        self._mu = float(mu)

    def set_sigma(self, sigma: float):
        sigma = float(sigma)
        if not sigma > 0:
            raise ValidationError(
                f"Sigma parameter of a {type(self).__name__} distribution "
                f"cannot be negative or zero, got {sigma}"
            )
        self._sigma = sigma

    def get_mu(self) -> float:
        return self._mu

    def get_sigma(self) -> float:
        return self._sigma

    def get_params(self) -> list:
        return [self._mu, self._sigma]

    # ── Distribution functions ───────────────────────────────────────────

    @abstractmethod
    def pdf(self, x: float) -> float:
        """Probability density at *x*."""

    @abstractmethod
    def cdf(self, x: float) -> float:
        """Cumulative probability at *x*."""

    @abstractmethod
    def icdf(self, p: float) -> float:
        """Quantile function; probabilities at 0 or 1 are clamped."""

    # ── Sampling ─────────────────────────────────────────────────────────

    def sample_single(self, rng: Optional[np.random.Generator] = None) -> float:
        return float(self.sample(1, rng=rng)[0])

    def sample_icdf(self, n: int, v: Sequence[float]) -> np.ndarray:
        probs = np.asarray(v, dtype=np.float64).ravel()
        if probs.size != n:
            raise ValidationError(
                f"Size of probability vector ({probs.size}) must equal n ({n})"
            )
        return np.asarray(self.icdf(probs), dtype=np.float64).reshape(n)

    def sample_single_icdf(self, p: float) -> float:
        return float(self.icdf(p))

    def __repr__(self):
        return f"{type(self).__name__}(mu={self._mu!r}, sigma={self._sigma!r})"

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.get_params() == other.get_params()

    __hash__ = None


class Normal(Parametric):
    """Normal (Gaussian) distribution, ``mu`` = mean, ``sigma`` = std."""

    @classmethod
    def from_statistics(cls, s: Statistics) -> 'Normal':
        return cls(s.mean, s.std)

    def mean(self) -> float:
        return self._mu

    def median(self) -> float:
        return self._mu

    def mode(self) -> float:
        return self._mu

    def std(self) -> float:
        return self._sigma

    def pdf(self, x: float) -> float:
        return float(norm.pdf(x, loc=self._mu, scale=self._sigma))

    def cdf(self, x: float) -> float:
        return float(norm.cdf(x, loc=self._mu, scale=self._sigma))

    def icdf(self, p):
        """Quantile function; accepts a scalar or an array of probabilities.

        ``p`` must lie in ``[0, 1]``.  Exact 0 and 1 are clamped onto
        ``DBL_MIN`` with a ``QuantileClampWarning`` rather than returning
        infinities.
        """
        return standard_normal_icdf(p) * self._sigma + self._mu

    def sample(self, n: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
        if rng is None:
            rng = np.random.default_rng()
        return rng.normal(self._mu, self._sigma, int(n))


class Lognormal(Parametric):
    """
    Log-normal distribution.

    ``mu`` and ``sigma`` are the location and scale of ``ln(X)``, not the
    mean and standard deviation of ``X``.  The support is ``x > 0``.
    """

    @classmethod
    def from_statistics(cls, s: Statistics) -> 'Lognormal':
        """Invert the log-normal mean/variance relations.

        ``mu = ln(mean / sqrt(1 + std²/mean²))`` and
        ``sigma = sqrt(ln(1 + std²/mean²))``.
        """
        if s.mean == 0:
            raise ValidationError("Lognormal fit requires a non-zero mean")
        ratio = 1.0 + (s.std ** 2) / (s.mean ** 2)
        if ratio < 0:
            raise ValidationError("Square root cannot be taken of a negative")
        location = s.mean / math.sqrt(ratio)
        if location <= 0:
            raise ValidationError(
                f"Lognormal fit requires a positive mean, got {s.mean}"
            )
        radicand = math.log(ratio)
        if radicand < 0:
            raise ValidationError("Square root cannot be taken of a negative")
        return cls(math.log(location), math.sqrt(radicand))

    def mean(self) -> float:
        return math.exp(self._mu + self._sigma ** 2 / 2)

    def median(self) -> float:
        return math.exp(self._mu)

    def mode(self) -> float:
        return math.exp(self._mu - self._sigma ** 2)

    def variance(self) -> float:
        return (math.exp(self._sigma ** 2) - 1) * math.exp(2 * self._mu + self._sigma ** 2)

    def std(self) -> float:
        return math.sqrt(self.variance())

    def _check_support(self, x: float, name: str):
        if x <= 0:
            raise ValidationError(f"Lognormal.{name}() cannot accept an input <= 0, got {x}")

    def pdf(self, x: float) -> float:
        self._check_support(x, "pdf")
        return float(lognorm.pdf(x, s=self._sigma, scale=math.exp(self._mu)))

    def cdf(self, x: float) -> float:
        self._check_support(x, "cdf")
        return float(lognorm.cdf(x, s=self._sigma, scale=math.exp(self._mu)))

    def icdf(self, p):
        """Quantile function: ``exp(z * sigma + mu)`` with ``z`` the standard-normal quantile."""
        return np.exp(standard_normal_icdf(p) * self._sigma + self._mu)

    def sample(self, n: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
        if rng is None:
            rng = np.random.default_rng()
        return rng.lognormal(self._mu, self._sigma, int(n))
