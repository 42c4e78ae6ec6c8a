"""
Translation between parametric and empirical random variables, and
propagation of a ``RandomVariableContainer`` by Simple Monte Carlo or
Latin Hypercube Sampling.

All functions take an optional ``numpy.random.Generator``.  Passing one
makes the result reproducible and avoids re-seeding on every call; when
omitted a fresh generator is created.

Ref: McKay, Beckman & Conover (1979);
Owen, A.B., "Monte Carlo theory, methods and examples", Ch. 10
(variance reduction, Latin hypercube sampling).
"""

from typing import Optional, Type, Union

import numpy as np

from .audit import audit_log
from .constants import OUTPUT_UNWEIGHTED, OUTPUT_WEIGHTED
from .container import RandomVariableContainer
from .errors import ValidationError
from .nonparametric import NonParametric, Unweighted, Weighted
from .parametric import Lognormal, Normal, Parametric

EmpiricalKind = Union[Type[NonParametric], str]
ParametricKind = Union[Type[Parametric], str]

_EMPIRICAL_KINDS = {
    OUTPUT_UNWEIGHTED: Unweighted,
    OUTPUT_WEIGHTED: Weighted,
}
_PARAMETRIC_KINDS = {
    "Normal": Normal,
    "Lognormal": Lognormal,
}


def _resolve_kind(kind, table, base):
    if isinstance(kind, str):
        try:
            return table[kind]
        except KeyError:
            raise ValidationError(
                f"Unknown kind {kind!r}; expected one of {sorted(table)}"
            ) from None
    if isinstance(kind, type) and issubclass(kind, base) and kind is not base:
        return kind
    raise ValidationError(f"Unsupported kind {kind!r}")


def _check_n(n) -> int:
    if int(n) != n or n < 0:
        raise ValidationError(f"Sample count must be a non-negative integer, got {n!r}")
    return int(n)


# ── Parametric <-> empirical ─────────────────────────────────────────────

def sample(source: Parametric, n: int, kind: EmpiricalKind = Unweighted,
           rng: Optional[np.random.Generator] = None) -> NonParametric:
    """Draw *n* values from *source*'s native sampler into an empirical set.

    Parameters
    ----------
    source : Parametric
        Distribution to draw from.
    n : int
        Number of draws.
    kind : {Unweighted, Weighted} or str
        Representation of the returned sample set.
    rng : numpy.random.Generator, optional
        Random source.
    """
    if not isinstance(source, Parametric):
        raise ValidationError(
            f"sample() needs a parametric source, got {type(source).__name__}"
        )
    cls = _resolve_kind(kind, _EMPIRICAL_KINDS, NonParametric)
    n = _check_n(n)
    draws = source.sample(n, rng=rng)
    audit_log.log_computation(
        "SAMPLE", f"{n} draws from {source!r} into {cls.__name__}")
    return cls(draws)


def sample_unweighted(source: Parametric, n: int,
                      rng: Optional[np.random.Generator] = None) -> Unweighted:
    return sample(source, n, kind=Unweighted, rng=rng)


def sample_weighted(source: Parametric, n: int,
                    rng: Optional[np.random.Generator] = None) -> Weighted:
    return sample(source, n, kind=Weighted, rng=rng)


def fit(source: NonParametric, kind: ParametricKind = Normal) -> Parametric:
    """Fit a parametric distribution to *source* by moment matching.

    The ``{mean, mode, std}`` snapshot of *source* is handed to
    ``kind.from_statistics``.
    """
    if not isinstance(source, NonParametric):
        raise ValidationError(
            f"fit() needs an empirical source, got {type(source).__name__}"
        )
    cls = _resolve_kind(kind, _PARAMETRIC_KINDS, Parametric)
    snapshot = source.stats()
    fitted = cls.from_statistics(snapshot)
    audit_log.log_computation(
        "FIT",
        f"{cls.__name__} fitted to {source!r}: mean={snapshot.mean:.6g}, "
        f"std={snapshot.std:.6g} -> {fitted!r}",
    )
    return fitted


def fit_normal(source: NonParametric) -> Normal:
    return fit(source, kind=Normal)


def fit_lognormal(source: NonParametric) -> Lognormal:
    return fit(source, kind=Lognormal)


# ── Container propagation ────────────────────────────────────────────────

def _draw_per_iteration(container: RandomVariableContainer, draws: np.ndarray):
    """Fill the columns of non-parametric variables one iteration at a time.

    Slots are visited in order inside each iteration, so an instance that
    fills several slots hands out consecutive stored values across them.
    """
    slots = [(i, rv) for i, rv in enumerate(container)
             if not isinstance(rv, Parametric)]
    if not slots:
        return
    for j in range(draws.shape[0]):
        for i, rv in slots:
            draws[j, i] = rv.sample_single()


def sample_mc(container: RandomVariableContainer, n: int,
              kind: EmpiricalKind = Unweighted,
              rng: Optional[np.random.Generator] = None) -> NonParametric:
    """Simple Monte Carlo propagation.

    Every iteration takes one independent native draw from each variable
    (parametric: distribution draw; empirical: cyclic replay) and applies
    the container's equation to the resulting vector.

    Returns
    -------
    NonParametric
        *n* combined outputs in the requested representation.
    """
    cls = _resolve_kind(kind, _EMPIRICAL_KINDS, NonParametric)
    n = _check_n(n)
    container.check_ready()
    if rng is None:
        rng = np.random.default_rng()

    # Column i holds the n draws of variable i; rows are iterations.
    draws = np.empty((n, len(container)), dtype=np.float64)
    for i, rv in enumerate(container):
        if isinstance(rv, Parametric):
            draws[:, i] = rv.sample(n, rng=rng)
    _draw_per_iteration(container, draws)

    outputs = container.evaluate(draws)
    audit_log.log_computation(
        "SAMPLE_MC", f"{n} iterations over {len(container)} random variable(s)")
    return cls(outputs)


def latin_hypercube_probabilities(n: int, k: int,
                                  rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Stratified probabilities for *k* variables and *n* iterations.

    Row ``i`` is ``(perm_i + u_i) / n`` where ``u_i`` are ``n`` uniforms on
    ``[0, 1)`` and ``perm_i`` an independent permutation of ``0..n-1``.
    Each row hits every stratum ``[j/n, (j+1)/n)`` exactly once, and the
    independent permutations decorrelate the rows.

    Returns
    -------
    numpy.ndarray of shape (k, n)
    """
    if rng is None:
        rng = np.random.default_rng()
    u = rng.uniform(0.0, 1.0, size=(k, n))
    x = np.empty((k, n), dtype=np.float64)
    for i in range(k):
        perm = rng.permutation(n)
        x[i] = (perm + u[i]) / n
    return x


def sample_lh(container: RandomVariableContainer, n: int,
              kind: EmpiricalKind = Unweighted,
              rng: Optional[np.random.Generator] = None) -> NonParametric:
    """Latin Hypercube propagation.

    Stratified probabilities are pushed through each parametric variable's
    quantile function, so each marginal is exactly stratified.  Empirical
    variables have no quantile function and fall back to their cyclic
    replay.  The equation is then applied per iteration.
    """
    cls = _resolve_kind(kind, _EMPIRICAL_KINDS, NonParametric)
    n = _check_n(n)
    container.check_ready()
    if rng is None:
        rng = np.random.default_rng()

    k = len(container)
    probs = latin_hypercube_probabilities(n, k, rng=rng)
    draws = np.empty((n, k), dtype=np.float64)
    for i, rv in enumerate(container):
        if isinstance(rv, Parametric):
            draws[:, i] = rv.sample_icdf(n, probs[i])
    _draw_per_iteration(container, draws)

    outputs = container.evaluate(draws)
    audit_log.log_computation(
        "SAMPLE_LH", f"{n} strata over {k} random variable(s)")
    return cls(outputs)
