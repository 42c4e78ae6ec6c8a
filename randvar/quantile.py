"""
Inverse standard-normal CDF (quantile function).

Implements Wichura's AS241 ``PPND16`` rational approximation, accurate to
about 1 part in 10**16.  The central region ``|p - 0.5| <= 0.425`` uses one
rational polynomial in ``r = 0.180625 - q**2``; the tails use
``r = sqrt(-ln(min(p, 1 - p)))`` with separate polynomials for ``r <= 5``
and ``r > 5``.

Both ``Normal.icdf`` and ``Lognormal.icdf`` route through
:func:`standard_normal_icdf`, which also owns the 0/1 boundary clamp.

Ref: Wichura, M.J. (1988), "Algorithm AS 241: The Percentage Points of
the Normal Distribution", Applied Statistics 37(3), 477-484.
"""

import warnings
from typing import Sequence, Union

import numpy as np

from .audit import audit_log
from .constants import DBL_MIN, PROBABILITY_TOLERANCE
from .errors import QuantileClampWarning, ValidationError

ArrayLike = Union[float, Sequence[float], np.ndarray]

# ── AS241 coefficients (highest order first) ─────────────────────────────
# Central region, 0.075 <= p <= 0.925
_A = (
    2509.0809287301226727, 33430.575583588128105, 67265.770927008700853,
    45921.953931549871457, 13731.693765509461125, 1971.5909503065514427,
    133.14166789178437745, 3.387132872796366608,
)
_B = (
    5226.495278852854561, 28729.085735721942674, 39307.89580009271061,
    21213.794301586595867, 5394.1960214247511077, 687.1870074920579083,
    42.313330701600911252, 1.0,
)
# Intermediate tail, min(p, 1-p) >= exp(-25)
_C = (
    7.7454501427834140764e-4, 0.0227238449892691845833, 0.24178072517745061177,
    1.27045825245236838258, 3.64784832476320460504, 5.7694972214606914055,
    4.6303378461565452959, 1.42343711074968357734,
)
_D = (
    1.05075007164441684324e-9, 5.475938084995344946e-4, 0.0151986665636164571966,
    0.14810397642748007459, 0.68976733498510000455, 1.6763848301838038494,
    2.05319162663775882187, 1.0,
)
# Far tail, min(p, 1-p) < exp(-25)
_E = (
    2.01033439929228813265e-7, 2.71155556874348757815e-5, 0.0012426609473880784386,
    0.026532189526576123093, 0.29656057182850489123, 1.7848265399172913358,
    5.4637849111641143699, 6.6579046435011037772,
)
_F = (
    2.04426310338993978564e-15, 1.4215117583164458887e-7, 1.8463183175100546818e-5,
    7.868691311456132591e-4, 0.0148753612908506148525, 0.13692988092273580531,
    0.59983220655588793769, 1.0,
)

_SPLIT_CENTRAL = 0.425
_SPLIT_TAIL = 5.0
_CONST_CENTRAL = 0.180625
_CONST_TAIL = 1.6


def _horner(coeffs, x):
    val = np.full_like(x, coeffs[0])
    for c in coeffs[1:]:
        val = val * x + c
    return val


def ppnd16(p: ArrayLike) -> Union[float, np.ndarray]:
    """Evaluate the AS241 approximation without any domain checks.

    Parameters
    ----------
    p : float or array-like
        Probabilities in ``[0, 1]``.  Exact 0 and 1 are mapped through
        ``DBL_MIN`` in the tail polynomial rather than producing ``inf``.

    Returns
    -------
    float or numpy.ndarray
        Standard-normal quantiles with the same shape as *p*.
    """
    arr = np.asarray(p, dtype=np.float64)
    scalar = arr.ndim == 0
    arr = np.atleast_1d(arr)

    q = arr - 0.5
    out = np.empty_like(arr)

    central = np.abs(q) <= _SPLIT_CENTRAL
    if np.any(central):
        qc = q[central]
        r = _CONST_CENTRAL - qc * qc
        out[central] = qc * _horner(_A, r) / _horner(_B, r)

    tail = ~central
    if np.any(tail):
        qt = q[tail]
        r = np.where(qt > 0, 1.0 - arr[tail], arr[tail])
        r = np.sqrt(-np.log(np.maximum(r, DBL_MIN)))
        near = r <= _SPLIT_TAIL
        val = np.empty_like(r)
        rn = r[near] - _CONST_TAIL
        val[near] = _horner(_C, rn) / _horner(_D, rn)
        rf = r[~near] - _SPLIT_TAIL
        val[~near] = _horner(_E, rf) / _horner(_F, rf)
        out[tail] = np.where(qt < 0.0, -val, val)

    if scalar:
        return float(out[0])
    return out


def clamp_probability(p: ArrayLike) -> np.ndarray:
    """Validate probabilities and clamp exact 0/1 onto ``DBL_MIN``.

    Raises ``ValidationError`` for values outside ``[0, 1]`` (or NaN).
    Values within ``PROBABILITY_TOLERANCE`` of a boundary are replaced by
    ``DBL_MIN`` / ``1 - DBL_MIN`` and a ``QuantileClampWarning`` is issued.
    """
    arr = np.asarray(p, dtype=np.float64)
    if np.any(np.isnan(arr)) or np.any((arr < 0.0) | (arr > 1.0)):
        raise ValidationError(
            "The probability argument for icdf() must lie in [0, 1]"
        )
    low = arr < PROBABILITY_TOLERANCE
    high = (1.0 - arr) < PROBABILITY_TOLERANCE
    if np.any(low):
        msg = ("icdf(0) would return -inf; DBL_MIN "
               f"({DBL_MIN:.3e}) was used instead")
        warnings.warn(msg, QuantileClampWarning, stacklevel=3)
        audit_log.log_warning(msg, f"{int(np.count_nonzero(low))} value(s) clamped")
    if np.any(high):
        msg = ("icdf(1) would return +inf; 1 - DBL_MIN "
               f"({DBL_MIN:.3e}) was used instead")
        warnings.warn(msg, QuantileClampWarning, stacklevel=3)
        audit_log.log_warning(msg, f"{int(np.count_nonzero(high))} value(s) clamped")
    if np.any(low) or np.any(high):
        arr = np.where(low, DBL_MIN, np.where(high, 1.0 - DBL_MIN, arr))
    return arr


def standard_normal_icdf(p: ArrayLike) -> Union[float, np.ndarray]:
    """Quantile of the standard normal distribution.

    Scalars in, float out; arrays in, ``numpy.ndarray`` out.
    """
    return ppnd16(clamp_probability(p))
