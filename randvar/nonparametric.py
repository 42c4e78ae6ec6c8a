"""
Empirical (nonparametric) distributions.

Two interchangeable physical representations of the same multiset:

- ``Unweighted`` keeps every observation in a flat, ordered list.
- ``Weighted`` keeps unique values with integer frequencies; ``size`` is
  always the sum of the frequencies.

Expanding each ``(value, freq)`` pair of a ``Weighted`` into ``freq``
copies reproduces the multiset held by the matching ``Unweighted``, so
``Unweighted(w.get_data())`` and ``Weighted(u.get_data())`` are lossless.

Without a shape model, sampling is a deterministic cyclic replay of the
stored data driven by a per-instance cursor.  The cursor is mutable state
shared by every ``sample``/``sample_single`` call on the instance and is
not safe for concurrent use: serialise access, or give each thread its own
instance.
"""

from abc import abstractmethod
from itertools import groupby
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import (
    NotFoundError, OutOfRangeError, UnsupportedOperationError, ValidationError,
)
from .random_variable import RandomVariable

Pair = Tuple[float, int]


def _check_index(k: int, limit: int, what: str):
    if not 0 <= k < limit:
        raise OutOfRangeError(f"Index {k} is out of range for {what} of length {limit}")


def _check_freq(freq) -> int:
    if int(freq) != freq or freq < 1:
        raise ValidationError(f"Frequency must be a positive integer, got {freq!r}")
    return int(freq)


class NonParametric(RandomVariable):
    """Shared behaviour of the empirical representations."""

    def __init__(self):
        self._cursor = 0

    # ── Data access (implemented by subclasses) ──────────────────────────

    @abstractmethod
    def __len__(self) -> int:
        """Number of logical observations."""

    @abstractmethod
    def append(self, item):
        """Add an observation."""

    @abstractmethod
    def get(self, k: int) -> float:
        """Return the *k*-th logical observation."""

    @abstractmethod
    def get_data(self) -> List[float]:
        """Return the data as a flat (unweighted) list."""

    @abstractmethod
    def get_wdata(self) -> List[Pair]:
        """Return the data as ``(value, frequency)`` pairs."""

    @abstractmethod
    def mean_height(self) -> float:
        """Average number of observations per distinct value."""

    def __iter__(self):
        return iter(self.get_data())

    def _require_data(self, operation: str):
        if len(self) == 0:
            raise ValidationError(f"Cannot compute {operation} of an empty dataset")

    # ── Cyclic replay sampling ───────────────────────────────────────────

    @property
    def cursor(self) -> int:
        """Position of the next replayed element (before wrapping)."""
        return self._cursor

    def reset_cursor(self):
        self._cursor = 0

    def sample_single(self, rng: Optional[np.random.Generator] = None) -> float:
        """Return the next stored value in cyclic order.

        *rng* is accepted for interface parity and ignored.
        """
        self._require_data("a sample")
        value = self.get(self._cursor % len(self))
        self._cursor += 1
        return value

    def sample(self, n: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """Return the next *n* stored values in cyclic order.

        Equivalent to *n* successive ``sample_single`` calls.
        """
        n = int(n)
        if n == 0:
            return np.empty(0, dtype=np.float64)
        self._require_data("a sample")
        data = np.asarray(self.get_data(), dtype=np.float64)
        idx = (self._cursor + np.arange(n)) % data.size
        self._cursor += n
        return data[idx]

    def sample_icdf(self, n: int, v: Sequence[float]) -> np.ndarray:
        raise UnsupportedOperationError(
            f"{type(self).__name__} has no quantile function; use sample() instead"
        )

    def sample_single_icdf(self, p: float) -> float:
        raise UnsupportedOperationError(
            f"{type(self).__name__} has no quantile function; use sample_single() instead"
        )


class Unweighted(NonParametric):
    """Flat, ordered sample set; duplicates allowed."""

    def __init__(self, data: Iterable[float] = ()):
        super().__init__()
        self._data: List[float] = [float(x) for x in data]

    @classmethod
    def from_pairs(cls, pairs: Iterable[Pair]) -> 'Unweighted':
        """Expand ``(value, frequency)`` pairs into a flat sample set."""
        data: List[float] = []
        for value, freq in pairs:
            data.extend([float(value)] * _check_freq(freq))
        return cls(data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self):
        return f"Unweighted(n={len(self._data)})"

    # ── Accessors ────────────────────────────────────────────────────────

    def get(self, k: int) -> float:
        _check_index(k, len(self._data), "Unweighted data")
        return self._data[k]

    def set(self, k: int, value: float):
        _check_index(k, len(self._data), "Unweighted data")
        self._data[k] = float(value)

    def append(self, item: float):
        self._data.append(float(item))

    def get_data(self) -> List[float]:
        return list(self._data)

    def get_wdata(self) -> List[Pair]:
        return Weighted(self._data).get_wdata()

    def to_weighted(self) -> 'Weighted':
        return Weighted(self._data)

    # ── Calculations ─────────────────────────────────────────────────────

    def mean(self) -> float:
        self._require_data("the mean")
        return float(np.mean(self._data))

    def median(self) -> float:
        """Middle element of the backing list in insertion order.

        The list is **not** sorted first, so this is only the conventional
        median when the data were appended in ascending order.  Even lengths
        average positions ``n // 2 - 1`` and ``n // 2``, the two central
        slots; pairing ``n // 2`` with ``n // 2 + 1`` instead would be off
        by one and run past the end for two values.
        """
        self._require_data("the median")
        n = len(self._data)
        if n % 2 == 0:
            return (self._data[n // 2 - 1] + self._data[n // 2]) / 2
        return self._data[n // 2]

    def std(self) -> float:
        """Sample standard deviation (``n - 1`` divisor); 0.0 for one value."""
        self._require_data("the standard deviation")
        if len(self._data) < 2:
            return 0.0
        return float(np.std(self._data, ddof=1))

    def mode(self) -> float:
        """Value of the longest run after sorting; ties go to the smallest value."""
        self._require_data("the mode")
        best_value, best_count = None, 0
        for value, run in groupby(sorted(self._data)):
            count = sum(1 for _ in run)
            if count > best_count:
                best_value, best_count = value, count
        return best_value

    def mean_height(self) -> float:
        self._require_data("the mean height")
        return len(self._data) / len(set(self._data))


class Weighted(NonParametric):
    """
    Frequency-compressed sample set.

    Built from flat data the pairs are grouped in ascending value order;
    values added later by ``append`` go to the end in first-insertion order.
    """

    def __init__(self, data: Iterable[float] = ()):
        super().__init__()
        self._pairs: List[List] = []    # [value, freq]
        self._index = {}                # value -> position in _pairs
        self._size = 0
        for value, run in groupby(sorted(float(x) for x in data)):
            self._insert(value, sum(1 for _ in run))

    @classmethod
    def from_pairs(cls, pairs: Iterable[Pair]) -> 'Weighted':
        """Build from ``(value, frequency)`` pairs; repeated values are merged."""
        w = cls()
        for pair in pairs:
            w.append(tuple(pair))
        return w

    def _insert(self, value: float, freq: int):
        self._index[value] = len(self._pairs)
        self._pairs.append([value, freq])
        self._size += freq

    @property
    def size(self) -> int:
        """Total number of observations, i.e. the sum of all frequencies."""
        return self._size

    def __len__(self) -> int:
        return self._size

    def __repr__(self):
        return f"Weighted(size={self._size}, pairs={len(self._pairs)})"

    # ── Accessors ────────────────────────────────────────────────────────

    def num_pairs(self) -> int:
        return len(self._pairs)

    def get_pair(self, k: int) -> Pair:
        _check_index(k, len(self._pairs), "Weighted pairs")
        value, freq = self._pairs[k]
        return value, freq

    def set(self, k: int, pair: Pair):
        """Replace the *k*-th pair; ``size`` moves by the frequency delta."""
        _check_index(k, len(self._pairs), "Weighted pairs")
        value, freq = float(pair[0]), _check_freq(pair[1])
        old_value, old_freq = self._pairs[k]
        if value != old_value:
            if value in self._index:
                raise ValidationError(
                    f"Value {value} already present at pair {self._index[value]}"
                )
            del self._index[old_value]
            self._index[value] = k
        self._size += freq - old_freq
        self._pairs[k] = [value, freq]

    def frequency(self, value: float) -> int:
        """Frequency of *value*; raises ``NotFoundError`` if absent."""
        try:
            return self._pairs[self._index[float(value)]][1]
        except KeyError:
            raise NotFoundError(f"Value {value} not found in the data set") from None

    def set_freq(self, value: float, freq: int):
        """Set the frequency of an existing value."""
        freq = _check_freq(freq)
        try:
            pos = self._index[float(value)]
        except KeyError:
            raise NotFoundError(f"Value {value} not found in the data set") from None
        self._size += freq - self._pairs[pos][1]
        self._pairs[pos][1] = freq

    def get(self, k: int) -> float:
        """Return the *k*-th element of the expanded multiset.

        Walks cumulative frequencies until they reach ``k + 1``.
        """
        _check_index(k, self._size, "Weighted data")
        total = 0
        for value, freq in self._pairs:
            total += freq
            if total >= k + 1:
                return value
        raise OutOfRangeError(f"Index {k} is out of range")  # unreachable while size is consistent

    def append(self, item):
        """Add one observation, or a ``(value, frequency)`` pair.

        An existing value has its frequency increased; a new value is added
        at the end.
        """
        if isinstance(item, (tuple, list)):
            if len(item) != 2:
                raise ValidationError("A weighted pair must be (value, frequency)")
            value, freq = float(item[0]), _check_freq(item[1])
        else:
            value, freq = float(item), 1
        pos = self._index.get(value)
        if pos is None:
            self._insert(value, freq)
        else:
            self._pairs[pos][1] += freq
            self._size += freq

    def get_data(self) -> List[float]:
        if not self._pairs:
            return []
        values, freqs = self._arrays()
        return np.repeat(values, freqs).tolist()

    def get_wdata(self) -> List[Pair]:
        return [(value, freq) for value, freq in self._pairs]

    def to_unweighted(self) -> Unweighted:
        return Unweighted(self.get_data())

    def _arrays(self):
        values = np.array([p[0] for p in self._pairs], dtype=np.float64)
        freqs = np.array([p[1] for p in self._pairs], dtype=np.int64)
        return values, freqs

    # ── Calculations ─────────────────────────────────────────────────────

    def mean(self) -> float:
        self._require_data("the mean")
        values, freqs = self._arrays()
        return float(np.dot(values, freqs) / self._size)

    def median(self) -> float:
        """Pair at position ``size // 2`` of the compressed list.

        This indexes the pairs, not the expanded multiset, so it is only the
        conventional median when every frequency is 1.  With larger
        frequencies the position can run past the pair list, which raises
        ``OutOfRangeError``.  Even sizes average pairs ``size // 2 - 1``
        and ``size // 2``, not ``size // 2`` and ``size // 2 + 1``.
        """
        self._require_data("the median")
        half = self._size // 2
        if self._size % 2 == 0:
            return (self.get_pair(half - 1)[0] + self.get_pair(half)[0]) / 2
        return self.get_pair(half)[0]

    def std(self) -> float:
        """Population standard deviation of the expanded multiset."""
        self._require_data("the standard deviation")
        values, freqs = self._arrays()
        mu = np.dot(values, freqs) / self._size
        return float(np.sqrt(np.dot(freqs, (values - mu) ** 2) / self._size))

    def mode(self) -> float:
        """First pair (in storage order) with the highest frequency."""
        self._require_data("the mode")
        return max(self._pairs, key=lambda p: p[1])[0]

    def mean_height(self) -> float:
        self._require_data("the mean height")
        return self._size / len(self._pairs)
