"""
Container bundling random variables with a combining equation.

The container holds **references** to the variables it is given; it never
copies them.  The caller keeps ownership and must keep each variable alive
and unmodified for as long as the container is used.  Sampling through the
container advances the replay cursor of any empirical variable it holds.
"""

import inspect
from typing import Callable, Iterable, List, Optional, Sequence

import numpy as np

from .errors import ValidationError
from .random_variable import RandomVariable

Equation = Callable[[Sequence[float]], float]


class RandomVariableContainer:
    """Ordered list of random variables plus ``f: R^k -> R``.

    Parameters
    ----------
    equation : callable, optional
        Function taking one sequence of ``k`` drawn values (in variable
        order) and returning a scalar.
    variables : iterable of RandomVariable, optional
        Initial variables.
    arity : int, optional
        Number of values *equation* expects.  When given it is checked
        against the number of variables every time the equation is called.
    """

    def __init__(self, equation: Optional[Equation] = None,
                 variables: Optional[Iterable[RandomVariable]] = None,
                 arity: Optional[int] = None):
        self._variables: List[RandomVariable] = []
        self._equation: Optional[Equation] = None
        self._arity: Optional[int] = None
        for rv in variables or ():
            self.add(rv)
        if equation is not None:
            self.set_equation(equation, arity=arity)

    # ── Variables ────────────────────────────────────────────────────────

    def add(self, rv: RandomVariable):
        if not isinstance(rv, RandomVariable):
            raise ValidationError(
                f"Only random variables can be added, got {type(rv).__name__}"
            )
        self._variables.append(rv)

    def get_data(self) -> List[RandomVariable]:
        """Return the held variables (the list is a copy, the variables are not)."""
        return list(self._variables)

    def get_size(self) -> int:
        return len(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def __iter__(self):
        return iter(self._variables)

    def __getitem__(self, i: int) -> RandomVariable:
        return self._variables[i]

    # ── Equation ─────────────────────────────────────────────────────────

    def set_equation(self, func: Equation, arity: Optional[int] = None):
        if not callable(func):
            raise ValidationError("Equation must be callable")
        try:
            params = list(inspect.signature(func).parameters.values())
        except (TypeError, ValueError):
            params = None  # builtins without a signature
        if params is not None:
            positional = [p for p in params
                          if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
                          and p.default is p.empty]
            has_varargs = any(p.kind == p.VAR_POSITIONAL for p in params)
            if len(positional) > 1 or (not positional and not has_varargs):
                raise ValidationError(
                    "Equation must accept exactly one argument: the vector of drawn values"
                )
        if arity is not None and (int(arity) != arity or arity < 0):
            raise ValidationError(f"Arity must be a non-negative integer, got {arity!r}")
        self._equation = func
        self._arity = None if arity is None else int(arity)

    @property
    def has_equation(self) -> bool:
        return self._equation is not None

    @property
    def arity(self) -> Optional[int]:
        return self._arity

    def check_ready(self):
        """Raise ``ValidationError`` unless the container can be simulated."""
        if self._equation is None:
            raise ValidationError("Equation function not initialized")
        if not self._variables:
            raise ValidationError("Container holds no random variables")
        if self._arity is not None and self._arity != len(self._variables):
            raise ValidationError(
                f"Equation arity ({self._arity}) does not match the number of "
                f"random variables ({len(self._variables)})"
            )

    def equation(self, values: Sequence[float]) -> float:
        """Apply the combining function to one vector of drawn values."""
        if self._equation is None:
            raise ValidationError("Equation function not initialized")
        k = len(self._variables)
        if len(values) != k:
            raise ValidationError(
                f"Equation expects {k} value(s), one per random variable; "
                f"got {len(values)}"
            )
        if self._arity is not None and self._arity != k:
            raise ValidationError(
                f"Equation arity ({self._arity}) does not match the number of "
                f"random variables ({k})"
            )
        return float(self._equation(values))

    def evaluate(self, draws: np.ndarray) -> np.ndarray:
        """Apply the equation to every row of an ``(n, k)`` array of draws."""
        draws = np.asarray(draws, dtype=np.float64)
        return np.array([self.equation(row) for row in draws], dtype=np.float64)
