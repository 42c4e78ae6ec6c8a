"""Tests for RandomVariableContainer."""

import numpy as np
import pytest

from randvar.container import RandomVariableContainer
from randvar.errors import ValidationError
from randvar.nonparametric import Unweighted
from randvar.parametric import Lognormal, Normal


class TestContainer:
    """Variable bookkeeping and equation checks."""

    def test_empty_container(self):
        rvc = RandomVariableContainer()
        assert len(rvc) == 0
        assert not rvc.has_equation

    def test_add_keeps_references(self):
        n, u = Normal(), Unweighted([1, 2])
        rvc = RandomVariableContainer()
        rvc.add(n)
        rvc.add(u)
        assert rvc.get_size() == 2
        assert rvc[0] is n
        assert rvc.get_data()[1] is u

    def test_add_rejects_non_random_variable(self):
        with pytest.raises(ValidationError):
            RandomVariableContainer().add(3.0)

    def test_prepopulated(self):
        rvc = RandomVariableContainer(sum, [Normal(), Lognormal()])
        assert len(rvc) == 2
        assert rvc.equation([1.0, 2.5]) == 3.5

    def test_equation_unset(self):
        rvc = RandomVariableContainer(variables=[Normal()])
        with pytest.raises(ValidationError):
            rvc.equation([1.0])
        with pytest.raises(ValidationError):
            rvc.check_ready()

    def test_equation_can_be_reassigned(self):
        rvc = RandomVariableContainer(lambda v: v[0] + v[1], [Normal(), Normal()])
        rvc.set_equation(lambda v: v[0] * v[1])
        assert rvc.equation([3.0, 4.0]) == 12.0

    def test_non_callable_rejected(self):
        with pytest.raises(ValidationError):
            RandomVariableContainer().set_equation("x + y")

    def test_two_argument_function_rejected(self):
        with pytest.raises(ValidationError):
            RandomVariableContainer().set_equation(lambda x, y: x + y)

    def test_vector_length_checked(self):
        rvc = RandomVariableContainer(sum, [Normal(), Normal()])
        with pytest.raises(ValidationError):
            rvc.equation([1.0])

    def test_declared_arity_checked_at_call_time(self):
        rvc = RandomVariableContainer(sum, [Normal()], arity=2)
        with pytest.raises(ValidationError):
            rvc.equation([1.0])
        with pytest.raises(ValidationError):
            rvc.check_ready()
        rvc.add(Normal())
        assert rvc.equation([1.0, 2.0]) == 3.0

    def test_no_variables_not_ready(self):
        with pytest.raises(ValidationError):
            RandomVariableContainer(sum).check_ready()

    def test_equation_result_is_float(self):
        rvc = RandomVariableContainer(lambda v: int(v[0]), [Normal()])
        assert isinstance(rvc.equation([2.7]), float)

    def test_evaluate_rows(self):
        rvc = RandomVariableContainer(lambda v: v[0] - v[1], [Normal(), Normal()])
        out = rvc.evaluate(np.array([[3.0, 1.0], [0.0, 2.0]]))
        np.testing.assert_array_equal(out, [2.0, -2.0])
