"""Tests for the AS241 inverse normal CDF and its boundary handling."""

import numpy as np
import pytest
from scipy.stats import norm

from randvar.audit import audit_log
from randvar.constants import DBL_MIN
from randvar.errors import QuantileClampWarning, ValidationError
from randvar.quantile import clamp_probability, ppnd16, standard_normal_icdf


class TestPPND16:
    """Accuracy of the rational approximation in every region."""

    def test_median_is_zero(self):
        assert ppnd16(0.5) == 0.0

    @pytest.mark.parametrize("p", [
        0.5, 0.3, 0.075, 0.925,          # central region
        0.05, 0.01, 1e-5, 0.999,         # intermediate tail
        1e-12, 1e-50, 1e-300,            # far tail (r > 5)
    ])
    def test_matches_scipy(self, p):
        assert ppnd16(p) == pytest.approx(norm.ppf(p), rel=1e-12, abs=1e-14)

    def test_array_input_keeps_shape(self):
        p = np.array([[0.1, 0.5], [0.9, 1e-20]])
        out = ppnd16(p)
        assert isinstance(out, np.ndarray)
        assert out.shape == (2, 2)
        np.testing.assert_allclose(out, norm.ppf(p), rtol=1e-12, atol=1e-14)

    def test_scalar_returns_float(self):
        assert isinstance(ppnd16(0.2), float)

    def test_symmetry(self):
        for p in (0.01, 0.2, 0.4):
            assert ppnd16(p) == pytest.approx(-ppnd16(1.0 - p), rel=1e-12)

    def test_monotonic(self):
        p = np.linspace(1e-6, 1 - 1e-6, 2001)
        assert np.all(np.diff(ppnd16(p)) > 0)


class TestStandardNormalIcdf:
    """Domain checks and the 0/1 clamp."""

    @pytest.mark.parametrize("p", [-0.1, 1.1, float("nan")])
    def test_out_of_range_rejected(self, p):
        with pytest.raises(ValidationError):
            standard_normal_icdf(p)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            standard_normal_icdf(2.0)

    def test_zero_is_clamped_with_warning(self):
        with pytest.warns(QuantileClampWarning):
            z = standard_normal_icdf(0.0)
        assert np.isfinite(z)
        assert z == pytest.approx(ppnd16(DBL_MIN))
        assert z < -37

    def test_one_is_clamped_with_warning(self):
        with pytest.warns(QuantileClampWarning):
            z = standard_normal_icdf(1.0)
        assert np.isfinite(z)
        assert z == pytest.approx(-ppnd16(DBL_MIN))

    def test_clamp_is_recorded_on_audit_log(self):
        with pytest.warns(QuantileClampWarning):
            standard_normal_icdf(0.0)
        warnings_logged = audit_log.filter("WARNING")
        assert len(warnings_logged) == 1
        assert "icdf(0)" in warnings_logged[0]['description']

    def test_clamp_only_touches_boundaries(self):
        with pytest.warns(QuantileClampWarning):
            out = clamp_probability([0.0, 0.25, 1.0])
        assert out[0] == DBL_MIN
        assert out[1] == 0.25

    def test_interior_values_do_not_warn(self, recwarn):
        standard_normal_icdf([0.1, 0.5, 0.9])
        assert not [w for w in recwarn if issubclass(w.category, QuantileClampWarning)]
