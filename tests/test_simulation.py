"""Tests for the settings-driven simulation runner."""

import numpy as np
import pytest

from randvar.audit import audit_log
from randvar.constants import SAMPLING_LHS, SAMPLING_MC
from randvar.container import RandomVariableContainer
from randvar.data_model import SimulationResults, SimulationSettings
from randvar.errors import ValidationError
from randvar.nonparametric import Unweighted, Weighted
from randvar.parametric import Normal
from randvar.simulation import coverage_percentiles, run_simulation, summarize_samples


def _two_normals():
    return RandomVariableContainer(lambda v: v[0] + v[1],
                                   [Normal(1.0, 1.0), Normal(2.0, 1.0)])


class TestSettings:
    """SimulationSettings validation and (de)serialisation."""

    def test_defaults(self):
        s = SimulationSettings()
        assert s.n_trials == 100000
        assert s.sampling_method == SAMPLING_MC
        assert s.output_kind == "Unweighted"
        s.validate()

    @pytest.mark.parametrize("kwargs", [
        {"n_trials": -1},
        {"n_trials": 2.5},
        {"sampling_method": "Sobol"},
        {"output_kind": "Histogram"},
        {"coverage": 1.5},
        {"coverage": 0.0},
    ])
    def test_invalid_settings(self, kwargs):
        with pytest.raises(ValidationError):
            SimulationSettings(**kwargs).validate()

    def test_dict_round_trip_ignores_unknown_keys(self):
        s = SimulationSettings(n_trials=10, seed=4, sampling_method=SAMPLING_LHS)
        d = s.to_dict()
        d['legacy_option'] = True
        assert SimulationSettings.from_dict(d) == s


class TestCoverage:
    """Percentile selection from the coverage setting."""

    def test_two_sided(self):
        lo, hi = coverage_percentiles(0.95, one_sided=False)
        assert lo == pytest.approx(2.5)
        assert hi == pytest.approx(97.5)

    def test_one_sided(self):
        lo, hi = coverage_percentiles(0.95, one_sided=True)
        assert lo == pytest.approx(5.0)
        assert hi == pytest.approx(95.0)


class TestSummarizeSamples:

    def test_empty(self):
        assert summarize_samples([]) == {}

    def test_basic(self):
        s = summarize_samples([1.0, 2.0, 3.0, float("nan")])
        assert s['n'] == 3
        assert s['mean'] == 2.0
        assert s['std'] == pytest.approx(1.0)
        assert set(s) == {'n', 'mean', 'std'}

    def test_single_value_has_zero_std(self):
        assert summarize_samples([4.0]) == {'n': 1, 'mean': 4.0, 'std': 0.0}


class TestRunSimulation:
    """End-to-end runs through run_simulation."""

    @pytest.mark.parametrize("method", [SAMPLING_MC, SAMPLING_LHS])
    def test_summary(self, method):
        settings = SimulationSettings(n_trials=20000, seed=3, sampling_method=method)
        res = run_simulation(_two_normals(), settings)
        assert isinstance(res, SimulationResults)
        assert res.computed
        assert res.n_trials == 20000
        assert res.sampling_method == method
        assert len(res.distribution) == 20000
        assert res.combined_mean == pytest.approx(3.0, abs=0.05)
        assert res.combined_std == pytest.approx(np.sqrt(2.0), abs=0.05)
        assert res.lower_pct == pytest.approx(2.5)
        assert res.lower_bound < res.combined_mean < res.upper_bound
        assert res.lower_bound == pytest.approx(3.0 - 1.96 * np.sqrt(2.0), abs=0.1)

    def test_seed_reproducible(self):
        settings = SimulationSettings(n_trials=500, seed=99)
        a = run_simulation(_two_normals(), settings)
        b = run_simulation(_two_normals(), settings)
        assert a.distribution.get_data() == b.distribution.get_data()
        assert a.upper_bound == b.upper_bound

    def test_explicit_rng_overrides_seed(self):
        settings = SimulationSettings(n_trials=50, seed=1)
        a = run_simulation(_two_normals(), settings, rng=np.random.default_rng(2))
        b = run_simulation(_two_normals(), SimulationSettings(n_trials=50, seed=2))
        assert a.distribution.get_data() == b.distribution.get_data()

    def test_weighted_output(self):
        settings = SimulationSettings(n_trials=100, seed=5, output_kind="Weighted")
        res = run_simulation(_two_normals(), settings)
        assert isinstance(res.distribution, Weighted)

    def test_default_settings_used(self):
        res = run_simulation(
            RandomVariableContainer(lambda v: v[0], [Unweighted([1, 2, 3, 4])]))
        assert res.n_trials == 100000
        assert res.combined_mean == pytest.approx(2.5, abs=1e-3)

    def test_lhs_notes_empirical_variables(self):
        rvc = RandomVariableContainer(lambda v: v[0] * v[1],
                                      [Unweighted([1, 2]), Normal(1.0, 0.1)])
        settings = SimulationSettings(n_trials=100, seed=1, sampling_method=SAMPLING_LHS)
        res = run_simulation(rvc, settings)
        assert any("empirical" in note for note in res.notes)
        assert audit_log.filter("ASSUMPTION")

    def test_zero_trials(self):
        res = run_simulation(_two_normals(), SimulationSettings(n_trials=0))
        assert not res.computed
        assert len(res.distribution) == 0
        assert res.notes

    def test_invalid_container(self):
        with pytest.raises(ValidationError):
            run_simulation(RandomVariableContainer(sum), SimulationSettings(n_trials=10))

    def test_results_to_dict_omits_distribution(self):
        res = run_simulation(_two_normals(), SimulationSettings(n_trials=100, seed=8))
        d = res.to_dict()
        assert 'distribution' not in d
        assert d['n_trials'] == 100
        assert d['computed'] is True

    def test_run_is_audited(self):
        run_simulation(_two_normals(), SimulationSettings(n_trials=100, seed=8))
        descriptions = [e['description'] for e in audit_log.filter("COMPUTATION")]
        assert "SAMPLE_MC" in descriptions
        assert "SIMULATION" in descriptions
