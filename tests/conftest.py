"""Shared fixtures for the randvar test suite."""

import numpy as np
import pytest

from randvar.audit import audit_log


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so statistical assertions are reproducible."""
    return np.random.default_rng(20170628)


@pytest.fixture(autouse=True)
def _fresh_audit_log():
    """Each test starts with an empty global audit log."""
    audit_log.clear()
    yield
    audit_log.clear()
