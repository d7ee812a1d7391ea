import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded random source so statistical tests are repeatable."""
    return np.random.default_rng(20240601)
