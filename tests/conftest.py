import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from waterdots import initialize


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def band(rng):
    """Headless 800x96 band with a fixed clock; tests pass ``now`` explicitly."""
    handle = initialize(None, rng=rng, clock=lambda: 0.0)
    handle.resize(800, 96)
    yield handle
    handle.dispose()
