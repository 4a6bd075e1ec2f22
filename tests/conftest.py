"""Shared fixtures for the threshold explorer tests."""

import numpy as np
import pandas as pd
import pytest

from threshold_explorer import ReferenceState, SampleStore


@pytest.fixture
def quadrant_store():
    """One sample in each corner around (3, 3)."""
    return SampleStore.from_records(
        [
            {"name": "low", "cpm": 1, "intensity": 1, "state": 1},
            {"name": "high", "cpm": 5, "intensity": 5, "state": 2},
            {"name": "int_only", "cpm": 1, "intensity": 5, "state": 1},
            {"name": "cpm_only", "cpm": 5, "intensity": 1, "state": 3},
        ]
    )


@pytest.fixture
def random_store():
    """300 log-normal samples with states 1-4."""
    rng = np.random.default_rng(42)
    n = 300
    df = pd.DataFrame(
        {
            "name": [f"sample_{i}" for i in range(n)],
            "cpm": rng.lognormal(mean=2.0, sigma=0.8, size=n),
            "intensity": rng.lognormal(mean=1.0, sigma=0.6, size=n),
            "state": rng.integers(1, 5, size=n),
        }
    )
    return SampleStore(df)


@pytest.fixture
def empty_store():
    return SampleStore.empty()


@pytest.fixture
def reference():
    return ReferenceState()
