"""
Pytest configuration and fixtures for plfit.
"""

import numpy as np
import pytest

from plfit import pl_gen

EXAMPLE = [1.0, 1.2, 1.5, 2.0, 2.5, 3.0, 4.0, 5.0, 8.0, 10.0]


@pytest.fixture
def example() -> np.ndarray:
    """Small hand-checkable sample."""
    return np.array(EXAMPLE)


@pytest.fixture
def pl_sample() -> np.ndarray:
    """Power law with alpha = 2.5 above xmin = 1, plus a body of small values below 0.45."""
    rng = np.random.default_rng(12345)
    tail = pl_gen(18000, 1.0, 2.5, rng)
    body = rng.uniform(0.0, 0.45, 2000)
    return np.concatenate([body, tail])


@pytest.fixture
def example_file(tmp_path):
    """The example sample written one value per line."""
    path = tmp_path / "example.txt"
    path.write_text("\n".join(str(v) for v in EXAMPLE) + "\n")
    return path
