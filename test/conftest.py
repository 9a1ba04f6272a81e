import logging

import numpy as np
import pytest


def pytest_configure(config):
    """Set up logging before tests run."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@pytest.fixture
def rng():
    return np.random.default_rng(42)
