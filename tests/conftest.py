# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Global pytest configuration.
"""

import os
import sys

import matplotlib
import numpy as np
import pytest

# Add the project root to the Python path so tests can import modules properly
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Never open windows while testing
matplotlib.use("Agg")


@pytest.fixture
def ramp16():
    """The deterministic signal 1, 2, ..., 16."""
    return np.arange(1.0, 17.0)


@pytest.fixture
def rng():
    """Seeded random generator for reproducible tests."""
    return np.random.default_rng(1336)


@pytest.fixture
def white_noise(rng):
    """1024 samples of unit-variance white noise."""
    return rng.normal(0.0, 1.0, 1024)
