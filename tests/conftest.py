"""Shared fixtures for the engine and HTTP API tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from prng_lab.config import EngineSettings
from prng_lab.web_app import create_app


@pytest.fixture
def settings():
    return EngineSettings()


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def uniform_sample():
    """100 values, exactly 10 in each tenth of [0, 1)."""
    return [(i + 0.5) / 100 for i in range(100)]
