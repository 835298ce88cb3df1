"""Shared fixtures for the multilayerqg tests."""

import sys
from pathlib import Path

import numpy as np
import pytest


# Ensure the repository root is importable without an editable install.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))


@pytest.fixture
def rs():
    return np.random.RandomState(42)
