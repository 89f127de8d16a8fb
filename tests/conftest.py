"""
Root pytest configuration for the TD(lambda) library tests.

This module provides shared markers and fixtures for all tests.
"""

import pytest
import torch

from algorithms.shared.linear import LinearFunctionApproximator
from algorithms.td_lambda.eligibility_traces import Trace
from algorithms.td_lambda.predictor import TDLambda
from projectors.tabular import TabularProjector


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow-running"
    )


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow convergence tests"
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless explicitly requested."""
    if not config.getoption("--run-slow"):
        skip_slow = pytest.mark.skip(
            reason="slow tests skipped (use --run-slow to enable)"
        )
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


@pytest.fixture
def make_predictor():
    """Factory for a tabular TD(lambda) predictor with all-zero weights."""
    def _make(n_states=10, alpha=0.1, gamma=0.9, lambda_=0.0):
        projector = TabularProjector(n_states)
        return TDLambda(
            trace=Trace(lambda_, n_states),
            fa_theta=LinearFunctionApproximator(projector),
            alpha=alpha,
            gamma=gamma,
        )
    return _make


@pytest.fixture
def zeros64():
    """Factory for float64 zero tensors."""
    def _make(*shape):
        return torch.zeros(*shape, dtype=torch.float64)
    return _make
