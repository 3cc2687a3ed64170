"""
Test configuration and fixtures for palette-core tests.
"""
import random

import pytest
from loguru import logger

from palette_core.services.colors.extraction import WeightedSample
from palette_core.utils.logging import get_logger
from palette_core.utils.metrics import reset_metrics


@pytest.fixture(autouse=True)
def reset_metrics_state():
    """Reset metrics before each test."""
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    # configure the structured sink first so it does not remove ours
    get_logger()
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def rgb_samples():
    """Three well separated primaries with distinct weights."""
    return [
        WeightedSample(255, 0, 0, 10),
        WeightedSample(0, 255, 0, 8),
        WeightedSample(0, 0, 255, 12),
    ]


@pytest.fixture
def seeded_rng():
    """Deterministic random source."""
    return random.Random(1234)
