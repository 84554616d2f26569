"""Shared pytest fixtures."""

import pytest

from config.settings import SamplingConfig
from poker.cards import Deck


@pytest.fixture
def deck():
    """Provide a reproducibly seeded standard deck."""
    return Deck.standard(seed=42)


@pytest.fixture
def sampling_config():
    """Small single-process sampling config."""
    return SamplingConfig(num_hands=1_000, workers=1, chunk_size=25, seed=1234)


@pytest.fixture(params=[1, 7, 100])
def chunk_size(request):
    """Parametrize over different chunk sizes."""
    return request.param
