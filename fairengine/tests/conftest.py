"""
Pytest fixtures for Fair Engine tests.
"""

import pytest

from ..session import SessionConfig, SessionManager


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> SessionConfig:
    """Small limits so expiry paths are cheap to reach."""
    return SessionConfig(
        max_age_seconds=600,
        max_plays=5,
        cleanup_interval_seconds=60,
        prediction_range=100,
        blackjack_reveal=10,
    )


@pytest.fixture
def manager(config: SessionConfig, clock: FakeClock) -> SessionManager:
    return SessionManager(config=config, clock=clock)


@pytest.fixture
def client_seed() -> str:
    return "player_client_seed_0001"
