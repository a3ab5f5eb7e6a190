"""
Session Config - Lifetime limits for game sessions.

Values can be overridden from the environment:
    FAIRENGINE_SESSION_MAX_AGE      seconds a session may accept plays (3600)
    FAIRENGINE_SESSION_MAX_PLAYS    plays per session (1000)
    FAIRENGINE_CLEANUP_INTERVAL     seconds between lazy sweeps (300)
    FAIRENGINE_PREDICTION_RANGE     upper bound of prediction outcomes (100)
    FAIRENGINE_BLACKJACK_REVEAL     cards shown per blackjack play (10)
"""

from __future__ import annotations
from dataclasses import dataclass
import os

from ..engine_core.errors import ValidationError


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(
            f"{name} must be an integer, got {raw!r}",
            details={"field": name},
        )


@dataclass(frozen=True)
class SessionConfig:
    max_age_seconds: float = 60 * 60
    max_plays: int = 1000
    cleanup_interval_seconds: float = 5 * 60
    prediction_range: int = 100
    blackjack_reveal: int = 10

    def __post_init__(self):
        if self.max_age_seconds <= 0:
            raise ValidationError("max_age_seconds must be > 0")
        if self.max_plays < 1:
            raise ValidationError("max_plays must be >= 1")
        if self.cleanup_interval_seconds < 0:
            raise ValidationError("cleanup_interval_seconds must be >= 0")
        if self.prediction_range < 1:
            raise ValidationError("prediction_range must be >= 1")
        if not 0 <= self.blackjack_reveal <= 52:
            raise ValidationError("blackjack_reveal must be between 0 and 52")

    @classmethod
    def from_env(cls) -> SessionConfig:
        return cls(
            max_age_seconds=_env_int("FAIRENGINE_SESSION_MAX_AGE", 60 * 60),
            max_plays=_env_int("FAIRENGINE_SESSION_MAX_PLAYS", 1000),
            cleanup_interval_seconds=_env_int("FAIRENGINE_CLEANUP_INTERVAL", 5 * 60),
            prediction_range=_env_int("FAIRENGINE_PREDICTION_RANGE", 100),
            blackjack_reveal=_env_int("FAIRENGINE_BLACKJACK_REVEAL", 10),
        )
