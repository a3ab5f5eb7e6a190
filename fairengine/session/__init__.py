"""
Session Module - Manages provably fair game sessions.

A session represents one committed server seed:
- Created when a player starts a game; only the seed hash is published
- Plays advance a monotonic nonce and reveal the seed with each outcome
- Expires after a max age or a max number of plays
- Dropped from memory by the idle sweep

Sessions are EPHEMERAL:
- No persistence; auditing storage is the caller's job
- The registry is owned by its SessionManager, not by the module
"""

from .config import SessionConfig
from .manager import (
    SessionManager,
    SessionRegistry,
    GameSession,
    GameType,
    SessionState,
    BetRecord,
    SessionTicket,
    SessionInfo,
    PlayResult,
)

__all__ = [
    "SessionConfig",
    "SessionManager",
    "SessionRegistry",
    "GameSession",
    "GameType",
    "SessionState",
    "BetRecord",
    "SessionTicket",
    "SessionInfo",
    "PlayResult",
]
