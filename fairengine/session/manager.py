"""
Session Manager - Owns the server seed and nonce of every live game.

LIFECYCLE:
1. start_session → fresh server seed drawn, only its SHA-256 hash leaves
   the manager (the commitment)
2. play → client seed validated, limits checked, nonce incremented exactly
   once, outcome derived, bet logged, outcome returned WITH the server seed
   (the seed is revealed on every play so each round verifies on its own)
3. Expired → max age or max play count reached; the session stays
   queryable but every further play fails
4. sweep → sessions idle for longer than max age are dropped from memory

CONCURRENCY:
- The registry lock guards insert/lookup/remove only
- Each session has its own lock held for check → increment → derive → log,
  so plays on one session serialize and plays on different sessions don't
  wait on each other

PERSISTENCE:
- None. Sessions are in-memory and owned by the manager instance.
"""

from __future__ import annotations
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import threading
import time
import uuid

from ..engine_core.errors import (
    SessionExpired,
    SessionLimitReached,
    SessionNotFound,
    ValidationError,
)
from ..engine_core.extractors import deal_deck, generate_outcome, generate_slot_outcome
from ..engine_core.outcomes import Outcome
from ..engine_core.seeds import new_seed_pair
from ..engine_core.validation import require_bet_amount, require_client_seed
from .config import SessionConfig

logger = logging.getLogger(__name__)


class GameType(str, Enum):
    """Games the engine can derive outcomes for."""
    SLOTS = "slots"  # 3-reel slot
    BLACKJACK = "blackjack"  # shuffled 52-card deck
    PREDICTION = "prediction"  # uniform integer in [0, range]


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Accepting plays
    EXPIRED = "expired"  # Max age or play count reached; read-only


@dataclass(frozen=True)
class BetRecord:
    """One entry of a session's append-only bet log."""
    nonce: int
    client_seed: str
    amount: float
    outcome: Outcome
    timestamp: float


@dataclass
class GameSession:
    """
    A provably fair game session.

    One session maps to exactly one server seed. The seed never appears in
    repr() so it cannot leak into logs or tracebacks before a play reveals it.
    """
    session_id: str
    game_type: GameType
    server_seed: str = field(repr=False)
    server_seed_hash: str
    created_at: float
    last_activity: float
    nonce: int = 0
    state: SessionState = SessionState.ACTIVE
    bets: list[BetRecord] = field(default_factory=list, repr=False)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    @property
    def bet_count(self) -> int:
        return len(self.bets)


@dataclass(frozen=True)
class SessionTicket:
    """What a caller receives at session start. Never includes the seed."""
    session_id: str
    server_seed_hash: str
    game_type: GameType
    created_at: float


@dataclass(frozen=True)
class SessionInfo:
    """Public view of a session."""
    session_id: str
    game_type: GameType
    state: SessionState
    server_seed_hash: str
    nonce: int
    bet_count: int
    created_at: float
    last_activity: float


@dataclass(frozen=True)
class PlayResult:
    """Result of one play: the outcome plus the revealed server seed."""
    session_id: str
    game_type: GameType
    nonce: int
    server_seed: str
    outcome: Outcome


class SessionRegistry:
    """
    Thread-safe map of session id → GameSession.

    Owned by a SessionManager; lives and dies with it.
    """

    def __init__(self):
        self._sessions: dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def add(self, session: GameSession):
        with self._lock:
            self._sessions[session.session_id] = session

    def get(self, session_id: str) -> GameSession | None:
        with self._lock:
            return self._sessions.get(session_id)

    def remove(self, session_id: str) -> GameSession | None:
        with self._lock:
            return self._sessions.pop(session_id, None)

    def snapshot(self) -> list[GameSession]:
        with self._lock:
            return list(self._sessions.values())

    def remove_where(self, predicate: Callable[[GameSession], bool]) -> list[str]:
        """Remove every session matching predicate; returns removed ids."""
        with self._lock:
            doomed = [sid for sid, s in self._sessions.items() if predicate(s)]
            for sid in doomed:
                del self._sessions[sid]
        return doomed


class SessionManager:
    """
    Manages provably fair game sessions.

    Usage:
        manager = SessionManager()
        ticket = manager.start_session("slots")
        # publish ticket.server_seed_hash to the player
        result = manager.play(ticket.session_id, client_seed="my-client-seed-0001")
        # result.server_seed now lets the player verify result.outcome
    """

    def __init__(
        self,
        config: SessionConfig | None = None,
        registry: SessionRegistry | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or SessionConfig()
        self.registry = registry if registry is not None else SessionRegistry()
        self._clock = clock
        self._last_sweep = clock()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start_session(self, game_type: GameType | str) -> SessionTicket:
        """Create a session and publish only its commitment."""
        game_type = self._parse_game_type(game_type)
        self._maybe_sweep()

        server_seed, server_seed_hash = new_seed_pair()
        now = self._clock()
        session = GameSession(
            session_id=str(uuid.uuid4()),
            game_type=game_type,
            server_seed=server_seed,
            server_seed_hash=server_seed_hash,
            created_at=now,
            last_activity=now,
        )
        self.registry.add(session)
        logger.info("Session %s started (game=%s)", session.session_id, game_type.value)

        return SessionTicket(
            session_id=session.session_id,
            server_seed_hash=server_seed_hash,
            game_type=game_type,
            created_at=now,
        )

    def play(
        self,
        session_id: str,
        client_seed: str,
        bet_amount: float | None = None,
    ) -> PlayResult:
        """
        Play one round.

        Inputs are validated before the session is touched, so a rejected
        request never consumes a nonce.

        Raises:
            ValidationError: malformed client seed or bet amount
            SessionNotFound: unknown session id
            SessionExpired: session past its max age
            SessionLimitReached: session used all of its plays
        """
        client_seed = require_client_seed(client_seed)
        amount = require_bet_amount(bet_amount)
        self._maybe_sweep()
        session = self._lookup(session_id)

        with session.lock:
            now = self._clock()
            self._ensure_playable(session, now)

            nonce = session.nonce + 1
            outcome = self._extract(session, client_seed, nonce)
            session.nonce = nonce
            session.bets.append(BetRecord(
                nonce=nonce,
                client_seed=client_seed,
                amount=amount or 0.0,
                outcome=outcome,
                timestamp=now,
            ))
            session.last_activity = now

            if session.nonce >= self.config.max_plays:
                self._expire(session, "play limit reached")

            logger.debug(
                "Session %s played nonce=%d (game=%s)",
                session.session_id, nonce, session.game_type.value,
            )
            return PlayResult(
                session_id=session.session_id,
                game_type=session.game_type,
                nonce=nonce,
                server_seed=session.server_seed,
                outcome=outcome,
            )

    def get_session(self, session_id: str) -> SessionInfo:
        """Public info for a session, including expired ones."""
        session = self._lookup(session_id)
        with session.lock:
            if session.is_active() and self._too_old(session, self._clock()):
                self._expire(session, "max age reached")
            return SessionInfo(
                session_id=session.session_id,
                game_type=session.game_type,
                state=session.state,
                server_seed_hash=session.server_seed_hash,
                nonce=session.nonce,
                bet_count=session.bet_count,
                created_at=session.created_at,
                last_activity=session.last_activity,
            )

    def bet_history(self, session_id: str) -> tuple[BetRecord, ...]:
        """Copy of the session's bet log, oldest first."""
        session = self._lookup(session_id)
        with session.lock:
            return tuple(session.bets)

    def end_session(self, session_id: str) -> bool:
        """
        Drop a session. Its seed becomes unreachable.

        Returns False if no such session existed.
        """
        session = self.registry.remove(session_id)
        if session is None:
            return False
        logger.info("Session %s ended after %d plays", session_id, session.nonce)
        return True

    def list_sessions(self, active_only: bool = True) -> list[str]:
        """IDs of registered sessions."""
        return [
            s.session_id for s in self.registry.snapshot()
            if not active_only or s.is_active()
        ]

    def sweep(self, now: float | None = None) -> int:
        """
        Drop sessions idle for longer than max age.

        Returns the number of sessions removed.
        """
        now = self._clock() if now is None else now
        cutoff = now - self.config.max_age_seconds
        removed = self.registry.remove_where(lambda s: s.last_activity < cutoff)
        self._last_sweep = now
        if removed:
            logger.info("Swept %d idle session(s)", len(removed))
        return len(removed)

    # =========================================================================
    # Internals
    # =========================================================================

    def _maybe_sweep(self):
        if self._clock() - self._last_sweep >= self.config.cleanup_interval_seconds:
            self.sweep()

    def _lookup(self, session_id: Any) -> GameSession:
        session = self.registry.get(session_id) if isinstance(session_id, str) else None
        if session is None:
            raise SessionNotFound(str(session_id))
        return session

    @staticmethod
    def _parse_game_type(game_type: GameType | str) -> GameType:
        try:
            return GameType(game_type)
        except ValueError:
            raise ValidationError(
                f"Unknown game type: {game_type!r}",
                details={
                    "field": "game_type",
                    "allowed": [g.value for g in GameType],
                },
            )

    def _too_old(self, session: GameSession, now: float) -> bool:
        return now - session.created_at > self.config.max_age_seconds

    def _expire(self, session: GameSession, reason: str):
        session.state = SessionState.EXPIRED
        logger.info("Session %s expired: %s", session.session_id, reason)

    def _ensure_playable(self, session: GameSession, now: float):
        if session.nonce >= self.config.max_plays:
            if session.is_active():
                self._expire(session, "play limit reached")
            raise SessionLimitReached(session.session_id, self.config.max_plays)
        if not session.is_active():
            raise SessionExpired(session.session_id)
        if self._too_old(session, now):
            self._expire(session, "max age reached")
            raise SessionExpired(session.session_id)

    def _extract(self, session: GameSession, client_seed: str, nonce: int) -> Outcome:
        seed = session.server_seed
        if session.game_type == GameType.SLOTS:
            return generate_slot_outcome(seed, client_seed, nonce)
        if session.game_type == GameType.BLACKJACK:
            return deal_deck(seed, client_seed, nonce)
        return generate_outcome(
            seed, client_seed, nonce, self.config.prediction_range
        ).as_outcome()
