"""
Session Manager - Creates and manages matches.

LIFECYCLE:
1. Host picks a player kind per color (human or a difficulty)
2. create_session builds the bots and a fresh GameLoop
3. During the match the host feeds human moves and runs computer turns
4. end_session drops the session; nothing is persisted
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import time
import uuid

from ..config import MatchSettings
from ..engine_core.state import StoneColor
from ..bots import Difficulty, create_bot
from .game_loop import GameLoop


logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a session."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


@dataclass
class Session:
    """
    An in-memory match session.

    The session is dropped when the match ends.
    """
    session_id: str
    settings: MatchSettings
    loop: GameLoop
    difficulties: dict[StoneColor, Difficulty]
    created_at: float

    state: SessionState = SessionState.ACTIVE
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        """Check if the match is still being played."""
        return self.state == SessionState.ACTIVE and not self.loop.is_over()

    def is_human_turn(self) -> bool:
        return self.is_active() and not self.loop.is_computer_turn()


class SessionManager:
    """
    Manages match sessions.

    No persistence - sessions are in-memory only.
    """

    def __init__(self, settings: MatchSettings | None = None):
        self.settings = settings or MatchSettings()
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        white: Difficulty | str = Difficulty.HUMAN,
        black: Difficulty | str = Difficulty.MEDIUM,
        settings: MatchSettings | None = None,
        seed: int | None = None,
    ) -> Session:
        """
        Create a new match.

        Args:
            white: Player kind for white (moves first)
            black: Player kind for black
            settings: Overrides the manager's settings
            seed: Seed for the bots' random choices

        Returns:
            New Session ready to play
        """
        settings = settings or self.settings
        difficulties = {
            StoneColor.WHITE: Difficulty(white),
            StoneColor.BLACK: Difficulty(black),
        }
        players = {
            color: create_bot(
                difficulty, color, settings,
                seed=None if seed is None else seed + int(color),
            )
            for color, difficulty in difficulties.items()
        }

        session = Session(
            session_id=str(uuid.uuid4()),
            settings=settings,
            loop=GameLoop(settings=settings, players=players),
            difficulties=difficulties,
            created_at=time.time(),
        )
        self._sessions[session.session_id] = session
        logger.debug(
            "Created session %s (white=%s, black=%s)",
            session.session_id, difficulties[StoneColor.WHITE].value, difficulties[StoneColor.BLACK].value,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed"):
        """
        End a session and forget it.

        Called when the match is completed or the user quits.
        """
        session = self._sessions.pop(session_id, None)
        if session:
            if reason == "completed":
                session.state = SessionState.GAME_OVER
            else:
                session.state = SessionState.ABANDONED

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600):
        """
        Drop finished sessions older than max_age.
        """
        current_time = time.time()
        to_remove = []

        for session_id, session in self._sessions.items():
            age = current_time - session.created_at
            if age > max_age_seconds and not session.is_active():
                to_remove.append(session_id)

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
