"""
Session Module - Drives matches on top of the engine.

A session represents one match:
- Created when the host starts a game
- Holds the live board inside its GameLoop
- Runs computer turns and accepts human moves
- Dropped when the match ends

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult, MatchOutcome

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
    "MatchOutcome",
]
