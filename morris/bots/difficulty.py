"""
Difficulty Levels - Which bot plays a side, and how strongly.

Levels:
- human:  no bot, moves come from the host
- random: uniformly random legal moves
- easy:   greedy one-move rules
- medium: alpha-beta search, cut off at the decision time
- strong: alpha-beta search, always searched to full depth
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
import random

from .policy import BotPolicy, RandomPolicy
from .greedy_bot import GreedyPolicy
from .alphabeta_bot import AlphaBetaBot
from ..config import MatchSettings

if TYPE_CHECKING:
    from ..engine_core.state import StoneColor


class Difficulty(str, Enum):
    """Player kinds selectable per color."""
    HUMAN = "human"
    RANDOM = "random"
    EASY = "easy"
    MEDIUM = "medium"
    STRONG = "strong"


@dataclass(frozen=True)
class DifficultyProfile:
    """Description of a difficulty level."""
    name: str
    description: str
    searches: bool = False
    respects_time_limit: bool = True


DIFFICULTIES: dict[Difficulty, DifficultyProfile] = {
    Difficulty.HUMAN: DifficultyProfile(
        name="Human",
        description="Moves are entered by a person",
    ),
    Difficulty.RANDOM: DifficultyProfile(
        name="Random",
        description="Plays any legal move",
    ),
    Difficulty.EASY: DifficultyProfile(
        name="Easy",
        description="Closes and blocks mills it can see one move ahead",
    ),
    Difficulty.MEDIUM: DifficultyProfile(
        name="Medium",
        description="Searches ahead until its decision time runs out",
        searches=True,
        respects_time_limit=True,
    ),
    Difficulty.STRONG: DifficultyProfile(
        name="Strong",
        description="Always searches the full depth, however long it takes",
        searches=True,
        respects_time_limit=False,
    ),
}


def create_bot(
    difficulty: Difficulty | str,
    color: StoneColor,
    settings: MatchSettings | None = None,
    seed: int | None = None,
) -> BotPolicy | None:
    """
    Create the bot for a difficulty level.

    Returns None for human players.
    """
    difficulty = Difficulty(difficulty)
    settings = settings or MatchSettings()
    rng = random.Random(seed)

    if difficulty == Difficulty.HUMAN:
        return None
    if difficulty == Difficulty.RANDOM:
        return RandomPolicy(color, rng=rng)
    if difficulty == Difficulty.EASY:
        return GreedyPolicy(color, rng=rng)

    profile = DIFFICULTIES[difficulty]
    return AlphaBetaBot(
        color,
        respect_time_limit=profile.respects_time_limit,
        search_depth=settings.search_depth,
        decision_time_ms=settings.decision_time_ms,
        rng=rng,
    )
