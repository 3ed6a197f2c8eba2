"""
Bots module - Computer opponents.

Provides:
- BotPolicy: Interface for bot decision-making
- HeuristicEvaluator: Scores board states
- RandomPolicy / GreedyPolicy: Weak opponents
- AlphaBetaBot: Search-based opponent
- Difficulty: Selectable levels and the bot factory
"""

from .policy import BotPolicy, BotDecision, RandomPolicy
from .evaluator import HeuristicEvaluator, EvaluationWeights, StateEvaluation
from .greedy_bot import GreedyPolicy
from .alphabeta_bot import AlphaBetaBot, SearchContext
from .difficulty import Difficulty, DifficultyProfile, DIFFICULTIES, create_bot

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "HeuristicEvaluator",
    "EvaluationWeights",
    "StateEvaluation",
    "GreedyPolicy",
    "AlphaBetaBot",
    "SearchContext",
    "Difficulty",
    "DifficultyProfile",
    "DIFFICULTIES",
    "create_bot",
]
