"""
Match Settings - Validated configuration for a match.

Settings come from code, CLI flags or the environment:
    MORRIS_DECISION_TIME   Computer decision time in ms (default 500)
    MORRIS_SEARCH_DEPTH    Alpha-beta depth in plies (default 4)
    MORRIS_PACE_MOVES      Wait out the decision time before moving (0/1)
    MORRIS_DEBUG           Verbose search logging (0/1)
"""

from __future__ import annotations
import os

from pydantic import BaseModel, Field


class MatchSettings(BaseModel):
    """Settings shared by the match controller and its bots."""
    decision_time_ms: int = Field(
        500, ge=0, description="Time budget per computer decision in milliseconds"
    )
    search_depth: int = Field(
        4, ge=1, le=8, description="Plies searched by the alpha-beta opponents"
    )
    pace_moves: bool = Field(
        False, description="Delay computer moves until the decision time has passed"
    )
    draw_turns_without_mill: int = Field(
        50, ge=1, description="Turns without a closed mill after which the match is drawn"
    )
    draw_repetitions: int = Field(
        3, ge=2, description="Occurrences of one position after which the match is drawn"
    )
    debug_log: bool = Field(False, description="Log search details")

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, **overrides) -> MatchSettings:
        """Build settings from MORRIS_* environment variables."""
        values: dict[str, object] = {}
        env_map = {
            "decision_time_ms": "MORRIS_DECISION_TIME",
            "search_depth": "MORRIS_SEARCH_DEPTH",
            "pace_moves": "MORRIS_PACE_MOVES",
            "debug_log": "MORRIS_DEBUG",
        }
        for name, var in env_map.items():
            raw = os.getenv(var)
            if raw is not None and raw != "":
                values[name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
