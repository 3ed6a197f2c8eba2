"""
Tests for match settings.
"""

import pytest
from pydantic import ValidationError

from ..config import MatchSettings


class TestMatchSettings:
    """Tests for defaults, validation and the environment."""

    def test_defaults(self):
        settings = MatchSettings()
        assert settings.decision_time_ms == 500
        assert settings.search_depth == 4
        assert not settings.pace_moves
        assert settings.draw_turns_without_mill == 50
        assert settings.draw_repetitions == 3

    @pytest.mark.parametrize("field,value", [
        ("search_depth", 0),
        ("decision_time_ms", -1),
        ("draw_repetitions", 1),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            MatchSettings(**{field: value})

    def test_frozen(self):
        settings = MatchSettings()
        with pytest.raises(ValidationError):
            settings.search_depth = 2

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("MORRIS_DECISION_TIME", "250")
        monkeypatch.setenv("MORRIS_SEARCH_DEPTH", "3")
        monkeypatch.setenv("MORRIS_PACE_MOVES", "1")

        settings = MatchSettings.from_env()

        assert settings.decision_time_ms == 250
        assert settings.search_depth == 3
        assert settings.pace_moves

    def test_overrides_beat_env(self, monkeypatch):
        monkeypatch.setenv("MORRIS_SEARCH_DEPTH", "3")
        settings = MatchSettings.from_env(search_depth=5, decision_time_ms=None)

        assert settings.search_depth == 5
        assert settings.decision_time_ms == 500

    def test_invalid_env(self, monkeypatch):
        monkeypatch.setenv("MORRIS_SEARCH_DEPTH", "deep")
        with pytest.raises(ValidationError):
            MatchSettings.from_env()
