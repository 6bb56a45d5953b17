"""Tests for battle.exceptions module."""

import pytest

from battle.exceptions import (
    BattleError,
    BattleStateError,
    CatalogLoadError,
    ConfigurationError,
    DataIntegrityError,
    InvalidPhaseError,
    MatchNotStartedError,
    UnknownArchetypeError,
)


class TestBattleError:
    def test_message_only(self):
        err = BattleError("bad")
        assert str(err) == "bad"
        assert err.details == {}

    def test_details_in_str(self):
        err = BattleError("bad", {"k": 1})
        assert "Details" in str(err)
        assert "'k': 1" in str(err)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc",
        [
            DataIntegrityError(),
            UnknownArchetypeError("summon"),
            CatalogLoadError(),
            ConfigurationError(),
            BattleStateError(),
            MatchNotStartedError(),
            InvalidPhaseError(),
        ],
    )
    def test_all_are_battle_errors(self, exc):
        assert isinstance(exc, BattleError)
        assert exc.message

    def test_unknown_archetype_is_data_error(self):
        err = UnknownArchetypeError("summon", item_name="Golem")
        assert isinstance(err, DataIntegrityError)
        assert err.kind == "summon"
        assert err.details["item_name"] == "Golem"
        assert "summon" in err.message

    def test_match_not_started_is_state_error(self):
        err = MatchNotStartedError()
        assert isinstance(err, BattleStateError)
        assert err.current_state == "not_started"


class TestDetails:
    def test_data_integrity_details(self):
        err = DataIntegrityError(item_name="burn", reason="effect has no name")
        assert err.details == {"item_name": "burn", "reason": "effect has no name"}

    def test_catalog_load_details(self):
        err = CatalogLoadError(file_path="cards.json", reason="file not found")
        assert err.file_path == "cards.json"
        assert err.details["reason"] == "file not found"

    def test_configuration_errors(self):
        err = ConfigurationError(errors=["max_turns must be >= 1, got 0"])
        assert err.errors == ["max_turns must be >= 1, got 0"]
        assert "max_turns" in str(err)

    def test_invalid_phase_fields(self):
        err = InvalidPhaseError(current_phase="TERMINAL", expected_phase="PLAYER_TURN")
        assert err.current_phase == "TERMINAL"
        assert err.details == {"current_state": "TERMINAL", "expected_state": "PLAYER_TURN"}
