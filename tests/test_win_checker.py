"""Tests for battle.win_checker module."""

from battle.combatant import Combatant
from battle.config import BattleConfig
from battle.enums import MatchOutcome
from battle.win_checker import WinConditionChecker


def _pair(player_hp: int = 100, enemy_hp: int = 80):
    return (
        Combatant(name="Player", max_hp=100, hp=player_hp),
        Combatant(name="Slime", max_hp=80, hp=enemy_hp),
    )


class TestDeaths:
    def test_both_alive(self):
        info = WinConditionChecker(BattleConfig()).check_deaths(*_pair(), turn_number=3)
        assert not info.is_over
        assert info.result is MatchOutcome.NOT_FINISHED

    def test_enemy_dead_is_win(self):
        info = WinConditionChecker(BattleConfig()).check_deaths(*_pair(enemy_hp=0), turn_number=3)
        assert info.is_over
        assert info.result is MatchOutcome.WIN
        assert info.turn_number == 3
        assert "Slime" in info.message

    def test_player_dead_is_loss(self):
        info = WinConditionChecker(BattleConfig()).check_deaths(*_pair(player_hp=0), turn_number=3)
        assert info.result is MatchOutcome.LOSS
        assert "Player" in info.message

    def test_simultaneous_death_counts_as_win(self):
        info = WinConditionChecker(BattleConfig()).check_deaths(
            *_pair(player_hp=0, enemy_hp=0), turn_number=3
        )
        assert info.result is MatchOutcome.WIN


class TestLimits:
    def test_turn_limit_after_max(self):
        checker = WinConditionChecker(BattleConfig(max_turns=50))
        assert not checker.check_game_over(*_pair(), turn_number=50).is_over
        info = checker.check_game_over(*_pair(), turn_number=51)
        assert info.result is MatchOutcome.TURN_LIMIT
        assert "50" in info.message

    def test_deaths_take_priority_over_turn_limit(self):
        checker = WinConditionChecker(BattleConfig(max_turns=50))
        info = checker.check_game_over(*_pair(enemy_hp=0), turn_number=51)
        assert info.result is MatchOutcome.WIN

    def test_time_limit_disabled_by_default(self):
        checker = WinConditionChecker(BattleConfig(turn_time_limit=0.0))
        assert not checker.check_game_over(*_pair(), turn_number=2, turn_elapsed=9999).is_over

    def test_time_limit(self):
        checker = WinConditionChecker(BattleConfig(turn_time_limit=30.0))
        assert not checker.check_game_over(*_pair(), turn_number=2, turn_elapsed=10).is_over
        info = checker.check_game_over(*_pair(), turn_number=2, turn_elapsed=31)
        assert info.result is MatchOutcome.TIME_LIMIT

    def test_results_are_independent(self):
        checker = WinConditionChecker(BattleConfig())
        first = checker.check_deaths(*_pair(), turn_number=1)
        first.is_over = True
        assert not checker.check_deaths(*_pair(), turn_number=1).is_over
