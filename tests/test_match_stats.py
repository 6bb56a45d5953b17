"""Tests for battle.stats module."""

import json
from unittest.mock import MagicMock, patch

import pytest

from battle.enums import MatchOutcome
from battle.events import EventBus, EventType
from battle.stats import MatchStats


@pytest.fixture
def stats(tmp_path):
    return MatchStats(tmp_path / "stats.json")


class TestRecord:
    def test_win_extends_streak(self, stats):
        stats.record(MatchOutcome.WIN, turns=5)
        stats.record(MatchOutcome.WIN, turns=7)
        assert stats.data.wins == 2
        assert stats.data.current_streak == 2
        assert stats.data.best_streak == 2

    def test_loss_resets_streak(self, stats):
        stats.record(MatchOutcome.WIN)
        stats.record(MatchOutcome.LOSS)
        assert stats.data.losses == 1
        assert stats.data.current_streak == 0
        assert stats.data.best_streak == 1

    def test_turn_limit_is_not_a_loss(self, stats):
        stats.record(MatchOutcome.WIN)
        stats.record(MatchOutcome.TURN_LIMIT)
        assert stats.data.losses == 0
        assert stats.data.total_games == 2
        assert stats.data.current_streak == 0

    def test_unfinished_is_ignored(self, stats):
        stats.record(MatchOutcome.NOT_FINISHED)
        assert stats.data.total_games == 0

    def test_recent_is_bounded(self, stats):
        for _ in range(25):
            stats.record(MatchOutcome.LOSS, turns=3)
        assert len(stats.data.recent) == 20

    def test_win_rate(self, stats):
        assert stats.win_rate == 0.0
        stats.record(MatchOutcome.WIN)
        stats.record(MatchOutcome.LOSS)
        assert stats.win_rate == pytest.approx(0.5)


class TestPersistence:
    def test_save_and_load(self, stats):
        stats.record(MatchOutcome.WIN, turns=12)
        stats.save()
        raw = json.loads(stats.path.read_text(encoding="utf-8"))
        assert raw["version"] == "1.0"

        again = MatchStats(stats.path)
        again.load()
        assert again.data.wins == 1
        assert again.data.recent[0].turns == 12
        assert again.data.recent[0].result == "player_win"

    def test_missing_file_is_empty(self, stats):
        stats.load()
        assert stats.data.total_games == 0

    def test_corrupt_file_resets(self, stats, caplog):
        stats.path.write_text("{broken", encoding="utf-8")
        stats.load()
        assert stats.data.total_games == 0
        assert "corrupt" in caplog.text

    def test_undecodable_bytes_reset(self, stats, caplog):
        stats.path.write_bytes(b"\xff\xfe\x00garbage")
        stats.load()
        assert stats.data.total_games == 0
        assert "corrupt" in caplog.text

    def test_unreadable_path_resets(self, tmp_path, caplog):
        folder = tmp_path / "stats.json"
        folder.mkdir()
        stats = MatchStats(folder)
        stats.load()
        assert stats.data.total_games == 0
        assert "corrupt" in caplog.text


class TestEventSubscription:
    def test_game_end_is_recorded(self, stats):
        bus = EventBus()
        stats.attach(bus)
        bus.emit(EventType.GAME_END, result=MatchOutcome.WIN, turn_number=9)
        assert stats.data.wins == 1
        assert stats.data.recent[0].turns == 9
        assert not stats.path.exists()

    def test_autosave(self, stats):
        bus = EventBus()
        stats.attach(bus, autosave=True)
        bus.emit(EventType.GAME_END, result=MatchOutcome.LOSS, turn_number=4)
        assert stats.path.exists()

    def test_subscribes_only_to_game_end(self, stats):
        bus = MagicMock()
        stats.attach(bus)
        bus.subscribe.assert_called_once_with(EventType.GAME_END, stats._on_game_end)

    def test_other_events_are_ignored(self, stats):
        bus = EventBus()
        stats.attach(bus)
        with patch.object(stats, "record") as record:
            bus.emit(EventType.TURN_END, turn_number=3)
        record.assert_not_called()
