"""Tests for the command-line entry point."""

import io
import logging

import pytest
from rich.console import Console

import main as main_mod
from battle.config import BattleConfig
from battle.engine import BattleEngine
from battle.rng import RandomSource
from battle.stats import MatchStats
from factories import make_catalog
from i18n import get_locale, set_locale
from ui.rich_hud import BattleHUD


@pytest.fixture(autouse=True)
def _restore_globals():
    original = get_locale()
    yield
    set_locale(original)
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.name in ("emoji_battle_file", "emoji_battle_console"):
            root.removeHandler(handler)
            handler.close()


def _quiet_hud() -> BattleHUD:
    return BattleHUD(console=Console(file=io.StringIO(), width=100))


class TestEmojiBattleGame:
    def test_auto_battle_finishes_and_records(self, tmp_path):
        engine = BattleEngine(
            catalog=make_catalog(enemy_hp=40, enemy_attack=5),
            config=BattleConfig(crit_chance=0.0, enemy_profile="dummy", turn_time_limit=0.0),
            rng=RandomSource(seed=11),
        )
        stats = MatchStats(tmp_path / "stats.json")
        game = main_mod.EmojiBattleGame(engine, hud=_quiet_hud(), stats=stats, auto=True)
        game.run()
        assert engine.is_over
        assert stats.data.total_games == 1
        assert (tmp_path / "stats.json").exists()
        assert game.hud.log_messages

    def test_quit_command(self, monkeypatch):
        engine = BattleEngine(
            catalog=make_catalog(),
            config=BattleConfig(enemy_profile="dummy"),
            rng=RandomSource(seed=1),
        )
        hud = _quiet_hud()
        monkeypatch.setattr(hud, "prompt", lambda: "q")
        game = main_mod.EmojiBattleGame(engine, hud=hud)
        game.run()
        assert not game.is_running
        assert not engine.is_over

    def test_invalid_then_end_turn(self, monkeypatch):
        engine = BattleEngine(
            catalog=make_catalog(),
            config=BattleConfig(enemy_profile="dummy"),
            rng=RandomSource(seed=1),
        )
        hud = _quiet_hud()
        answers = iter(["99", "e", "q"])
        monkeypatch.setattr(hud, "prompt", lambda: next(answers))
        main_mod.EmojiBattleGame(engine, hud=hud).run()
        assert engine.turn_number == 2
        assert hud.log_messages[0] == main_mod._t("ui.invalid_choice")


class TestMain:
    def test_parser_defaults(self):
        args = main_mod.build_parser().parse_args([])
        assert args.seed is None
        assert args.auto is False
        assert args.locale == "zh_CN"

    def test_auto_run(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        code = main_mod.main(
            ["--auto", "--seed", "3", "--locale", "en_US", "--stats-file", str(tmp_path / "s.json")]
        )
        assert code == 0
        assert (tmp_path / "s.json").exists()
        assert (tmp_path / "logs" / "emoji_battle.log").exists()

    def test_bad_catalog_returns_error(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        code = main_mod.main(["--auto", "--no-stats", "--catalog", str(tmp_path / "missing.json")])
        assert code == 1
