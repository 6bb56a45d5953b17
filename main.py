# -*- coding: utf-8 -*-
"""
Emoji 卡牌对战 - 命令行终端版
主程序入口

使用方法:
    python main.py
    python main.py --seed 42 --locale en_US
    python main.py --auto            # 自动对战（每回合打出第一张可用的牌）

依赖:
    - Python 3.10+
    - pydantic (卡牌目录校验)
    - rich (终端界面)
"""

from __future__ import annotations

import argparse
import logging
import sys

from battle.catalog import load_catalog
from battle.config import BattleConfig, get_config
from battle.engine import BattleEngine
from battle.exceptions import BattleError
from battle.rng import RandomSource
from battle.stats import MatchStats
from i18n import set_locale
from i18n import t as _t
from logging_config import setup_logging
from ui.rich_hud import BattleHUD, describe_play

logger = logging.getLogger(__name__)

# 自动对战的安全上限（防止配置异常时死循环）
_AUTO_ACTION_LIMIT = 10_000


class EmojiBattleGame:
    """
    Emoji 卡牌对战主类
    负责对局的初始化、主循环与输入处理
    """

    def __init__(
        self,
        engine: BattleEngine,
        hud: BattleHUD | None = None,
        stats: MatchStats | None = None,
        auto: bool = False,
    ):
        self.engine = engine
        self.hud = hud or BattleHUD()
        self.stats = stats
        self.auto = auto
        self.is_running = True

    def run(self, enemy_key: str | None = None) -> None:
        """运行一局对战"""
        self.engine.start_match(enemy_key=enemy_key)
        if self.stats is not None:
            self.stats.attach(self.engine.event_bus, autosave=True)

        actions = 0
        while self.is_running and not self.engine.is_over:
            snapshot = self.engine.snapshot()
            if not self.auto:
                self.hud.show(snapshot)
            self._take_action(snapshot)
            actions += 1
            if self.auto and actions >= _AUTO_ACTION_LIMIT:
                logger.error("Auto battle exceeded %d actions, aborting", _AUTO_ACTION_LIMIT)
                break

        if self.engine.is_over:
            final = self.engine.snapshot()
            if not self.auto:
                self.hud.show(final)
            self.hud.show_game_over(final, self._stats_line())

    def _take_action(self, snapshot) -> None:
        if self.auto:
            playable = [c for c in snapshot.hand if c.playable]
            if playable:
                result = self.engine.play_card(playable[0].instance_id)
            else:
                result = self.engine.end_turn()
            self.hud.log_many(describe_play(result))
            return

        choice = self.hud.prompt()
        if choice == "q":
            self.is_running = False
            self.hud.console.print(_t("main.goodbye"))
            return
        if choice == "e":
            self.hud.log_many(describe_play(self.engine.end_turn()))
            return
        if not choice.isdigit() or not 1 <= int(choice) <= len(snapshot.hand):
            self.hud.log(_t("ui.invalid_choice"))
            return
        card = snapshot.hand[int(choice) - 1]
        self.hud.log_many(describe_play(self.engine.play_card(card.instance_id)))

    def _stats_line(self) -> str:
        if self.stats is None:
            return ""
        data = self.stats.data
        return _t(
            "main.stats",
            wins=data.wins,
            losses=data.losses,
            streak=data.current_streak,
            best=data.best_streak,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Emoji 卡牌对战")
    parser.add_argument("--seed", type=int, default=None, help="随机种子（可复现对局）")
    parser.add_argument("--auto", action="store_true", help="自动对战")
    parser.add_argument("--locale", default="zh_CN", help="界面语言 (zh_CN / en_US)")
    parser.add_argument("--log-level", default=None, help="日志级别")
    parser.add_argument("--enemy", default=None, help="敌人档案名")
    parser.add_argument("--catalog", default=None, help="卡牌目录 JSON 路径")
    parser.add_argument("--stats-file", default=None, help="战绩文件路径")
    parser.add_argument("--no-stats", action="store_true", help="不记录战绩")
    return parser


def main(argv: list[str] | None = None) -> int:
    """程序入口"""
    args = build_parser().parse_args(argv)
    config: BattleConfig = get_config()
    setup_logging(level=args.log_level or config.log_level, enable_console=False)

    try:
        set_locale(args.locale)
        catalog = load_catalog(args.catalog or config.catalog_path or None)
        engine = BattleEngine(catalog=catalog, config=config, rng=RandomSource(seed=args.seed))
        stats = None
        if not args.no_stats:
            stats = MatchStats(args.stats_file or config.stats_path or None)
            stats.load()
        EmojiBattleGame(engine, stats=stats, auto=args.auto).run(enemy_key=args.enemy)
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt - exiting")
        print("\n" + _t("main.goodbye"))
        return 0
    except (BattleError, ValueError) as e:
        logger.exception("Failed to run match")
        print(f"\n{e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
