"""对战统计记录

只订阅引擎的 GAME_END 事件，累计胜负与连胜并以 JSON 持久化。

用法:
    stats = MatchStats()
    stats.load()
    stats.attach(engine.event_bus)
    ...
    stats.save()
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path

from .enums import MatchOutcome
from .events import EventBus, EventType, GameEvent

logger = logging.getLogger(__name__)

# 默认存储路径
_DEFAULT_PATH = Path("data") / "battle_stats.json"

# 保留最近的对局条数
_MAX_RECENT = 20


@dataclass(slots=True)
class MatchRecord:
    """单局结果"""

    result: str
    turns: int
    timestamp: float = field(default_factory=time.time)


@dataclass(slots=True)
class StatsData:
    wins: int = 0
    losses: int = 0
    total_games: int = 0
    current_streak: int = 0
    best_streak: int = 0
    last_played: float | None = None
    recent: list[MatchRecord] = field(default_factory=list)


class MatchStats:
    """胜负统计管理器"""

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path else _DEFAULT_PATH
        self.data = StatsData()
        self._autosave = False

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> None:
        """从文件加载；文件损坏时重置为空统计"""
        if not self._path.exists():
            self.data = StatsData()
            return
        try:
            with open(self._path, encoding="utf-8") as f:
                raw = json.load(f)
            recent = [MatchRecord(**r) for r in raw.pop("recent", [])]
            raw.pop("version", None)
            self.data = StatsData(**raw, recent=recent)
        except (OSError, ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning("Stats file is corrupt, resetting: %s", e)
            self.data = StatsData()

    def save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"version": "1.0", **asdict(self.data)}
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)

    def record(self, result: MatchOutcome, turns: int = 0) -> None:
        """记录一局结果；只有胜利会延续连胜"""
        if result is MatchOutcome.NOT_FINISHED:
            return
        data = self.data
        data.total_games += 1
        if result is MatchOutcome.WIN:
            data.wins += 1
            data.current_streak += 1
            data.best_streak = max(data.best_streak, data.current_streak)
        else:
            if result is MatchOutcome.LOSS:
                data.losses += 1
            data.current_streak = 0
        data.last_played = time.time()
        data.recent.append(MatchRecord(result=result.value, turns=turns))
        data.recent = data.recent[-_MAX_RECENT:]
        logger.info(
            "Match recorded: %s (wins=%d losses=%d streak=%d)",
            result.value,
            data.wins,
            data.losses,
            data.current_streak,
        )

    @property
    def win_rate(self) -> float:
        if not self.data.total_games:
            return 0.0
        return self.data.wins / self.data.total_games

    # ==================== 事件订阅 ====================

    def attach(self, event_bus: EventBus, autosave: bool = False) -> None:
        """订阅终局事件"""
        self._autosave = autosave
        event_bus.subscribe(EventType.GAME_END, self._on_game_end)

    def _on_game_end(self, event: GameEvent) -> None:
        self.record(event.data["result"], event.data.get("turn_number", 0))
        if self._autosave:
            self.save()
