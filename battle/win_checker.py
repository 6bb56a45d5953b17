"""胜负判定

判定顺序：敌人倒下 → 胜利；玩家倒下 → 失败；
超过回合上限 → 回合耗尽；超过单回合时限 → 超时。
"""

from __future__ import annotations

from dataclasses import dataclass

from i18n import t as _t

from .combatant import Combatant
from .config import BattleConfig, get_config
from .enums import MatchOutcome


@dataclass(slots=True)
class GameOverInfo:
    """对局结束信息"""

    is_over: bool
    result: MatchOutcome
    message: str
    turn_number: int = 0


def not_over() -> GameOverInfo:
    return GameOverInfo(is_over=False, result=MatchOutcome.NOT_FINISHED, message="")


class WinConditionChecker:
    """胜负条件检查器"""

    def __init__(self, config: BattleConfig | None = None):
        self.config = config or get_config()

    def check_deaths(self, player: Combatant, enemy: Combatant, turn_number: int) -> GameOverInfo:
        """只检查生命值（出牌结算后与回合结算后调用）"""
        if not enemy.is_alive:
            return self._over(MatchOutcome.WIN, turn_number, name=enemy.name)
        if not player.is_alive:
            return self._over(MatchOutcome.LOSS, turn_number, name=player.name)
        return not_over()

    def check_game_over(
        self,
        player: Combatant,
        enemy: Combatant,
        turn_number: int,
        turn_elapsed: float | None = None,
    ) -> GameOverInfo:
        """完整判定

        Args:
            turn_elapsed: 本回合已用秒数；时限为 0 或未提供时不检查
        """
        info = self.check_deaths(player, enemy, turn_number)
        if info.is_over:
            return info
        if turn_number > self.config.max_turns:
            return self._over(MatchOutcome.TURN_LIMIT, turn_number, limit=self.config.max_turns)
        limit = self.config.turn_time_limit
        if limit > 0 and turn_elapsed is not None and turn_elapsed > limit:
            return self._over(MatchOutcome.TIME_LIMIT, turn_number, limit=limit)
        return not_over()

    @staticmethod
    def _over(result: MatchOutcome, turn_number: int, **kwargs: object) -> GameOverInfo:
        return GameOverInfo(
            is_over=True,
            result=result,
            message=_t(f"outcome.{result.value}", **kwargs),
            turn_number=turn_number,
        )
