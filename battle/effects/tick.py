"""回合结算引擎

在回合边界对一个战斗单位的全部计时效果各结算一次：
造成/回复数值、递减剩余回合、移除到期效果。结算过程中不做死亡判定，
由回合控制器在两侧都结算完毕后统一检查。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from ..enums import EffectKind
from ..exceptions import DataIntegrityError
from .base import Effect, TickResult, validate_effect

if TYPE_CHECKING:
    from ..combatant import Combatant

logger = logging.getLogger(__name__)

# (combatant, effect) -> (结算量, 是否爆发)
TickHandler = Callable[["Combatant", Effect], "tuple[int, bool]"]


class TickEngine:
    """计时效果的逐回合结算"""

    def __init__(self) -> None:
        self._handlers: dict[EffectKind, TickHandler] = {
            EffectKind.DAMAGE_OVER_TIME: self._tick_damage,
            EffectKind.HEAL_OVER_TIME: self._tick_heal,
            EffectKind.RESOURCE_REGEN: self._tick_regen,
            EffectKind.DELAYED_ERUPTION: self._tick_eruption,
        }

    def tick(self, combatant: Combatant) -> list[TickResult]:
        """结算一个战斗单位的全部效果

        遍历开始时存在的每个效果恰好结算一次。
        """
        results: list[TickResult] = []
        for effect in combatant.effects:
            try:
                validate_effect(effect)
            except DataIntegrityError as e:
                logger.error("Skipping malformed effect on %s: %s", combatant.name, e)
                combatant.effects.discard(effect)
                results.append(
                    TickResult(
                        combatant=combatant.name,
                        effect_name=str(getattr(effect, "name", "") or ""),
                        kind=None,
                        skipped_reason="malformed",
                    )
                )
                continue

            effect.ticks_elapsed += 1
            handler = self._handlers.get(effect.kind)
            amount, erupted = handler(combatant, effect) if handler else (0, False)

            effect.turns_remaining = max(0, effect.turns_remaining - 1)
            expired = erupted or effect.turns_remaining == 0
            if expired:
                combatant.effects.discard(effect)
                logger.debug("Effect expired: %s on %s", effect.name, combatant.name)

            results.append(
                TickResult(
                    combatant=combatant.name,
                    effect_name=effect.name,
                    kind=effect.kind,
                    amount=amount,
                    stacks=effect.stacks,
                    turns_remaining=effect.turns_remaining,
                    expired=expired,
                    erupted=erupted,
                )
            )
        return results

    # ==================== 各类效果 ====================

    @staticmethod
    def _tick_damage(combatant: Combatant, effect: Effect) -> tuple[int, bool]:
        amount = combatant.lose_hp(effect.tick_amount)
        logger.debug("%s takes %d from %s x%d", combatant.name, amount, effect.name, effect.stacks)
        return amount, False

    @staticmethod
    def _tick_heal(combatant: Combatant, effect: Effect) -> tuple[int, bool]:
        return combatant.heal(effect.tick_amount), False

    @staticmethod
    def _tick_regen(combatant: Combatant, effect: Effect) -> tuple[int, bool]:
        return combatant.gain_resource(effect.tick_amount), False

    @staticmethod
    def _tick_eruption(combatant: Combatant, effect: Effect) -> tuple[int, bool]:
        if effect.ticks_elapsed >= effect.eruption_turn:
            amount = combatant.lose_hp(int(effect.magnitude * effect.eruption_multiplier))
            logger.debug("%s erupts on %s for %d", effect.name, combatant.name, amount)
            return amount, True
        amount = combatant.lose_hp(int(effect.magnitude))
        effect.magnitude *= effect.growth_multiplier
        return amount, False
