"""持续效果基础数据

Effect 是挂在战斗单位身上的计时状态（燃烧、中毒、护盾、回复、增益……），
TickResult 是一次回合结算对单个效果的处理记录。
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..enums import EffectKind, StackPolicy
from ..exceptions import DataIntegrityError


@dataclass
class Effect:
    """一个计时效果实例

    magnitude 的含义随 kind 变化：
    - DAMAGE_OVER_TIME / HEAL_OVER_TIME / RESOURCE_REGEN: 每层每回合数值
    - SHIELD: 剩余吸收量
    - DAMAGE_REDUCTION / DAMAGE_BUFF / WEAKEN: 比例（0.4 = 40%）
    - ARMOR_BREAK: 每层削减的防御
    - DELAYED_ERUPTION: 当前（已成长的）每回合伤害
    - THORNS: 每次受击反弹的伤害
    """

    name: str
    kind: EffectKind
    magnitude: float
    turns_remaining: int
    duration: int = 0
    stacks: int = 1
    max_stacks: int = 1
    stack_policy: StackPolicy = StackPolicy.REFRESH
    source_card_name: str = ""
    emoji: str = ""

    # 延迟爆发
    growth_multiplier: float = 1.0
    eruption_turn: int = 0
    eruption_multiplier: float = 1.0
    ticks_elapsed: int = 0

    # 下一张牌增益
    applies_to: str | None = None
    guaranteed_crit: bool = False

    def __post_init__(self) -> None:
        if self.duration <= 0:
            self.duration = self.turns_remaining
        if self.max_stacks < 1:
            self.max_stacks = 1

    @property
    def is_stacking(self) -> bool:
        return self.stack_policy is not StackPolicy.REFRESH

    @property
    def tick_amount(self) -> int:
        """本回合结算量（每层数值 × 层数，向下取整）"""
        return max(0, int(self.magnitude * self.stacks))

    def copy(self) -> Effect:
        return replace(self)

    def matches_element(self, element: str | None) -> bool:
        """增益是否作用于该元素的卡牌（applies_to 为空表示任意元素）"""
        return self.applies_to is None or self.applies_to == element


def validate_effect(effect: Effect) -> None:
    """检查效果数据是否完整

    Raises:
        DataIntegrityError: 缺少名称、类型非法或回合数为负
    """
    name = getattr(effect, "name", None)
    if not isinstance(name, str) or not name.strip():
        raise DataIntegrityError(
            item_name=str(getattr(effect, "source_card_name", "") or "?"),
            reason="effect has no name",
        )
    if not isinstance(effect.kind, EffectKind):
        raise DataIntegrityError(item_name=name, reason=f"invalid kind {effect.kind!r}")
    if effect.turns_remaining < 0:
        raise DataIntegrityError(
            item_name=name, reason=f"negative turns_remaining {effect.turns_remaining}"
        )


@dataclass(slots=True)
class TickResult:
    """单个效果在一次回合结算中的结果"""

    combatant: str
    effect_name: str
    kind: EffectKind | None
    amount: int = 0
    stacks: int = 0
    turns_remaining: int = 0
    expired: bool = False
    erupted: bool = False
    skipped_reason: str | None = None
