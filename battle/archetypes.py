"""卡牌原型定义

CardArchetype 是不可变的卡牌数据，解析器按其 kind 分发处理。
具体数值来自 data/card_catalog.json，见 catalog.py。
"""

from __future__ import annotations

from dataclasses import dataclass

from .effects.base import Effect
from .enums import ArchetypeKind, EffectKind, Element, StackPolicy

# 会造成直接伤害的原型（会消耗下一张牌增益）
DAMAGING_KINDS: frozenset[ArchetypeKind] = frozenset(
    {
        ArchetypeKind.DIRECT_DAMAGE,
        ArchetypeKind.DAMAGE_OVER_TIME,
        ArchetypeKind.CROWD_CONTROL,
        ArchetypeKind.MULTI_HIT,
        ArchetypeKind.SCALING,
        ArchetypeKind.DELAYED_ERUPTION,
        ArchetypeKind.EXECUTE,
        ArchetypeKind.DRAIN,
    }
)

# 需要存活敌方目标的原型
TARGETED_KINDS: frozenset[ArchetypeKind] = DAMAGING_KINDS


@dataclass(frozen=True, slots=True)
class RiderSpec:
    """附加效果：主效果成功后按概率施加的次要效果"""

    effect_name: str
    kind: EffectKind
    magnitude: float
    duration: int
    chance: float = 1.0
    max_stacks: int = 1
    stack_policy: StackPolicy = StackPolicy.REFRESH
    on_self: bool = False
    emoji: str = ""

    def build(self, source: str) -> Effect:
        return Effect(
            name=self.effect_name,
            kind=self.kind,
            magnitude=self.magnitude,
            turns_remaining=self.duration,
            max_stacks=self.max_stacks,
            stack_policy=self.stack_policy,
            source_card_name=source,
            emoji=self.emoji,
        )


@dataclass(frozen=True, slots=True)
class CardArchetype:
    """卡牌原型（不可变）

    variance / crit_chance / crit_multiplier 为 None 时使用 BattleConfig 中的默认值。
    """

    name: str
    cost: int
    kind: ArchetypeKind
    base_value: float
    element: Element
    emoji: str = ""
    description: str = ""
    cooldown: int = 0

    # 伤害公式
    variance: float | None = None
    crit_chance: float | None = None
    crit_multiplier: float | None = None
    penetration: float = 0.0
    guaranteed_crit: bool = False

    # 计时效果
    effect_name: str = ""
    duration: int = 0
    max_stacks: int = 1
    stack_policy: StackPolicy = StackPolicy.REFRESH
    impact_fraction: float = 0.0
    explosion_multiplier: float = 1.0

    # 延迟爆发
    growth_multiplier: float = 1.0
    eruption_turn: int = 0
    eruption_multiplier: float = 1.0

    # 斩杀
    execute_threshold: float = 0.0
    execute_multiplier: float = 1.0
    refund_fraction: float = 0.0

    # 多段 / 成长
    min_hits: int = 1
    max_hits: int = 1
    per_hit_bonus: float = 0.0
    scaling_per_stack: float = 0.0
    scaling_key: str = ""

    # 增益 / 防护
    damage_bonus: float = 0.0
    applies_to: Element | None = None
    damage_reduction: float = 0.0

    self_damage: int = 0
    rider: RiderSpec | None = None

    @property
    def status_name(self) -> str:
        """该卡牌施加的计时效果名"""
        return self.effect_name or self.name.lower()

    @property
    def is_damaging(self) -> bool:
        return self.kind in DAMAGING_KINDS
