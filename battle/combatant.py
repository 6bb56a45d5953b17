"""战斗单位

玩家与敌人共用的生命 / 法力 / 防御状态。所有数值变更都经过
钳制方法，保证 0 <= hp <= max_hp 与 0 <= resource <= max_resource。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .effects.registry import EffectRegistry
from .enums import EffectKind

logger = logging.getLogger(__name__)

# 伤害减免与虚弱的叠加上限
MAX_DAMAGE_REDUCTION = 0.9
MAX_WEAKEN = 0.9


@dataclass(slots=True)
class DamageTaken:
    """一次受击的结算"""

    hp_lost: int = 0
    absorbed: int = 0


@dataclass(frozen=True, slots=True)
class EffectView:
    """效果的只读视图（供界面渲染）"""

    name: str
    kind: str
    magnitude: float
    stacks: int
    turns_remaining: int
    emoji: str = ""


@dataclass(frozen=True, slots=True)
class CombatantSnapshot:
    """战斗单位的只读快照"""

    name: str
    emoji: str
    hp: int
    max_hp: int
    resource: int
    max_resource: int
    defense: int
    effects: tuple[EffectView, ...] = ()

    @property
    def is_alive(self) -> bool:
        return self.hp > 0


@dataclass
class Combatant:
    """战斗单位"""

    name: str
    max_hp: int
    hp: int | None = None
    max_resource: int = 0
    resource: int | None = None
    defense: int = 0
    attack_power: int = 0
    emoji: str = ""
    effects: EffectRegistry = field(default_factory=EffectRegistry)

    def __post_init__(self) -> None:
        self.max_hp = max(1, int(self.max_hp))
        self.max_resource = max(0, int(self.max_resource))
        self.hp = self.max_hp if self.hp is None else self._clamp(self.hp, self.max_hp)
        self.resource = (
            self.max_resource
            if self.resource is None
            else self._clamp(self.resource, self.max_resource)
        )
        if not self.effects.owner:
            self.effects.owner = self.name

    @staticmethod
    def _clamp(value: float, upper: int) -> int:
        return max(0, min(upper, int(value)))

    # ==================== 生命 ====================

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def missing_hp(self) -> int:
        return self.max_hp - self.hp

    @property
    def is_full_health(self) -> bool:
        return self.hp >= self.max_hp

    @property
    def hp_ratio(self) -> float:
        return self.hp / self.max_hp

    def set_hp(self, value: float) -> None:
        self.hp = self._clamp(value, self.max_hp)

    def lose_hp(self, amount: float) -> int:
        """直接扣除生命（无视护盾），返回实际损失"""
        if amount <= 0:
            return 0
        before = self.hp
        self.set_hp(self.hp - amount)
        return before - self.hp

    def heal(self, amount: float) -> int:
        """回复生命，返回实际回复量"""
        if amount <= 0:
            return 0
        before = self.hp
        self.set_hp(self.hp + amount)
        return self.hp - before

    def take_damage(self, amount: float) -> DamageTaken:
        """受到伤害：先由护盾吸收，剩余部分扣除生命"""
        result = DamageTaken()
        remaining = max(0, int(amount))
        for shield in self.effects.find_by_kind(EffectKind.SHIELD):
            if remaining <= 0:
                break
            absorbed = min(remaining, int(shield.magnitude))
            shield.magnitude -= absorbed
            remaining -= absorbed
            result.absorbed += absorbed
            if shield.magnitude <= 0:
                self.effects.remove(shield.name)
                logger.debug("%s's %s broke", self.name, shield.name)
        result.hp_lost = self.lose_hp(remaining)
        return result

    # ==================== 法力 ====================

    @property
    def is_full_resource(self) -> bool:
        return self.resource >= self.max_resource

    def set_resource(self, value: float) -> None:
        self.resource = self._clamp(value, self.max_resource)

    def gain_resource(self, amount: float) -> int:
        if amount <= 0:
            return 0
        before = self.resource
        self.set_resource(self.resource + amount)
        return self.resource - before

    def spend_resource(self, amount: int) -> bool:
        if amount > self.resource:
            return False
        self.set_resource(self.resource - amount)
        return True

    # ==================== 状态派生值 ====================

    @property
    def effective_defense(self) -> int:
        """防御减去破甲层数后的值，最低为 0"""
        return max(0, int(self.defense - self.effects.total(EffectKind.ARMOR_BREAK)))

    @property
    def damage_reduction(self) -> float:
        return min(MAX_DAMAGE_REDUCTION, self.effects.total(EffectKind.DAMAGE_REDUCTION))

    @property
    def weaken(self) -> float:
        return min(MAX_WEAKEN, self.effects.total(EffectKind.WEAKEN))

    @property
    def thorns(self) -> int:
        return int(self.effects.total(EffectKind.THORNS))

    @property
    def is_stunned(self) -> bool:
        return self.effects.has_kind(EffectKind.STUN)

    def snapshot(self) -> CombatantSnapshot:
        return CombatantSnapshot(
            name=self.name,
            emoji=self.emoji,
            hp=self.hp,
            max_hp=self.max_hp,
            resource=self.resource,
            max_resource=self.max_resource,
            defense=self.effective_defense,
            effects=tuple(
                EffectView(
                    name=e.name,
                    kind=e.kind.value,
                    magnitude=e.magnitude,
                    stacks=e.stacks,
                    turns_remaining=e.turns_remaining,
                    emoji=e.emoji,
                )
                for e in self.effects
            ),
        )
