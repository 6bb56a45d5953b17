"""效果注册表

每个战斗单位持有一个 EffectRegistry，按施加顺序保存当前生效的计时效果。
同名效果再次施加时按其 StackPolicy 处理：刷新 / 叠层封顶 / 满层引爆。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from ..enums import EffectKind, StackPolicy
from ..exceptions import DataIntegrityError
from .base import Effect, validate_effect

logger = logging.getLogger(__name__)


class AddAction(Enum):
    """施加效果的处理结果"""

    APPLIED = "applied"
    STACKED = "stacked"
    MAX_STACKS = "max_stacks"
    REFRESHED = "refreshed"
    DETONATED = "detonated"
    REJECTED = "rejected"


@dataclass(slots=True)
class AddResult:
    action: AddAction
    effect: Effect | None
    stacks: int = 0

    @property
    def accepted(self) -> bool:
        return self.action is not AddAction.REJECTED


class EffectRegistry:
    """单个战斗单位的效果集合

    同名效果只保留一条记录；迭代时返回快照，允许在遍历中移除。
    """

    def __init__(self, owner: str = "") -> None:
        self.owner = owner
        self._effects: dict[str, Effect] = {}

    # ==================== 施加 ====================

    def add(self, effect: Effect) -> AddResult:
        """施加效果

        数据不完整的效果会被记录并拒绝，不影响对局继续。
        """
        try:
            validate_effect(effect)
        except DataIntegrityError as e:
            logger.error("Rejected malformed effect on %s: %s", self.owner or "?", e)
            return AddResult(AddAction.REJECTED, None)

        existing = self._effects.get(effect.name)
        if existing is None:
            effect.stacks = max(1, min(effect.stacks, effect.max_stacks))
            if effect.stack_policy is StackPolicy.DETONATE and effect.stacks >= effect.max_stacks:
                logger.debug("%s detonated on application (%s)", effect.name, self.owner)
                return AddResult(AddAction.DETONATED, effect, 0)
            self._effects[effect.name] = effect
            logger.debug(
                "Effect applied: %s on %s (%d turns)", effect.name, self.owner, effect.turns_remaining
            )
            return AddResult(AddAction.APPLIED, effect, effect.stacks)

        if existing.stack_policy is StackPolicy.REFRESH:
            existing.turns_remaining = effect.turns_remaining
            existing.duration = effect.duration
            existing.magnitude = max(existing.magnitude, effect.magnitude)
            return AddResult(AddAction.REFRESHED, existing, existing.stacks)

        if existing.stack_policy is StackPolicy.DETONATE:
            if existing.stacks + effect.stacks >= existing.max_stacks:
                del self._effects[existing.name]
                logger.debug("%s detonated at %d stacks (%s)", existing.name, existing.max_stacks, self.owner)
                return AddResult(AddAction.DETONATED, existing, 0)
            existing.stacks += effect.stacks
            existing.turns_remaining = effect.turns_remaining
            return AddResult(AddAction.STACKED, existing, existing.stacks)

        new_stacks = min(existing.stacks + effect.stacks, existing.max_stacks)
        added = new_stacks - existing.stacks
        existing.stacks = new_stacks
        if added > 0:
            existing.turns_remaining = effect.turns_remaining
            return AddResult(AddAction.STACKED, existing, existing.stacks)
        return AddResult(AddAction.MAX_STACKS, existing, existing.stacks)

    # ==================== 查询 ====================

    def get(self, name: str) -> Effect | None:
        return self._effects.get(name)

    def has(self, name: str) -> bool:
        return name in self._effects

    def stacks_of(self, name: str) -> int:
        """同名效果的层数，不存在时为 0"""
        effect = self._effects.get(name)
        return effect.stacks if effect else 0

    def find_by_kind(self, kind: EffectKind) -> list[Effect]:
        return [e for e in self._effects.values() if e.kind is kind]

    def has_kind(self, kind: EffectKind) -> bool:
        return any(e.kind is kind for e in self._effects.values())

    def total(self, kind: EffectKind) -> float:
        """某类效果的总量（数值 × 层数之和）"""
        return sum(e.magnitude * e.stacks for e in self._effects.values() if e.kind is kind)

    def debuffs(self) -> list[Effect]:
        return [e for e in self._effects.values() if e.kind.is_debuff]

    def names(self) -> list[str]:
        return list(self._effects)

    # ==================== 移除 ====================

    def remove(self, name: str) -> bool:
        return self._effects.pop(name, None) is not None

    def discard(self, effect: Effect) -> bool:
        """按对象身份移除（用于名称已损坏的效果）"""
        for key, value in list(self._effects.items()):
            if value is effect:
                del self._effects[key]
                return True
        return False

    def consume(self, name: str) -> Effect | None:
        """取出并移除一次性效果（如下一张牌增益）"""
        effect = self._effects.pop(name, None)
        if effect is not None:
            logger.debug("Effect consumed: %s (%s)", name, self.owner)
        return effect

    def cleanse(self) -> list[str]:
        """移除所有减益，返回被移除的名称"""
        removed = [e.name for e in self.debuffs()]
        for name in removed:
            del self._effects[name]
        if removed:
            logger.debug("Cleansed %s from %s", removed, self.owner)
        return removed

    def clear(self) -> None:
        self._effects.clear()

    def __iter__(self) -> Iterator[Effect]:
        return iter(list(self._effects.values()))

    def __len__(self) -> int:
        return len(self._effects)

    def __contains__(self, name: object) -> bool:
        return name in self._effects
