"""卡牌效果解析器

按卡牌原型分发到对应处理函数，计算一次出牌的 Outcome。
解析过程只读取施法者 / 目标状态并消耗随机源，不修改任何战斗单位；
由回合控制器负责把 Outcome 应用到状态上。

伤害公式（顺序固定）:
    1. 基础值（成长型卡牌加上已出同类牌数 × 每层加成）
    2. 确定性倍率：必暴 ×暴击倍率，斩杀 ×斩杀倍率，下一张牌增益 ×(1 + 加成)
    3. 均匀浮动 ×U(1 - variance, 1 + variance)
    4. 独立暴击判定（已必暴时不再判定）
    5. 防御减免：有效防御 = 防御 × (1 - 穿透)，减免 = min(有效防御 / 100, 0.5)
    结果向下取整，且不小于 0。

持续伤害与延迟爆发类卡牌不走上述流程，但同样吃下一张牌增益：
倍率同时作用于冲击伤害和每回合数值。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable

from .archetypes import DAMAGING_KINDS, TARGETED_KINDS, CardArchetype
from .combatant import Combatant
from .config import BattleConfig, get_config
from .effects.base import Effect
from .enums import ArchetypeKind, EffectKind, FailureReason, StackPolicy
from .exceptions import UnknownArchetypeError
from .rng import RandomSource

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResolveContext:
    """出牌上下文：由控制器在解析前构造"""

    guaranteed_crit: bool = False
    damage_bonus: float = 0.0
    consumed_buffs: list[str] = field(default_factory=list)
    scaling_counts: dict[str, int] = field(default_factory=dict)


@dataclass(slots=True)
class Outcome:
    """一次出牌的结算结果

    new_effects 施加于目标，self_effects 施加于施法者；
    removed_effects / consumed_buffs 是施法者身上要移除的效果名。
    kill_refund 只是候选返还量；killed 由控制器在伤害实际结算后填写。
    """

    card_name: str
    kind: ArchetypeKind
    damage: int = 0
    healing: int = 0
    critical: bool = False
    hits: int = 0
    new_effects: list[Effect] = field(default_factory=list)
    self_effects: list[Effect] = field(default_factory=list)
    removed_effects: list[str] = field(default_factory=list)
    consumed_buffs: list[str] = field(default_factory=list)
    resource_delta: int = 0
    kill_refund: int = 0
    self_damage: int = 0
    executed: bool = False
    detonated: bool = False
    explosion_damage: int = 0
    killed: bool = False
    failure_reason: FailureReason | None = None

    @property
    def success(self) -> bool:
        return self.failure_reason is None


Handler = Callable[[CardArchetype, Combatant, "Combatant | None", ResolveContext, Outcome], None]


class CardResolver:
    """原型分发表

    使用方式::

        resolver = CardResolver(RandomSource(seed=42))
        outcome = resolver.resolve(archetype, player, enemy)
    """

    def __init__(self, rng: RandomSource, config: BattleConfig | None = None):
        self.rng = rng
        self.config = config or get_config()
        self._handlers: dict[ArchetypeKind, Handler] = {
            ArchetypeKind.DIRECT_DAMAGE: self._resolve_direct_damage,
            ArchetypeKind.DAMAGE_OVER_TIME: self._resolve_damage_over_time,
            ArchetypeKind.HEAL: self._resolve_heal,
            ArchetypeKind.HEAL_OVER_TIME: self._resolve_heal_over_time,
            ArchetypeKind.SHIELD: self._resolve_shield,
            ArchetypeKind.DAMAGE_BUFF: self._resolve_damage_buff,
            ArchetypeKind.CROWD_CONTROL: self._resolve_crowd_control,
            ArchetypeKind.MULTI_HIT: self._resolve_multi_hit,
            ArchetypeKind.SCALING: self._resolve_scaling,
            ArchetypeKind.DELAYED_ERUPTION: self._resolve_delayed_eruption,
            ArchetypeKind.EXECUTE: self._resolve_execute,
            ArchetypeKind.DRAIN: self._resolve_drain,
            ArchetypeKind.CLEANSE: self._resolve_cleanse,
            ArchetypeKind.RESOURCE_RESTORE: self._resolve_resource_restore,
        }

    # ==================== 入口 ====================

    def build_context(
        self,
        archetype: CardArchetype,
        caster: Combatant,
        scaling_counts: dict[str, int] | None = None,
    ) -> ResolveContext:
        """收集施法者身上对本卡生效的下一张牌增益"""
        context = ResolveContext(scaling_counts=dict(scaling_counts or {}))
        if archetype.kind not in DAMAGING_KINDS:
            return context
        for buff in caster.effects.find_by_kind(EffectKind.DAMAGE_BUFF):
            if not buff.matches_element(archetype.element.value):
                continue
            context.damage_bonus += buff.magnitude
            context.guaranteed_crit = context.guaranteed_crit or buff.guaranteed_crit
            context.consumed_buffs.append(buff.name)
        return context

    def resolve(
        self,
        archetype: CardArchetype,
        caster: Combatant,
        target: Combatant | None,
        context: ResolveContext | None = None,
    ) -> Outcome:
        """解析一张卡牌

        失败原因写入 Outcome.failure_reason，不抛异常。

        Raises:
            UnknownArchetypeError: 原型不在分发表中
        """
        handler = self._handlers.get(archetype.kind)
        if handler is None:
            raise UnknownArchetypeError(str(archetype.kind), item_name=archetype.name)
        context = context or ResolveContext()
        outcome = Outcome(card_name=archetype.name, kind=archetype.kind)

        if archetype.kind in TARGETED_KINDS and (target is None or not target.is_alive):
            outcome.failure_reason = FailureReason.NO_TARGET
            return outcome

        handler(archetype, caster, target, context, outcome)
        if not outcome.success:
            logger.debug("%s failed: %s", archetype.name, outcome.failure_reason.value)
            return outcome

        self._roll_rider(archetype, outcome)
        if archetype.kind in DAMAGING_KINDS:
            outcome.consumed_buffs = list(context.consumed_buffs)
            if archetype.refund_fraction > 0:
                outcome.kill_refund = math.floor(archetype.cost * archetype.refund_fraction)
        outcome.self_damage = archetype.self_damage

        logger.debug(
            "%s resolved: damage=%d healing=%d crit=%s effects=%d/%d",
            archetype.name,
            outcome.damage,
            outcome.healing,
            outcome.critical,
            len(outcome.new_effects),
            len(outcome.self_effects),
        )
        return outcome

    # ==================== 伤害公式 ====================

    def _crit_multiplier(self, archetype: CardArchetype) -> float:
        if archetype.crit_multiplier is not None:
            return archetype.crit_multiplier
        return self.config.crit_multiplier

    def _crit_chance(self, archetype: CardArchetype) -> float:
        if archetype.crit_chance is not None:
            return archetype.crit_chance
        return self.config.crit_chance

    def mitigate(self, damage: float, defense: float, penetration: float = 0.0) -> float:
        """防御减免"""
        effective_defense = defense * (1.0 - penetration)
        reduction = min(effective_defense / 100, self.config.max_defense_reduction)
        return damage * (1.0 - max(0.0, reduction))

    def compute_damage(
        self,
        base: float,
        archetype: CardArchetype,
        target: Combatant,
        context: ResolveContext,
    ) -> tuple[int, bool, bool]:
        """完整伤害流程

        Returns:
            (伤害, 是否暴击, 是否触发斩杀)
        """
        damage = float(base)
        crit_multiplier = self._crit_multiplier(archetype)
        guaranteed = archetype.guaranteed_crit or context.guaranteed_crit
        critical = guaranteed
        if guaranteed:
            damage *= crit_multiplier

        executed = False
        if archetype.execute_threshold > 0 and target.hp_ratio <= archetype.execute_threshold:
            damage *= archetype.execute_multiplier
            executed = True

        if context.damage_bonus > 0:
            damage *= 1.0 + context.damage_bonus

        damage = self.rng.variance(damage, archetype.variance or 0.0)

        if not guaranteed and self.rng.chance(self._crit_chance(archetype)):
            damage *= crit_multiplier
            critical = True

        damage = self.mitigate(damage, target.effective_defense, archetype.penetration)
        return max(0, math.floor(damage)), critical, executed

    def _roll_amount(self, base: float, variance: float) -> int:
        return max(0, math.floor(self.rng.variance(base, variance)))

    def _roll_rider(self, archetype: CardArchetype, outcome: Outcome) -> None:
        rider = archetype.rider
        if rider is None or not self.rng.chance(rider.chance):
            return
        effect = rider.build(archetype.name)
        if rider.on_self:
            outcome.self_effects.append(effect)
        else:
            outcome.new_effects.append(effect)

    def _status_effect(
        self,
        archetype: CardArchetype,
        kind: EffectKind,
        magnitude: float,
        turns: int | None = None,
    ) -> Effect:
        return Effect(
            name=archetype.status_name,
            kind=kind,
            magnitude=magnitude,
            turns_remaining=archetype.duration if turns is None else turns,
            max_stacks=archetype.max_stacks,
            stack_policy=archetype.stack_policy,
            source_card_name=archetype.name,
            emoji=archetype.emoji,
            applies_to=archetype.applies_to.value if archetype.applies_to else None,
            guaranteed_crit=archetype.guaranteed_crit,
        )

    # ==================== 伤害类 ====================

    def _resolve_direct_damage(self, archetype, caster, target, context, outcome) -> None:
        damage, critical, executed = self.compute_damage(
            archetype.base_value, archetype, target, context
        )
        outcome.damage = damage
        outcome.critical = critical
        outcome.executed = executed
        outcome.hits = 1

    def _resolve_scaling(self, archetype, caster, target, context, outcome) -> None:
        count = context.scaling_counts.get(archetype.scaling_key, 0)
        base = archetype.base_value + archetype.scaling_per_stack * count
        damage, critical, _ = self.compute_damage(base, archetype, target, context)
        outcome.damage = damage
        outcome.critical = critical
        outcome.hits = 1

    def _resolve_execute(self, archetype, caster, target, context, outcome) -> None:
        self._resolve_direct_damage(archetype, caster, target, context, outcome)

    def _resolve_drain(self, archetype, caster, target, context, outcome) -> None:
        self._resolve_direct_damage(archetype, caster, target, context, outcome)
        outcome.healing = min(outcome.damage, caster.missing_hp)

    def _resolve_multi_hit(self, archetype, caster, target, context, outcome) -> None:
        hits = self.rng.randint(archetype.min_hits, archetype.max_hits)
        for _ in range(hits):
            base = archetype.base_value
            if archetype.per_hit_bonus > 0:
                base *= 1.0 + self.rng.uniform(0.0, archetype.per_hit_bonus)
            damage, critical, _ = self.compute_damage(base, archetype, target, context)
            outcome.damage += damage
            outcome.critical = outcome.critical or critical
            outcome.hits += 1
            if outcome.damage >= target.hp:
                break

    def _resolve_crowd_control(self, archetype, caster, target, context, outcome) -> None:
        if target.is_stunned:
            outcome.failure_reason = FailureReason.ALREADY_STUNNED
            return
        if archetype.base_value > 0:
            self._resolve_direct_damage(archetype, caster, target, context, outcome)
        outcome.new_effects.append(
            self._status_effect(archetype, EffectKind.STUN, 0, turns=max(1, archetype.duration))
        )

    def _amplify(self, value: float, archetype, context, outcome) -> float:
        """下一张牌增益作用于持续伤害类卡牌：同时放大冲击伤害与每回合数值"""
        if context.guaranteed_crit:
            value *= self._crit_multiplier(archetype)
            outcome.critical = True
        if context.damage_bonus > 0:
            value *= 1.0 + context.damage_bonus
        return value

    def _resolve_damage_over_time(self, archetype, caster, target, context, outcome) -> None:
        magnitude = self._amplify(archetype.base_value, archetype, context, outcome)
        if archetype.impact_fraction > 0:
            outcome.damage = math.floor(magnitude * archetype.impact_fraction)
            outcome.hits = 1

        name = archetype.status_name
        existing = target.effects.get(name)
        policy = existing.stack_policy if existing else archetype.stack_policy
        max_stacks = existing.max_stacks if existing else archetype.max_stacks
        if policy is StackPolicy.DETONATE and target.effects.stacks_of(name) + 1 >= max_stacks:
            explosion = math.floor(magnitude * max_stacks * archetype.explosion_multiplier)
            outcome.explosion_damage = explosion
            outcome.damage += explosion
            outcome.detonated = True
            logger.info("%s detonates on %s for %d", name, target.name, explosion)

        outcome.new_effects.append(
            self._status_effect(archetype, EffectKind.DAMAGE_OVER_TIME, magnitude)
        )

    def _resolve_delayed_eruption(self, archetype, caster, target, context, outcome) -> None:
        if target.effects.has(archetype.status_name):
            outcome.failure_reason = FailureReason.ALREADY_ACTIVE
            return
        magnitude = self._amplify(archetype.base_value, archetype, context, outcome)
        if archetype.impact_fraction > 0:
            outcome.damage = math.floor(magnitude * archetype.impact_fraction)
            outcome.hits = 1
        effect = self._status_effect(
            archetype,
            EffectKind.DELAYED_ERUPTION,
            magnitude,
            turns=archetype.eruption_turn,
        )
        effect.growth_multiplier = archetype.growth_multiplier
        effect.eruption_turn = archetype.eruption_turn
        effect.eruption_multiplier = archetype.eruption_multiplier
        outcome.new_effects.append(effect)

    # ==================== 治疗 / 防护类 ====================

    def _resolve_heal(self, archetype, caster, target, context, outcome) -> None:
        if caster.is_full_health:
            outcome.failure_reason = FailureReason.FULL_HEALTH
            return
        amount = float(archetype.base_value)
        if archetype.guaranteed_crit or self.rng.chance(self._crit_chance(archetype)):
            amount *= self._crit_multiplier(archetype)
            outcome.critical = True
        variance = archetype.variance if archetype.variance is not None else self.config.heal_variance
        outcome.healing = min(self._roll_amount(amount, variance), caster.missing_hp)

    def _resolve_heal_over_time(self, archetype, caster, target, context, outcome) -> None:
        outcome.self_effects.append(
            self._status_effect(archetype, EffectKind.HEAL_OVER_TIME, archetype.base_value)
        )

    def _resolve_shield(self, archetype, caster, target, context, outcome) -> None:
        if caster.effects.has(archetype.status_name):
            outcome.failure_reason = FailureReason.ALREADY_ACTIVE
            return
        if archetype.base_value > 0:
            pool = self._roll_amount(archetype.base_value, archetype.variance or 0.0)
            outcome.self_effects.append(self._status_effect(archetype, EffectKind.SHIELD, pool))
        if archetype.damage_reduction > 0:
            ward = self._status_effect(
                archetype, EffectKind.DAMAGE_REDUCTION, archetype.damage_reduction
            )
            if archetype.base_value > 0:
                ward.name = f"{archetype.status_name}_ward"
            outcome.self_effects.append(ward)

    def _resolve_damage_buff(self, archetype, caster, target, context, outcome) -> None:
        if caster.effects.has(archetype.status_name):
            outcome.failure_reason = FailureReason.ALREADY_ACTIVE
            return
        outcome.self_effects.append(
            self._status_effect(archetype, EffectKind.DAMAGE_BUFF, archetype.damage_bonus)
        )

    def _resolve_cleanse(self, archetype, caster, target, context, outcome) -> None:
        debuffs = [e.name for e in caster.effects.debuffs()]
        if not debuffs and caster.is_full_health:
            outcome.failure_reason = FailureReason.NOTHING_TO_CLEANSE
            return
        outcome.removed_effects = debuffs
        if not caster.is_full_health:
            amount = self._roll_amount(archetype.base_value, archetype.variance or 0.0)
            outcome.healing = min(amount, caster.missing_hp)

    def _resolve_resource_restore(self, archetype, caster, target, context, outcome) -> None:
        if archetype.duration > 0:
            outcome.self_effects.append(
                self._status_effect(archetype, EffectKind.RESOURCE_REGEN, archetype.base_value)
            )
            return
        if caster.is_full_resource:
            outcome.failure_reason = FailureReason.FULL_RESOURCE
            return
        amount = self._roll_amount(archetype.base_value, archetype.variance or 0.0)
        outcome.resource_delta = min(amount, caster.max_resource - caster.resource)
