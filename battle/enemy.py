"""敌人

敌人档案（数值来自卡牌目录）与敌方回合的攻击结算。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .combatant import Combatant
from .config import BattleConfig, get_config
from .effects.base import Effect
from .enums import EffectKind, StackPolicy
from .rng import RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EnemyProfile:
    """敌人档案"""

    key: str
    name: str
    max_hp: int
    attack: int
    defense: int = 0
    emoji: str = ""
    crit_chance: float | None = None
    crit_multiplier: float | None = None
    poison_chance: float = 0.0
    poison_damage: int = 0
    poison_duration: int = 0
    poison_max_stacks: int = 5


# 卡牌目录缺失敌人数据时使用的默认档案
DEFAULT_ENEMY = EnemyProfile(
    key="slime",
    name="Slime",
    emoji="🟢",
    max_hp=80,
    attack=12,
    defense=5,
    poison_chance=0.3,
    poison_damage=2,
    poison_duration=3,
)


def create_enemy(profile: EnemyProfile) -> Combatant:
    return Combatant(
        name=profile.name,
        max_hp=profile.max_hp,
        defense=profile.defense,
        attack_power=profile.attack,
        emoji=profile.emoji,
    )


@dataclass(slots=True)
class EnemyAttack:
    """一次敌方攻击的结算"""

    attacker: str
    raw_damage: int = 0
    hp_lost: int = 0
    absorbed: int = 0
    critical: bool = False
    poisoned: bool = False
    retaliation: int = 0
    skipped_reason: str | None = None

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None


class EnemyBehavior:
    """敌方行动：每个敌方回合普通攻击一次，眩晕时跳过"""

    def __init__(
        self,
        profile: EnemyProfile,
        rng: RandomSource,
        config: BattleConfig | None = None,
    ):
        self.profile = profile
        self.rng = rng
        self.config = config or get_config()

    def attack(self, enemy: Combatant, player: Combatant) -> EnemyAttack:
        """攻击玩家

        伤害 = 攻击力 × 浮动 × 暴击 × (1 - 虚弱) × (1 - 玩家减伤) × (1 - 防御减免)，
        再由玩家护盾吸收。
        """
        result = EnemyAttack(attacker=enemy.name)
        if not enemy.is_alive:
            result.skipped_reason = "dead"
            return result
        if enemy.is_stunned:
            result.skipped_reason = "stunned"
            logger.debug("%s is stunned and skips its attack", enemy.name)
            return result

        cfg = self.config
        damage = self.rng.variance(enemy.attack_power, cfg.enemy_attack_variance)
        crit_chance = (
            self.profile.crit_chance if self.profile.crit_chance is not None else cfg.crit_chance
        )
        if self.rng.chance(crit_chance):
            damage *= (
                self.profile.crit_multiplier
                if self.profile.crit_multiplier is not None
                else cfg.crit_multiplier
            )
            result.critical = True
        damage *= 1.0 - enemy.weaken
        damage *= 1.0 - player.damage_reduction
        reduction = min(player.effective_defense / 100, cfg.max_defense_reduction)
        damage *= 1.0 - reduction

        result.raw_damage = max(0, int(damage))
        taken = player.take_damage(result.raw_damage)
        result.hp_lost = taken.hp_lost
        result.absorbed = taken.absorbed

        if player.thorns > 0:
            result.retaliation = enemy.lose_hp(player.thorns)

        if self.profile.poison_chance > 0 and self.rng.chance(self.profile.poison_chance):
            add = player.effects.add(
                Effect(
                    name="poison",
                    kind=EffectKind.DAMAGE_OVER_TIME,
                    magnitude=self.profile.poison_damage,
                    turns_remaining=self.profile.poison_duration,
                    max_stacks=self.profile.poison_max_stacks,
                    stack_policy=StackPolicy.CLAMP,
                    source_card_name=enemy.name,
                    emoji="☠️",
                )
            )
            result.poisoned = add.accepted

        logger.info(
            "%s attacks %s: %d damage (%d absorbed)%s",
            enemy.name,
            player.name,
            result.hp_lost,
            result.absorbed,
            " CRIT" if result.critical else "",
        )
        return result
