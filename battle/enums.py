"""战斗枚举定义

卡牌原型、效果类型、叠加策略、回合阶段、对局结果与失败原因。
"""

from __future__ import annotations

from enum import Enum


class Element(Enum):
    """卡牌元素"""

    FIRE = "fire"
    WATER = "water"
    NATURE = "nature"


class ArchetypeKind(Enum):
    """卡牌原型（封闭集合，每种原型对应解析器中的一个处理函数）"""

    DIRECT_DAMAGE = "direct_damage"
    DAMAGE_OVER_TIME = "damage_over_time"
    HEAL = "heal"
    HEAL_OVER_TIME = "heal_over_time"
    SHIELD = "shield"
    DAMAGE_BUFF = "damage_buff"
    CROWD_CONTROL = "crowd_control"
    MULTI_HIT = "multi_hit"
    SCALING = "scaling"
    DELAYED_ERUPTION = "delayed_eruption"
    EXECUTE = "execute"
    DRAIN = "drain"
    CLEANSE = "cleanse"
    RESOURCE_RESTORE = "resource_restore"


class EffectKind(Enum):
    """持续效果类型"""

    DAMAGE_OVER_TIME = "damage_over_time"
    HEAL_OVER_TIME = "heal_over_time"
    RESOURCE_REGEN = "resource_regen"
    SHIELD = "shield"
    DAMAGE_REDUCTION = "damage_reduction"
    DAMAGE_BUFF = "damage_buff"
    STUN = "stun"
    WEAKEN = "weaken"
    ARMOR_BREAK = "armor_break"
    DELAYED_ERUPTION = "delayed_eruption"
    THORNS = "thorns"

    @property
    def is_debuff(self) -> bool:
        return self in DEBUFF_KINDS


DEBUFF_KINDS: frozenset[EffectKind] = frozenset(
    {
        EffectKind.DAMAGE_OVER_TIME,
        EffectKind.STUN,
        EffectKind.WEAKEN,
        EffectKind.ARMOR_BREAK,
        EffectKind.DELAYED_ERUPTION,
    }
)


class StackPolicy(Enum):
    """同名效果再次施加时的处理策略"""

    REFRESH = "refresh"  # 不叠层，只刷新持续时间
    CLAMP = "clamp"  # 叠层，达到上限后保持上限
    DETONATE = "detonate"  # 叠层，达到上限时引爆并清零


class TurnPhase(Enum):
    """回合阶段"""

    PLAYER_TURN = "player_turn"
    RESOLVING = "resolving"
    ENEMY_TICK = "enemy_tick"
    TERMINAL = "terminal"


class MatchOutcome(Enum):
    """对局结果"""

    NOT_FINISHED = "not_finished"
    WIN = "player_win"
    LOSS = "player_loss"
    TURN_LIMIT = "turn_limit"
    TIME_LIMIT = "time_limit"


class FailureReason(Enum):
    """出牌失败原因（以返回值形式给出，不抛异常）"""

    NO_TARGET = "no_target"
    FULL_HEALTH = "full_health"
    FULL_RESOURCE = "full_resource"
    INSUFFICIENT_RESOURCE = "insufficient_resource"
    UNKNOWN_CARD = "unknown_card"
    NOT_IN_HAND = "not_in_hand"
    ON_COOLDOWN = "on_cooldown"
    ALREADY_ACTIVE = "already_active"
    ALREADY_STUNNED = "already_stunned"
    NOTHING_TO_CLEANSE = "nothing_to_cleanse"
    NOT_PLAYER_TURN = "not_player_turn"
    GAME_OVER = "game_over"
