"""
Emoji 卡牌对战核心模块
包含卡牌效果解析、计时效果结算与回合控制
"""

from .archetypes import CardArchetype, RiderSpec
from .catalog import CardCatalog, load_catalog
from .combatant import Combatant, CombatantSnapshot
from .config import BattleConfig, get_config, reset_config
from .deck import CardInstance, Deck
from .effects import Effect, EffectRegistry, TickEngine, TickResult
from .engine import BattleEngine, MatchSnapshot, PlayResult, TurnReport
from .enums import (
    ArchetypeKind,
    EffectKind,
    Element,
    FailureReason,
    MatchOutcome,
    StackPolicy,
    TurnPhase,
)
from .events import EventBus, EventType, GameEvent
from .resolver import CardResolver, Outcome, ResolveContext
from .rng import RandomSource

__all__ = [
    # 卡牌
    'CardArchetype', 'RiderSpec', 'CardCatalog', 'load_catalog',
    'CardInstance', 'Deck',
    # 战斗单位与效果
    'Combatant', 'CombatantSnapshot',
    'Effect', 'EffectRegistry', 'TickEngine', 'TickResult',
    # 解析与回合
    'CardResolver', 'Outcome', 'ResolveContext',
    'BattleEngine', 'MatchSnapshot', 'PlayResult', 'TurnReport',
    # 配置
    'BattleConfig', 'get_config', 'reset_config',
    # 枚举
    'ArchetypeKind', 'EffectKind', 'Element', 'FailureReason',
    'MatchOutcome', 'StackPolicy', 'TurnPhase',
    # 事件
    'EventBus', 'EventType', 'GameEvent',
    'RandomSource',
]
