"""计时效果子系统

- base: Effect / TickResult 数据
- registry: 单个战斗单位的效果集合与叠层规则
- tick: 逐回合结算
"""

from .base import Effect, TickResult, validate_effect
from .registry import AddAction, AddResult, EffectRegistry
from .tick import TickEngine

__all__ = [
    "Effect",
    "TickResult",
    "validate_effect",
    "AddAction",
    "AddResult",
    "EffectRegistry",
    "TickEngine",
]
