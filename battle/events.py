"""战斗事件总线

引擎把开局、出牌、效果结算、敌人攻击与终局发布为事件；
界面和胜负统计只订阅，不反过来修改战斗状态。
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Iterable

logger = logging.getLogger(__name__)


class EventType(Enum):
    """战斗事件类型"""

    MATCH_START = auto()
    GAME_END = auto()

    TURN_START = auto()
    TURN_END = auto()

    CARD_PLAYED = auto()
    CARD_REJECTED = auto()

    EFFECT_APPLIED = auto()
    EFFECT_TICK = auto()
    EFFECT_EXPIRED = auto()
    EFFECT_DETONATED = auto()

    ENEMY_ATTACK = auto()


@dataclass
class GameEvent:
    """一条战斗事件，负载放在 data 中"""

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    cancelled: bool = False

    @property
    def message(self) -> str:
        return self.data.get("message", "")

    def cancel(self) -> None:
        """阻止后续处理器收到该事件"""
        self.cancelled = True


EventHandler = Callable[[GameEvent], None]


@dataclass(frozen=True)
class _Subscription:
    priority: int
    handler: EventHandler


def _by_priority(subs: list[_Subscription]) -> None:
    # 稳定排序：同优先级按订阅先后
    subs.sort(key=lambda s: -s.priority)


class EventBus:
    """
    同步事件总线

    全局订阅者先于按类型订阅者执行；同一组内优先级高者先执行。
    """

    def __init__(self, max_history: int = 500):
        self._typed: dict[EventType, list[_Subscription]] = {}
        self._global: list[_Subscription] = []
        self._history: deque[GameEvent] = deque(maxlen=max_history)

    def subscribe(self, event_type: EventType, handler: EventHandler, priority: int = 0) -> None:
        """
        订阅一种事件

        Args:
            event_type: 事件类型
            handler: 处理器
            priority: 数字越大越先执行
        """
        subs = self._typed.setdefault(event_type, [])
        subs.append(_Subscription(priority, handler))
        _by_priority(subs)

    def subscribe_all(self, handler: EventHandler, priority: int = 0) -> None:
        self._global.append(_Subscription(priority, handler))
        _by_priority(self._global)

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> None:
        subs = self._typed.get(event_type)
        if subs:
            self._typed[event_type] = [s for s in subs if s.handler != handler]

    def _dispatch(self, event: GameEvent, subs: Iterable[_Subscription]) -> None:
        for sub in subs:
            if event.cancelled:
                return
            try:
                sub.handler(event)
            except Exception:
                logger.exception("Handler %r failed on %s", sub.handler, event.event_type.name)

    def publish(self, event: GameEvent) -> GameEvent:
        """发布事件；处理器抛出的异常只记录日志，不影响引擎"""
        self._history.append(event)
        self._dispatch(event, [*self._global, *self._typed.get(event.event_type, ())])
        return event

    def emit(self, event_type: EventType, **data: Any) -> GameEvent:
        return self.publish(GameEvent(event_type, data))

    def clear(self) -> None:
        """移除全部订阅（保留历史）"""
        self._typed.clear()
        self._global.clear()

    def get_history(self, count: int = 10) -> list[GameEvent]:
        return list(self._history)[-count:]

    def count(self, event_type: EventType) -> int:
        """历史中某类事件的条数"""
        return sum(1 for e in self._history if e.event_type is event_type)
