"""回合阶段有限状态机 (Turn FSM)

玩家回合 → 结算 → 敌方回合 → 玩家回合，任意阶段都可进入终局；
终局是吸收态，不允许再离开。
"""

from __future__ import annotations

import logging

from .enums import TurnPhase
from .exceptions import InvalidPhaseError

logger = logging.getLogger(__name__)

# key: 当前阶段, value: 允许转换到的目标阶段集合
VALID_TRANSITIONS: dict[TurnPhase, set[TurnPhase]] = {
    TurnPhase.PLAYER_TURN: {TurnPhase.RESOLVING, TurnPhase.TERMINAL},
    TurnPhase.RESOLVING: {TurnPhase.ENEMY_TICK, TurnPhase.TERMINAL},
    TurnPhase.ENEMY_TICK: {TurnPhase.PLAYER_TURN, TurnPhase.TERMINAL},
    TurnPhase.TERMINAL: set(),
}


class InvalidPhaseTransition(InvalidPhaseError):
    """非法阶段转换异常"""

    def __init__(self, current_phase: TurnPhase, target_phase: TurnPhase):
        message = f"Invalid phase transition: {current_phase.name} → {target_phase.name}"
        super().__init__(
            message=message,
            current_phase=current_phase.name,
            expected_phase=target_phase.name,
        )
        self.from_phase = current_phase
        self.to_phase = target_phase


class TurnFSM:
    """回合阶段状态机

    使用方式::

        fsm = TurnFSM()
        fsm.transition(TurnPhase.RESOLVING)    # OK
        fsm.transition(TurnPhase.PLAYER_TURN)  # 抛出 InvalidPhaseTransition
    """

    def __init__(self) -> None:
        self._phase: TurnPhase = TurnPhase.PLAYER_TURN

    @property
    def current(self) -> TurnPhase:
        return self._phase

    @property
    def is_terminal(self) -> bool:
        return self._phase is TurnPhase.TERMINAL

    def transition(self, target: TurnPhase) -> None:
        """转换到目标阶段

        Raises:
            InvalidPhaseTransition: 如果转换不合法
        """
        if target not in VALID_TRANSITIONS.get(self._phase, set()):
            raise InvalidPhaseTransition(self._phase, target)
        logger.debug("Phase transition: %s → %s", self._phase.name, target.name)
        self._phase = target

    def can_transition(self, target: TurnPhase) -> bool:
        return target in VALID_TRANSITIONS.get(self._phase, set())

    def can_play_card(self) -> bool:
        return self._phase is TurnPhase.PLAYER_TURN

    def reset(self) -> None:
        """新对局开始时调用"""
        self._phase = TurnPhase.PLAYER_TURN
