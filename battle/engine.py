"""战斗引擎（回合控制器）

驱动一局对战：
    玩家回合 ──出牌/结束回合──▶ 结算 ──▶ 敌方回合 ──▶ 玩家回合
    任意阶段判定胜负后进入终局（吸收态）。

玩家每回合执行一个动作（打出一张牌或直接结束回合），随后进入敌方回合：
敌人攻击 → 敌人效果结算 → 玩家效果结算 → 死亡判定 → 法力回复、回合数 +1、补牌
→ 回合上限 / 时限判定。
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Iterable

from .archetypes import TARGETED_KINDS, CardArchetype
from .catalog import CardCatalog, load_catalog
from .combatant import Combatant, CombatantSnapshot
from .config import BattleConfig, get_config
from .deck import CardInstance, Deck
from .effects.base import Effect, TickResult
from .effects.registry import AddAction
from .effects.tick import TickEngine
from .enemy import EnemyAttack, EnemyBehavior, create_enemy
from .enums import ArchetypeKind, FailureReason, MatchOutcome, TurnPhase
from .events import EventBus, EventType
from .exceptions import ConfigurationError, MatchNotStartedError
from .resolver import CardResolver, Outcome
from .rng import RandomSource
from .turn_fsm import TurnFSM
from .win_checker import GameOverInfo, WinConditionChecker

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TurnReport:
    """一次敌方回合的结算记录"""

    turn_number: int
    enemy_attack: EnemyAttack | None = None
    ticks: list[TickResult] = field(default_factory=list)
    resource_gained: int = 0
    drawn: list[str] = field(default_factory=list)


@dataclass(slots=True)
class PlayResult:
    """一次玩家动作（出牌或结束回合）的结果"""

    success: bool
    reason: FailureReason | None = None
    instance_id: str | None = None
    outcome: Outcome | None = None
    turn_report: TurnReport | None = None
    game_over: GameOverInfo | None = None


@dataclass(frozen=True, slots=True)
class CardView:
    """手牌的只读视图"""

    instance_id: str
    name: str
    emoji: str
    cost: int
    element: str
    kind: str
    description: str
    playable: bool
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class MatchSnapshot:
    """对局的只读快照（供界面渲染）"""

    turn_number: int
    max_turns: int
    phase: str
    player: CombatantSnapshot
    enemy: CombatantSnapshot
    hand: tuple[CardView, ...]
    draw_pile: int
    discard_pile: int
    result: str
    message: str = ""

    @property
    def is_over(self) -> bool:
        return self.phase == TurnPhase.TERMINAL.value


class BattleEngine:
    """战斗引擎

    使用方式::

        engine = BattleEngine(rng=RandomSource(seed=7))
        engine.start_match()
        ok, reason = engine.can_play("fireball-1")
        result = engine.play_card("fireball-1")
        result = engine.end_turn()
    """

    def __init__(
        self,
        catalog: CardCatalog | None = None,
        config: BattleConfig | None = None,
        rng: RandomSource | None = None,
        event_bus: EventBus | None = None,
        clock: Callable[[], float] = time.monotonic,
        player_name: str = "Player",
    ):
        self.config = config or get_config()
        self.catalog = catalog if catalog is not None else load_catalog(self.config.catalog_path or None)
        self.rng = rng or RandomSource()
        self.event_bus = event_bus or EventBus()
        self.resolver = CardResolver(self.rng, self.config)
        self.tick_engine = TickEngine()
        self.win_checker = WinConditionChecker(self.config)
        self.fsm = TurnFSM()
        self.player_name = player_name
        self._clock = clock

        self.player: Combatant | None = None
        self.enemy: Combatant | None = None
        self.enemy_behavior: EnemyBehavior | None = None
        self.deck: Deck | None = None
        self.turn_number: int = 0
        self.game_over: GameOverInfo | None = None
        self._cards_played: Counter[str] = Counter()
        self._turn_started_at: float = 0.0

    # ==================== 对局生命周期 ====================

    def start_match(
        self,
        card_names: Iterable[str] | None = None,
        enemy_key: str | None = None,
    ) -> MatchSnapshot:
        """开始新对局（重新创建双方与牌组）

        Args:
            card_names: 组成牌组的卡牌名，默认使用目录中的全部卡牌
            enemy_key: 敌人档案名，默认取配置

        Raises:
            ConfigurationError: 配置校验失败
        """
        errors = self.config.validate()
        if errors:
            raise ConfigurationError(errors=errors)

        cfg = self.config
        names = list(card_names) if card_names is not None else self.catalog.names()
        archetypes: list[CardArchetype] = []
        for name in names:
            archetype = self.catalog.get(name)
            if archetype is None:
                logger.error("Unknown card '%s' in deck list, skipping", name)
                continue
            archetypes.append(archetype)

        self.player = Combatant(
            name=self.player_name,
            max_hp=cfg.player_max_hp,
            max_resource=cfg.player_max_resource,
            resource=cfg.player_start_resource,
            defense=cfg.player_defense,
            emoji="🧙",
        )
        profile = self.catalog.enemy(enemy_key or cfg.enemy_profile)
        self.enemy = create_enemy(profile)
        self.enemy_behavior = EnemyBehavior(profile, self.rng, cfg)
        self.deck = Deck(archetypes, self.rng, copies=cfg.deck_copies)
        self.deck.fill_hand(cfg.hand_size)

        self.turn_number = 1
        self.game_over = None
        self._cards_played.clear()
        self.fsm.reset()
        self._turn_started_at = self._clock()

        logger.info(
            "Match started: %s vs %s, %d cards in deck (seed=%s)",
            self.player.name,
            self.enemy.name,
            len(self.deck),
            self.rng.seed,
        )
        self.event_bus.emit(
            EventType.MATCH_START, player=self.player.name, enemy=self.enemy.name
        )
        self.event_bus.emit(EventType.TURN_START, turn_number=self.turn_number)
        return self.snapshot()

    @property
    def started(self) -> bool:
        return self.player is not None

    @property
    def phase(self) -> TurnPhase:
        return self.fsm.current

    @property
    def is_over(self) -> bool:
        return self.game_over is not None

    @property
    def result(self) -> MatchOutcome:
        return self.game_over.result if self.game_over else MatchOutcome.NOT_FINISHED

    @property
    def hand(self) -> list[CardInstance]:
        self._require_started()
        return list(self.deck.hand)

    def _require_started(self) -> None:
        if not self.started:
            raise MatchNotStartedError()

    # ==================== 出牌前置条件 ====================

    def can_play(self, instance_id: str) -> tuple[bool, FailureReason | None]:
        """检查能否打出某张牌

        Returns:
            (能否打出, 失败原因)；检查本身不改变任何状态
        """
        self._require_started()
        if self.is_over:
            return False, FailureReason.GAME_OVER
        if not self.fsm.can_play_card():
            return False, FailureReason.NOT_PLAYER_TURN
        card = self.deck.find(instance_id)
        if card is None:
            return False, FailureReason.UNKNOWN_CARD
        if not card.in_hand:
            return False, FailureReason.NOT_IN_HAND
        if card.cooldown > 0:
            return False, FailureReason.ON_COOLDOWN
        if card.cost > self.player.resource:
            return False, FailureReason.INSUFFICIENT_RESOURCE
        reason = self._archetype_gate(card.archetype)
        return reason is None, reason

    def _archetype_gate(self, archetype: CardArchetype) -> FailureReason | None:
        player, enemy = self.player, self.enemy
        kind = archetype.kind
        if kind in TARGETED_KINDS and not enemy.is_alive:
            return FailureReason.NO_TARGET
        if kind is ArchetypeKind.HEAL and player.is_full_health:
            return FailureReason.FULL_HEALTH
        if kind is ArchetypeKind.RESOURCE_RESTORE and archetype.duration == 0 and player.is_full_resource:
            return FailureReason.FULL_RESOURCE
        if kind is ArchetypeKind.CLEANSE and not player.effects.debuffs() and player.is_full_health:
            return FailureReason.NOTHING_TO_CLEANSE
        if kind in (ArchetypeKind.SHIELD, ArchetypeKind.DAMAGE_BUFF) and player.effects.has(
            archetype.status_name
        ):
            return FailureReason.ALREADY_ACTIVE
        if kind is ArchetypeKind.DELAYED_ERUPTION and enemy.effects.has(archetype.status_name):
            return FailureReason.ALREADY_ACTIVE
        if kind is ArchetypeKind.CROWD_CONTROL and enemy.is_stunned:
            return FailureReason.ALREADY_STUNNED
        return None

    def playable_cards(self) -> list[CardInstance]:
        return [c for c in self.hand if self.can_play(c.instance_id)[0]]

    # ==================== 玩家动作 ====================

    def play_card(self, instance_id: str) -> PlayResult:
        """打出一张手牌

        前置条件不满足时不改变任何状态，返回失败原因。
        """
        ok, reason = self.can_play(instance_id)
        if not ok:
            return self._reject(instance_id, reason)

        card = self.deck.find(instance_id)
        archetype = card.archetype
        player, enemy = self.player, self.enemy

        player.spend_resource(archetype.cost)
        context = self.resolver.build_context(archetype, player, dict(self._cards_played))
        outcome = self.resolver.resolve(archetype, player, enemy, context)
        if not outcome.success:
            player.gain_resource(archetype.cost)
            return self._reject(instance_id, outcome.failure_reason)

        self.fsm.transition(TurnPhase.RESOLVING)
        self._apply_outcome(archetype, outcome)
        self._cards_played[archetype.element.value] += 1
        self._cards_played[archetype.name] += 1
        self.deck.discard(card)
        card.cooldown = archetype.cooldown

        logger.info(
            "Turn %d: played %s (damage=%d healing=%d%s)",
            self.turn_number,
            archetype.name,
            outcome.damage,
            outcome.healing,
            " CRIT" if outcome.critical else "",
        )
        self.event_bus.emit(
            EventType.CARD_PLAYED,
            card=archetype.name,
            instance_id=instance_id,
            outcome=outcome,
            turn_number=self.turn_number,
        )

        info = self.win_checker.check_deaths(player, enemy, self.turn_number)
        if info.is_over:
            self._finish(info)
            return PlayResult(True, instance_id=instance_id, outcome=outcome, game_over=info)

        self.fsm.transition(TurnPhase.ENEMY_TICK)
        report = self._run_enemy_phase()
        return PlayResult(
            True,
            instance_id=instance_id,
            outcome=outcome,
            turn_report=report,
            game_over=self.game_over,
        )

    def end_turn(self) -> PlayResult:
        """不出牌直接结束回合"""
        self._require_started()
        if self.is_over:
            return PlayResult(False, FailureReason.GAME_OVER)
        if not self.fsm.can_play_card():
            return PlayResult(False, FailureReason.NOT_PLAYER_TURN)
        self.fsm.transition(TurnPhase.RESOLVING)
        self.fsm.transition(TurnPhase.ENEMY_TICK)
        report = self._run_enemy_phase()
        return PlayResult(True, turn_report=report, game_over=self.game_over)

    def _reject(self, instance_id: str, reason: FailureReason | None) -> PlayResult:
        logger.info("Card %s rejected: %s", instance_id, reason.value if reason else "?")
        self.event_bus.emit(EventType.CARD_REJECTED, instance_id=instance_id, reason=reason)
        return PlayResult(False, reason, instance_id=instance_id)

    def _apply_outcome(self, archetype: CardArchetype, outcome: Outcome) -> None:
        player, enemy = self.player, self.enemy
        if outcome.damage:
            enemy.take_damage(outcome.damage)
            outcome.killed = not enemy.is_alive
            if outcome.killed and outcome.kill_refund:
                outcome.resource_delta += outcome.kill_refund
        if outcome.self_damage:
            player.lose_hp(outcome.self_damage)
        if outcome.healing:
            player.heal(outcome.healing)
        for name in outcome.removed_effects:
            player.effects.remove(name)
        for name in outcome.consumed_buffs:
            player.effects.consume(name)
        for effect in outcome.new_effects:
            self._add_effect(enemy, effect)
        for effect in outcome.self_effects:
            self._add_effect(player, effect)
        if outcome.resource_delta:
            player.gain_resource(outcome.resource_delta)

    def _add_effect(self, combatant: Combatant, effect: Effect) -> None:
        added = combatant.effects.add(effect)
        if added.action is AddAction.DETONATED:
            self.event_bus.emit(
                EventType.EFFECT_DETONATED, combatant=combatant.name, effect=effect.name
            )
        elif added.accepted:
            self.event_bus.emit(
                EventType.EFFECT_APPLIED,
                combatant=combatant.name,
                effect=effect.name,
                action=added.action.value,
                stacks=added.stacks,
            )

    # ==================== 敌方回合 ====================

    def _run_enemy_phase(self) -> TurnReport:
        cfg = self.config
        player, enemy = self.player, self.enemy
        report = TurnReport(turn_number=self.turn_number)
        elapsed = self._clock() - self._turn_started_at
        self.event_bus.emit(EventType.TURN_END, turn_number=self.turn_number)

        report.enemy_attack = self.enemy_behavior.attack(enemy, player)
        self.event_bus.emit(EventType.ENEMY_ATTACK, attack=report.enemy_attack)

        report.ticks.extend(self.tick_engine.tick(enemy))
        report.ticks.extend(self.tick_engine.tick(player))
        for tick in report.ticks:
            self.event_bus.emit(
                EventType.EFFECT_EXPIRED if tick.expired else EventType.EFFECT_TICK, tick=tick
            )

        info = self.win_checker.check_deaths(player, enemy, self.turn_number)
        if info.is_over:
            self._finish(info)
            return report

        report.resource_gained = player.gain_resource(cfg.resource_per_turn)
        self.turn_number += 1
        self.deck.tick_cooldowns()
        report.drawn = [c.instance_id for c in self.deck.fill_hand(cfg.hand_size)]

        info = self.win_checker.check_game_over(player, enemy, self.turn_number, elapsed)
        if info.is_over:
            self._finish(info)
            return report

        self.fsm.transition(TurnPhase.PLAYER_TURN)
        self._turn_started_at = self._clock()
        self.event_bus.emit(EventType.TURN_START, turn_number=self.turn_number)
        return report

    def _finish(self, info: GameOverInfo) -> None:
        if self.is_over:
            return
        self.fsm.transition(TurnPhase.TERMINAL)
        self.game_over = info
        logger.info("Match over on turn %d: %s", info.turn_number, info.result.value)
        self.event_bus.emit(
            EventType.GAME_END,
            result=info.result,
            turn_number=info.turn_number,
            message=info.message,
        )

    # ==================== 快照 ====================

    def snapshot(self) -> MatchSnapshot:
        self._require_started()
        hand = []
        for card in self.deck.hand:
            ok, reason = self.can_play(card.instance_id)
            hand.append(
                CardView(
                    instance_id=card.instance_id,
                    name=card.name,
                    emoji=card.archetype.emoji,
                    cost=card.cost,
                    element=card.element.value,
                    kind=card.archetype.kind.value,
                    description=card.archetype.description,
                    playable=ok,
                    reason=reason.value if reason else None,
                )
            )
        return MatchSnapshot(
            turn_number=self.turn_number,
            max_turns=self.config.max_turns,
            phase=self.phase.value,
            player=self.player.snapshot(),
            enemy=self.enemy.snapshot(),
            hand=tuple(hand),
            draw_pile=self.deck.remaining,
            discard_pile=len(self.deck.discard_pile),
            result=self.result.value,
            message=self.game_over.message if self.game_over else "",
        )
