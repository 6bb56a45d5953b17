"""牌组

建牌时把卡牌原型复制成带唯一编号的卡牌实例，
管理摸牌堆 / 手牌 / 弃牌堆，摸牌堆为空时洗入弃牌堆。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .archetypes import CardArchetype
from .enums import Element
from .rng import RandomSource

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CardInstance:
    """一张具体的卡牌"""

    instance_id: str
    archetype: CardArchetype
    in_hand: bool = False
    discarded: bool = False
    cooldown: int = 0

    @property
    def name(self) -> str:
        return self.archetype.name

    @property
    def cost(self) -> int:
        return self.archetype.cost

    @property
    def element(self) -> Element:
        return self.archetype.element

    @property
    def display_name(self) -> str:
        return f"{self.archetype.emoji} {self.archetype.name}".strip()


class Deck:
    """牌组：摸牌堆、手牌与弃牌堆"""

    def __init__(
        self,
        archetypes: Iterable[CardArchetype],
        rng: RandomSource,
        copies: int = 1,
    ):
        """初始化牌组

        Args:
            archetypes: 卡牌原型
            rng: 随机源（用于洗牌）
            copies: 每种原型复制的张数
        """
        self.rng = rng
        self.draw_pile: list[CardInstance] = []
        self.hand: list[CardInstance] = []
        self.discard_pile: list[CardInstance] = []
        self._cards: dict[str, CardInstance] = {}

        for archetype in archetypes:
            for n in range(1, copies + 1):
                card = CardInstance(f"{archetype.name.lower()}-{n}", archetype)
                self._cards[card.instance_id] = card
        self.reset()

    def reset(self) -> None:
        """所有牌放回摸牌堆并洗牌"""
        for card in self._cards.values():
            card.in_hand = False
            card.discarded = False
            card.cooldown = 0
        self.draw_pile = list(self._cards.values())
        self.hand.clear()
        self.discard_pile.clear()
        self.shuffle()

    def shuffle(self) -> None:
        self.rng.shuffle(self.draw_pile)

    def draw(self, count: int = 1) -> list[CardInstance]:
        """摸牌到手牌

        Returns:
            摸到的卡牌列表（牌不够时可能少于 count）
        """
        drawn = []
        for _ in range(count):
            if not self.draw_pile:
                self._reshuffle_discard()
            if not self.draw_pile:
                break
            card = self.draw_pile.pop()
            card.in_hand = True
            card.discarded = False
            self.hand.append(card)
            drawn.append(card)
        return drawn

    def fill_hand(self, hand_size: int) -> list[CardInstance]:
        """补牌至手牌上限"""
        missing = hand_size - len(self.hand)
        if missing <= 0:
            return []
        return self.draw(missing)

    def _reshuffle_discard(self) -> None:
        if self.discard_pile:
            logger.debug("Reshuffling %d cards into the draw pile", len(self.discard_pile))
            for card in self.discard_pile:
                card.discarded = False
            self.draw_pile.extend(self.discard_pile)
            self.discard_pile.clear()
            self.shuffle()

    def discard(self, card: CardInstance) -> None:
        """将手牌打出到弃牌堆"""
        if card in self.hand:
            self.hand.remove(card)
        card.in_hand = False
        card.discarded = True
        self.discard_pile.append(card)

    def find(self, instance_id: str) -> CardInstance | None:
        return self._cards.get(instance_id)

    def tick_cooldowns(self) -> None:
        for card in self._cards.values():
            if card.cooldown > 0:
                card.cooldown -= 1

    @property
    def remaining(self) -> int:
        """摸牌堆剩余张数"""
        return len(self.draw_pile)

    def __len__(self) -> int:
        return len(self._cards)
