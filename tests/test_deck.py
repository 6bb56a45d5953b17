"""Tests for battle.deck module."""

from battle.deck import Deck
from battle.enums import ArchetypeKind
from battle.rng import RandomSource
from factories import make_card


def _deck(copies: int = 2) -> Deck:
    cards = [make_card("Zap"), make_card("Mend", ArchetypeKind.HEAL)]
    return Deck(cards, RandomSource(seed=3), copies=copies)


class TestDeck:
    def test_instances_have_unique_ids(self):
        deck = _deck()
        assert len(deck) == 4
        assert deck.find("zap-1") is not None
        assert deck.find("mend-2").name == "Mend"
        assert deck.find("zap-3") is None

    def test_fill_hand(self):
        deck = _deck()
        drawn = deck.fill_hand(3)
        assert len(drawn) == 3
        assert len(deck.hand) == 3
        assert deck.remaining == 1
        assert all(card.in_hand for card in deck.hand)
        assert deck.fill_hand(3) == []

    def test_hand_limited_by_deck_size(self):
        deck = _deck(copies=1)
        assert len(deck.fill_hand(5)) == 2

    def test_discard_moves_card(self):
        deck = _deck()
        deck.fill_hand(2)
        card = deck.hand[0]
        deck.discard(card)
        assert card not in deck.hand
        assert card.discarded
        assert not card.in_hand
        assert deck.discard_pile == [card]

    def test_draw_reshuffles_discard(self):
        deck = _deck(copies=1)
        deck.fill_hand(2)
        played = deck.hand[0]
        deck.discard(played)
        assert deck.remaining == 0
        drawn = deck.draw(1)
        assert drawn == [played]
        assert played.in_hand
        assert deck.discard_pile == []

    def test_draw_from_empty_deck(self):
        deck = _deck(copies=1)
        deck.fill_hand(2)
        assert deck.draw(1) == []

    def test_cooldowns_tick_down(self):
        deck = _deck()
        card = deck.find("zap-1")
        card.cooldown = 2
        deck.tick_cooldowns()
        assert card.cooldown == 1
        deck.tick_cooldowns()
        deck.tick_cooldowns()
        assert card.cooldown == 0

    def test_reset(self):
        deck = _deck()
        deck.fill_hand(3)
        deck.discard(deck.hand[0])
        deck.reset()
        assert deck.hand == []
        assert deck.discard_pile == []
        assert deck.remaining == 4

    def test_same_seed_same_order(self):
        a = _deck()
        b = _deck()
        assert [c.instance_id for c in a.draw_pile] == [c.instance_id for c in b.draw_pile]

    def test_display_name(self):
        card = Deck([make_card("Zap", emoji="⚡")], RandomSource(seed=1)).find("zap-1")
        assert card.display_name == "⚡ Zap"
