"""Tests for battle.effects.registry module."""

import logging

from battle.effects.base import Effect
from battle.effects.registry import AddAction, EffectRegistry
from battle.enums import EffectKind, StackPolicy


def _poison(stacks: int = 1, turns: int = 3) -> Effect:
    return Effect(
        "poison",
        EffectKind.DAMAGE_OVER_TIME,
        2,
        turns,
        stacks=stacks,
        max_stacks=5,
        stack_policy=StackPolicy.CLAMP,
    )


def _ignite() -> Effect:
    return Effect(
        "ignite",
        EffectKind.DAMAGE_OVER_TIME,
        2,
        4,
        max_stacks=6,
        stack_policy=StackPolicy.DETONATE,
    )


class TestAdd:
    def test_first_application(self):
        reg = EffectRegistry("Slime")
        result = reg.add(_poison())
        assert result.action is AddAction.APPLIED
        assert result.accepted
        assert reg.stacks_of("poison") == 1

    def test_malformed_effect_rejected_and_logged(self, caplog):
        reg = EffectRegistry("Slime")
        with caplog.at_level(logging.ERROR):
            result = reg.add(Effect("", EffectKind.DAMAGE_OVER_TIME, 2, 3))
        assert result.action is AddAction.REJECTED
        assert not result.accepted
        assert len(reg) == 0
        assert "malformed" in caplog.text

    def test_negative_turns_rejected(self):
        reg = EffectRegistry()
        assert reg.add(Effect("burn", EffectKind.DAMAGE_OVER_TIME, 2, -1)).action is AddAction.REJECTED

    def test_refresh_policy_keeps_single_entry(self):
        reg = EffectRegistry()
        reg.add(Effect("regen", EffectKind.HEAL_OVER_TIME, 3, 2))
        reg.get("regen").turns_remaining = 1
        result = reg.add(Effect("regen", EffectKind.HEAL_OVER_TIME, 4, 4))
        assert result.action is AddAction.REFRESHED
        assert len(reg) == 1
        assert reg.get("regen").turns_remaining == 4
        assert reg.get("regen").magnitude == 4

    def test_clamp_stacks_and_refreshes(self):
        reg = EffectRegistry()
        reg.add(_poison())
        reg.get("poison").turns_remaining = 1
        result = reg.add(_poison())
        assert result.action is AddAction.STACKED
        assert result.stacks == 2
        assert reg.get("poison").turns_remaining == 3

    def test_clamp_at_max_does_not_refresh(self):
        reg = EffectRegistry()
        for _ in range(5):
            reg.add(_poison())
        reg.get("poison").turns_remaining = 1
        result = reg.add(_poison())
        assert result.action is AddAction.MAX_STACKS
        assert reg.stacks_of("poison") == 5
        assert reg.get("poison").turns_remaining == 1

    def test_detonate_resets_to_zero(self):
        reg = EffectRegistry()
        for n in range(1, 6):
            assert reg.add(_ignite()).stacks == n
        result = reg.add(_ignite())
        assert result.action is AddAction.DETONATED
        assert reg.stacks_of("ignite") == 0
        assert not reg.has("ignite")
        assert reg.add(_ignite()).action is AddAction.APPLIED

    def test_detonate_with_single_max_stack(self):
        reg = EffectRegistry()
        effect = Effect("flare", EffectKind.DAMAGE_OVER_TIME, 2, 2, stack_policy=StackPolicy.DETONATE)
        assert reg.add(effect).action is AddAction.DETONATED
        assert len(reg) == 0


class TestQueries:
    def test_find_and_total(self):
        reg = EffectRegistry()
        reg.add(_poison(stacks=3))
        reg.add(Effect("burn", EffectKind.DAMAGE_OVER_TIME, 1, 2))
        reg.add(Effect("ward", EffectKind.DAMAGE_REDUCTION, 0.4, 3))
        assert len(reg.find_by_kind(EffectKind.DAMAGE_OVER_TIME)) == 2
        assert reg.total(EffectKind.DAMAGE_OVER_TIME) == 7
        assert reg.has_kind(EffectKind.DAMAGE_REDUCTION)
        assert not reg.has_kind(EffectKind.STUN)

    def test_debuffs_and_cleanse(self):
        reg = EffectRegistry()
        reg.add(_poison())
        reg.add(Effect("stun", EffectKind.STUN, 0, 1))
        reg.add(Effect("regen", EffectKind.HEAL_OVER_TIME, 3, 2))
        assert {e.name for e in reg.debuffs()} == {"poison", "stun"}
        removed = reg.cleanse()
        assert sorted(removed) == ["poison", "stun"]
        assert reg.names() == ["regen"]

    def test_consume_removes_once(self):
        reg = EffectRegistry()
        reg.add(Effect("bloom", EffectKind.DAMAGE_BUFF, 0.6, 3, applies_to="nature"))
        assert reg.consume("bloom").magnitude == 0.6
        assert reg.consume("bloom") is None

    def test_iteration_is_snapshot(self):
        reg = EffectRegistry()
        reg.add(_poison())
        reg.add(Effect("burn", EffectKind.DAMAGE_OVER_TIME, 1, 2))
        for effect in reg:
            reg.discard(effect)
        assert len(reg) == 0

    def test_contains_and_remove(self):
        reg = EffectRegistry()
        reg.add(_poison())
        assert "poison" in reg
        assert reg.remove("poison") is True
        assert reg.remove("poison") is False
        assert reg.stacks_of("poison") == 0
