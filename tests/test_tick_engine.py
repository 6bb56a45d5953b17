"""Tests for battle.effects.tick module."""

import logging

from battle.combatant import Combatant
from battle.effects.base import Effect
from battle.effects.tick import TickEngine
from battle.enums import EffectKind, StackPolicy


def _magma() -> Effect:
    return Effect(
        "magma_pool",
        EffectKind.DELAYED_ERUPTION,
        3,
        3,
        growth_multiplier=2.0,
        eruption_turn=3,
        eruption_multiplier=5.0,
    )


class TestDelayedEruption:
    def test_grows_then_erupts(self):
        enemy = Combatant(name="Slime", max_hp=200)
        enemy.effects.add(_magma())
        engine = TickEngine()

        amounts = []
        for _ in range(3):
            (result,) = engine.tick(enemy)
            amounts.append(result.amount)

        assert amounts == [3, 6, 60]
        assert result.erupted
        assert result.expired
        assert not enemy.effects.has("magma_pool")
        assert enemy.hp == 200 - 69

    def test_nothing_after_eruption(self):
        enemy = Combatant(name="Slime", max_hp=200)
        enemy.effects.add(_magma())
        engine = TickEngine()
        for _ in range(3):
            engine.tick(enemy)
        assert engine.tick(enemy) == []


class TestSteadyEffects:
    def test_dot_scales_with_stacks_and_expires(self):
        enemy = Combatant(name="Slime", max_hp=80)
        enemy.effects.add(
            Effect("poison", EffectKind.DAMAGE_OVER_TIME, 2, 2, stacks=3, max_stacks=5, stack_policy=StackPolicy.CLAMP)
        )
        engine = TickEngine()

        first = engine.tick(enemy)[0]
        assert first.amount == 6
        assert first.turns_remaining == 1
        assert not first.expired

        second = engine.tick(enemy)[0]
        assert second.amount == 6
        assert second.expired
        assert enemy.hp == 68
        assert len(enemy.effects) == 0

    def test_heal_over_time_capped(self):
        player = Combatant(name="Player", max_hp=100, hp=98)
        player.effects.add(Effect("regen", EffectKind.HEAL_OVER_TIME, 4, 4))
        result = TickEngine().tick(player)[0]
        assert result.amount == 2
        assert player.hp == 100

    def test_resource_regen_capped(self):
        player = Combatant(name="Player", max_hp=100, max_resource=50, resource=49)
        player.effects.add(Effect("photosynthesis", EffectKind.RESOURCE_REGEN, 2, 3))
        result = TickEngine().tick(player)[0]
        assert result.amount == 1
        assert player.resource == 50

    def test_passive_effect_only_counts_down(self):
        enemy = Combatant(name="Slime", max_hp=80)
        enemy.effects.add(Effect("stun", EffectKind.STUN, 0, 1))
        result = TickEngine().tick(enemy)[0]
        assert result.amount == 0
        assert result.expired
        assert not enemy.is_stunned
        assert enemy.hp == 80


class TestTickPass:
    def test_all_effects_apply_before_death_check(self):
        enemy = Combatant(name="Slime", max_hp=80, hp=5)
        enemy.effects.add(Effect("burn", EffectKind.DAMAGE_OVER_TIME, 4, 2))
        enemy.effects.add(Effect("poison", EffectKind.DAMAGE_OVER_TIME, 4, 2))
        results = TickEngine().tick(enemy)
        assert [r.effect_name for r in results] == ["burn", "poison"]
        assert [r.amount for r in results] == [4, 1]
        assert enemy.hp == 0

    def test_malformed_effect_skipped(self, caplog):
        enemy = Combatant(name="Slime", max_hp=80)
        enemy.effects.add(Effect("burn", EffectKind.DAMAGE_OVER_TIME, 2, 3))
        broken = Effect("", EffectKind.DAMAGE_OVER_TIME, 5, 3)
        enemy.effects._effects["broken"] = broken

        with caplog.at_level(logging.ERROR):
            results = TickEngine().tick(enemy)

        skipped = [r for r in results if r.skipped_reason]
        assert len(skipped) == 1
        assert skipped[0].skipped_reason == "malformed"
        assert enemy.hp == 78
        assert enemy.effects.names() == ["burn"]
        assert "Skipping malformed effect" in caplog.text

    def test_ticks_elapsed_counts_up(self):
        enemy = Combatant(name="Slime", max_hp=80)
        enemy.effects.add(Effect("burn", EffectKind.DAMAGE_OVER_TIME, 1, 5))
        engine = TickEngine()
        engine.tick(enemy)
        engine.tick(enemy)
        assert enemy.effects.get("burn").ticks_elapsed == 2
        assert enemy.effects.get("burn").turns_remaining == 3
