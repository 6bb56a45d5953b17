"""伤害 / 治疗公式的性质测试（Property-based）。

核心不变量：
1. 无暴击时伤害落在 [base × (1 - v), base × (1 + v)] × (1 - 减免) 区间内，且不小于 0
2. 防御减免永远不超过 50%，穿透只会让伤害变大
3. 治疗量不超过目标缺失的生命值；满血时治疗被拒绝
4. 同一种子得到完全相同的结算结果
"""

from __future__ import annotations

import sys
from pathlib import Path

_project_root = str(Path(__file__).resolve().parents[2])
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from hypothesis import given, settings
from hypothesis import strategies as st

from battle.archetypes import CardArchetype
from battle.combatant import Combatant
from battle.config import BattleConfig
from battle.enums import ArchetypeKind, Element, FailureReason
from battle.resolver import CardResolver
from battle.rng import RandomSource

_EPS = 1e-9


def _resolver(seed: int) -> CardResolver:
    return CardResolver(RandomSource(seed=seed), BattleConfig(crit_chance=0.0, turn_time_limit=0.0))


def _strike(base: int, variance: float, penetration: float = 0.0) -> CardArchetype:
    return CardArchetype(
        name="Strike",
        cost=1,
        kind=ArchetypeKind.DIRECT_DAMAGE,
        base_value=base,
        element=Element.FIRE,
        variance=variance,
        penetration=penetration,
    )


# ---------------------------------------------------------------------------
# 性质 1: 伤害落在浮动区间内
# ---------------------------------------------------------------------------


@given(
    seed=st.integers(min_value=0, max_value=2**32 - 1),
    base=st.integers(min_value=0, max_value=500),
    variance=st.floats(min_value=0.0, max_value=0.5),
    defense=st.integers(min_value=0, max_value=200),
    penetration=st.floats(min_value=0.0, max_value=1.0),
)
@settings(max_examples=200)
def test_damage_within_variance_band(
    seed: int, base: int, variance: float, defense: int, penetration: float
) -> None:
    target = Combatant(name="Dummy", max_hp=10_000, defense=defense)
    outcome = _resolver(seed).resolve(_strike(base, variance, penetration), target, target)

    reduction = min(defense * (1 - penetration) / 100, 0.5)
    low = base * (1 - variance) * (1 - reduction)
    high = base * (1 + variance) * (1 - reduction)
    assert outcome.success
    assert outcome.damage >= 0
    assert low - 1 - _EPS <= outcome.damage <= high + _EPS
    assert not outcome.critical


# ---------------------------------------------------------------------------
# 性质 2: 防御减免封顶 50%
# ---------------------------------------------------------------------------


@given(
    damage=st.floats(min_value=0.0, max_value=10_000.0),
    defense=st.floats(min_value=0.0, max_value=1_000.0),
    penetration=st.floats(min_value=0.0, max_value=1.0),
)
@settings(max_examples=200)
def test_mitigation_capped_at_half(damage: float, defense: float, penetration: float) -> None:
    resolver = _resolver(0)
    mitigated = resolver.mitigate(damage, defense, penetration)
    assert damage * 0.5 - _EPS <= mitigated <= damage + _EPS
    # 穿透越高，剩余伤害越多
    assert resolver.mitigate(damage, defense, 1.0) >= mitigated - _EPS


# ---------------------------------------------------------------------------
# 性质 3: 治疗不溢出
# ---------------------------------------------------------------------------


@given(
    seed=st.integers(min_value=0, max_value=2**32 - 1),
    max_hp=st.integers(min_value=1, max_value=300),
    hp_fraction=st.floats(min_value=0.0, max_value=1.0),
    base=st.integers(min_value=0, max_value=200),
    crit=st.booleans(),
)
@settings(max_examples=200)
def test_heal_never_exceeds_missing_hp(
    seed: int, max_hp: int, hp_fraction: float, base: int, crit: bool
) -> None:
    caster = Combatant(name="Player", max_hp=max_hp, hp=max(1, int(max_hp * hp_fraction)))
    card = CardArchetype(
        name="Mend",
        cost=1,
        kind=ArchetypeKind.HEAL,
        base_value=base,
        element=Element.WATER,
        guaranteed_crit=crit,
    )
    missing = caster.missing_hp
    outcome = _resolver(seed).resolve(card, caster, None)

    if missing == 0:
        assert outcome.failure_reason is FailureReason.FULL_HEALTH
        assert outcome.healing == 0
    else:
        assert outcome.success
        assert 0 <= outcome.healing <= missing


# ---------------------------------------------------------------------------
# 性质 4: 同一种子可复现
# ---------------------------------------------------------------------------


@given(
    seed=st.integers(min_value=0, max_value=2**32 - 1),
    base=st.integers(min_value=1, max_value=100),
)
@settings(max_examples=100)
def test_same_seed_same_outcome(seed: int, base: int) -> None:
    config = BattleConfig(crit_chance=0.3, turn_time_limit=0.0)
    card = _strike(base, 0.25)
    results = []
    for _ in range(2):
        target = Combatant(name="Dummy", max_hp=1_000, defense=20)
        outcome = CardResolver(RandomSource(seed=seed), config).resolve(card, target, target)
        results.append((outcome.damage, outcome.critical))
    assert results[0] == results[1]
