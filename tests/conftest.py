"""共享测试夹具"""

from __future__ import annotations

import pytest

from battle.catalog import CardCatalog, load_catalog
from battle.combatant import Combatant
from battle.config import BattleConfig
from battle.rng import RandomSource


@pytest.fixture
def no_crit_config() -> BattleConfig:
    """关闭随机暴击的配置，便于断言伤害区间"""
    return BattleConfig(crit_chance=0.0, turn_time_limit=0.0)


@pytest.fixture
def rng() -> RandomSource:
    return RandomSource(seed=1234)


@pytest.fixture(scope="session")
def catalog() -> CardCatalog:
    return load_catalog()


@pytest.fixture
def player() -> Combatant:
    return Combatant(name="Player", max_hp=100, max_resource=50, emoji="🧙")


@pytest.fixture
def slime() -> Combatant:
    return Combatant(name="Slime", max_hp=80)
