"""卡牌目录加载

从 data/card_catalog.json 读取卡牌原型与敌人档案。

设计原则:
  - 校验模型 (Pydantic) 与内部 dataclass 分离 (校验层 vs 业务层)
  - model_config = ConfigDict(extra="forbid") 拒绝拼写错误的字段
  - 单条数据非法时记录日志并跳过，不影响其余卡牌
  - 文件本身缺失或无法解析时抛出 CatalogLoadError
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from .archetypes import CardArchetype, RiderSpec
from .enemy import DEFAULT_ENEMY, EnemyProfile
from .enums import ArchetypeKind, EffectKind, Element, StackPolicy
from .exceptions import CatalogLoadError, DataIntegrityError, UnknownArchetypeError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "card_catalog.json"

_ARCHETYPE_KINDS = {kind.value for kind in ArchetypeKind}

# 会施加计时效果、必须给出持续回合数的原型
_TIMED_KINDS = frozenset(
    {
        ArchetypeKind.DAMAGE_OVER_TIME,
        ArchetypeKind.HEAL_OVER_TIME,
        ArchetypeKind.DAMAGE_BUFF,
        ArchetypeKind.SHIELD,
    }
)


# ====================================================================== #
#  校验模型                                                                #
# ====================================================================== #


class RiderModel(BaseModel):
    """附加效果校验"""

    model_config = ConfigDict(extra="forbid")

    effect_name: str = Field(min_length=1)
    kind: EffectKind
    magnitude: float = Field(ge=0)
    duration: int = Field(ge=1)
    chance: float = Field(default=1.0, ge=0, le=1)
    max_stacks: int = Field(default=1, ge=1)
    stack_policy: StackPolicy = StackPolicy.REFRESH
    on_self: bool = False
    emoji: str = ""


class ArchetypeModel(BaseModel):
    """卡牌原型校验"""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=40)
    cost: int = Field(ge=0)
    kind: ArchetypeKind
    base_value: float = Field(ge=0)
    element: Element
    emoji: str = ""
    description: str = ""
    cooldown: int = Field(default=0, ge=0)

    variance: float | None = Field(default=None, ge=0, lt=1)
    crit_chance: float | None = Field(default=None, ge=0, le=1)
    crit_multiplier: float | None = Field(default=None, ge=1)
    penetration: float = Field(default=0.0, ge=0, le=1)
    guaranteed_crit: bool = False

    effect_name: str = ""
    duration: int = Field(default=0, ge=0)
    max_stacks: int = Field(default=1, ge=1)
    stack_policy: StackPolicy = StackPolicy.REFRESH
    impact_fraction: float = Field(default=0.0, ge=0)
    explosion_multiplier: float = Field(default=1.0, ge=0)

    growth_multiplier: float = Field(default=1.0, ge=0)
    eruption_turn: int = Field(default=0, ge=0)
    eruption_multiplier: float = Field(default=1.0, ge=0)

    execute_threshold: float = Field(default=0.0, ge=0, le=1)
    execute_multiplier: float = Field(default=1.0, ge=1)
    refund_fraction: float = Field(default=0.0, ge=0, le=1)

    min_hits: int = Field(default=1, ge=1)
    max_hits: int = Field(default=1, ge=1)
    per_hit_bonus: float = Field(default=0.0, ge=0)
    scaling_per_stack: float = 0.0
    scaling_key: str = ""

    damage_bonus: float = Field(default=0.0, ge=0)
    applies_to: Element | None = None
    damage_reduction: float = Field(default=0.0, ge=0, lt=1)

    self_damage: int = Field(default=0, ge=0)
    rider: RiderModel | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("卡牌名不能为空")
        return v

    @field_validator("max_hits")
    @classmethod
    def hits_ordered(cls, v: int, info: ValidationInfo) -> int:
        min_hits = info.data.get("min_hits", 1)
        if v < min_hits:
            raise ValueError(f"max_hits ({v}) < min_hits ({min_hits})")
        return v

    @model_validator(mode="after")
    def timing_matches_kind(self) -> ArchetypeModel:
        if self.kind is ArchetypeKind.DELAYED_ERUPTION and self.eruption_turn < 1:
            raise ValueError("delayed_eruption 需要 eruption_turn >= 1")
        if self.kind in _TIMED_KINDS and self.duration < 1:
            raise ValueError(f"{self.kind.value} 需要 duration >= 1")
        return self

    def to_archetype(self) -> CardArchetype:
        data = self.model_dump(exclude={"rider"})
        rider = RiderSpec(**self.rider.model_dump()) if self.rider else None
        return CardArchetype(**data, rider=rider)


class EnemyModel(BaseModel):
    """敌人档案校验"""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    max_hp: int = Field(ge=1)
    attack: int = Field(ge=0)
    defense: int = Field(default=0, ge=0)
    emoji: str = ""
    crit_chance: float | None = Field(default=None, ge=0, le=1)
    crit_multiplier: float | None = Field(default=None, ge=1)
    poison_chance: float = Field(default=0.0, ge=0, le=1)
    poison_damage: int = Field(default=0, ge=0)
    poison_duration: int = Field(default=0, ge=0)
    poison_max_stacks: int = Field(default=5, ge=1)

    def to_profile(self, key: str) -> EnemyProfile:
        return EnemyProfile(key=key, **self.model_dump())


# ====================================================================== #
#  目录                                                                    #
# ====================================================================== #


@dataclass
class CardCatalog:
    """已加载的卡牌原型与敌人档案"""

    cards: dict[str, CardArchetype] = field(default_factory=dict)
    enemies: dict[str, EnemyProfile] = field(default_factory=dict)
    rejected: list[str] = field(default_factory=list)

    def get(self, name: str) -> CardArchetype | None:
        return self.cards.get(name)

    def require(self, name: str) -> CardArchetype:
        archetype = self.cards.get(name)
        if archetype is None:
            raise UnknownArchetypeError(name, item_name=name)
        return archetype

    def names(self) -> list[str]:
        return list(self.cards)

    def by_element(self, element: Element) -> list[CardArchetype]:
        return [c for c in self.cards.values() if c.element is element]

    def enemy(self, key: str) -> EnemyProfile:
        profile = self.enemies.get(key)
        if profile is None:
            logger.warning("Unknown enemy profile '%s', using %s", key, DEFAULT_ENEMY.key)
            return self.enemies.get(DEFAULT_ENEMY.key, DEFAULT_ENEMY)
        return profile

    def __len__(self) -> int:
        return len(self.cards)

    def __contains__(self, name: object) -> bool:
        return name in self.cards


def parse_archetype(entry: dict[str, Any]) -> CardArchetype:
    """校验并转换单条卡牌数据

    Raises:
        UnknownArchetypeError: kind 不在原型集合中
        DataIntegrityError: 其他字段校验失败
    """
    name = str(entry.get("name", "?"))
    kind = entry.get("kind")
    if kind not in _ARCHETYPE_KINDS:
        raise UnknownArchetypeError(str(kind), item_name=name)
    try:
        return ArchetypeModel.model_validate(entry).to_archetype()
    except ValidationError as e:
        raise DataIntegrityError(item_name=name, reason=str(e)) from e


def build_catalog(raw: dict[str, Any]) -> CardCatalog:
    """由已解析的 JSON 构建目录；非法条目记录后跳过"""
    catalog = CardCatalog()
    for entry in raw.get("cards", []):
        if not isinstance(entry, dict):
            logger.error("Skipping non-object card entry: %r", entry)
            continue
        try:
            archetype = parse_archetype(entry)
        except DataIntegrityError as e:
            logger.error("Skipping invalid card entry: %s", e)
            catalog.rejected.append(str(entry.get("name", "?")))
            continue
        if archetype.name in catalog.cards:
            logger.warning("Duplicate card '%s' in catalog, keeping the last one", archetype.name)
        catalog.cards[archetype.name] = archetype

    for key, entry in raw.get("enemies", {}).items():
        if key.startswith("_"):
            continue
        try:
            catalog.enemies[key] = EnemyModel.model_validate(entry).to_profile(key)
        except ValidationError as e:
            logger.error("Skipping invalid enemy '%s': %s", key, e)
            catalog.rejected.append(key)

    logger.info(
        "Card catalog loaded: %d cards, %d enemies, %d rejected",
        len(catalog.cards),
        len(catalog.enemies),
        len(catalog.rejected),
    )
    return catalog


def load_catalog(path: str | Path | None = None) -> CardCatalog:
    """从 JSON 文件加载卡牌目录

    Args:
        path: 目录文件路径，默认为包内 data/card_catalog.json

    Raises:
        CatalogLoadError: 文件不存在或不是合法 JSON
    """
    catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
    if not catalog_path.exists():
        raise CatalogLoadError(file_path=str(catalog_path), reason="file not found")
    try:
        with open(catalog_path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogLoadError(file_path=str(catalog_path), reason=str(e)) from e
    if not isinstance(raw, dict):
        raise CatalogLoadError(file_path=str(catalog_path), reason="top level must be an object")
    return build_catalog(raw)
