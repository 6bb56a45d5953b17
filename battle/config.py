"""战斗配置中心 (SSOT - 单一事实来源)

所有可调的数值参数在此定义，支持从环境变量覆盖。
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _get_env_float(key: str, default: float) -> float:
    """从环境变量获取浮点数配置"""
    value = os.environ.get(key)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            pass
    return default


def _get_env_int(key: str, default: int) -> int:
    """从环境变量获取整数配置"""
    value = os.environ.get(key)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            pass
    return default


def _get_env_bool(key: str, default: bool) -> bool:
    """从环境变量获取布尔配置"""
    value = os.environ.get(key, "").lower()
    if value in ("true", "1", "yes", "on"):
        return True
    elif value in ("false", "0", "no", "off"):
        return False
    return default


@dataclass(frozen=True)
class BattleConfig:
    """战斗配置类 (不可变)

    常用环境变量：
    - EMOJI_BATTLE_PLAYER_HP: 玩家最大生命
    - EMOJI_BATTLE_MANA_REGEN: 每回合法力回复
    - EMOJI_BATTLE_MAX_TURNS: 回合上限
    - EMOJI_BATTLE_TURN_TIME_LIMIT: 单回合时限（秒，0 表示关闭）
    - EMOJI_BATTLE_ENEMY: 敌人档案名
    """

    # ==================== 玩家 ====================
    player_max_hp: int = field(
        default_factory=lambda: _get_env_int("EMOJI_BATTLE_PLAYER_HP", 100)
    )
    player_max_resource: int = field(
        default_factory=lambda: _get_env_int("EMOJI_BATTLE_MAX_MANA", 50)
    )
    player_start_resource: int = field(
        default_factory=lambda: _get_env_int("EMOJI_BATTLE_START_MANA", 50)
    )
    resource_per_turn: int = field(
        default_factory=lambda: _get_env_int("EMOJI_BATTLE_MANA_REGEN", 3)
    )
    player_defense: int = 0

    # ==================== 牌组 ====================
    hand_size: int = field(
        default_factory=lambda: _get_env_int("EMOJI_BATTLE_HAND_SIZE", 5)
    )
    deck_copies: int = field(
        default_factory=lambda: _get_env_int("EMOJI_BATTLE_DECK_COPIES", 2)
    )

    # ==================== 敌人 ====================
    enemy_profile: str = field(
        default_factory=lambda: os.environ.get("EMOJI_BATTLE_ENEMY", "slime")
    )
    enemy_attack_variance: float = 0.2

    # ==================== 回合 ====================
    max_turns: int = field(
        default_factory=lambda: _get_env_int("EMOJI_BATTLE_MAX_TURNS", 50)
    )
    turn_time_limit: float = field(
        default_factory=lambda: _get_env_float("EMOJI_BATTLE_TURN_TIME_LIMIT", 0.0)
    )

    # ==================== 伤害公式 ====================
    crit_chance: float = field(
        default_factory=lambda: _get_env_float("EMOJI_BATTLE_CRIT_CHANCE", 0.15)
    )
    crit_multiplier: float = field(
        default_factory=lambda: _get_env_float("EMOJI_BATTLE_CRIT_MULTIPLIER", 1.5)
    )
    max_defense_reduction: float = 0.5
    heal_variance: float = 0.1

    # ==================== 数据文件 ====================
    catalog_path: str = field(
        default_factory=lambda: os.environ.get("EMOJI_BATTLE_CATALOG", "")
    )
    stats_path: str = field(
        default_factory=lambda: os.environ.get("EMOJI_BATTLE_STATS_FILE", "")
    )

    # ==================== 日志与调试 ====================
    log_level: str = field(
        default_factory=lambda: os.environ.get("EMOJI_BATTLE_LOG_LEVEL", "INFO")
    )
    debug_mode: bool = field(
        default_factory=lambda: _get_env_bool("EMOJI_BATTLE_DEBUG", False)
    )

    @classmethod
    def from_env(cls) -> BattleConfig:
        """从环境变量创建配置实例"""
        return cls()

    def get(self, key: str, default: object | None = None) -> object:
        """字典风格的访问方法"""
        return getattr(self, key, default)

    def validate(self) -> list[str]:
        """校验配置取值范围

        Returns:
            错误描述列表，为空表示配置合法
        """
        errors: list[str] = []
        if self.player_max_hp < 1:
            errors.append(f"player_max_hp must be >= 1, got {self.player_max_hp}")
        if self.player_max_resource < 0:
            errors.append(
                f"player_max_resource must be >= 0, got {self.player_max_resource}"
            )
        if not 0 <= self.player_start_resource <= self.player_max_resource:
            errors.append(
                "player_start_resource must be within [0, player_max_resource], "
                f"got {self.player_start_resource}"
            )
        if self.resource_per_turn < 0:
            errors.append(f"resource_per_turn must be >= 0, got {self.resource_per_turn}")
        if self.player_defense < 0:
            errors.append(f"player_defense must be >= 0, got {self.player_defense}")
        if self.hand_size < 1:
            errors.append(f"hand_size must be >= 1, got {self.hand_size}")
        if self.deck_copies < 1:
            errors.append(f"deck_copies must be >= 1, got {self.deck_copies}")
        if not 0.0 <= self.enemy_attack_variance < 1.0:
            errors.append(
                f"enemy_attack_variance must be in [0, 1), got {self.enemy_attack_variance}"
            )
        if self.max_turns < 1:
            errors.append(f"max_turns must be >= 1, got {self.max_turns}")
        if self.turn_time_limit < 0:
            errors.append(f"turn_time_limit must be >= 0, got {self.turn_time_limit}")
        if not 0.0 <= self.crit_chance <= 1.0:
            errors.append(f"crit_chance must be in [0, 1], got {self.crit_chance}")
        if self.crit_multiplier < 1.0:
            errors.append(f"crit_multiplier must be >= 1, got {self.crit_multiplier}")
        if not 0.0 <= self.max_defense_reduction < 1.0:
            errors.append(
                f"max_defense_reduction must be in [0, 1), got {self.max_defense_reduction}"
            )
        if not 0.0 <= self.heal_variance < 1.0:
            errors.append(f"heal_variance must be in [0, 1), got {self.heal_variance}")
        return errors


# 全局配置单例
_config: BattleConfig | None = None


def get_config() -> BattleConfig:
    """获取全局配置实例（懒加载）"""
    global _config
    if _config is None:
        _config = BattleConfig.from_env()
    return _config


def reset_config() -> None:
    """重置配置（用于测试）"""
    global _config
    _config = None
