# -*- coding: utf-8 -*-
"""
UI模块
提供基于 rich 的终端对战界面
"""

from .rich_hud import BattleHUD, describe_play, describe_turn

__all__ = ['BattleHUD', 'describe_play', 'describe_turn']
