"""可注入的随机源

解析器、敌人与牌组的所有随机性都经由 RandomSource，
传入种子即可完全复现一局对战。
"""

from __future__ import annotations

import random
from typing import MutableSequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """对 random.Random 的薄封装，提供战斗公式常用的抽样方法"""

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self.seed = seed
        self._rng = rng if rng is not None else random.Random(seed)

    def random(self) -> float:
        """[0, 1) 均匀分布"""
        return self._rng.random()

    def uniform(self, low: float, high: float) -> float:
        return self._rng.uniform(low, high)

    def variance(self, value: float, band: float) -> float:
        """在 ±band 的比例范围内扰动数值

        band 为 0 时不消耗随机数，结果等于原值。
        """
        if band <= 0:
            return float(value)
        return value * self._rng.uniform(1.0 - band, 1.0 + band)

    def chance(self, probability: float) -> bool:
        """以给定概率返回 True；概率 <= 0 或 >= 1 时不消耗随机数"""
        if probability <= 0:
            return False
        if probability >= 1:
            return True
        return self._rng.random() < probability

    def randint(self, low: int, high: int) -> int:
        """闭区间 [low, high] 内的整数"""
        if low >= high:
            return low
        return self._rng.randint(low, high)

    def shuffle(self, items: MutableSequence[T]) -> None:
        self._rng.shuffle(items)
