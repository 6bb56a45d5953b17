"""界面文本的多语言支持。

战斗核心只产出枚举值与数字，显示文本统一经由 ``t`` 查表::

    from i18n import t, set_locale

    set_locale("en_US")
    t("outcome.turn_limit", limit=50)   # "The 50-turn limit was reached"
    reason_text("full_health")          # "Already at full health"
    element_name("fire")                # "Fire"

当前语言缺少某个键时回退到 zh_CN；两者都缺时返回 ``[key]``。
"""

from __future__ import annotations

import importlib
import logging
from enum import Enum

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "zh_CN"
_SUPPORTED = ("zh_CN", "en_US")

_locale: str = FALLBACK_LOCALE
_tables: dict[str, dict[str, str]] = {}


def _table(locale: str) -> dict[str, str]:
    """取翻译表，首次访问时导入 ``i18n.<locale>`` 模块"""
    table = _tables.get(locale)
    if table is None:
        module = importlib.import_module(f"{__name__}.{locale}")
        table = _tables[locale] = module.STRINGS
    return table


def set_locale(locale: str) -> None:
    """切换当前语言

    Raises:
        ValueError: 不支持的语言
    """
    global _locale
    if locale not in _SUPPORTED:
        raise ValueError(f"Unsupported locale: {locale}")
    _table(locale)
    _locale = locale
    logger.debug("Locale set to %s", locale)


def get_locale() -> str:
    return _locale


def get_available_locales() -> list[str]:
    return list(_SUPPORTED)


def t(key: str, **params: object) -> str:
    """按当前语言查找 key 并填入参数

    参数不全时返回未替换的模板，不抛异常。
    """
    template = _table(_locale).get(key)
    if template is None and _locale != FALLBACK_LOCALE:
        template = _table(FALLBACK_LOCALE).get(key)
        if template is not None:
            logger.debug("'%s' missing in %s, falling back to %s", key, _locale, FALLBACK_LOCALE)
    if template is None:
        logger.warning("Missing translation: '%s' (%s)", key, _locale)
        return f"[{key}]"
    if not params:
        return template
    try:
        return template.format_map(params)
    except KeyError as e:
        logger.warning("Translation '%s' needs parameter %s", key, e)
        return template


_ = t


def _enum_text(group: str, value: str | Enum | None) -> str:
    if value is None:
        return ""
    raw = value.value if isinstance(value, Enum) else str(value)
    key = f"{group}.{raw}"
    text = t(key)
    return raw if text == f"[{key}]" else text


def reason_text(reason: str | Enum | None) -> str:
    """出牌失败原因的显示文本；未收录的原因原样返回"""
    return _enum_text("reason", reason)


def element_name(element: str | Enum | None) -> str:
    """元素名（火 / 水 / 自然）"""
    return _enum_text("element", element)
