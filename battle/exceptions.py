"""战斗异常

出牌被拒绝属于正常流程，用 FailureReason 返回值表示，不在这里定义。
这里只有两类异常：数据错误（目录 / 效果 / 配置）和调用顺序错误。
"""

from i18n import t as _t


def _present(**fields) -> dict:
    """只保留有值的字段"""
    return {k: v for k, v in fields.items() if v}


class BattleError(Exception):
    """战斗异常基类

    Attributes:
        message: 可显示的错误消息
        details: 附加的诊断字段
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} | Details: {self.details}"


# ==================== 数据错误 ====================


class DataIntegrityError(BattleError):
    """卡牌或效果数据缺少必填字段

    由调用方记录日志并跳过该条目，对局继续。
    """

    def __init__(self, message: str | None = None, item_name: str | None = None, reason: str | None = None):
        super().__init__(
            message or _t("exc.data_integrity"),
            _present(item_name=item_name, reason=reason),
        )
        self.item_name = item_name
        self.reason = reason


class UnknownArchetypeError(DataIntegrityError):
    """分发表里没有的卡牌原型"""

    def __init__(self, kind: str, item_name: str | None = None):
        super().__init__(_t("exc.unknown_archetype", kind=kind), item_name=item_name, reason=kind)
        self.kind = kind


class CatalogLoadError(BattleError):
    def __init__(self, message: str | None = None, file_path: str | None = None, reason: str | None = None):
        super().__init__(
            message or _t("exc.catalog_load"),
            _present(file_path=file_path, reason=reason),
        )
        self.file_path = file_path
        self.reason = reason


class ConfigurationError(BattleError):
    """BattleConfig.validate() 发现的全部问题"""

    def __init__(self, message: str | None = None, errors: list[str] | None = None):
        self.errors = list(errors or [])
        super().__init__(message or _t("exc.config_error"), _present(errors=self.errors))


# ==================== 调用顺序错误 ====================


class BattleStateError(BattleError):
    def __init__(
        self,
        message: str | None = None,
        current_state: str | None = None,
        expected_state: str | None = None,
    ):
        super().__init__(
            message or _t("exc.battle_state"),
            _present(current_state=current_state, expected_state=expected_state),
        )
        self.current_state = current_state
        self.expected_state = expected_state


class MatchNotStartedError(BattleStateError):
    """在 start_match() 之前调用了对局操作"""

    def __init__(self, message: str | None = None):
        super().__init__(message or _t("exc.match_not_started"), current_state="not_started")


class InvalidPhaseError(BattleStateError):
    """回合状态机收到非法转换"""

    def __init__(
        self,
        message: str | None = None,
        current_phase: str | None = None,
        expected_phase: str | None = None,
    ):
        super().__init__(message or _t("exc.invalid_phase"), current_phase, expected_phase)
        self.current_phase = current_phase
        self.expected_phase = expected_phase
