"""共通例外。"""

from __future__ import annotations


class BaseAppError(Exception):
    """全レイヤで共有するベース例外。"""

    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ConfigurationError(BaseAppError):
    """設定読み込みや不足を示すエラー。"""

    default_message = "Configuration is invalid or missing"


class ExternalServiceError(BaseAppError):
    """外部サービス呼び出しで回復できなかったエラーの基底。"""

    default_message = "External service call failed"


__all__ = [
    "BaseAppError",
    "ConfigurationError",
    "ExternalServiceError",
]
