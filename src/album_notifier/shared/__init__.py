"""共有レイヤの公開インターフェース。"""

from .config import AppSettings, get_settings
from .exceptions import BaseAppError, ConfigurationError, ExternalServiceError
from .logging import configure_logging, get_logger
from .retry import RetryExecutor, RetryExhaustedError, RetryPolicy

__all__ = [
    "AppSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "BaseAppError",
    "ConfigurationError",
    "ExternalServiceError",
    "RetryExecutor",
    "RetryExhaustedError",
    "RetryPolicy",
]
