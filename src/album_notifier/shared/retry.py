"""外部呼び出しを固定間隔でリトライする実行器。

Generator の取得と GroupMe への投稿はどちらもこの実行器を通す。
リトライ対象は通信エラーと非 2xx ステータス (`httpx.HTTPError`) のみで、
成功したレスポンスの解釈に失敗した場合は呼び出し側が別の例外を送出する。
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

import httpx

from .config import RetrySettings
from .exceptions import BaseAppError
from .logging import get_logger

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """リトライ回数と固定待機時間の組。"""

    max_retries: int = 10
    delay_seconds: float = 60.0
    retry_on: tuple[type[Exception], ...] = (httpx.HTTPError,)

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            msg = "max_retries must be non-negative"
            raise ValueError(msg)
        if self.delay_seconds < 0:
            msg = "delay_seconds must be non-negative"
            raise ValueError(msg)

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    @classmethod
    def from_settings(cls, settings: RetrySettings) -> RetryPolicy:
        return cls(max_retries=settings.max_retries, delay_seconds=settings.delay_seconds)


class RetryExhaustedError(BaseAppError):
    """リトライ上限まで失敗し続けた際の例外。"""

    default_message = "Retries exhausted"

    def __init__(
        self,
        message: str | None = None,
        *,
        operation_name: str,
        attempts: int,
        last_error: Exception,
    ) -> None:
        super().__init__(message)
        self.operation_name = operation_name
        self.attempts = attempts
        self.last_error = last_error


class RetryExecutor:
    """単一の外部呼び出しをリトライポリシーに従って実行する。"""

    def __init__(
        self,
        policy: RetryPolicy,
        *,
        logger=None,
        sleep_func: Callable[[float], None] = time.sleep,
    ) -> None:
        self._policy = policy
        self._sleep = sleep_func
        self._logger = logger or get_logger(__name__)

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def execute(self, operation: Callable[[], T], *, operation_name: str) -> T:
        """`operation` を実行し、リトライ対象の失敗なら待機して再実行する。

        リトライ対象外の例外はそのまま伝播させる。
        """

        retries = 0
        while True:
            try:
                return operation()
            except self._policy.retry_on as exc:
                if retries >= self._policy.max_retries:
                    self._logger.error(
                        "retry_exhausted",
                        operation=operation_name,
                        attempts=retries + 1,
                        error=str(exc),
                    )
                    msg = f"{operation_name} failed after {retries + 1} attempt(s): {exc}"
                    raise RetryExhaustedError(
                        msg,
                        operation_name=operation_name,
                        attempts=retries + 1,
                        last_error=exc,
                    ) from exc

                retries += 1
                self._logger.warning(
                    "retry_scheduled",
                    operation=operation_name,
                    attempt=retries,
                    max_retries=self._policy.max_retries,
                    delay_seconds=self._policy.delay_seconds,
                    error=str(exc),
                )
                self._sleep(self._policy.delay_seconds)


__all__ = ["RetryExecutor", "RetryExhaustedError", "RetryPolicy"]
