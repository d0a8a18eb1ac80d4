"""GroupMe Bot へ告知文を投稿するクライアント。"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from album_notifier.shared.exceptions import ExternalServiceError
from album_notifier.shared.logging import get_logger
from album_notifier.shared.retry import RetryExecutor, RetryExhaustedError, RetryPolicy

DEFAULT_GROUPME_API_URL = "https://api.groupme.com/v3/bots/post"


class GroupMeDeliveryError(ExternalServiceError):
    """リトライを使い切っても投稿できなかった際の例外。"""

    default_message = "GroupMe message delivery failed"

    def __init__(self, message: str | None = None, *, last_error: Exception | None = None) -> None:
        super().__init__(message)
        self.last_error = last_error


@dataclass(slots=True, frozen=True)
class GroupMeMessage:
    """Bot API へ送信するメッセージ DTO。"""

    bot_id: str
    text: str

    def to_payload(self) -> dict[str, str]:
        return {"bot_id": self.bot_id, "text": self.text}


class GroupMeBotClient:
    """GroupMe Bot API へメッセージを送信するクライアント。

    投稿は冪等ではない。応答が失われた後のリトライで同じ告知が二重に届くことがあり、
    配信は at-least-once として扱う。
    """

    def __init__(
        self,
        *,
        api_url: str = DEFAULT_GROUPME_API_URL,
        retry_policy: RetryPolicy | None = None,
        http_post: Callable[..., httpx.Response] = httpx.post,
        timeout: float = 30.0,
        logger=None,
        sleep_func: Callable[[float], None] = time.sleep,
    ) -> None:
        self._api_url = api_url
        self._http_post = http_post
        self._timeout = timeout
        self._logger = logger or get_logger(__name__)
        self._executor = RetryExecutor(
            retry_policy or RetryPolicy(),
            logger=self._logger,
            sleep_func=sleep_func,
        )

    def send(self, message: GroupMeMessage) -> None:
        """単一メッセージを送信する。"""

        payload = message.to_payload()

        def request() -> httpx.Response:
            response = self._http_post(self._api_url, json=payload, timeout=self._timeout)
            response.raise_for_status()
            return response

        try:
            self._executor.execute(request, operation_name="groupme_send")
        except RetryExhaustedError as exc:
            msg = f"Could not send message: {exc.last_error}"
            raise GroupMeDeliveryError(msg, last_error=exc.last_error) from exc

        self._logger.info("groupme_message_sent", text=message.text)


__all__ = [
    "DEFAULT_GROUPME_API_URL",
    "GroupMeBotClient",
    "GroupMeDeliveryError",
    "GroupMeMessage",
]
