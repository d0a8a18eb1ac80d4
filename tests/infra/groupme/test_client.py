"""GroupMe Bot クライアントの挙動を検証する。"""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from album_notifier.infra.groupme import (
    GroupMeBotClient,
    GroupMeDeliveryError,
    GroupMeMessage,
)
from album_notifier.shared.retry import RetryPolicy

API_URL = "https://api.groupme.com/v3/bots/post"


class DummyLogger:
    def __init__(self) -> None:
        self.infos: list[tuple[str, dict[str, object]]] = []
        self.warnings: list[dict[str, object]] = []
        self.errors: list[dict[str, object]] = []

    def info(self, event: str, **kwargs) -> None:
        self.infos.append((event, kwargs))

    def warning(self, *_args, **kwargs) -> None:
        self.warnings.append(kwargs)

    def error(self, *_args, **kwargs) -> None:
        self.errors.append(kwargs)


class StubPost:
    def __init__(self, statuses: list[int | Exception]) -> None:
        self._statuses = list(statuses)
        self.calls: list[dict[str, Any]] = []

    def __call__(self, url: str, *, json: dict[str, Any], timeout: float) -> httpx.Response:
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        status = self._statuses.pop(0)
        if isinstance(status, Exception):
            raise status
        return httpx.Response(status, request=httpx.Request("POST", url))


def _client(http_post: StubPost, *, max_retries: int, logger: DummyLogger, sleeps: list[float]):
    return GroupMeBotClient(
        api_url=API_URL,
        retry_policy=RetryPolicy(max_retries=max_retries, delay_seconds=60.0),
        http_post=http_post,
        timeout=10.0,
        logger=logger,
        sleep_func=sleeps.append,
    )


def test_send_posts_bot_id_and_text() -> None:
    logger = DummyLogger()
    http_post = StubPost([202])

    _client(http_post, max_retries=3, logger=logger, sleeps=[]).send(
        GroupMeMessage(bot_id="bot-123", text="hello")
    )

    assert http_post.calls == [
        {"url": API_URL, "json": {"bot_id": "bot-123", "text": "hello"}, "timeout": 10.0}
    ]
    assert logger.infos == [("groupme_message_sent", {"text": "hello"})]


def test_send_retries_once_after_server_error() -> None:
    logger = DummyLogger()
    sleeps: list[float] = []
    http_post = StubPost([500, 200])

    _client(http_post, max_retries=1, logger=logger, sleeps=sleeps).send(
        GroupMeMessage(bot_id="bot", text="announcement")
    )

    assert len(http_post.calls) == 2
    assert sleeps == [60.0]
    assert len(logger.warnings) == 1
    assert [event for event, _ in logger.infos] == ["groupme_message_sent"]


def test_send_raises_delivery_error_after_exhaustion() -> None:
    logger = DummyLogger()
    sleeps: list[float] = []
    http_post = StubPost([httpx.ConnectError("unreachable"), 503, 503])

    with pytest.raises(GroupMeDeliveryError) as excinfo:
        _client(http_post, max_retries=2, logger=logger, sleeps=sleeps).send(
            GroupMeMessage(bot_id="bot", text="never delivered")
        )

    assert len(http_post.calls) == 3
    assert sleeps == [60.0, 60.0]
    assert logger.infos == []
    assert isinstance(excinfo.value.last_error, httpx.HTTPStatusError)


def test_send_retry_may_duplicate_delivery() -> None:
    """応答が失われたリトライは重複投稿になり得る (at-least-once)。"""

    delivered: list[str] = []

    def http_post(url: str, *, json: dict[str, Any], timeout: float) -> httpx.Response:
        delivered.append(json["text"])
        if len(delivered) == 1:
            raise httpx.ReadTimeout("response lost after the server accepted the post")
        return httpx.Response(200, request=httpx.Request("POST", url))

    client = GroupMeBotClient(
        api_url=API_URL,
        retry_policy=RetryPolicy(max_retries=1, delay_seconds=0.0),
        http_post=http_post,
        logger=DummyLogger(),
        sleep_func=lambda _seconds: None,
    )

    client.send(GroupMeMessage(bot_id="bot", text="today"))

    assert delivered == ["today", "today"]
