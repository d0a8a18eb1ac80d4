"""1001 Albums Generator から今日のアルバムを取得するクライアント。"""

from __future__ import annotations

import time
from collections.abc import Callable

import httpx

from album_notifier.core.announcement.models import Album
from album_notifier.shared.exceptions import ExternalServiceError
from album_notifier.shared.logging import get_logger
from album_notifier.shared.retry import RetryExecutor, RetryExhaustedError, RetryPolicy

from .dto import decode_payload, parse_album_payload

DEFAULT_SPOTIFY_ALBUM_BASE_URL = "https://open.spotify.com/album"


class GeneratorUnavailableError(ExternalServiceError):
    """リトライを使い切っても Generator から応答を得られなかった際の例外。"""

    default_message = "Generator service is unavailable"

    def __init__(self, message: str | None = None, *, last_error: Exception | None = None) -> None:
        super().__init__(message)
        self.last_error = last_error


def build_group_api_url(base_url: str, group: str) -> str:
    """グループの現在のアルバムを返す API の URL。"""

    return f"{base_url.rstrip('/')}/api/v1/groups/{group}"


def build_group_page_url(base_url: str, group: str) -> str:
    """告知文に載せるグループページの URL。"""

    return f"{base_url.rstrip('/')}/groups/{group}"


class GeneratorClient:
    """Generator API へ GET し、レスポンスを Album へ変換する。"""

    def __init__(
        self,
        *,
        retry_policy: RetryPolicy | None = None,
        http_get: Callable[..., httpx.Response] = httpx.get,
        timeout: float = 30.0,
        spotify_album_base_url: str = DEFAULT_SPOTIFY_ALBUM_BASE_URL,
        logger=None,
        sleep_func: Callable[[float], None] = time.sleep,
    ) -> None:
        self._http_get = http_get
        self._timeout = timeout
        self._spotify_album_base_url = spotify_album_base_url
        self._logger = logger or get_logger(__name__)
        self._executor = RetryExecutor(
            retry_policy or RetryPolicy(),
            logger=self._logger,
            sleep_func=sleep_func,
        )

    def fetch_current_album(self, url: str) -> Album:
        """今日のアルバムを取得する。

        通信エラーと非 2xx はリトライし、成功後の解析失敗はリトライせずに送出する。
        """

        def request() -> httpx.Response:
            self._logger.debug("generator_request", url=url)
            response = self._http_get(url, timeout=self._timeout)
            response.raise_for_status()
            return response

        try:
            response = self._executor.execute(request, operation_name="generator_fetch")
        except RetryExhaustedError as exc:
            msg = f"Could not get album: {exc.last_error}"
            raise GeneratorUnavailableError(msg, last_error=exc.last_error) from exc

        payload = decode_payload(response.content)
        album = parse_album_payload(payload, spotify_album_base_url=self._spotify_album_base_url)
        self._logger.info("generator_album_fetched", **album.to_dict())
        return album


__all__ = [
    "DEFAULT_SPOTIFY_ALBUM_BASE_URL",
    "GeneratorClient",
    "GeneratorUnavailableError",
    "build_group_api_url",
    "build_group_page_url",
]
