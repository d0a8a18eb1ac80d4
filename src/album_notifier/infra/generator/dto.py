"""Generator API レスポンスの検証と Album への変換。"""

from __future__ import annotations

import json
from typing import Any

from album_notifier.core.announcement.models import Album
from album_notifier.shared.exceptions import ExternalServiceError

CURRENT_ALBUM_KEY = "currentAlbum"
# Album の属性名 -> currentAlbum 内のキー
_ALBUM_FIELDS: tuple[tuple[str, str], ...] = (
    ("title", "name"),
    ("artist", "artist"),
    ("release_year", "releaseDate"),
    ("spotify_id", "spotifyId"),
)


class MalformedAlbumResponseError(ExternalServiceError):
    """成功レスポンスが想定した形をしていない場合の例外。リトライしない。"""

    default_message = "Generator response has an unexpected shape"


def decode_payload(body: bytes) -> Any:
    """レスポンスボディを JSON としてデコードする。"""

    try:
        return json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        msg = "Generator response is not valid JSON"
        raise MalformedAlbumResponseError(msg) from exc


def _require_text(container: dict[str, Any], key: str) -> str:
    value = container.get(key)
    if not isinstance(value, str):
        kind = "missing" if value is None else f"not a string ({type(value).__name__})"
        msg = f"{CURRENT_ALBUM_KEY}.{key} is {kind}"
        raise MalformedAlbumResponseError(msg)
    if not value.strip():
        msg = f"{CURRENT_ALBUM_KEY}.{key} is blank"
        raise MalformedAlbumResponseError(msg)
    return value


def parse_album_payload(payload: Any, *, spotify_album_base_url: str) -> Album:
    """`currentAlbum` から 4 項目を取り出して Album を生成する。

    1 項目でも欠けていれば MalformedAlbumResponseError を送出する。
    """

    if not isinstance(payload, dict):
        msg = "Generator response must be a JSON object"
        raise MalformedAlbumResponseError(msg)

    current = payload.get(CURRENT_ALBUM_KEY)
    if not isinstance(current, dict):
        msg = f"{CURRENT_ALBUM_KEY} is missing or not an object"
        raise MalformedAlbumResponseError(msg)

    values = {attr: _require_text(current, key) for attr, key in _ALBUM_FIELDS}
    spotify_id = values.pop("spotify_id")
    return Album(
        **values,
        streaming_link=f"{spotify_album_base_url.rstrip('/')}/{spotify_id}",
    )


__all__ = [
    "CURRENT_ALBUM_KEY",
    "MalformedAlbumResponseError",
    "decode_payload",
    "parse_album_payload",
]
