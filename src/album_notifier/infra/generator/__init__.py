"""1001 Albums Generator 向け infra 層パッケージ。"""

from .client import (
    DEFAULT_SPOTIFY_ALBUM_BASE_URL,
    GeneratorClient,
    GeneratorUnavailableError,
    build_group_api_url,
    build_group_page_url,
)
from .dto import MalformedAlbumResponseError, decode_payload, parse_album_payload

__all__ = [
    "DEFAULT_SPOTIFY_ALBUM_BASE_URL",
    "GeneratorClient",
    "GeneratorUnavailableError",
    "MalformedAlbumResponseError",
    "build_group_api_url",
    "build_group_page_url",
    "decode_payload",
    "parse_album_payload",
]
