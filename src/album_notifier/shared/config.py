"""アプリケーション全体で共有する設定ローダー。"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AnyHttpUrl, BaseModel, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class RetrySettings(BaseModel):
    """外部呼び出し共通のリトライ設定。"""

    max_retries: int = Field(10, ge=0, description="初回を除いたリトライ回数の上限")
    delay_seconds: float = Field(60.0, ge=0, description="失敗後に待機する固定秒数")


class GeneratorSettings(BaseModel):
    """1001 Albums Generator 関連の設定。"""

    base_url: AnyHttpUrl = Field(
        "https://1001albumsgenerator.com", description="Generator サービスのベース URL"
    )
    spotify_album_base_url: AnyHttpUrl = Field(
        "https://open.spotify.com/album", description="Spotify アルバムリンクのベース URL"
    )


class GroupMeSettings(BaseModel):
    """GroupMe Bot 投稿先の設定。"""

    api_url: AnyHttpUrl = Field(
        "https://api.groupme.com/v3/bots/post", description="Bot 投稿 API のエンドポイント"
    )


class AppSettings(BaseSettings):
    """共有設定。`.env` 読み込みと環境変数バリデーションを担う。"""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    bot_id: SecretStr = Field(..., description="GroupMe Bot ID")
    group: str = Field(..., description="1001 Albums Generator のグループ名")
    log_level: str = Field("INFO", description="ルートロガーのログレベル")
    http_timeout_seconds: float = Field(30.0, gt=0, description="HTTP リクエストのタイムアウト")
    retry: RetrySettings = Field(default_factory=RetrySettings)
    generator: GeneratorSettings = Field(default_factory=GeneratorSettings)
    groupme: GroupMeSettings = Field(default_factory=GroupMeSettings)

    @field_validator("bot_id")
    @classmethod
    def _require_bot_id(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            msg = "bot_id must not be blank"
            raise ValueError(msg)
        return value

    @field_validator("group")
    @classmethod
    def _require_group(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            msg = "group must not be blank"
            raise ValueError(msg)
        return normalized


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """設定をロードし、再利用する。

    LRU キャッシュによりプロセス内での重複読み込みを防ぎ、
    `pytest` などから `get_settings.cache_clear()` を呼び出すことで再読込できる。
    """

    try:
        return AppSettings()
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


__all__ = [
    "AppSettings",
    "GeneratorSettings",
    "GroupMeSettings",
    "RetrySettings",
    "get_settings",
]
