from __future__ import annotations

import time
from collections.abc import Callable
from datetime import date
from typing import Annotated

import httpx
import typer
from structlog.stdlib import BoundLogger

from album_notifier.core.announcement import build_announcement
from album_notifier.infra.generator import (
    GeneratorClient,
    GeneratorUnavailableError,
    MalformedAlbumResponseError,
    build_group_api_url,
    build_group_page_url,
)
from album_notifier.infra.groupme import GroupMeBotClient, GroupMeDeliveryError, GroupMeMessage
from album_notifier.shared.config import AppSettings, get_settings
from album_notifier.shared.exceptions import BaseAppError, ConfigurationError
from album_notifier.shared.logging import configure_logging, get_logger
from album_notifier.shared.retry import RetryPolicy

app = typer.Typer(
    help="今日のアルバムを取得して GroupMe へ告知するコマンド",
    invoke_without_command=True,
)


def _today() -> date:
    return date.today()


def _build_http_client(
    settings: AppSettings, *, transport: httpx.BaseTransport | None = None
) -> httpx.Client:
    return httpx.Client(
        timeout=settings.http_timeout_seconds,
        follow_redirects=True,
        transport=transport,
    )


def _describe_stage(exc: BaseAppError) -> str:
    if isinstance(exc, ConfigurationError):
        return "設定の読み込み"
    if isinstance(exc, GeneratorUnavailableError | MalformedAlbumResponseError):
        return "アルバムの取得"
    if isinstance(exc, GroupMeDeliveryError):
        return "メッセージの送信"
    return "告知処理"


def announce_album_of_the_day(
    settings: AppSettings,
    *,
    http_client: httpx.Client,
    today: date,
    logger: BoundLogger,
    sleep_func: Callable[[float], None] = time.sleep,
    dry_run: bool = False,
) -> str:
    """アルバム取得、告知文の整形、GroupMe への投稿を順に 1 度だけ行う。

    返り値は投稿 (dry-run 時は生成のみ) した告知文。
    """

    policy = RetryPolicy.from_settings(settings.retry)
    base_url = str(settings.generator.base_url)
    api_url = build_group_api_url(base_url, settings.group)
    group_url = build_group_page_url(base_url, settings.group)

    fetcher = GeneratorClient(
        retry_policy=policy,
        http_get=http_client.get,
        timeout=settings.http_timeout_seconds,
        spotify_album_base_url=str(settings.generator.spotify_album_base_url),
        logger=logger,
        sleep_func=sleep_func,
    )
    album = fetcher.fetch_current_album(api_url)

    text = build_announcement(album, today=today, group_url=group_url)
    if dry_run:
        logger.info("announce_dry_run", text=text)
        return text

    notifier = GroupMeBotClient(
        api_url=str(settings.groupme.api_url),
        retry_policy=policy,
        http_post=http_client.post,
        timeout=settings.http_timeout_seconds,
        logger=logger,
        sleep_func=sleep_func,
    )
    notifier.send(GroupMeMessage(bot_id=settings.bot_id.get_secret_value(), text=text))
    return text


@app.callback()
def run(
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="GroupMe へ投稿せず告知文だけを表示する。"),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", "-l", help="ログレベル。省略時は設定値。"),
    ] = None,
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="ログを JSON 形式で出力する。"),
    ] = False,
) -> None:
    """今日のアルバムを GroupMe へ告知する。"""

    try:
        settings = get_settings()
    except ConfigurationError as exc:
        configure_logging("INFO", json_output=json_logs)
        get_logger("cli.announce.run").error("announce_config_failed", error=str(exc))
        typer.echo(f"{_describe_stage(exc)}に失敗しました: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    try:
        configure_logging(log_level or settings.log_level, json_output=json_logs)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc

    logger = get_logger("cli.announce.run", group=settings.group, dry_run=dry_run)

    try:
        with _build_http_client(settings) as http_client:
            text = announce_album_of_the_day(
                settings,
                http_client=http_client,
                today=_today(),
                logger=logger,
                dry_run=dry_run,
            )
    except BaseAppError as exc:
        stage = _describe_stage(exc)
        logger.error("announce_failed", stage=stage, error=str(exc))
        typer.echo(f"{stage}に失敗しました: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if dry_run:
        typer.echo(text)
    logger.info("announce_completed")


__all__ = ["announce_album_of_the_day", "app", "run"]
