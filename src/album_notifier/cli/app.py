from __future__ import annotations

import typer

from album_notifier.cli.commands import announce
from album_notifier.shared.logging import configure_logging

app = typer.Typer(help="1001 Albums Generator の今日のアルバムを告知する CLI")

app.add_typer(announce.app, name="announce", help="今日のアルバムを GroupMe へ投稿")


def main() -> None:
    """エントリポイント。"""

    configure_logging()
    app()


if __name__ == "__main__":  # pragma: no cover - CLI エントリ
    main()
