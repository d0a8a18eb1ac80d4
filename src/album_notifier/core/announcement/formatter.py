"""GroupMe へ投稿する告知文のテンプレート。"""

from __future__ import annotations

from datetime import date

from .models import Album

ANNOUNCEMENT_HEADER = "1001albumsgenerator"


def format_us_date(value: date) -> str:
    """ゼロ埋めしない月/日/年 形式に整形する。"""

    return f"{value.month}/{value.day}/{value.year}"


def build_announcement(album: Album, *, today: date, group_url: str) -> str:
    """アルバムと日付から告知文を組み立てる。副作用は持たない。"""

    return (
        f"{ANNOUNCEMENT_HEADER} {format_us_date(today)}\n\n"
        f"{album.title} by {album.artist} ({album.release_year})\n\n"
        f"{album.streaming_link}\n\n"
        f"Group: {group_url}\n"
    )


__all__ = ["ANNOUNCEMENT_HEADER", "build_announcement", "format_us_date"]
