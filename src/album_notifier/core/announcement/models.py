"""告知対象のアルバムを表す値オブジェクト。"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(slots=True, frozen=True)
class Album:
    """今日のアルバム。4 項目すべてが揃った状態でのみ生成される。"""

    title: str
    artist: str
    release_year: str
    streaming_link: str

    def __post_init__(self) -> None:
        if not self.title.strip():
            msg = "title must not be blank"
            raise ValueError(msg)
        if not self.artist.strip():
            msg = "artist must not be blank"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


__all__ = ["Album"]
