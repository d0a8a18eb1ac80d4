"""アルバム告知のドメインモデルと整形処理。"""

from .formatter import build_announcement, format_us_date
from .models import Album

__all__ = ["Album", "build_announcement", "format_us_date"]
