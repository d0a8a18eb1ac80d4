"""GroupMe Bot 通知クライアント。"""

from .client import (
    DEFAULT_GROUPME_API_URL,
    GroupMeBotClient,
    GroupMeDeliveryError,
    GroupMeMessage,
)

__all__ = [
    "DEFAULT_GROUPME_API_URL",
    "GroupMeBotClient",
    "GroupMeDeliveryError",
    "GroupMeMessage",
]
