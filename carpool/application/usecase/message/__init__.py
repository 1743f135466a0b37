"""Direct message use cases."""

from .get_unread_count import (
    GetUnreadMessageCountRequest,
    GetUnreadMessageCountResponse,
    GetUnreadMessageCountUseCase,
)
from .list_direct_messages import (
    ListDirectMessagesRequest,
    ListDirectMessagesResponse,
    ListDirectMessagesUseCase,
)
from .mark_message_read import (
    MarkMessageReadRequest,
    MarkMessageReadResponse,
    MarkMessageReadUseCase,
)
from .send_direct_message import (
    SendDirectMessageRequest,
    SendDirectMessageResponse,
    SendDirectMessageUseCase,
)

__all__ = [
    "GetUnreadMessageCountRequest",
    "GetUnreadMessageCountResponse",
    "GetUnreadMessageCountUseCase",
    "ListDirectMessagesRequest",
    "ListDirectMessagesResponse",
    "ListDirectMessagesUseCase",
    "MarkMessageReadRequest",
    "MarkMessageReadResponse",
    "MarkMessageReadUseCase",
    "SendDirectMessageRequest",
    "SendDirectMessageResponse",
    "SendDirectMessageUseCase",
]
