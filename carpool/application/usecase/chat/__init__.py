"""Group chat use cases."""

from .list_group_messages import (
    ListGroupMessagesRequest,
    ListGroupMessagesResponse,
    ListGroupMessagesUseCase,
)
from .list_group_participants import (
    ChatMemberInfo,
    ListGroupParticipantsRequest,
    ListGroupParticipantsResponse,
    ListGroupParticipantsUseCase,
)
from .send_group_message import (
    SendGroupMessageRequest,
    SendGroupMessageResponse,
    SendGroupMessageUseCase,
)

__all__ = [
    "ChatMemberInfo",
    "ListGroupMessagesRequest",
    "ListGroupMessagesResponse",
    "ListGroupMessagesUseCase",
    "ListGroupParticipantsRequest",
    "ListGroupParticipantsResponse",
    "ListGroupParticipantsUseCase",
    "SendGroupMessageRequest",
    "SendGroupMessageResponse",
    "SendGroupMessageUseCase",
]
