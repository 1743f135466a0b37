"""Message entity.

Trip messages come in two delivery modes that share one table:

- direct: addressed to one receiver, who can mark it read once
- group: broadcast to the whole trip room, immutable
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from carpool.domain.model.common import DomainModel, utcnow
from carpool.domain.value import MessageId, MessageMode, TripId, UserId

MAX_BODY_LENGTH = 1000


class Message(DomainModel):
    """Trip-scoped message.

    Business rules:
    - body is trimmed and 1-1000 characters
    - direct messages always have a receiver; group messages never do
    - read_at only exists on direct messages and is set at most once
    """

    id: MessageId
    trip_id: TripId
    sender_id: UserId
    mode: MessageMode
    body: str = Field(min_length=1, max_length=MAX_BODY_LENGTH)
    receiver_id: Optional[UserId] = None
    read_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def check_mode_fields(self) -> "Message":
        if self.mode == MessageMode.DIRECT and self.receiver_id is None:
            raise ValueError("Direct messages require a receiver")
        if self.mode == MessageMode.GROUP and (
            self.receiver_id is not None or self.read_at is not None
        ):
            raise ValueError("Group messages have no receiver or read receipt")
        return self

    @property
    def is_read(self) -> bool:
        return self.read_at is not None
