"""User entity.

Users are owned by the campus identity provider. This service keeps a
mirror of their public profile so trip members can see who they ride with.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from carpool.domain.model.common import DomainModel, utcnow
from carpool.domain.value import PublicProfile, UserId
from carpool.domain.value.types import Handle


class User(DomainModel):
    """Mirrored user profile.

    The identifier is issued by the identity provider and never changes.
    """

    id: UserId
    handle: Handle
    email: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def public_profile(self) -> PublicProfile:
        return PublicProfile(id=self.id, handle=self.handle, email=self.email)
