"""Participation use cases."""

from .decide_participation import (
    DecideParticipationRequest,
    DecideParticipationResponse,
    DecideParticipationUseCase,
)
from .list_participants import (
    ListParticipantsRequest,
    ListParticipantsResponse,
    ListParticipantsUseCase,
)
from .request_join import RequestJoinRequest, RequestJoinResponse, RequestJoinUseCase

__all__ = [
    "DecideParticipationRequest",
    "DecideParticipationResponse",
    "DecideParticipationUseCase",
    "ListParticipantsRequest",
    "ListParticipantsResponse",
    "ListParticipantsUseCase",
    "RequestJoinRequest",
    "RequestJoinResponse",
    "RequestJoinUseCase",
]
