"""Trip use cases."""

from .create_trip import CreateTripRequest, CreateTripResponse, CreateTripUseCase
from .delete_trip import DeleteTripRequest, DeleteTripResponse, DeleteTripUseCase
from .get_trip import GetTripRequest, GetTripResponse, GetTripUseCase
from .list_trips import (
    ListTripsRequest,
    ListTripsResponse,
    OwnParticipationInfo,
    TripListItem,
    ListTripsUseCase,
)
from .update_trip import UpdateTripRequest, UpdateTripResponse, UpdateTripUseCase

__all__ = [
    "CreateTripRequest",
    "CreateTripResponse",
    "CreateTripUseCase",
    "DeleteTripRequest",
    "DeleteTripResponse",
    "DeleteTripUseCase",
    "GetTripRequest",
    "GetTripResponse",
    "GetTripUseCase",
    "ListTripsRequest",
    "ListTripsResponse",
    "ListTripsUseCase",
    "OwnParticipationInfo",
    "TripListItem",
    "UpdateTripRequest",
    "UpdateTripResponse",
    "UpdateTripUseCase",
]
