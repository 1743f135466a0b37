"""Authenticate use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from carpool.domain.error import NotAuthenticatedError
from carpool.domain.service import JWTService, UserService
from carpool.domain.value import UserId
from carpool.domain.value.types import Handle
from carpool.util.jwt import JWTError


class AuthenticateRequest(BaseModel):
    """Authenticate request."""

    token: str | None  # JWT token from cookie, header or query


class AuthenticateResponse(BaseModel):
    """Authenticated caller."""

    user_id: str
    handle: Handle
    email: str | None


class AuthenticateUseCase:
    """Use case for resolving the caller of a request.

    Users are owned by the campus identity provider. The first request of a
    user creates the local profile mirror; later requests refresh it when the
    token carries a new handle or email.
    """

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize authenticate use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: AuthenticateRequest) -> AuthenticateResponse:
        """Execute authenticate flow.

        Steps:
        1. Verify JWT token via JWT service
        2. Mirror the caller's public profile

        Args:
            request: Request with JWT token

        Returns:
            The authenticated caller

        Raises:
            NotAuthenticatedError: If the token is missing, invalid or expired
        """
        if not request.token:
            raise NotAuthenticatedError()

        try:
            payload = self.jwt_service.verify_token(request.token)
        except JWTError as e:
            raise NotAuthenticatedError(str(e))

        try:
            handle = Handle(payload.handle)
        except ValueError:
            logfire.warn("Token carries an invalid handle", user_id=payload.user_id)
            raise NotAuthenticatedError("Invalid token")

        user = await self.user_service.sync_profile(
            UserId(UUID(payload.user_id)), handle, payload.email
        )

        return AuthenticateResponse(
            user_id=str(user.id), handle=user.handle, email=user.email
        )
