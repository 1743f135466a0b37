"""JWT token domain service."""

from uuid import UUID

import logfire

from carpool.config import AuthSettings
from carpool.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, handle: str, email: str | None = None) -> str:
        """Create JWT token for user.

        Used by development tooling and tests; production tokens come from
        the identity provider.

        Args:
            user_id: User ID
            handle: Display handle
            email: Email address

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id, handle=handle):
            token = create_token(user_id, handle, email, self.auth_settings)
            logfire.info("JWT token created", user_id=user_id, handle=handle)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                UUID(payload.user_id)
            except ValueError:
                logfire.error("JWT token carries a malformed user id")
                raise JWTError("Invalid user id in token")
            except JWTError as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise
            logfire.info(
                "JWT token verified", user_id=payload.user_id, handle=payload.handle
            )
            return payload

    def get_identity_from_token(self, token: str | None) -> TokenPayload | None:
        """Extract the token identity without raising exceptions.

        Args:
            token: JWT token string (optional)

        Returns:
            Token payload if valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            return self.verify_token(token)
        except JWTError as e:
            # Invalid or expired token, treat as unauthenticated
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
