"""Caller identification for HTTP and WebSocket endpoints."""

from carpool.application.usecase.auth import (
    AuthenticateRequest,
    AuthenticateResponse,
    AuthenticateUseCase,
)

AUTH_COOKIE = "auth_token"


def extract_token(
    auth_token: str | None = None,
    authorization: str | None = None,
    query_token: str | None = None,
) -> str | None:
    """Pick the bearer token from cookie, Authorization header or query string."""
    if auth_token:
        return auth_token
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    return query_token or None


async def current_user(
    authenticate_use_case: AuthenticateUseCase,
    auth_token: str | None,
    authorization: str | None,
) -> AuthenticateResponse:
    """Resolve the caller of an HTTP request.

    Raises:
        NotAuthenticatedError: If no valid token was sent
    """
    token = extract_token(auth_token=auth_token, authorization=authorization)
    return await authenticate_use_case.execute(AuthenticateRequest(token=token))
