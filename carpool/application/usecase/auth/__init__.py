"""Authentication use cases."""

from .authenticate import AuthenticateRequest, AuthenticateResponse, AuthenticateUseCase

__all__ = ["AuthenticateRequest", "AuthenticateResponse", "AuthenticateUseCase"]
