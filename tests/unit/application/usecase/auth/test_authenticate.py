"""Unit tests for AuthenticateUseCase."""

from uuid import uuid4

import pytest

from carpool.application.usecase.auth import AuthenticateRequest, AuthenticateUseCase
from carpool.domain.error import NotAuthenticatedError
from carpool.domain.repository import UserRepository
from carpool.domain.value import UserId
from carpool.domain.value.types import Handle
from tests.conftest import make_token
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestAuthenticateUseCase:
    """Tests for AuthenticateUseCase."""

    @pytest.mark.asyncio
    async def test_valid_token_mirrors_profile(self, unit_env):
        use_case = await unit_env.get(AuthenticateUseCase)
        user_repo = await unit_env.get(UserRepository)
        user_id = uuid4()

        response = await use_case.execute(
            AuthenticateRequest(token=make_token(user_id, "21CS042", "s@x.edu"))
        )

        assert response.user_id == str(user_id)
        assert response.handle == Handle("21CS042")
        stored = await user_repo.find_by_id(UserId(user_id))
        assert stored is not None and stored.email == "s@x.edu"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    async def test_missing_or_invalid_token_is_rejected(self, unit_env, token):
        use_case = await unit_env.get(AuthenticateUseCase)

        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(AuthenticateRequest(token=token))

    @pytest.mark.asyncio
    async def test_empty_handle_is_rejected(self, unit_env):
        use_case = await unit_env.get(AuthenticateUseCase)

        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(AuthenticateRequest(token=make_token(uuid4(), "")))
