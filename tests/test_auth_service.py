"""Unit tests for the authenticator."""

import threading
from unittest.mock import patch

import pytest

from quotes_api.adapters.store.base import UserProfile
from quotes_api.core.errors import AuthenticationAppError, InternalAppError
from quotes_api.services.auth_service import AuthService


@pytest.fixture
def auth_service(user_store, hasher) -> AuthService:
    user_store.insert(
        UserProfile(
            identifier="alice",
            email="alice@example.com",
            secret_hash=hasher.hash("password123"),
        )
    )
    return AuthService(user_store, hasher)


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_correct_secret_returns_profile(self, auth_service) -> None:
        profile = await auth_service.authenticate("alice", "password123")
        assert profile.identifier == "alice"
        assert profile.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_unknown_identity_is_401(self, auth_service) -> None:
        with pytest.raises(AuthenticationAppError) as exc_info:
            await auth_service.authenticate("bob", "password123")
        assert exc_info.value.code == "unrecognized_identity"
        assert exc_info.value.http_status == 401

    @pytest.mark.asyncio
    async def test_wrong_secret_is_401(self, auth_service) -> None:
        with pytest.raises(AuthenticationAppError) as exc_info:
            await auth_service.authenticate("alice", "password999")
        assert exc_info.value.code == "invalid_secret"

    @pytest.mark.asyncio
    async def test_corrupt_stored_hash_is_500(self, user_store, hasher) -> None:
        user_store.insert(
            UserProfile(identifier="carol", email="carol@example.com", secret_hash="garbage")
        )
        service = AuthService(user_store, hasher)

        with pytest.raises(InternalAppError) as exc_info:
            await service.authenticate("carol", "password123")
        assert exc_info.value.code == "secret_verification_failed"
        assert exc_info.value.http_status == 500

    @pytest.mark.asyncio
    async def test_hash_secret_is_verifiable(self, auth_service, hasher) -> None:
        new_hash = await auth_service.hash_secret("newpassword1")
        assert new_hash != "newpassword1"
        assert hasher.verify("newpassword1", new_hash)


class TestOffloading:
    @pytest.mark.asyncio
    async def test_store_lookup_runs_off_the_event_loop(self, auth_service, user_store) -> None:
        """A slow store must not stall other requests sharing the loop."""
        loop_thread = threading.get_ident()
        seen: list[int] = []
        original_get = user_store.get

        def spy(identifier):
            seen.append(threading.get_ident())
            return original_get(identifier)

        with patch.object(user_store, "get", side_effect=spy):
            await auth_service.authenticate("alice", "password123")

        assert len(seen) == 1
        assert seen[0] != loop_thread
