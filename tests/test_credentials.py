"""Tests for API-key generation and secret hashing."""

from unittest.mock import Mock

import pytest

from quotes_api.adapters.hashing.base import HashVerificationError
from quotes_api.services.credentials import generate_identity_key, generate_secret_key_pair
from quotes_api.services.request_validation import is_valid_api_key


class TestGenerateIdentityKey:
    def test_matches_key_pattern(self, user_store) -> None:
        key = generate_identity_key(user_store)
        assert key.startswith("identity-")
        assert is_valid_api_key(key)

    def test_keys_are_unique(self, user_store) -> None:
        keys = {generate_identity_key(user_store) for _ in range(1000)}
        assert len(keys) == 1000

    def test_rerolls_on_collision(self) -> None:
        """A key already in the store is never returned."""
        store = Mock()
        store.exists.side_effect = [True, True, False]

        key = generate_identity_key(store)

        assert is_valid_api_key(key)
        assert store.exists.call_count == 3
        first_candidate = store.exists.call_args_list[0].args[0]
        assert key != first_candidate


class TestGenerateSecretKeyPair:
    def test_returns_plaintext_and_hash(self, hasher) -> None:
        secret_key, secret_hash = generate_secret_key_pair(hasher)

        assert is_valid_api_key(secret_key)
        assert secret_key.startswith("secret-")
        assert secret_hash != secret_key
        assert secret_key not in secret_hash
        assert hasher.verify(secret_key, secret_hash) is True

    def test_hashes_are_salted(self, hasher) -> None:
        """Hashing the same secret twice yields two different hashes."""
        first = hasher.hash("samesecret1")
        second = hasher.hash("samesecret1")
        assert first != second
        assert hasher.verify("samesecret1", first)
        assert hasher.verify("samesecret1", second)


class TestArgon2Hasher:
    def test_mismatch_returns_false(self, hasher) -> None:
        stored = hasher.hash("password123")
        assert hasher.verify("password124", stored) is False

    def test_corrupt_hash_raises(self, hasher) -> None:
        with pytest.raises(HashVerificationError):
            hasher.verify("password123", "not-an-argon2-hash")

    def test_hash_is_argon2id(self, hasher) -> None:
        assert hasher.hash("password123").startswith("$argon2id$")
