"""HTTP tests for deployments running the identity/secret key scheme."""

import re

from fastapi.testclient import TestClient

KEY_PATTERN = re.compile(r"(identity|secret)-[0-9a-f]{64}")
CLIENT = {"name": "Sheva Alomar", "email": "sheva@bsaa.org"}


def _register(client: TestClient, **overrides) -> dict:
    resp = client.post("/register", json={**CLIENT, **overrides})
    assert resp.status_code == 201
    return resp.json()


class TestApiKeyRegistration:
    def test_issues_a_key_pair(self, api_key_client: TestClient, api_key_app) -> None:
        keys = _register(api_key_client)

        assert KEY_PATTERN.fullmatch(keys["identityKey"])
        assert KEY_PATTERN.fullmatch(keys["secretKey"])
        assert keys["identityKey"].startswith("identity-")
        assert keys["secretKey"].startswith("secret-")

        profile = api_key_app.state.user_store.get(keys["identityKey"])
        assert profile.name == "Sheva Alomar"
        assert profile.secret_hash != keys["secretKey"]

    def test_honeypot_returns_fake_success_and_stores_nothing(
        self, api_key_client: TestClient, api_key_app
    ) -> None:
        resp = api_key_client.post("/register", json={**CLIENT, "reason": "buy cheap pills"})

        assert resp.status_code == 200
        assert resp.json() == {"message": "Sign up successful"}
        assert not api_key_app.state.user_store.email_exists("sheva@bsaa.org")

    def test_duplicate_email_is_409(self, api_key_client: TestClient) -> None:
        _register(api_key_client)
        resp = api_key_client.post("/register", json={**CLIENT, "name": "Another"})

        assert resp.status_code == 409

    def test_missing_name_is_400(self, api_key_client: TestClient) -> None:
        resp = api_key_client.post("/register", json={**CLIENT, "name": ""})

        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "missing_inputs"

    def test_invalid_email_is_400(self, api_key_client: TestClient) -> None:
        resp = api_key_client.post("/register", json={**CLIENT, "email": "sheva"})

        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "malformed_inputs"

    def test_long_name_is_truncated(self, api_key_client: TestClient, api_key_app) -> None:
        keys = _register(api_key_client, name="x" * 1500)

        profile = api_key_app.state.user_store.get(keys["identityKey"])
        assert len(profile.name) == 1000


class TestApiKeyQuotes:
    def test_keys_authenticate_quote_requests(self, api_key_client: TestClient) -> None:
        keys = _register(api_key_client)
        headers = {"identity-key": keys["identityKey"], "secret-key": keys["secretKey"]}

        resp = api_key_client.get("/quotes", params={"source": "resident-evil-5"}, headers=headers)

        assert resp.status_code == 200
        assert resp.json()["source"] == "Resident Evil 5"

    def test_uppercase_keys_are_accepted(self, api_key_client: TestClient) -> None:
        keys = _register(api_key_client)
        headers = {
            "identity-key": keys["identityKey"].upper(),
            "secret-key": keys["secretKey"].upper(),
        }

        assert api_key_client.get("/quotes", headers=headers).status_code == 200

    def test_wrong_secret_is_401(self, api_key_client: TestClient) -> None:
        keys = _register(api_key_client)
        headers = {"identity-key": keys["identityKey"], "secret-key": "secret-" + "0" * 64}

        resp = api_key_client.get("/quotes", headers=headers)

        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "invalid_secret"

    def test_unknown_identity_is_401(self, api_key_client: TestClient) -> None:
        headers = {"identity-key": "identity-" + "a" * 64, "secret-key": "secret-" + "b" * 64}

        resp = api_key_client.get("/quotes", headers=headers)

        assert resp.status_code == 401

    def test_missing_headers_are_400(self, api_key_client: TestClient) -> None:
        resp = api_key_client.get("/quotes")

        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "missing_api_key_headers"

    def test_malformed_hex_is_400(self, api_key_client: TestClient) -> None:
        headers = {"identity-key": "identity-xyz", "secret-key": "secret-" + "b" * 64}

        resp = api_key_client.get("/quotes", headers=headers)

        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "malformed_api_key_hex"


class TestSchemeSelection:
    def test_portal_is_not_mounted(self, api_key_client: TestClient) -> None:
        assert api_key_client.post("/portal/sign-in").status_code == 404

    def test_basic_header_is_not_accepted(self, api_key_client: TestClient) -> None:
        from tests.conftest import basic_auth

        resp = api_key_client.get("/quotes", headers=basic_auth("someone", "password123"))

        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "missing_api_key_headers"
