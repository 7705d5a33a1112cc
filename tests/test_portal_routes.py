"""HTTP tests for the /portal account management endpoints."""

import pytest
from fastapi.testclient import TestClient

from tests.conftest import basic_auth

USER = {"username": "leon_sk", "email": "leon@dso.gov", "password": "ashley123"}
AUTH = basic_auth(USER["username"], USER["password"])


@pytest.fixture
def registered_client(client: TestClient) -> TestClient:
    assert client.post("/register", json=USER).status_code == 201
    return client


class TestSignIn:
    def test_valid_credentials(self, registered_client: TestClient) -> None:
        resp = registered_client.post("/portal/sign-in", headers=AUTH)

        assert resp.status_code == 200
        assert resp.json() == {"message": "User is authentic."}

    def test_wrong_password_is_401(self, registered_client: TestClient) -> None:
        resp = registered_client.post(
            "/portal/sign-in", headers=basic_auth("leon_sk", "wrongpass1")
        )
        assert resp.status_code == 401

    def test_missing_header_is_400(self, registered_client: TestClient) -> None:
        resp = registered_client.post("/portal/sign-in")
        assert resp.status_code == 400

    def test_body_username_is_ignored(self, registered_client: TestClient) -> None:
        """Only the Authorization header decides who is acting."""
        resp = registered_client.post(
            "/portal/sign-in", headers=AUTH, json={"username": "someone_else"}
        )
        assert resp.status_code == 200


class TestEmail:
    def test_get_current_email(self, registered_client: TestClient) -> None:
        resp = registered_client.post("/portal/get-current-email", headers=AUTH)

        assert resp.status_code == 200
        assert resp.json() == {"email": "leon@dso.gov"}

    def test_change_email(self, registered_client: TestClient) -> None:
        resp = registered_client.post(
            "/portal/change-email", headers=AUTH, json={"newEmail": "leon@bsaa.org"}
        )
        assert resp.status_code == 200

        current = registered_client.post("/portal/get-current-email", headers=AUTH)
        assert current.json() == {"email": "leon@bsaa.org"}

    def test_invalid_email_leaves_old_value(self, registered_client: TestClient) -> None:
        resp = registered_client.post(
            "/portal/change-email", headers=AUTH, json={"newEmail": "no-at-sign"}
        )

        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "invalid_email"
        current = registered_client.post("/portal/get-current-email", headers=AUTH)
        assert current.json() == {"email": "leon@dso.gov"}

    def test_email_taken_by_another_user_is_409(self, registered_client: TestClient) -> None:
        registered_client.post(
            "/register",
            json={"username": "ada_w", "email": "ada@umbrella.com", "password": "butterfly1"},
        )
        resp = registered_client.post(
            "/portal/change-email", headers=AUTH, json={"newEmail": "ada@umbrella.com"}
        )

        assert resp.status_code == 409
        assert resp.json()["error"]["code"] == "duplicate_email"

    def test_missing_new_email_is_400(self, registered_client: TestClient) -> None:
        resp = registered_client.post("/portal/change-email", headers=AUTH, json={})
        assert resp.status_code == 400


class TestChangePassword:
    def test_round_trip(self, registered_client: TestClient) -> None:
        resp = registered_client.post(
            "/portal/change-password", headers=AUTH, json={"newPassword": "krauser456"}
        )
        assert resp.status_code == 200

        old = registered_client.post("/portal/sign-in", headers=AUTH)
        assert old.status_code == 401

        new = registered_client.post(
            "/portal/sign-in", headers=basic_auth("leon_sk", "krauser456")
        )
        assert new.status_code == 200

    def test_invalid_new_password_is_400(self, registered_client: TestClient) -> None:
        resp = registered_client.post(
            "/portal/change-password", headers=AUTH, json={"newPassword": "short"}
        )

        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "invalid_password"
        assert registered_client.post("/portal/sign-in", headers=AUTH).status_code == 200


class TestDeleteAccount:
    def test_delete_then_sign_in_fails(self, registered_client: TestClient, app) -> None:
        resp = registered_client.post("/portal/delete-account", headers=AUTH)
        assert resp.status_code == 200

        assert app.state.user_store.get("leon_sk") is None
        after = registered_client.post("/portal/sign-in", headers=AUTH)
        assert after.status_code == 401
        assert after.json()["error"]["code"] == "unrecognized_identity"

    def test_username_and_email_are_free_again(self, registered_client: TestClient) -> None:
        registered_client.post("/portal/delete-account", headers=AUTH)

        assert registered_client.post("/register", json=USER).status_code == 201

    def test_delete_requires_correct_password(self, registered_client: TestClient, app) -> None:
        resp = registered_client.post(
            "/portal/delete-account", headers=basic_auth("leon_sk", "wrongpass1")
        )

        assert resp.status_code == 401
        assert app.state.user_store.get("leon_sk") is not None
