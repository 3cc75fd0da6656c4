"""
Test suite for auth and user endpoints.

Tests cover:
- Token issuance and registration
- Admin / same-user gating
- Applications
"""

from app.core.auth import decode_token


class TestAuth:

    def test_token(self, client):
        response = client.post("/auth/token", json={"username": "u1", "password": "password1"})

        assert response.status_code == 200
        payload = decode_token(response.json()["token"])
        assert payload["username"] == "u1"
        assert payload["isAdmin"] is True

    def test_token_wrong_password(self, client):
        response = client.post("/auth/token", json={"username": "u1", "password": "nope"})

        assert response.status_code == 401

    def test_register_is_never_admin(self, client):
        response = client.post("/auth/register", json={
            "username": "new",
            "firstName": "first",
            "lastName": "last",
            "password": "password",
            "email": "new@email.com",
        })

        assert response.status_code == 201
        assert decode_token(response.json()["token"])["isAdmin"] is False

    def test_register_duplicate(self, client):
        response = client.post("/auth/register", json={
            "username": "u1",
            "firstName": "first",
            "lastName": "last",
            "password": "password",
            "email": "new@email.com",
        })

        assert response.status_code == 400

    def test_register_bad_email(self, client):
        response = client.post("/auth/register", json={
            "username": "new",
            "firstName": "first",
            "lastName": "last",
            "password": "password",
            "email": "not-an-email",
        })

        assert response.status_code == 400


class TestUsers:

    NEW_USER = {
        "username": "u-new",
        "firstName": "First-new",
        "lastName": "Last-newL",
        "password": "password-new",
        "email": "new@email.com",
        "isAdmin": True,
    }

    def test_admin_creates_admin(self, client, admin_headers):
        response = client.post("/users", json=self.NEW_USER, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["user"] == {k: v for k, v in self.NEW_USER.items() if k != "password"}
        assert decode_token(response.json()["token"])["isAdmin"] is True

    def test_regular_user_cannot_create(self, client, user_headers):
        assert client.post("/users", json=self.NEW_USER, headers=user_headers).status_code == 401

    def test_list_admin_only(self, client, admin_headers, user_headers):
        response = client.get("/users", headers=admin_headers)

        assert [u["username"] for u in response.json()["users"]] == ["u1", "u2", "u3"]
        assert client.get("/users", headers=user_headers).status_code == 401

    def test_get_self(self, client, user_headers):
        response = client.get("/users/u2", headers=user_headers)

        assert response.json() == {
            "user": {
                "username": "u2",
                "firstName": "U2F",
                "lastName": "U2L",
                "email": "user2@user.com",
                "isAdmin": False,
                "jobs": [],
            }
        }

    def test_get_other_user_unauthorized(self, client, user_headers):
        assert client.get("/users/u3", headers=user_headers).status_code == 401

    def test_admin_gets_anyone(self, client, admin_headers, job_ids):
        response = client.get("/users/u1", headers=admin_headers)

        assert response.json()["user"]["jobs"] == job_ids[:2]

    def test_get_not_found(self, client, admin_headers):
        assert client.get("/users/nope", headers=admin_headers).status_code == 404

    def test_update_self(self, client, user_headers):
        response = client.patch("/users/u2", json={"firstName": "New"}, headers=user_headers)

        assert response.status_code == 200
        assert response.json()["user"]["firstName"] == "New"

    def test_update_password_then_login(self, client, user_headers):
        client.patch("/users/u2", json={"password": "new-password"}, headers=user_headers)

        response = client.post("/auth/token", json={"username": "u2", "password": "new-password"})
        assert response.status_code == 200

    def test_user_cannot_make_self_admin(self, client, user_headers, admin_headers):
        response = client.patch("/users/u2", json={"isAdmin": True}, headers=user_headers)

        assert response.status_code == 401
        assert client.get("/users/u2", headers=admin_headers).json()["user"]["isAdmin"] is False

    def test_admin_can_promote(self, client, admin_headers):
        response = client.patch("/users/u2", json={"isAdmin": True}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["user"]["isAdmin"] is True

    def test_null_field_rejected(self, client, user_headers):
        response = client.patch("/users/u2", json={"firstName": None}, headers=user_headers)

        assert response.status_code == 400

    def test_update_username_rejected(self, client, user_headers):
        response = client.patch("/users/u2", json={"username": "u9"}, headers=user_headers)

        assert response.status_code == 400

    def test_delete_self(self, client, user_headers):
        assert client.delete("/users/u2", headers=user_headers).json() == {"deleted": "u2"}

    def test_delete_other_unauthorized(self, client, user_headers):
        assert client.delete("/users/u3", headers=user_headers).status_code == 401


class TestApplications:

    def test_apply(self, client, user_headers, job_ids):
        response = client.post(f"/users/u2/jobs/{job_ids[2]}", headers=user_headers)

        assert response.json() == {"applied": job_ids[2]}
        assert client.get("/users/u2", headers=user_headers).json()["user"]["jobs"] == [job_ids[2]]

    def test_apply_twice(self, client, admin_headers, job_ids):
        response = client.post(f"/users/u1/jobs/{job_ids[0]}", headers=admin_headers)

        assert response.status_code == 400

    def test_apply_unknown_job(self, client, user_headers):
        assert client.post("/users/u2/jobs/0", headers=user_headers).status_code == 404

    def test_apply_for_someone_else(self, client, user_headers, job_ids):
        assert client.post(f"/users/u3/jobs/{job_ids[0]}", headers=user_headers).status_code == 401
