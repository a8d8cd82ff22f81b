"""
Tests for user endpoints.

Tests:
- Admin-only user creation and listing
- Admin-or-self access to a single user
- Applying for jobs
"""

import pytest

from jobly.core.security import decode_token


NEW_USER = {
    "username": "u-new",
    "firstName": "First-new",
    "lastName": "Last-newL",
    "password": "password-new",
    "email": "new@email.com",
    "isAdmin": False,
}


class TestCreateUser:
    """Test POST /users"""

    def test_admin_creates_user(self, client, seed_users, admin_headers):
        response = client.post("/users", json=NEW_USER, headers=admin_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["user"] == {
            "username": "u-new",
            "firstName": "First-new",
            "lastName": "Last-newL",
            "email": "new@email.com",
            "isAdmin": False,
        }
        assert isinstance(data["token"], str)
        assert "tempPassword" not in data

    def test_admin_creates_admin(self, client, seed_users, admin_headers):
        response = client.post("/users", json={**NEW_USER, "isAdmin": True}, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["user"]["isAdmin"] is True

    def test_is_admin_defaults_false(self, client, seed_users, admin_headers):
        body = {k: v for k, v in NEW_USER.items() if k != "isAdmin"}
        response = client.post("/users", json=body, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["user"]["isAdmin"] is False

    def test_random_password_generated(self, client, seed_users, admin_headers, test_settings):
        body = {k: v for k, v in NEW_USER.items() if k != "password"}
        response = client.post("/users", json=body, headers=admin_headers)

        assert response.status_code == 201
        data = response.json()
        assert len(data["tempPassword"]) == 12
        assert decode_token(data["token"], test_settings)["username"] == "u-new"

        login = client.post("/auth/token", json={"username": "u-new", "password": data["tempPassword"]})
        assert login.status_code == 200

    def test_fails_for_non_admin(self, client, seed_users, u1_headers):
        response = client.post("/users", json=NEW_USER, headers=u1_headers)

        assert response.status_code == 401

    def test_unauth_for_anon(self, client, seed_users):
        response = client.post("/users", json=NEW_USER)

        assert response.status_code == 401

    def test_missing_data(self, client, seed_users, admin_headers):
        response = client.post("/users", json={"username": "u-new"}, headers=admin_headers)

        assert response.status_code == 400

    def test_invalid_data(self, client, seed_users, admin_headers):
        response = client.post("/users", json={**NEW_USER, "email": "not-an-email"}, headers=admin_headers)

        assert response.status_code == 400

    def test_duplicate(self, client, seed_users, admin_headers):
        response = client.post("/users", json={**NEW_USER, "username": "u2"}, headers=admin_headers)

        assert response.status_code == 409


class TestListUsers:
    """Test GET /users"""

    def test_works_for_admin(self, client, seed_application, admin_headers):
        response = client.get("/users", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            "users": [
                {"username": "admin", "firstName": "AdminF", "lastName": "AdminL",
                 "email": "admin@user.com", "isAdmin": True, "jobs": []},
                {"username": "u1", "firstName": "U1F", "lastName": "U1L",
                 "email": "user1@user.com", "isAdmin": False, "jobs": [seed_application]},
                {"username": "u2", "firstName": "U2F", "lastName": "U2L",
                 "email": "user2@user.com", "isAdmin": False, "jobs": []},
            ]
        }

    def test_unauth_for_non_admin(self, client, seed_users, u1_headers):
        response = client.get("/users", headers=u1_headers)

        assert response.status_code == 401

    def test_unauth_for_anon(self, client, seed_users):
        response = client.get("/users")

        assert response.status_code == 401


class TestGetUser:
    """Test GET /users/{username}"""

    def test_works_for_self(self, client, seed_application, u1_headers):
        response = client.get("/users/u1", headers=u1_headers)

        assert response.status_code == 200
        assert response.json() == {
            "user": {
                "username": "u1",
                "firstName": "U1F",
                "lastName": "U1L",
                "email": "user1@user.com",
                "isAdmin": False,
                "jobs": [seed_application],
            }
        }

    def test_works_for_admin(self, client, seed_users, admin_headers):
        response = client.get("/users/u1", headers=admin_headers)

        assert response.status_code == 200

    def test_unauth_for_other_user(self, client, seed_users, u2_headers):
        response = client.get("/users/u1", headers=u2_headers)

        assert response.status_code == 401

    def test_unauth_for_anon(self, client, seed_users):
        response = client.get("/users/u1")

        assert response.status_code == 401

    def test_not_found(self, client, seed_users, admin_headers):
        response = client.get("/users/nope", headers=admin_headers)

        assert response.status_code == 404


class TestUpdateUser:
    """Test PATCH /users/{username}"""

    def test_works_for_self(self, client, seed_users, u1_headers):
        response = client.patch("/users/u1", json={"firstName": "New"}, headers=u1_headers)

        assert response.status_code == 200
        assert response.json()["user"]["firstName"] == "New"
        assert response.json()["user"]["lastName"] == "U1L"

    def test_works_for_admin(self, client, seed_users, admin_headers):
        response = client.patch("/users/u1", json={"email": "changed@user.com"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "changed@user.com"

    def test_set_new_password(self, client, seed_users, u1_headers):
        response = client.patch("/users/u1", json={"password": "new-password"}, headers=u1_headers)
        assert response.status_code == 200

        login = client.post("/auth/token", json={"username": "u1", "password": "new-password"})
        assert login.status_code == 200

    def test_unauth_for_other_user(self, client, seed_users, u2_headers):
        response = client.patch("/users/u1", json={"firstName": "New"}, headers=u2_headers)

        assert response.status_code == 401

    def test_unauth_for_anon(self, client, seed_users):
        response = client.patch("/users/u1", json={"firstName": "New"})

        assert response.status_code == 401

    def test_not_found(self, client, seed_users, admin_headers):
        response = client.patch("/users/nope", json={"firstName": "Nope"}, headers=admin_headers)

        assert response.status_code == 404

    @pytest.mark.parametrize("body", [
        {"firstName": 42},
        {"firstName": None},
        {"isAdmin": True},
        {"username": "renamed"},
        {},
    ])
    def test_bad_request(self, client, seed_users, admin_headers, body):
        response = client.patch("/users/u1", json=body, headers=admin_headers)

        assert response.status_code == 400


class TestDeleteUser:
    """Test DELETE /users/{username}"""

    def test_works_for_self(self, client, seed_users, u1_headers, admin_headers):
        response = client.delete("/users/u1", headers=u1_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "u1"}
        assert client.get("/users/u1", headers=admin_headers).status_code == 404

    def test_works_for_admin(self, client, seed_users, admin_headers):
        response = client.delete("/users/u1", headers=admin_headers)

        assert response.json() == {"deleted": "u1"}

    def test_unauth_for_other_user(self, client, seed_users, u2_headers):
        response = client.delete("/users/u1", headers=u2_headers)

        assert response.status_code == 401

    def test_unauth_for_anon(self, client, seed_users):
        response = client.delete("/users/u1")

        assert response.status_code == 401

    def test_not_found(self, client, seed_users, admin_headers):
        response = client.delete("/users/nope", headers=admin_headers)

        assert response.status_code == 404


class TestApplyForJob:
    """Test POST /users/{username}/jobs/{job_id}"""

    def test_works_for_self(self, client, seed_users, seed_jobs, u1_headers, admin_headers):
        job_id = seed_jobs["engineer"]
        response = client.post(f"/users/u1/jobs/{job_id}", headers=u1_headers)

        assert response.status_code == 200
        assert response.json() == {"applied": job_id}
        assert client.get("/users/u1", headers=admin_headers).json()["user"]["jobs"] == [job_id]

    def test_works_for_admin_with_state(self, client, seed_users, seed_jobs, admin_headers):
        job_id = seed_jobs["scientist"]
        response = client.post(f"/users/u2/jobs/{job_id}?state=interested", headers=admin_headers)

        assert response.status_code == 200

    def test_invalid_state(self, client, seed_users, seed_jobs, u1_headers):
        response = client.post(f"/users/u1/jobs/{seed_jobs['engineer']}?state=invalidState", headers=u1_headers)

        assert response.status_code == 400

    def test_unauth_for_other_user(self, client, seed_users, seed_jobs, u2_headers):
        response = client.post(f"/users/u1/jobs/{seed_jobs['engineer']}", headers=u2_headers)

        assert response.status_code == 401

    def test_unauth_for_anon(self, client, seed_users, seed_jobs):
        response = client.post(f"/users/u1/jobs/{seed_jobs['engineer']}")

        assert response.status_code == 401

    def test_unknown_job(self, client, seed_users, u1_headers):
        response = client.post("/users/u1/jobs/999999", headers=u1_headers)

        assert response.status_code == 404

    def test_unknown_user(self, client, seed_users, seed_jobs, admin_headers):
        response = client.post(f"/users/ghost/jobs/{seed_jobs['engineer']}", headers=admin_headers)

        assert response.status_code == 404

    def test_duplicate(self, client, seed_application, u1_headers):
        response = client.post(f"/users/u1/jobs/{seed_application}", headers=u1_headers)

        assert response.status_code == 409
