"""
Tests for /auth routes and /health.
"""

from jobly.core.auth import decode_token


class TestToken:
    def test_works(self, client, settings):
        resp = client.post("/auth/token", json={"username": "u1", "password": "password1"})

        assert resp.status_code == 200
        assert decode_token(resp.json()["token"], settings) == {"username": "u1", "isAdmin": False}

    def test_unknown_user(self, client):
        resp = client.post("/auth/token", json={"username": "no-such-user", "password": "password1"})
        assert resp.status_code == 401

    def test_wrong_password(self, client):
        resp = client.post("/auth/token", json={"username": "u1", "password": "nope"})
        assert resp.status_code == 401

    def test_missing_data(self, client):
        assert client.post("/auth/token", json={"username": "u1"}).status_code == 400


class TestRegister:
    NEW = {
        "username": "new",
        "firstName": "first",
        "lastName": "last",
        "password": "password",
        "email": "new@email.com",
    }

    def test_works(self, client, settings):
        resp = client.post("/auth/register", json=self.NEW)

        assert resp.status_code == 201
        assert decode_token(resp.json()["token"], settings) == {"username": "new", "isAdmin": False}

    def test_cannot_self_register_as_admin(self, client):
        resp = client.post("/auth/register", json={**self.NEW, "isAdmin": True})
        assert resp.status_code == 400

    def test_duplicate_username(self, client):
        resp = client.post("/auth/register", json={**self.NEW, "username": "u1"})
        assert resp.status_code == 400

    def test_invalid_email(self, client):
        resp = client.post("/auth/register", json={**self.NEW, "email": "not-an-email"})
        assert resp.status_code == 400


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy", "database": "connected"}


class TestMe:
    def test_works_for_user(self, client, u1_token, job_ids):
        resp = client.get("/auth/me", headers={"authorization": f"Bearer {u1_token}"})
        assert resp.json()["user"]["username"] == "u1"
        assert resp.json()["user"]["jobs"] == job_ids

    def test_unauth_for_anon(self, client):
        assert client.get("/auth/me").status_code == 401
