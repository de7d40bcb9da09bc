"""
CarValue Backend — Authentication API Tests
=============================================

What:  End-to-end tests of /auth through the ASGI app.
How:   httpx AsyncClient keeps the session cookie between calls, so each
       test signs up first and then acts as that user.
"""

import pytest

EMAIL = "test@test.com"


async def _signup(client, email=EMAIL, password="password"):
    response = await client.post("/auth/signup", json={"email": email, "password": password})
    assert response.status_code == 201
    return response


class TestSignup:

    @pytest.mark.asyncio
    async def test_signup_returns_public_user(self, test_client):
        response = await _signup(test_client)

        body = response.json()
        assert body["id"] is not None
        assert body["email"] == EMAIL
        assert "password" not in body

    @pytest.mark.asyncio
    async def test_signup_sets_session_cookie(self, test_client):
        await _signup(test_client)

        response = await test_client.get("/auth/whoami")

        assert response.status_code == 200
        assert response.json()["email"] == EMAIL

    @pytest.mark.asyncio
    async def test_signup_duplicate_email(self, test_client):
        await _signup(test_client)

        response = await test_client.post(
            "/auth/signup", json={"email": EMAIL, "password": "other"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "email in use"

    @pytest.mark.asyncio
    async def test_signup_rejects_malformed_email(self, test_client):
        response = await test_client.post(
            "/auth/signup", json={"email": "not-an-email", "password": "password"}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_responses_carry_request_id(self, test_client):
        response = await test_client.post(
            "/auth/signup",
            json={"email": EMAIL, "password": "password"},
            headers={"X-Request-ID": "abc12345"},
        )

        assert response.headers["X-Request-ID"] == "abc12345"


class TestSigninSignout:

    @pytest.mark.asyncio
    async def test_signout_clears_session(self, test_client):
        await _signup(test_client)

        response = await test_client.post("/auth/signout")
        assert response.status_code == 200

        response = await test_client.get("/auth/whoami")
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_signin_after_signout(self, test_client):
        created = (await _signup(test_client)).json()
        await test_client.post("/auth/signout")

        response = await test_client.post(
            "/auth/signin", json={"email": EMAIL, "password": "password"}
        )

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]
        whoami = await test_client.get("/auth/whoami")
        assert whoami.json()["id"] == created["id"]

    @pytest.mark.asyncio
    async def test_signin_bad_password(self, test_client):
        await _signup(test_client)

        response = await test_client.post(
            "/auth/signin", json={"email": EMAIL, "password": "wrong"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_signin_unknown_email(self, test_client):
        response = await test_client.post(
            "/auth/signin", json={"email": "ghost@test.com", "password": "password"}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_whoami_requires_session(self, test_client):
        response = await test_client.get("/auth/whoami")

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"


class TestUserCrud:

    @pytest.mark.asyncio
    async def test_find_user_by_id(self, test_client):
        created = (await _signup(test_client)).json()

        response = await test_client.get(f"/auth/{created['id']}")

        assert response.status_code == 200
        assert response.json()["email"] == EMAIL

    @pytest.mark.asyncio
    async def test_find_missing_user(self, test_client):
        response = await test_client.get("/auth/9999")

        assert response.status_code == 404
        assert response.json()["message"] == "user not found"

    @pytest.mark.asyncio
    async def test_find_users_by_email(self, test_client):
        await _signup(test_client)

        response = await test_client.get("/auth", params={"email": EMAIL})

        assert response.status_code == 200
        assert [user["email"] for user in response.json()] == [EMAIL]

    @pytest.mark.asyncio
    async def test_update_user(self, test_client):
        created = (await _signup(test_client)).json()

        response = await test_client.patch(
            f"/auth/{created['id']}", json={"email": "teste2@test.com"}
        )

        assert response.status_code == 200
        assert response.json()["email"] == "teste2@test.com"

    @pytest.mark.asyncio
    async def test_update_password_then_signin(self, test_client):
        created = (await _signup(test_client)).json()
        await test_client.patch(f"/auth/{created['id']}", json={"password": "changed"})
        await test_client.post("/auth/signout")

        response = await test_client.post(
            "/auth/signin", json={"email": EMAIL, "password": "changed"}
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_update_missing_user(self, test_client):
        response = await test_client.patch("/auth/9999", json={"email": "x@test.com"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_user(self, test_client):
        created = (await _signup(test_client)).json()

        response = await test_client.delete(f"/auth/{created['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

        response = await test_client.get(f"/auth/{created['id']}")
        assert response.status_code == 404
        assert "email" not in response.json()

    @pytest.mark.asyncio
    async def test_delete_user_with_reports_conflicts(self, test_client):
        created = (await _signup(test_client)).json()
        await test_client.post(
            "/reports",
            json={
                "make": "toyota",
                "model": "corolla",
                "price": 10000,
                "year": 2018,
                "mileage": 50000,
                "lng": 0,
                "lat": 0,
            },
        )

        response = await test_client.delete(f"/auth/{created['id']}")

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    @pytest.mark.asyncio
    async def test_update_and_delete_do_not_require_session(self, test_client):
        created = (await _signup(test_client)).json()
        await test_client.post("/auth/signout")

        response = await test_client.patch(f"/auth/{created['id']}", json={"password": "reset"})
        assert response.status_code == 200

        response = await test_client.delete(f"/auth/{created['id']}")
        assert response.status_code == 200
