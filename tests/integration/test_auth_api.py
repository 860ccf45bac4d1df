"""Integration tests for the /api/auth endpoints."""

import pytest
from libs.auth.models import Role
from libs.auth.passwords import hash_password
from tests.conftest import auth_headers, create_user

REGISTER_BODY = {
    "email": "new@biz.com",
    "password": "Abc12345!",
    "firstName": "A",
    "lastName": "B",
}


# ---------------------------------------------------------------------------
# Register
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_register_returns_user_and_tokens(client):
    """POST /api/auth/register: new retail account, signed in."""
    response = await client.post("/api/auth/register", json=REGISTER_BODY)

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["success"] is True
    user = body["data"]["user"]
    assert user["role"] == "b2c"
    assert user["email"] == "new@biz.com"
    assert "passwordHash" not in user
    assert "password_hash" not in user
    assert body["data"]["tokens"]["accessToken"]
    assert body["data"]["tokens"]["refreshToken"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_register_duplicate_is_conflict(client):
    await client.post("/api/auth/register", json=REGISTER_BODY)

    response = await client.post("/api/auth/register", json=REGISTER_BODY)

    assert response.status_code == 409
    assert response.json() == {"success": False, "error": "User already exists"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_register_admin_domain_gets_admin_role(client):
    body = {**REGISTER_BODY, "email": "boss@naturalfoodsinc.com"}

    response = await client.post("/api/auth/register", json=body)

    assert response.status_code == 201
    assert response.json()["data"]["user"]["role"] == "admin"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_register_validation_errors_use_envelope(client):
    body = {**REGISTER_BODY, "email": "not-an-email", "password": "short"}

    response = await client.post("/api/auth/register", json=body)

    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert "Invalid email format" in payload["error"]


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_login_google_only_account(client, db_session):
    await create_user(db_session, email="g@example.com", google_id="g-1")

    response = await client.post(
        "/api/auth/login", json={"email": "g@example.com", "password": "Abc12345!"}
    )

    assert response.status_code == 401
    error = response.json()["error"]
    assert "Google" in error
    assert error != "Invalid credentials"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_login_success(client, db_session):
    await create_user(
        db_session, email="p@example.com", password_hash=hash_password("Abc12345!")
    )

    response = await client.post(
        "/api/auth/login", json={"email": "P@example.com", "password": "Abc12345!"}
    )

    assert response.status_code == 200, response.text
    assert response.json()["data"]["tokens"]["accessToken"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_login_unknown_email(client):
    response = await client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "x"}
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid credentials"


# ---------------------------------------------------------------------------
# Google, refresh, profile
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_google_sign_in(client):
    profile = {
        "id": "google-42",
        "emails": [{"value": "hen@example.com"}],
        "name": {"givenName": "Henny", "familyName": "Penny"},
    }

    response = await client.post("/api/auth/google", json=profile)

    assert response.status_code == 200, response.text
    user = response.json()["data"]["user"]
    assert user["googleId"] == "google-42"
    assert user["isEmailVerified"] is True


@pytest.mark.asyncio
@pytest.mark.integration
async def test_refresh_flow(client):
    registered = await client.post("/api/auth/register", json=REGISTER_BODY)
    refresh_token = registered.json()["data"]["tokens"]["refreshToken"]

    response = await client.post(
        "/api/auth/refresh", json={"refreshToken": refresh_token}
    )

    assert response.status_code == 200
    tokens = response.json()["data"]["tokens"]
    assert tokens["refreshToken"] == refresh_token

    profile = await client.get(
        "/api/auth/profile",
        headers={"Authorization": f"Bearer {tokens['accessToken']}"},
    )
    assert profile.status_code == 200
    assert profile.json()["data"]["user"]["email"] == "new@biz.com"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_refresh_token_cannot_be_used_as_bearer(client):
    registered = await client.post("/api/auth/register", json=REGISTER_BODY)
    refresh_token = registered.json()["data"]["tokens"]["refreshToken"]

    response = await client.get(
        "/api/auth/profile", headers={"Authorization": f"Bearer {refresh_token}"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.integration
async def test_profile_requires_token(client):
    response = await client.get("/api/auth/profile")

    assert response.status_code == 401
    assert response.json()["error"] == "Access token required"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_profile_and_logout(client, db_session):
    user = await create_user(db_session, Role.B2B)
    headers = auth_headers(user)

    response = await client.put(
        "/api/auth/profile",
        json={"firstName": "Hattie", "lastName": "Hen"},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    assert response.json()["data"]["user"]["firstName"] == "Hattie"

    logout = await client.post("/api/auth/logout", headers=headers)
    assert logout.status_code == 200
    assert logout.json()["success"] is True


@pytest.mark.asyncio
@pytest.mark.integration
async def test_register_rejects_password_over_72_bytes(client):
    body = {**REGISTER_BODY, "password": "A" * 80}

    response = await client.post("/api/auth/register", json=body)

    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert "at most 72 bytes" in payload["error"]
