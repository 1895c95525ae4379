import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_me_returns_current_account(client: AsyncClient, test_data):
    signup = (await client.post("/api/auth/signup", json=test_data.get_copy("signup_alice"))).json()

    response = await client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {signup['token']}"}
    )

    assert response.status_code == 200
    assert response.json()["user"] == signup["user"]


@pytest.mark.asyncio
async def test_me_without_token(client: AsyncClient):
    response = await client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json() == {"message": "Authentication required"}


@pytest.mark.asyncio
async def test_me_with_garbage_token(client: AsyncClient):
    response = await client.get("/api/auth/me", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid or expired token"}


@pytest.mark.asyncio
async def test_me_rejects_reset_token(client: AsyncClient, test_data, notifications):
    await client.post("/api/auth/signup", json=test_data.get_copy("signup_alice"))
    await client.post("/api/auth/forgot-password", json={"email": "alice@example.com"})
    verify = await client.post(
        "/api/auth/verify-otp",
        json={"email": "alice@example.com", "otp": notifications.last_code_for("alice@example.com")},
    )
    reset_token = verify.json()["resetToken"]

    response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {reset_token}"})

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid or expired token"}
