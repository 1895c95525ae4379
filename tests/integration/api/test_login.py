import pytest
from httpx import AsyncClient
from jose import jwt


@pytest.mark.asyncio
async def test_successful_login(client: AsyncClient, test_data):
    await client.post("/api/auth/signup", json=test_data.get_copy("signup_alice"))

    response = await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "secret1"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Login successful"
    assert data["user"]["email"] == "alice@example.com"

    claims = jwt.get_unverified_claims(data["token"])
    assert claims["email"] == "alice@example.com"
    assert claims["userId"] == data["user"]["id"]
    assert claims["purpose"] == "session"
    assert claims["exp"] - claims["iat"] == 3600


@pytest.mark.asyncio
async def test_login_email_is_case_insensitive(client: AsyncClient, test_data):
    await client.post("/api/auth/signup", json=test_data.get_copy("signup_alice"))

    response = await client.post(
        "/api/auth/login", json={"email": " ALICE@Example.COM", "password": "secret1"}
    )

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_look_the_same(client: AsyncClient, test_data):
    await client.post("/api/auth/signup", json=test_data.get_copy("signup_alice"))

    wrong_password = await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "WrongPassword!"}
    )
    unknown_email = await client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "secret1"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"message": "Invalid email or password"}


@pytest.mark.asyncio
async def test_login_missing_fields(client: AsyncClient):
    response = await client.post("/api/auth/login", json={"email": "alice@example.com"})

    assert response.status_code == 400
    assert response.json() == {"message": "All fields are required"}
