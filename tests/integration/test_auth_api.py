"""
Integration tests for authentication API endpoints

Tests registration, login and using the issued credentials against the task API.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskapi.auth.dependencies import get_token_codec
from taskapi.models.user import User


REGISTRATION = {
    "name": "Carol",
    "username": "carol",
    "password": "SecurePass123!",
}


@pytest.mark.integration
class TestUserRegistration:
    """Test user registration endpoint"""

    async def test_register_success(self, client: AsyncClient, db_session: AsyncSession):
        """Test successful user registration"""
        response = await client.post("/api/register", json=REGISTRATION)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Thank you for registering"
        assert len(data["api_key"]) == 32
        assert "password" not in data

        result = await db_session.execute(select(User).where(User.username == "carol"))
        user = result.scalar_one()
        assert user.api_key == data["api_key"]
        assert user.password_hash != REGISTRATION["password"]

    async def test_register_duplicate_username(self, client: AsyncClient, alice):
        """Test registration with existing username"""
        response = await client.post(
            "/api/register",
            json={**REGISTRATION, "username": "alice"},
        )

        assert response.status_code == 409
        assert response.json() == {"message": "Username already registered"}

    async def test_register_missing_fields(self, client: AsyncClient):
        """Test registration without a password"""
        response = await client.post("/api/register", json={"name": "Carol", "username": "carol"})

        assert response.status_code == 422
        assert any(error.startswith("password:") for error in response.json()["errors"])

    async def test_register_short_password(self, client: AsyncClient):
        """Test password length rule"""
        response = await client.post("/api/register", json={**REGISTRATION, "password": "short"})

        assert response.status_code == 422

    async def test_registered_key_authenticates(self, client: AsyncClient):
        """Test the returned API key works on task routes"""
        registered = await client.post("/api/register", json=REGISTRATION)
        api_key = registered.json()["api_key"]

        response = await client.get("/api/tasks", headers={"X-API-Key": api_key})

        assert response.status_code == 200


@pytest.mark.integration
class TestUserLogin:
    """Test user login endpoint"""

    async def test_login_success(self, client: AsyncClient, alice):
        """Test successful login"""
        response = await client.post(
            "/api/login",
            json={"username": "alice", "password": "SecurePass123!"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["expires_in"] == 300 * 60

        claims = get_token_codec().decode(data["access_token"])
        assert claims["sub"] == alice.id
        assert claims["name"] == "Alice"

    async def test_login_wrong_password(self, client: AsyncClient, alice):
        """Test login with wrong password"""
        response = await client.post(
            "/api/login",
            json={"username": "alice", "password": "WrongPass123!"},
        )

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid authentication"}

    async def test_login_unknown_user(self, client: AsyncClient):
        """Unknown users get the same answer as wrong passwords"""
        response = await client.post(
            "/api/login",
            json={"username": "nobody", "password": "SecurePass123!"},
        )

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid authentication"}

    @pytest.mark.parametrize(
        "body",
        [{}, {"username": "alice"}, {"password": "SecurePass123!"}, {"username": "", "password": ""}],
    )
    async def test_login_missing_credentials(self, client: AsyncClient, alice, body):
        """Test login with incomplete credentials"""
        response = await client.post("/api/login", json=body)

        assert response.status_code == 400
        assert response.json() == {"message": "Missing login credentials"}

    async def test_login_invalid_json(self, client: AsyncClient):
        response = await client.post(
            "/api/login",
            content=b"username=alice",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Request body is not valid JSON"}


@pytest.mark.integration
class TestBearerFlow:
    """Test logging in and using the token"""

    async def test_login_then_create_task(self, client: AsyncClient, alice):
        login = await client.post(
            "/api/login",
            json={"username": "alice", "password": "SecurePass123!"},
        )
        headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

        created = await client.post("/api/tasks", json={"name": "Buy milk"}, headers=headers)
        listed = await client.get("/api/tasks", headers=headers)

        assert created.status_code == 201
        assert [task["user_id"] for task in listed.json()] == [alice.id]

    async def test_me(self, client: AsyncClient, alice, alice_token):
        response = await client.get("/api/me", headers={"Authorization": f"Bearer {alice_token}"})

        assert response.status_code == 200
        assert response.json() == {"id": alice.id, "name": "Alice", "username": "alice"}

    async def test_me_with_api_key(self, client: AsyncClient, alice, alice_headers):
        response = await client.get("/api/me", headers=alice_headers)

        assert response.json()["username"] == "alice"
