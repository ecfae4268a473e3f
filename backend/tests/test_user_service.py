"""
Devotionals API - User Registration Tests
=========================================

What:  Tests for UserService and POST /api/users/register.

What we test:
    ✅ Password rules (minimum length, bcrypt's 72-byte ceiling)
    ✅ Stored hash verifies and is never the plain password
    ✅ Duplicate email → 409, case-insensitively
    ✅ Malformed email or body → 400
"""

import pytest
from sqlalchemy import select

from devotional_api.exceptions import ConflictError, ValidationError
from devotional_api.models.user import User
from devotional_api.services.user_service import UserService, pwd_context


class TestPasswordRules:

    def setup_method(self):
        self.service = UserService(password_min_length=8)

    @pytest.mark.asyncio
    async def test_short_password_rejected(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.register(mock_db_session, "a@example.com", "short")
        assert exc_info.value.field == "password"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_overlong_password_rejected(self, mock_db_session):
        with pytest.raises(ValidationError, match="72 bytes"):
            await self.service.register(mock_db_session, "a@example.com", "x" * 73)

    def test_hash_round_trip(self):
        hashed = self.service.hash_password("correct horse")

        assert hashed != "correct horse"
        assert pwd_context.verify("correct horse", hashed)
        assert not pwd_context.verify("wrong horse", hashed)


class TestRegisterService:

    @pytest.mark.asyncio
    async def test_register_stores_hash(self, db_session):
        service = UserService()

        registered = await service.register(db_session, "Reader@Example.com", "s3cret-pass")

        assert registered.id >= 1
        assert registered.email == "reader@example.com"
        stored = (await db_session.execute(select(User).where(User.id == registered.id))).scalar_one()
        assert stored.password_hash != "s3cret-pass"
        assert pwd_context.verify("s3cret-pass", stored.password_hash)

    @pytest.mark.asyncio
    async def test_duplicate_email_conflict(self, db_session):
        service = UserService()
        await service.register(db_session, "dup@example.com", "password-1")

        with pytest.raises(ConflictError):
            await service.register(db_session, "DUP@example.com", "password-2")


class TestRegisterEndpoint:

    @pytest.mark.asyncio
    async def test_register_201(self, test_client):
        response = await test_client.post(
            "/api/users/register",
            json={"email": "new@example.com", "password": "long-enough"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "new@example.com"
        assert isinstance(body["id"], int)
        assert "password" not in body
        assert "password_hash" not in body

    @pytest.mark.asyncio
    async def test_register_duplicate_409(self, test_client):
        payload = {"email": "twice@example.com", "password": "long-enough"}
        await test_client.post("/api/users/register", json=payload)

        response = await test_client.post("/api/users/register", json=payload)

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"email": "not-an-email", "password": "long-enough"},
        {"email": "ok@example.com"},
        {"password": "long-enough"},
        {"email": "ok@example.com", "password": "short"},
    ])
    async def test_register_invalid_400(self, test_client, payload):
        response = await test_client.post("/api/users/register", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
