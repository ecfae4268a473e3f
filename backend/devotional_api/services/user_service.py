"""
Devotionals API - User Registration Service
===========================================

What:  Creates user accounts with bcrypt-hashed passwords.
How:   passlib CryptContext for hashing; a single INSERT guarded by the unique
       email index. A duplicate email surfaces as IntegrityError and becomes
       ConflictError (409).
Who:   Called by POST /api/users/register.
"""

import logging

from passlib.context import CryptContext
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from devotional_api.exceptions import ConflictError, DatabaseError, ValidationError
from devotional_api.models.user import User
from devotional_api.schemas.user import UserRegisteredResponse

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt only uses the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class UserService:
    """Registration logic; stateless like DevotionalService."""

    def __init__(self, password_min_length: int = 8):
        self.password_min_length = password_min_length

    def _validate_password(self, password: str) -> None:
        if len(password) < self.password_min_length:
            raise ValidationError(
                message=f"Password must be at least {self.password_min_length} characters long",
                field="password",
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                message=f"Password must be at most {MAX_PASSWORD_BYTES} bytes long",
                field="password",
            )

    def hash_password(self, password: str) -> str:
        return pwd_context.hash(password)

    async def register(self, db: AsyncSession, email: str, password: str) -> UserRegisteredResponse:
        """
        Register a new account.

        Raises:
            ValidationError: password too short or too long (→ 400)
            ConflictError:   email already registered (→ 409)
            DatabaseError:   INSERT failed for another reason (→ 500)
        """
        self._validate_password(password)
        email = email.lower()

        try:
            result = await db.execute(
                insert(User)
                .values(email=email, password_hash=self.hash_password(password))
                .returning(User.id)
            )
            user_id = result.scalar_one()
        except IntegrityError as e:
            logger.warning("Registration rejected, email already in use: %s", email)
            raise ConflictError(
                message="A user with that email already exists.",
                field="email",
            ) from e
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to register user.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("User %d registered", user_id)
        return UserRegisteredResponse(id=user_id, email=email)
