"""
Devotionals API - User SQLAlchemy Model
=======================================

What:  ORM model for the `users` table backing the registration endpoint.
Who:   Used by UserService; unrelated to the devotional lifecycle.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from devotional_api.database import Base


class User(Base):
    """A registered account. Only the bcrypt hash of the password is stored."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Stored lower-cased; the unique index enforces one account per address
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
