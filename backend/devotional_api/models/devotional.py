"""
Devotionals API - Devotional SQLAlchemy Model
=============================================

What:  ORM model representing the `devotionals` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by DevotionalService for every store operation.

Table Design:
    - Integer primary key with AUTOINCREMENT on SQLite: ids are never reused,
      even after the highest row is soft-deleted
    - verse / content: TEXT NOT NULL, emptiness is rejected by the service
    - created_at: store-generated on INSERT, never written again
    - updated_at: NULL until the first partial update
    - deleted_at: NULL while active; a timestamp once soft-deleted (terminal)

    Index on created_at DESC serves the "newest first" listing.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from devotional_api.database import Base


class Devotional(Base):
    """
    A verse plus commentary.

    Lifecycle:
        Active (updated_at NULL)
          → Active (updated_at set)   on each partial update
          → Deleted (deleted_at set)  terminal; no restore, no hard delete

    Query Patterns:
        - List active: WHERE deleted_at IS NULL ORDER BY created_at DESC, id DESC
        - Get one:     WHERE id = :id AND deleted_at IS NULL
        - Mutations:   UPDATE ... WHERE id = :id AND deleted_at IS NULL
    """

    __tablename__ = "devotionals"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    verse: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    # ── Timestamps ────────────────────────────────────────────────────────
    # All three are written by the database clock (CURRENT_TIMESTAMP / now()),
    # never by callers.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    __table_args__ = (
        Index("idx_devotionals_created_at", created_at.desc()),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return (
            f"<Devotional(id={self.id}, verse='{self.verse}', "
            f"created_at='{self.created_at}', deleted_at='{self.deleted_at}')>"
        )
