"""
Devotionals API - Devotional Service (Lifecycle and Soft Delete)
================================================================

What:  Every store operation on devotionals: create, get, list, partial
       update and soft delete.
How:   Each operation is a single SQL statement. Mutations are conditional
       (`WHERE id = :id AND deleted_at IS NULL`) so concurrent callers are
       arbitrated by the database's row-level atomicity, with no locks held
       in Python.
Who:   Called by the devotional route handlers.

Operations:
    create         INSERT ... RETURNING *
    get_by_id      SELECT ... WHERE id = :id AND deleted_at IS NULL
    list_active    SELECT ... WHERE deleted_at IS NULL ORDER BY created_at DESC
    update_partial UPDATE ... SET <supplied>, updated_at = now()
                   WHERE id = :id AND deleted_at IS NULL RETURNING *
    soft_delete    UPDATE ... SET deleted_at = now()
                   WHERE id = :id AND deleted_at IS NULL   (rowcount 1 → success)

Visibility:
    A soft-deleted row is invisible to all of the above. A second soft_delete
    of the same id matches zero rows and raises NotFoundError, the same error
    as for an id that was never assigned.

Design Decision:
    DevotionalService is stateless; it receives the AsyncSession for each call.
    Commit and rollback belong to the `get_db_session` dependency.
"""

import logging
from typing import List, Optional, Union

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from devotional_api.exceptions import DatabaseError, NotFoundError, ValidationError
from devotional_api.models.devotional import Devotional
from devotional_api.schemas.devotional import DevotionalPatch, DevotionalResponse

logger = logging.getLogger(__name__)

# Largest value an SQLite / PostgreSQL BIGINT key can hold
MAX_DEVOTIONAL_ID = 2**63 - 1

# Columns returned by INSERT/UPDATE ... RETURNING. Plain rows, not ORM
# instances, so results never come from a stale identity map.
DEVOTIONAL_COLUMNS = (
    Devotional.id,
    Devotional.verse,
    Devotional.content,
    Devotional.created_at,
    Devotional.updated_at,
    Devotional.deleted_at,
)


def parse_devotional_id(raw: Union[str, int]) -> int:
    """
    Validate a path identifier and return it as an int.

    Accepts ASCII digit strings (and non-negative ints). Anything else, such
    as "abc", "-1", "1.5" or " 7", raises ValidationError, which the API
    reports as 400 rather than 404.
    """
    if isinstance(raw, bool):
        raise ValidationError(
            message="Invalid id provided. Id must be a number",
            field="id",
            context={"value": str(raw)},
        )
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.isascii() and raw.isdigit():
        value = int(raw)
    else:
        raise ValidationError(
            message="Invalid id provided. Id must be a number",
            field="id",
            context={"value": str(raw)},
        )

    if value < 0 or value > MAX_DEVOTIONAL_ID:
        raise ValidationError(
            message="Invalid id provided. Id is out of range",
            field="id",
            context={"value": str(raw)},
        )
    return value


def _require_text(value: Optional[str], field: str) -> str:
    """Raise ValidationError unless value is a non-empty, UTF-8 encodable string (no trimming)."""
    if not isinstance(value, str) or value == "":
        raise ValidationError(
            message=f"'{field}' is required and must be a non-empty string",
            field=field,
        )
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        # JSON allows lone surrogate escapes such as "\ud800"; the store does not
        raise ValidationError(
            message=f"'{field}' must be valid UTF-8 text",
            field=field,
        )
    return value


class DevotionalService:
    """
    Business logic layer for the devotional lifecycle.

    Error Handling Strategy:
        ValidationError / NotFoundError are raised directly.
        SQLAlchemy failures are logged and wrapped in DatabaseError, which the
        global handler turns into a generic 500.
    """

    async def create(
        self,
        db: AsyncSession,
        verse: Optional[str],
        content: Optional[str],
    ) -> DevotionalResponse:
        """
        Insert a new devotional.

        The database assigns `id` and `created_at`; `updated_at` and
        `deleted_at` start out NULL.

        Raises:
            ValidationError: verse or content missing or empty (→ 400)
            DatabaseError:   INSERT failed (→ 500)
        """
        verse = _require_text(verse, "verse")
        content = _require_text(content, "content")

        try:
            result = await db.execute(
                insert(Devotional)
                .values(verse=verse, content=content)
                .returning(*DEVOTIONAL_COLUMNS)
            )
            devotional = result.one()
        except SQLAlchemyError as e:
            logger.error("Database error creating devotional: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to create devotional. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Devotional %d created", devotional.id)
        return DevotionalResponse.model_validate(devotional)

    async def get_by_id(self, db: AsyncSession, devotional_id: Union[str, int]) -> DevotionalResponse:
        """
        Retrieve one active devotional.

        Raises:
            ValidationError: id is not a non-negative integer (→ 400)
            NotFoundError:   no such id, or the devotional was soft-deleted (→ 404)
            DatabaseError:   query failed (→ 500)
        """
        key = parse_devotional_id(devotional_id)

        try:
            result = await db.execute(
                select(Devotional).where(
                    Devotional.id == key,
                    Devotional.deleted_at.is_(None),
                )
                .execution_options(populate_existing=True)
            )
            devotional = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching devotional %s: %s", key, str(e))
            raise DatabaseError(
                message="Could not retrieve the devotional. Please try again.",
                context={"devotional_id": key},
            ) from e

        if devotional is None:
            raise NotFoundError(resource="devotional", resource_id=str(key))

        return DevotionalResponse.model_validate(devotional)

    async def list_active(self, db: AsyncSession) -> List[DevotionalResponse]:
        """
        Return every active devotional, newest first.

        `created_at` has one-second resolution on SQLite, so `id DESC` breaks
        ties between rows created within the same second.
        """
        try:
            result = await db.execute(
                select(Devotional)
                .where(Devotional.deleted_at.is_(None))
                .order_by(Devotional.created_at.desc(), Devotional.id.desc())
                .execution_options(populate_existing=True)
            )
            devotionals = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing devotionals: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to retrieve devotionals.",
                context={"error_type": type(e).__name__},
            ) from e

        return [DevotionalResponse.model_validate(d) for d in devotionals]

    async def update_partial(
        self,
        db: AsyncSession,
        devotional_id: Union[str, int],
        patch: DevotionalPatch,
    ) -> DevotionalResponse:
        """
        Overwrite the supplied fields of an active devotional.

        Fields absent from the request keep their stored value. A supplied
        field that is empty or null is rejected, so verse and content are
        never blank. `updated_at` is refreshed whenever a row matches.

        Raises:
            ValidationError: bad id, nothing supplied, or a supplied field is empty (→ 400)
            NotFoundError:   no active devotional with this id (→ 404)
            DatabaseError:   UPDATE failed (→ 500)
        """
        key = parse_devotional_id(devotional_id)

        changes = patch.supplied()
        if not changes:
            raise ValidationError(
                message="At least one of 'verse' or 'content' must be provided",
                context={"fields": ["verse", "content"]},
            )
        for field, value in changes.items():
            _require_text(value, field)

        try:
            result = await db.execute(
                update(Devotional)
                .where(
                    Devotional.id == key,
                    Devotional.deleted_at.is_(None),
                )
                .values(**changes, updated_at=func.now())
                .returning(*DEVOTIONAL_COLUMNS)
                .execution_options(synchronize_session=False)
            )
            devotional = result.one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error updating devotional %s: %s", key, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to update devotional.",
                context={"devotional_id": key},
            ) from e

        if devotional is None:
            raise NotFoundError(resource="devotional", resource_id=str(key))

        logger.info("Devotional %d updated: %s", key, ", ".join(sorted(changes)))
        return DevotionalResponse.model_validate(devotional)

    async def soft_delete(self, db: AsyncSession, devotional_id: Union[str, int]) -> None:
        """
        Mark an active devotional as deleted.

        Only the caller whose UPDATE changes the row succeeds; a repeat or
        racing delete matches zero rows and gets NotFoundError.

        Raises:
            ValidationError: id is not a non-negative integer (→ 400)
            NotFoundError:   never existed or already deleted (→ 404)
            DatabaseError:   UPDATE failed (→ 500)
        """
        key = parse_devotional_id(devotional_id)

        try:
            result = await db.execute(
                update(Devotional)
                .where(
                    Devotional.id == key,
                    Devotional.deleted_at.is_(None),
                )
                .values(deleted_at=func.now())
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError as e:
            logger.error("Database error deleting devotional %s: %s", key, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to delete devotional.",
                context={"devotional_id": key},
            ) from e

        if result.rowcount != 1:
            raise NotFoundError(resource="devotional", resource_id=str(key))

        logger.info("Devotional %d soft-deleted", key)


# ── Singleton Instance ────────────────────────────────────────────────────
# Stateless; sessions are passed per call
devotional_service = DevotionalService()
