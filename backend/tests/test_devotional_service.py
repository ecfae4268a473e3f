"""
Devotionals API - Devotional Service Tests
==========================================

What:  Tests for DevotionalService (create, get, list, partial update, soft delete).
How:   Validation and error-wrapping paths use a mock session; lifecycle and
       visibility rules run against a temporary SQLite database.

What we test:
    ✅ Id parsing: malformed ids are ValidationError, never NotFoundError
    ✅ Create rejects missing/empty fields and leaves updated_at/deleted_at NULL
    ✅ Partial update keeps unsupplied fields and refreshes updated_at
    ✅ Soft-deleted rows never resurface (get, list, update, delete)
    ✅ Listing order is newest first
    ✅ Store failures become DatabaseError
"""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from devotional_api.exceptions import DatabaseError, NotFoundError, ValidationError
from devotional_api.models.devotional import Devotional
from devotional_api.schemas.devotional import DevotionalPatch
from devotional_api.services.devotional_service import (
    DevotionalService,
    MAX_DEVOTIONAL_ID,
    parse_devotional_id,
)


class TestParseDevotionalId:
    """Tests for path id validation."""

    @pytest.mark.parametrize("raw, expected", [("0", 0), ("1", 1), ("42", 42), (7, 7)])
    def test_valid_ids(self, raw, expected):
        assert parse_devotional_id(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", "-1", "1.5", " 1", "1e3", "١٢", -3, True])
    def test_invalid_ids(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            parse_devotional_id(raw)
        assert exc_info.value.field == "id"

    def test_out_of_range_id(self):
        with pytest.raises(ValidationError, match="out of range"):
            parse_devotional_id(str(MAX_DEVOTIONAL_ID + 1))


class TestDevotionalServiceValidation:
    """Input validation happens before any SQL is issued."""

    def setup_method(self):
        self.service = DevotionalService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("verse, content, field", [
        ("", "For God so loved...", "verse"),
        (None, "For God so loved...", "verse"),
        ("John 3:16", "", "content"),
        ("John 3:16", None, "content"),
    ])
    async def test_create_requires_both_fields(self, mock_db_session, verse, content, field):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create(mock_db_session, verse, content)
        assert exc_info.value.field == field
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_rejects_unencodable_text(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create(mock_db_session, "John 3:16", "broken \ud800 text")
        assert exc_info.value.field == "content"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_rejects_unencodable_text(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_partial(mock_db_session, "1", DevotionalPatch(verse="\udfff"))
        assert exc_info.value.field == "verse"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_invalid_id_skips_query(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.get_by_id(mock_db_session, "abc")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_soft_delete_invalid_id_skips_query(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.soft_delete(mock_db_session, "abc")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_requires_a_field(self, mock_db_session):
        with pytest.raises(ValidationError, match="At least one"):
            await self.service.update_partial(mock_db_session, "1", DevotionalPatch())
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_rejects_supplied_empty_string(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_partial(mock_db_session, "1", DevotionalPatch(verse=""))
        assert exc_info.value.field == "verse"

    @pytest.mark.asyncio
    async def test_update_rejects_supplied_null(self, mock_db_session):
        patch = DevotionalPatch.model_validate({"content": None})
        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_partial(mock_db_session, "1", patch)
        assert exc_info.value.field == "content"

    @pytest.mark.asyncio
    async def test_store_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
        with pytest.raises(DatabaseError):
            await self.service.list_active(mock_db_session)

    @pytest.mark.asyncio
    async def test_soft_delete_zero_rows_is_not_found(self, mock_db_session):
        mock_db_session.execute.return_value.rowcount = 0
        with pytest.raises(NotFoundError):
            await self.service.soft_delete(mock_db_session, "5")


class TestDevotionalPatch:
    """Presence tracking on the PATCH body."""

    def test_absent_keys_are_not_supplied(self):
        assert DevotionalPatch.model_validate({}).supplied() == {}

    def test_only_present_keys_are_supplied(self):
        patch = DevotionalPatch.model_validate({"content": "C2"})
        assert patch.supplied() == {"content": "C2"}

    def test_empty_and_null_values_count_as_supplied(self):
        patch = DevotionalPatch.model_validate({"verse": "", "content": None})
        assert patch.supplied() == {"verse": "", "content": None}


class TestDevotionalLifecycle:
    """Lifecycle and visibility rules against a real SQLite database."""

    def setup_method(self):
        self.service = DevotionalService()

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_created_at(self, db_session):
        created = await self.service.create(db_session, "John 3:16", "For God so loved...")

        assert created.id >= 1
        assert created.verse == "John 3:16"
        assert created.content == "For God so loved..."
        assert created.created_at is not None
        assert created.updated_at is None
        assert created.deleted_at is None

        fetched = await self.service.get_by_id(db_session, str(created.id))
        assert fetched.id == created.id

    @pytest.mark.asyncio
    async def test_get_unknown_id_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_by_id(db_session, "999")

    @pytest.mark.asyncio
    async def test_list_newest_first(self, db_session):
        a = await self.service.create(db_session, "A", "a")
        b = await self.service.create(db_session, "B", "b")
        c = await self.service.create(db_session, "C", "c")

        listed = await self.service.list_active(db_session)

        assert [d.id for d in listed] == [c.id, b.id, a.id]

    @pytest.mark.asyncio
    async def test_list_empty(self, db_session):
        assert await self.service.list_active(db_session) == []

    @pytest.mark.asyncio
    async def test_partial_update_preserves_untouched_field(self, db_session):
        created = await self.service.create(db_session, "V1", "C1")

        updated = await self.service.update_partial(
            db_session, str(created.id), DevotionalPatch(content="C2")
        )

        assert updated.verse == "V1"
        assert updated.content == "C2"
        assert updated.updated_at is not None
        assert updated.created_at == created.created_at

        fetched = await self.service.get_by_id(db_session, created.id)
        assert (fetched.verse, fetched.content) == ("V1", "C2")
        assert fetched.updated_at is not None

    @pytest.mark.asyncio
    async def test_partial_update_both_fields(self, db_session):
        created = await self.service.create(db_session, "V1", "C1")

        updated = await self.service.update_partial(
            db_session, created.id, DevotionalPatch(verse="V2", content="C2")
        )

        assert (updated.verse, updated.content) == ("V2", "C2")

    @pytest.mark.asyncio
    async def test_update_unknown_id_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.update_partial(db_session, "12345", DevotionalPatch(verse="V"))

    @pytest.mark.asyncio
    async def test_soft_delete_hides_record(self, db_session):
        keep = await self.service.create(db_session, "Keep", "k")
        gone = await self.service.create(db_session, "Gone", "g")

        await self.service.soft_delete(db_session, str(gone.id))

        with pytest.raises(NotFoundError):
            await self.service.get_by_id(db_session, gone.id)
        assert [d.id for d in await self.service.list_active(db_session)] == [keep.id]

    @pytest.mark.asyncio
    async def test_second_soft_delete_not_found(self, db_session):
        created = await self.service.create(db_session, "V", "C")

        await self.service.soft_delete(db_session, created.id)
        with pytest.raises(NotFoundError):
            await self.service.soft_delete(db_session, created.id)

    @pytest.mark.asyncio
    async def test_deleted_record_cannot_be_updated(self, db_session):
        created = await self.service.create(db_session, "V", "C")
        await self.service.soft_delete(db_session, created.id)

        with pytest.raises(NotFoundError):
            await self.service.update_partial(db_session, created.id, DevotionalPatch(verse="V2"))

    @pytest.mark.asyncio
    async def test_soft_delete_keeps_row_with_terminal_timestamp(self, db_session):
        created = await self.service.create(db_session, "V", "C")
        await self.service.soft_delete(db_session, created.id)

        result = await db_session.execute(
            select(Devotional.deleted_at, Devotional.verse).where(Devotional.id == created.id)
        )
        first_deleted_at, verse = result.one()
        assert first_deleted_at is not None
        assert verse == "V"

        with pytest.raises(NotFoundError):
            await self.service.soft_delete(db_session, created.id)

        result = await db_session.execute(
            select(Devotional.deleted_at).where(Devotional.id == created.id)
        )
        assert result.scalar_one() == first_deleted_at

