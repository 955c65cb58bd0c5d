"""
NoteKeeper Backend - Note Service Unit Tests
=============================================

What:  Tests for NoteService lifecycle rules.
How:   Most tests run against the in-memory repository; a few use an
       AsyncMock repository to check exactly which storage calls happen.

What we test:
    ✅ create stamps created_date from the clock and defaults tags to empty
    ✅ update keeps tags when omitted, replaces or clears them when given
    ✅ update never touches id or created_date
    ✅ delete/get/update/stats on unknown ids raise NotFoundError
    ✅ list ordering, paging totals and tag filtering
    ✅ repository errors propagate unchanged
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from notekeeper.domain import UNSET, Note, NoteSummary, Page, Tag
from notekeeper.exceptions import DatabaseError, NotFoundError
from notekeeper.services.note_service import NoteService


class TestNoteServiceCreate:

    @pytest.mark.asyncio
    async def test_create_then_get_returns_supplied_fields(self, note_service):
        created = await note_service.create_note(
            title="Quarterly Business Review Meeting",
            text="Prepare presentation slides for Q4 business review.",
            tags={Tag.BUSINESS, Tag.IMPORTANT},
        )

        fetched = await note_service.get_note(created.id)

        assert created.id is not None
        assert fetched.id == created.id
        assert fetched.title == "Quarterly Business Review Meeting"
        assert fetched.text == "Prepare presentation slides for Q4 business review."
        assert fetched.tags == {Tag.BUSINESS, Tag.IMPORTANT}
        assert fetched.created_date == datetime(2024, 11, 9, 14, 30, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_create_without_tags_defaults_to_empty(self, note_service):
        created = await note_service.create_note(title="Personal Reminder", text="Call mom.")

        assert created.tags == frozenset()

    @pytest.mark.asyncio
    async def test_create_assigns_distinct_ids(self, note_service):
        first = await note_service.create_note(title="One", text="first")
        second = await note_service.create_note(title="Two", text="second")

        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_create_rejects_blank_title(self, note_service, memory_repository):
        with pytest.raises(ValidationError):
            await note_service.create_note(title="   ", text="body")

        page = await memory_repository.find_all_order_by_created_date_desc(0, 10)
        assert page.total_elements == 0

    @pytest.mark.asyncio
    async def test_create_rejects_title_longer_than_column(self, mock_repository):
        service = NoteService(mock_repository)

        with pytest.raises(ValidationError):
            await service.create_note(title="x" * 256, text="body")

        mock_repository.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_propagates_repository_failure(self, mock_repository):
        mock_repository.save.side_effect = DatabaseError()
        service = NoteService(mock_repository)

        with pytest.raises(DatabaseError):
            await service.create_note(title="Title", text="text")


class TestNoteServiceUpdate:

    @pytest.mark.asyncio
    async def test_update_replaces_title_and_text(self, note_service):
        note = await note_service.create_note(title="Old", text="old text", tags={Tag.PERSONAL})

        updated = await note_service.update_note(note.id, title="New", text="new text")

        assert updated.title == "New"
        assert updated.text == "new text"
        assert (await note_service.get_note(note.id)).title == "New"

    @pytest.mark.asyncio
    async def test_update_without_tags_preserves_tags(self, note_service):
        note = await note_service.create_note(
            title="Tagged", text="text", tags={Tag.BUSINESS, Tag.IMPORTANT}
        )

        updated = await note_service.update_note(note.id, title="Tagged", text="changed")

        assert updated.tags == {Tag.BUSINESS, Tag.IMPORTANT}

    @pytest.mark.asyncio
    async def test_update_with_tags_replaces_exactly(self, note_service):
        note = await note_service.create_note(
            title="Tagged", text="text", tags={Tag.BUSINESS, Tag.IMPORTANT}
        )

        updated = await note_service.update_note(
            note.id, title="Tagged", text="text", tags={Tag.PERSONAL}
        )

        assert updated.tags == {Tag.PERSONAL}

    @pytest.mark.asyncio
    async def test_update_with_empty_tags_clears_them(self, note_service):
        note = await note_service.create_note(title="Tagged", text="text", tags={Tag.BUSINESS})

        updated = await note_service.update_note(note.id, title="Tagged", text="text", tags=set())

        assert updated.tags == frozenset()
        assert (await note_service.get_note(note.id)).tags == frozenset()

    @pytest.mark.asyncio
    async def test_update_keeps_id_and_created_date(self, note_service):
        note = await note_service.create_note(title="Title", text="text")

        updated = await note_service.update_note(note.id, title="Other", text="other", tags=UNSET)

        assert updated.id == note.id
        assert updated.created_date == note.created_date

    @pytest.mark.asyncio
    async def test_update_unknown_id_raises_not_found(self, note_service):
        with pytest.raises(NotFoundError) as exc_info:
            await note_service.update_note("nonexistent123", title="T", text="x")

        assert "nonexistent123" in exc_info.value.message
        assert exc_info.value.context["operation"] == "update"

    @pytest.mark.asyncio
    async def test_update_with_blank_text_is_rejected(self, note_service):
        note = await note_service.create_note(title="Title", text="text")

        with pytest.raises(ValidationError):
            await note_service.update_note(note.id, title="Title", text="")

        assert (await note_service.get_note(note.id)).text == "text"


class TestNoteServiceDelete:

    @pytest.mark.asyncio
    async def test_delete_then_get_raises_not_found(self, note_service):
        note = await note_service.create_note(title="Title", text="text")

        await note_service.delete_note(note.id)

        with pytest.raises(NotFoundError):
            await note_service.get_note(note.id)

    @pytest.mark.asyncio
    async def test_delete_unknown_id_raises_not_found(self, note_service):
        with pytest.raises(NotFoundError) as exc_info:
            await note_service.delete_note("nonexistent456")

        assert exc_info.value.context == {
            "operation": "delete",
            "resource": "Note",
            "resource_id": "nonexistent456",
        }

    @pytest.mark.asyncio
    async def test_delete_checks_existence_before_deleting(self, mock_repository):
        mock_repository.exists_by_id.return_value = False
        service = NoteService(mock_repository)

        with pytest.raises(NotFoundError):
            await service.delete_note("missing")

        mock_repository.delete_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_existing_calls_repository(self, mock_repository):
        mock_repository.exists_by_id.return_value = True
        service = NoteService(mock_repository)

        await service.delete_note("507f1f77bcf86cd799439011")

        mock_repository.delete_by_id.assert_awaited_once_with("507f1f77bcf86cd799439011")


class TestNoteServiceList:

    @pytest.mark.asyncio
    async def test_first_page_is_newest_first(self, note_service):
        created = [
            await note_service.create_note(title=f"Note {i}", text="text") for i in range(5)
        ]

        page = await note_service.list_notes(page=0, size=3)

        assert isinstance(page, Page)
        assert [s.id for s in page.items] == [created[4].id, created[3].id, created[2].id]
        assert page.total_elements == 5
        assert page.total_pages == 2

    @pytest.mark.asyncio
    async def test_second_page_holds_the_rest(self, note_service):
        created = [
            await note_service.create_note(title=f"Note {i}", text="text") for i in range(5)
        ]

        page = await note_service.list_notes(page=1, size=3)

        assert [s.id for s in page.items] == [created[1].id, created[0].id]

    @pytest.mark.asyncio
    async def test_items_are_summaries(self, note_service):
        note = await note_service.create_note(title="Only", text="secret text", tags={Tag.PERSONAL})

        page = await note_service.list_notes(page=0, size=10)

        assert page.items == [NoteSummary(id=note.id, title="Only", created_date=note.created_date)]

    @pytest.mark.asyncio
    async def test_tag_filter_keeps_matching_notes_in_date_order(self, note_service):
        a = await note_service.create_note(title="A", text="t", tags={Tag.BUSINESS})
        await note_service.create_note(title="B", text="t", tags={Tag.PERSONAL})
        c = await note_service.create_note(title="C", text="t", tags={Tag.BUSINESS, Tag.IMPORTANT})
        await note_service.create_note(title="D", text="t")

        page = await note_service.list_notes(page=0, size=10, tag=Tag.BUSINESS)

        assert [s.id for s in page.items] == [c.id, a.id]
        assert page.total_elements == 2
        assert page.total_pages == 1

    @pytest.mark.asyncio
    async def test_empty_collection(self, note_service):
        page = await note_service.list_notes(page=0, size=10)

        assert page.items == []
        assert page.total_elements == 0
        assert page.total_pages == 0

    @pytest.mark.asyncio
    async def test_list_uses_tag_query_only_when_filtering(self, mock_repository):
        mock_repository.find_by_tag_order_by_created_date_desc.return_value = Page(
            items=[], page=0, size=5, total_elements=0
        )
        service = NoteService(mock_repository)

        await service.list_notes(page=0, size=5, tag=Tag.IMPORTANT)

        mock_repository.find_by_tag_order_by_created_date_desc.assert_awaited_once_with(
            Tag.IMPORTANT, 0, 5
        )
        mock_repository.find_all_order_by_created_date_desc.assert_not_awaited()


class TestNoteServiceStatistics:

    @pytest.mark.asyncio
    async def test_statistics_of_note_text(self, note_service):
        note = await note_service.create_note(title="Stats", text="note is just a note")

        stats = await note_service.get_word_statistics(note.id)

        assert list(stats.items()) == [("note", 2), ("is", 1), ("just", 1), ("a", 1)]

    @pytest.mark.asyncio
    async def test_statistics_are_stable_across_calls(self, note_service):
        note = await note_service.create_note(title="Stats", text="b a b c a b")

        first = await note_service.get_word_statistics(note.id)
        second = await note_service.get_word_statistics(note.id)

        assert list(first.items()) == list(second.items())

    @pytest.mark.asyncio
    async def test_statistics_unknown_id_raises_not_found(self, note_service):
        with pytest.raises(NotFoundError):
            await note_service.get_word_statistics("missing")

    @pytest.mark.asyncio
    async def test_statistics_of_punctuation_only_text(self, note_service):
        note = await note_service.create_note(title="Symbols", text="!!! ??? ... ,,, ---")

        assert await note_service.get_word_statistics(note.id) == {}


class TestNoteEntity:

    def _note(self, **overrides):
        fields = {
            "title": "Title",
            "text": "text",
            "created_date": datetime(2024, 1, 15, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return Note(**fields)

    @pytest.mark.parametrize("field", ["title", "text"])
    def test_blank_content_is_rejected(self, field):
        with pytest.raises(ValidationError):
            self._note(**{field: ""})

    def test_title_length_limit(self):
        assert len(self._note(title="x" * 255).title) == 255

        with pytest.raises(ValidationError):
            self._note(title="x" * 256)

    def test_assigning_blank_title_is_rejected(self):
        note = self._note()

        with pytest.raises(ValidationError):
            note.title = " "

    def test_id_cannot_be_reassigned(self):
        note = self._note(id="abc")

        with pytest.raises(ValidationError):
            note.id = "other"

    def test_created_date_cannot_be_reassigned(self):
        note = self._note()

        with pytest.raises(ValidationError):
            note.created_date = datetime.now(timezone.utc)

    def test_unknown_tag_is_rejected(self):
        with pytest.raises(ValidationError):
            self._note(tags={"URGENT"})

    def test_tag_values_are_coerced(self):
        note = self._note(tags=["BUSINESS", "BUSINESS"])

        assert note.tags == frozenset({Tag.BUSINESS})
