"""
Tests for the SQLite note store.
"""

import asyncio
from datetime import datetime
from unittest.mock import patch

import aiosqlite
import pytest

from synapse.core.note_store.sqlite_store import SQLiteNoteStore
from synapse.models.note import EmbeddingStatus, Note
from synapse.utils.exceptions import StorageError


def make_note(text: str, tags: list[str] | None = None, created_at: datetime | None = None, **kwargs) -> Note:
    return Note(
        text=text,
        tags=tags or [],
        created_at=created_at or datetime(2024, 1, 15, 12, 0, 0),
        **kwargs,
    )


class TestInsert:
    """Test note insertion."""

    async def test_assigns_id(self, store):
        note_id = await store.insert(make_note("red shoe", ["red", "shoe"]))

        assert note_id.startswith("note_")
        assert await store.count() == 1

    async def test_keeps_given_id(self, store):
        note_id = await store.insert(make_note("red shoe", id="note_custom00001"))
        assert note_id == "note_custom00001"

    async def test_round_trip_fields(self, store):
        created = datetime(2024, 3, 5, 8, 15, 30, 123456)
        note = make_note(
            "blue bag",
            ["blue", "bag"],
            created_at=created,
            embedding=[0.1, 0.2, 0.3],
            embedding_status=EmbeddingStatus.OK,
        )

        note_id = await store.insert(note)
        [stored] = await store.scan_all()

        assert stored.id == note_id
        assert stored.text == "blue bag"
        assert stored.tags == ["blue", "bag"]
        assert stored.embedding == [0.1, 0.2, 0.3]
        assert stored.embedding_status == EmbeddingStatus.OK
        assert stored.created_at == created
        assert stored.image is None

    async def test_degraded_note_stored_without_embedding(self, store):
        await store.insert(make_note("pink bike", embedding_status=EmbeddingStatus.DEGRADED))

        [stored] = await store.scan_all()

        assert stored.embedding_status == EmbeddingStatus.DEGRADED
        assert stored.embedding == []
        assert not stored.has_embedding

    async def test_image_note(self, store):
        await store.insert(make_note("Image content", image="aGVsbG8="))

        [stored] = await store.scan_all()

        assert stored.image == "aGVsbG8="
        assert stored.embedding_status == EmbeddingStatus.NONE

    async def test_duplicate_id_is_storage_error(self, store):
        await store.insert(make_note("first", id="note_dup000000001"))

        with pytest.raises(StorageError):
            await store.insert(make_note("second", id="note_dup000000001"))

        notes = await store.scan_all()
        assert [n.text for n in notes] == ["first"]

    async def test_persists_across_connections(self, tmp_path):
        db_path = str(tmp_path / "persist.db")
        first = SQLiteNoteStore(db_path=db_path)
        await first.initialize()
        await first.insert(make_note("green bottle"))
        await first.close()

        second = SQLiteNoteStore(db_path=db_path)
        await second.initialize()
        try:
            assert [n.text for n in await second.scan_all()] == ["green bottle"]
        finally:
            await second.close()

    async def test_in_memory_database(self):
        memory_store = SQLiteNoteStore(db_path=":memory:")
        await memory_store.initialize()
        try:
            await memory_store.insert(make_note("white shirt"))
            assert await memory_store.count() == 1
        finally:
            await memory_store.close()


class TestConcurrency:
    """Test the store under concurrent callers."""

    async def test_concurrent_inserts(self, store):
        notes = [make_note(f"note {i}", ["red"] if i % 2 else []) for i in range(50)]

        ids = await asyncio.gather(*(store.insert(note) for note in notes))

        assert len(set(ids)) == 50
        assert await store.count() == 50
        stored = await store.scan_all()
        assert sorted(n.text for n in stored) == sorted(n.text for n in notes)
        assert len(await store.find_by_pattern("red")) == 25

    async def test_concurrent_first_use_opens_one_connection(self, tmp_path):
        fresh_store = SQLiteNoteStore(db_path=str(tmp_path / "fresh.db"))

        with patch("aiosqlite.connect", wraps=aiosqlite.connect) as connect_spy:
            await asyncio.gather(*(fresh_store.connect() for _ in range(10)))
        try:
            assert connect_spy.call_count == 1
            assert fresh_store.connection is not None
        finally:
            await fresh_store.close()


class TestScanAll:
    """Test full corpus scans."""

    async def test_empty(self, store):
        assert await store.scan_all() == []

    async def test_insertion_order(self, store):
        # Later timestamp inserted first: order follows insertion, not created_at
        await store.insert(make_note("one", created_at=datetime(2024, 2, 1)))
        await store.insert(make_note("two", created_at=datetime(2024, 1, 1)))
        await store.insert(make_note("three", created_at=datetime(2024, 3, 1)))

        assert [n.text for n in await store.scan_all()] == ["one", "two", "three"]


class TestFindByPattern:
    """Test case-insensitive text/tag matching."""

    async def test_matches_text_case_insensitive(self, store):
        await store.insert(make_note("Meeting with Alice"))
        await store.insert(make_note("Grocery list"))

        results = await store.find_by_pattern("ALICE")

        assert [n.text for n in results] == ["Meeting with Alice"]

    async def test_matches_tags(self, store):
        await store.insert(make_note("untitled snippet", ["red"]))
        await store.insert(make_note("another snippet", ["blue"]))

        results = await store.find_by_pattern("red")

        assert [n.text for n in results] == ["untitled snippet"]

    async def test_matches_substring(self, store):
        await store.insert(make_note("Read the handbook"))

        assert len(await store.find_by_pattern("andbo")) == 1

    async def test_empty_pattern_matches_everything(self, store):
        await store.insert(make_note("a"))
        await store.insert(make_note("b"))

        assert [n.text for n in await store.find_by_pattern("")] == ["a", "b"]

    async def test_regex_metacharacters_are_literal(self, store):
        await store.insert(make_note("abc"))
        await store.insert(make_note("a.c (draft)"))

        assert [n.text for n in await store.find_by_pattern("a.c")] == ["a.c (draft)"]
        assert [n.text for n in await store.find_by_pattern("(draft")] == ["a.c (draft)"]
        assert await store.find_by_pattern(".*") == []

    async def test_json_syntax_does_not_match_tags(self, store):
        await store.insert(make_note("plain", ["red", "shoe"]))

        assert await store.find_by_pattern('","') == []

    async def test_no_match(self, store):
        await store.insert(make_note("red shoe", ["red", "shoe"]))
        assert await store.find_by_pattern("laptop") == []


class TestFindByRange:
    """Test date range + pattern filtering."""

    @pytest.fixture
    async def dated_store(self, store):
        await store.insert(make_note("new year's eve", created_at=datetime(2023, 12, 31, 23, 59, 59, 999999)))
        await store.insert(make_note("first red day", ["red"], created_at=datetime(2024, 1, 1, 0, 0, 0)))
        await store.insert(make_note("mid month", created_at=datetime(2024, 1, 15, 9, 0, 0)))
        await store.insert(make_note("last blue minute", ["blue"], created_at=datetime(2024, 1, 31, 23, 59, 59, 999000)))
        await store.insert(make_note("february red", ["red"], created_at=datetime(2024, 2, 1, 0, 0, 0)))
        return store

    async def test_inclusive_bounds(self, dated_store):
        results = await dated_store.find_by_range(
            start=datetime(2024, 1, 1), end=datetime(2024, 1, 31, 23, 59, 59, 999000)
        )

        assert [n.text for n in results] == ["last blue minute", "mid month", "first red day"]

    async def test_unbounded_start(self, dated_store):
        results = await dated_store.find_by_range(end=datetime(2024, 1, 1))
        assert [n.text for n in results] == ["first red day", "new year's eve"]

    async def test_unbounded_end(self, dated_store):
        results = await dated_store.find_by_range(start=datetime(2024, 1, 31))
        assert [n.text for n in results] == ["february red", "last blue minute"]

    async def test_no_constraints_returns_all_newest_first(self, dated_store):
        results = await dated_store.find_by_range()
        assert [n.text for n in results] == [
            "february red",
            "last blue minute",
            "mid month",
            "first red day",
            "new year's eve",
        ]

    async def test_pattern_and_range(self, dated_store):
        results = await dated_store.find_by_range(
            start=datetime(2024, 1, 1), end=datetime(2024, 1, 31, 23, 59, 59, 999000), pattern="RED"
        )
        assert [n.text for n in results] == ["first red day"]

    async def test_pattern_only(self, dated_store):
        results = await dated_store.find_by_range(pattern="red")
        assert [n.text for n in results] == ["february red", "first red day"]

    async def test_blank_pattern_is_no_constraint(self, dated_store):
        assert len(await dated_store.find_by_range(pattern="   ")) == 5

    async def test_ties_newest_insert_first(self, store):
        same_time = datetime(2024, 1, 10, 12, 0, 0)
        await store.insert(make_note("earlier insert", created_at=same_time))
        await store.insert(make_note("later insert", created_at=same_time))

        results = await store.find_by_range()
        assert [n.text for n in results] == ["later insert", "earlier insert"]
