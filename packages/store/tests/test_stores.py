"""Tests for snipreview-store implementations."""

from __future__ import annotations

import json
import sqlite3
import threading
from datetime import datetime, timezone

import pytest

from snipreview_store.base import HISTORY_KEY, CorruptStoreError
from snipreview_store.memory import MemoryStore
from snipreview_store.models import FindingRecord, ReviewRecord, record_from_dict, record_to_dict
from snipreview_store.sqlite import SQLiteStore


def _make_record(review_id="r1", findings=1, language="python"):
    return ReviewRecord(
        id=review_id,
        code="def f(x):\n    return x / 0\n",
        language=language,
        created_at=datetime.now(timezone.utc).isoformat(),
        findings=[
            FindingRecord(type="bug", severity="high", message="Division by zero", suggestion="Guard the divisor", line=2)
            for _ in range(findings)
        ],
    )


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    if request.param == "memory":
        s = MemoryStore()
    else:
        s = SQLiteStore(db_path=str(tmp_path / "test.db"))
    yield s
    s.close()


# ---------------------------------------------------------------------------
# Behaviour shared by every backend
# ---------------------------------------------------------------------------


class TestStoreContract:
    def test_load_empty_when_nothing_stored(self, store):
        assert store.load() == []

    def test_add_prepends(self, store):
        store.add(_make_record("first"))
        store.add(_make_record("second"))
        store.add(_make_record("third"))
        assert [r.id for r in store.load()] == ["third", "second", "first"]

    def test_findings_roundtrip(self, store):
        record = _make_record(findings=2)
        store.add(record)
        [loaded] = store.load()
        assert loaded == record

    def test_optional_fields_roundtrip(self, store):
        record = ReviewRecord(
            id="r1",
            code="x",
            language="js",
            created_at="2026-01-01T00:00:00+00:00",
            findings=[FindingRecord(type="standard", severity="low", message="m")],
        )
        store.add(record)
        [loaded] = store.load()
        assert loaded.findings[0].suggestion is None
        assert loaded.findings[0].line is None

    def test_save_replaces_wholesale(self, store):
        store.add(_make_record("old"))
        store.save([_make_record("a"), _make_record("b")])
        assert [r.id for r in store.load()] == ["a", "b"]

    def test_save_then_add_keeps_order(self, store):
        store.save([_make_record("b"), _make_record("a")])
        store.add(_make_record("c"))
        assert [r.id for r in store.load()] == ["c", "b", "a"]

    def test_close_is_safe(self, store):
        store.close()


# ---------------------------------------------------------------------------
# Corrupt data
# ---------------------------------------------------------------------------


class TestCorruptData:
    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            '{"id": "r1"}',
            '[{"code": "no id"}]',
            '["just a string"]',
            '[{"id": "r1", "insights": [{"type": "bug"}]}]',
        ],
    )
    def test_load_raises(self, raw):
        store = MemoryStore({HISTORY_KEY: raw})
        with pytest.raises(CorruptStoreError):
            store.load()

    def test_add_does_not_overwrite_corrupt_history(self):
        store = MemoryStore({HISTORY_KEY: "not json"})
        with pytest.raises(CorruptStoreError):
            store.add(_make_record())
        assert store._get(HISTORY_KEY) == "not json"

    def test_sqlite_add_rolls_back_on_corrupt_history(self, tmp_path):
        store = SQLiteStore(db_path=str(tmp_path / "test.db"))
        store._put(HISTORY_KEY, "not json")
        with pytest.raises(CorruptStoreError):
            store.add(_make_record())
        # The connection must be usable again after the rollback.
        store.save([_make_record("fresh")])
        assert [r.id for r in store.load()] == ["fresh"]
        store.close()

    def test_user_message_present(self):
        assert "corrupt" in CorruptStoreError.user_message.lower()


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


class TestSerialization:
    def test_uses_original_field_names(self):
        d = record_to_dict(_make_record())
        assert set(d) == {"id", "code", "language", "createdAt", "insights"}
        assert d["insights"][0] == {
            "type": "bug",
            "severity": "high",
            "message": "Division by zero",
            "suggestion": "Guard the divisor",
            "line": 2,
        }

    def test_optional_keys_omitted(self):
        record = ReviewRecord(
            id="r", code="", language="", created_at="", findings=[FindingRecord("bug", "low", "m")]
        )
        assert record_to_dict(record)["insights"][0] == {"type": "bug", "severity": "low", "message": "m"}

    def test_from_dict_tolerates_missing_optional_fields(self):
        record = record_from_dict({"id": "r1"})
        assert record.code == ""
        assert record.findings == []


# ---------------------------------------------------------------------------
# SQLiteStore
# ---------------------------------------------------------------------------


class TestSQLiteStore:
    def test_persists_across_connections(self, tmp_path):
        """Data written by one SQLiteStore instance must be readable by another."""
        db_path = str(tmp_path / "test.db")
        store_a = SQLiteStore(db_path=db_path)
        store_a.add(_make_record("r1"))
        store_a.close()

        store_b = SQLiteStore(db_path=db_path)
        assert [r.id for r in store_b.load()] == ["r1"]
        store_b.close()

    def test_history_stored_under_single_key(self, tmp_path):
        db_path = str(tmp_path / "test.db")
        store = SQLiteStore(db_path=db_path)
        store.add(_make_record("r1"))
        store.add(_make_record("r2"))
        store.close()

        conn = sqlite3.connect(db_path)
        rows = conn.execute("SELECT key, value FROM kv").fetchall()
        conn.close()
        assert len(rows) == 1
        key, value = rows[0]
        assert key == HISTORY_KEY
        assert [r["id"] for r in json.loads(value)] == ["r2", "r1"]

    def test_interleaved_writers_lose_nothing(self, tmp_path):
        db_path = str(tmp_path / "test.db")
        store_a = SQLiteStore(db_path=db_path)
        store_b = SQLiteStore(db_path=db_path)
        for i in range(5):
            store_a.add(_make_record(f"a{i}"))
            store_b.add(_make_record(f"b{i}"))
        assert len(store_a.load()) == 10
        store_a.close()
        store_b.close()


class TestConcurrentAdds:
    def test_threads_do_not_lose_updates(self):
        store = MemoryStore()
        threads = [threading.Thread(target=store.add, args=(_make_record(f"r{i}"),)) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert sorted(r.id for r in store.load()) == sorted(f"r{i}" for i in range(20))
