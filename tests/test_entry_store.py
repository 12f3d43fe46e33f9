import json
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from tools.journal.entry_store import JsonEntryStore
from tools.journal.exceptions import NotFoundError, StorageError
from tools.journal.models import JournalEntry


def _entry(date="2025-06-15", title="Walk", **kwargs):
    return JournalEntry.create(date=date, title=title, **kwargs)


@pytest.fixture
def store(tmp_path):
    return JsonEntryStore(tmp_path / "journal_data.json")


def test_missing_file_is_empty_collection(store):
    assert store.list() == []
    assert store.find_by_date("2025-06-15") is None


def test_empty_file_is_empty_collection(tmp_path):
    path = tmp_path / "journal_data.json"
    path.write_text("", encoding="utf-8")
    assert JsonEntryStore(path).list() == []


def test_malformed_document_raises_storage_error(tmp_path):
    path = tmp_path / "journal_data.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        JsonEntryStore(path).list()


def test_document_must_be_array(tmp_path):
    path = tmp_path / "journal_data.json"
    path.write_text('{"date": "2025-06-15"}', encoding="utf-8")
    with pytest.raises(StorageError):
        JsonEntryStore(path).list()


def test_append_keeps_storage_order_and_round_trips(store):
    store.append(_entry("2025-06-20", "Later", time="09:30", text="coffee", color="green"))
    store.append(_entry("2025-06-01", "Earlier"))

    entries = store.list()
    assert [e.title for e in entries] == ["Later", "Earlier"]
    assert [e.index for e in entries] == [0, 1]

    first = entries[0]
    assert (first.date, first.title, first.time, first.text, first.color, first.photos) == (
        "2025-06-20", "Later", "09:30", "coffee", "green", []
    )
    assert first.id


def test_default_color_is_blue(store):
    store.append(_entry(color=None))
    store.append(_entry(color="magenta"))
    assert [e.color for e in store.list()] == ["blue", "blue"]


def test_find_by_date_returns_first_match(store):
    store.append(_entry("2025-06-15", "First"))
    store.append(_entry("2025-06-15", "Second"))
    assert store.find_by_date("2025-06-15").title == "First"
    assert store.find_by_date("2025-06-16") is None


def test_partial_update_keeps_untouched_fields(store):
    store.append(_entry(time="10:00", text="body", color="pink", photos=["/uploads/a.jpg"]))

    updated = store.update_at(0, {"title": "X"})

    assert updated.title == "X"
    stored = store.list()[0]
    assert stored.title == "X"
    assert (stored.time, stored.text, stored.date, stored.color, stored.photos) == (
        "10:00", "body", "2025-06-15", "pink", ["/uploads/a.jpg"]
    )


def test_update_applies_empty_string_but_skips_none(store):
    store.append(_entry(time="10:00", text="body"))

    store.update_at(0, {"text": "", "time": None})

    stored = store.list()[0]
    assert stored.text == ""
    assert stored.time == "10:00"


def test_update_cannot_change_date_color_or_photos(store):
    store.append(_entry(color="red"))
    store.update_at(0, {"date": "2030-01-01", "color": "gray", "photos": ["/x"]})
    stored = store.list()[0]
    assert (stored.date, stored.color, stored.photos) == ("2025-06-15", "red", [])


def test_remove_shifts_following_entries(store):
    for title in ["a", "b", "c", "d"]:
        store.append(_entry(title=title))
    before = store.list()

    store.remove_at(1)

    after = store.list()
    assert len(after) == len(before) - 1
    assert [e.title for e in after] == ["a", "c", "d"]
    for old in before[2:]:
        assert after[old.index - 1].id == old.id


@pytest.mark.parametrize("index", [-1, 2])
def test_out_of_range_leaves_collection_unchanged(store, index):
    store.append(_entry(title="a"))
    store.append(_entry(title="b"))
    raw_before = store.filepath.read_text(encoding="utf-8")

    with pytest.raises(NotFoundError):
        store.update_at(index, {"title": "X"})
    with pytest.raises(NotFoundError):
        store.remove_at(index)

    assert store.filepath.read_text(encoding="utf-8") == raw_before


def test_stable_id_survives_earlier_delete(store):
    store.append(_entry(title="a"))
    kept = store.append(_entry(title="b"))

    store.remove_at(0)

    assert store.index_of(kept.id) == 0
    assert store.update(kept.id, {"text": "still me"}).title == "b"
    assert store.get(kept.id).text == "still me"


def test_unknown_id_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.remove("nope")


def test_legacy_entries_get_ids_on_next_write(tmp_path):
    path = tmp_path / "journal_data.json"
    path.write_text(
        json.dumps([{"date": "2025-06-15", "title": "old", "color": "red", "photos": []}]),
        encoding="utf-8",
    )
    store = JsonEntryStore(path)
    assert store.list()[0].id is None

    store.append(_entry(title="new"))

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert all(item["id"] for item in raw)
    assert raw[0]["title"] == "old"


def test_get_reads_collection_once(store):
    store.append(_entry(title="a"))
    target = store.append(_entry(title="b"))

    with patch.object(store, "list", wraps=store.list) as list_spy:
        found = store.get(target.id)

    assert (found.title, found.index) == ("b", 1)
    assert list_spy.call_count == 1


def test_get_unknown_id_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.get("missing")


def test_concurrent_writers_on_same_document_lose_nothing(tmp_path):
    path = tmp_path / "journal_data.json"
    first, second = JsonEntryStore(path), JsonEntryStore(path)
    for i in range(10):
        first.append(_entry(title=f"seed-{i}"))

    def add(n):
        store = first if n % 2 else second
        return store.append(_entry(title=f"new-{n}")).id

    def touch(n):
        store = second if n % 2 else first
        return store.update_at(0, {"text": f"edit-{n}"})

    def drop(_):
        return first.remove_at(0).id

    with ThreadPoolExecutor(max_workers=8) as pool:
        added = [pool.submit(add, n) for n in range(40)]
        edited = [pool.submit(touch, n) for n in range(10)]
        removed = [pool.submit(drop, n) for n in range(5)]
        added_ids = {f.result() for f in added}
        for f in edited:
            f.result()
        removed_ids = {f.result() for f in removed}

    entries = second.list()
    ids = [e.id for e in entries]

    assert len(entries) == 10 + 40 - 5
    assert len(set(ids)) == len(ids)
    assert (added_ids - removed_ids) <= set(ids)
    assert not removed_ids & set(ids)
    assert [e.index for e in entries] == list(range(len(entries)))
    # Документ остался валидным JSON-массивом
    assert len(json.loads(path.read_text(encoding="utf-8"))) == len(entries)
