import pytest
from sqlalchemy.pool import StaticPool

from infrastructure.database.models import Entry, Photo, User
from infrastructure.database.session import Database
from tools.journal.exceptions import NotFoundError
from tools.journal.models import JournalEntry
from tools.journal.repository import SqlEntryStore


@pytest.fixture
def db():
    database = Database("sqlite://", poolclass=StaticPool)
    database.create_all()
    return database


@pytest.fixture
def store(db):
    return SqlEntryStore(db, owner="tester")


def _entry(date="2025-06-15", title="Walk", **kwargs):
    return JournalEntry.create(date=date, title=title, **kwargs)


def test_round_trip_with_photos_in_upload_order(store):
    created = store.append(
        _entry(time="08:00", text="sunrise", color="orange", photos=["/uploads/2.jpg", "/uploads/1.jpg"])
    )

    [stored] = store.list()
    assert stored.id == created.id
    assert stored.index == 0
    assert (stored.date, stored.title, stored.time, stored.text, stored.color) == (
        "2025-06-15", "Walk", "08:00", "sunrise", "orange"
    )
    assert stored.photos == ["/uploads/2.jpg", "/uploads/1.jpg"]


def test_entries_belong_to_single_owner(store, db):
    store.append(_entry(title="a"))
    store.append(_entry(title="b"))

    with db.get_session() as session:
        users = session.query(User).all()
        assert [u.username for u in users] == ["tester"]
        assert session.query(Entry).filter_by(user_id=users[0].id).count() == 2


def test_partial_update_and_find_by_date(store):
    store.append(_entry("2025-06-10", "first", text="keep"))
    store.append(_entry("2025-06-11", "second"))

    updated = store.update_at(0, {"title": "X", "text": None})

    assert updated.title == "X"
    assert store.find_by_date("2025-06-10").text == "keep"
    assert store.find_by_date("2025-06-11").index == 1
    assert store.find_by_date("2025-01-01") is None


def test_remove_at_shifts_and_cascades_photos(store, db):
    store.append(_entry(title="a", photos=["/uploads/a.jpg"]))
    kept = store.append(_entry(title="b"))

    store.remove_at(0)

    [only] = store.list()
    assert only.id == kept.id and only.index == 0
    with db.get_session() as session:
        assert session.query(Photo).count() == 0


@pytest.mark.parametrize("index", [-1, 1])
def test_out_of_range_index(store, index):
    store.append(_entry())
    with pytest.raises(NotFoundError):
        store.update_at(index, {"title": "X"})
    with pytest.raises(NotFoundError):
        store.remove_at(index)
    assert len(store.list()) == 1


def test_update_and_remove_by_id(store):
    store.append(_entry(title="a"))
    target = store.append(_entry(title="b"))

    assert store.update(target.id, {"time": "12:00"}).time == "12:00"
    assert store.remove(target.id).title == "b"

    with pytest.raises(NotFoundError):
        store.remove(target.id)
    with pytest.raises(NotFoundError):
        store.update("not-a-number", {"title": "X"})
