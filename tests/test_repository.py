import pytest
from sqlalchemy.exc import OperationalError

from fixgeni.db import StoreUnavailable, repository
from fixgeni.models.category import Category


def test_upsert_inserts_then_reports_unchanged(db):
    first = repository.upsert(db, Category, "hvac", {"name": "HVAC", "is_active": True})
    second = repository.upsert(db, Category, "hvac", {"name": "HVAC", "is_active": True})

    assert first.created is True
    assert first.row.id is not None
    assert second.created is False
    assert second.updated is False
    assert second.changed == ()
    assert second.row.id == first.row.id


def test_upsert_reports_changed_fields(db):
    repository.upsert(db, Category, "hvac", {"name": "Hvac", "is_active": False})

    outcome = repository.upsert(db, Category, "hvac", {"name": "HVAC", "is_active": False})

    assert outcome.updated is True
    assert outcome.changed == ("name",)


def test_upsert_recovers_from_lost_insert_race(db, monkeypatch):
    # Another writer inserted the row after our lookup said it was absent.
    db.add(Category(slug="plumbing", name="Plumbing", is_active=False))
    db.commit()

    real_find = repository.find_by_key
    calls = {"n": 0}

    def stale_first_lookup(session, model, key):
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return real_find(session, model, key)

    monkeypatch.setattr(repository, "find_by_key", stale_first_lookup)

    outcome = repository.upsert(db, Category, "plumbing", {"name": "Plumbing", "is_active": True})

    assert outcome.created is False
    assert outcome.updated is True
    assert repository.count(db, Category) == 1
    assert outcome.row.is_active is True


def test_query_filters_sorts_and_pages(db):
    for slug, name, active in [("b", "Bravo", True), ("a", "Alpha", True), ("c", "Charlie", False)]:
        db.add(Category(slug=slug, name=name, is_active=active))
    db.commit()

    active = repository.query(db, Category, filters={"is_active": True}, order_by=(Category.name.asc(),))
    assert [c.slug for c in active] == ["a", "b"]

    page = repository.query(db, Category, order_by=(Category.name.asc(),), limit=1, offset=1)
    assert [c.slug for c in page] == ["b"]

    assert repository.count(db, Category) == 3
    assert repository.count(db, Category, is_active=False) == 1


def test_existing_keys(db):
    db.add(Category(slug="roofing", name="Roofing", is_active=True))
    db.commit()

    assert repository.existing_keys(db, Category, ["roofing", "hvac"]) == {"roofing"}
    assert repository.existing_keys(db, Category, []) == set()


def test_failed_commit_rolls_back_the_session(db, monkeypatch):
    def locked():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "commit", locked)

    with pytest.raises(StoreUnavailable):
        repository.upsert(db, Category, "hvac", {"name": "HVAC", "is_active": True})

    assert not db.in_transaction()
    assert len(db.new) == 0

    monkeypatch.undo()
    assert repository.upsert(db, Category, "hvac", {"name": "HVAC", "is_active": True}).created is True
