# tests/test_store.py
import json
import logging
import os
import threading

import pytest

from marketplace_api.app.core.errors import StoreReadError, StoreWriteError
from marketplace_api.app.core.store import FileBackend, ListingStore, MemoryBackend
from marketplace_api.app.schemas.listing import Listing
from marketplace_api.app.services.listing_service import ListingService


def make_listing(listing_id, **overrides):
    data = {
        "id": listing_id,
        "title": "Desk",
        "price": 50,
        "description": "Oak",
        "contact": "desk@example.com",
        "imageUrl": "",
        "likes": 0,
        "sold": False,
        "createdAt": "2026-10-18T12:00:00.000Z",
    }
    data.update(overrides)
    return Listing.model_validate(data)


class FailingBackend(MemoryBackend):
    def save(self, text):
        raise OSError("disk full")


def test_ensure_exists_creates_empty_document_and_directory(listings_path):
    store = ListingStore(FileBackend(listings_path))
    assert not listings_path.parent.exists()
    store.ensure_exists()
    assert json.loads(listings_path.read_text(encoding="utf-8")) == []
    assert store.read() == []


def test_ensure_exists_keeps_existing_document(listings_path):
    listings_path.parent.mkdir(parents=True)
    listings_path.write_text('[{"id": "1", "title": "t", "price": 1, "description": "d", '
                             '"contact": "c", "imageUrl": "", "likes": 3, "sold": true, '
                             '"createdAt": "2026-01-01T00:00:00.000Z"}]', encoding="utf-8")
    store = ListingStore(FileBackend(listings_path))
    store.ensure_exists()
    [listing] = store.read()
    assert listing.likes == 3
    assert listing.sold is True


def test_ensure_exists_logs_failure_instead_of_raising(caplog):
    store = ListingStore(FailingBackend())
    with caplog.at_level(logging.ERROR):
        store.ensure_exists()
    assert "Failed to initialise listings document" in caplog.text
    with pytest.raises(StoreReadError):
        store.read()


def test_read_missing_document_raises(listings_path):
    store = ListingStore(FileBackend(listings_path))
    with pytest.raises(StoreReadError):
        store.read()


@pytest.mark.parametrize("content", ["{not json", '{"id": "1"}', '[{"id": "1"}]', ""])
def test_read_corrupt_document_raises(listings_path, content):
    listings_path.parent.mkdir(parents=True)
    listings_path.write_text(content, encoding="utf-8")
    store = ListingStore(FileBackend(listings_path))
    with pytest.raises(StoreReadError):
        store.read()


def test_read_corrupt_document_with_empty_policy_returns_empty(listings_path):
    listings_path.parent.mkdir(parents=True)
    listings_path.write_text("{not json", encoding="utf-8")
    store = ListingStore(FileBackend(listings_path), read_failure="empty")
    assert store.read() == []
    assert ListingStore(FileBackend(listings_path.with_name("absent.json")), read_failure="empty").read() == []


def test_unknown_read_failure_policy_is_rejected():
    with pytest.raises(ValueError):
        ListingStore(MemoryBackend(), read_failure="ignore")


def test_write_is_indented_and_preserves_order(file_store, listings_path):
    file_store.write([make_listing("1"), make_listing("2"), make_listing("3")])
    text = listings_path.read_text(encoding="utf-8")
    assert text.startswith("[\n  {\n    \"id\": \"1\"")
    assert [listing.id for listing in file_store.read()] == ["1", "2", "3"]


def test_write_of_read_is_a_no_op(file_store, listings_path):
    file_store.write([make_listing("1", price=19.5, likes=2), make_listing("2", sold=True)])
    before = listings_path.read_bytes()
    file_store.write(file_store.read())
    assert listings_path.read_bytes() == before


def test_unknown_fields_survive_a_rewrite(memory_store):
    memory_store.backend.save(json.dumps([dict(make_listing("1").model_dump(by_alias=True), featured=True)]))
    memory_store.write(memory_store.read())
    assert json.loads(memory_store.backend.text)[0]["featured"] is True


def test_failed_write_keeps_previous_document(file_store, listings_path, monkeypatch):
    file_store.write([make_listing("1")])
    before = listings_path.read_bytes()

    def broken_replace(src, dst):
        raise OSError("rename failed")

    monkeypatch.setattr(os, "replace", broken_replace)
    with pytest.raises(StoreWriteError):
        file_store.write([make_listing("1"), make_listing("2")])
    assert listings_path.read_bytes() == before
    assert sorted(p.name for p in listings_path.parent.iterdir()) == ["listings.json"]


def test_transaction_writes_on_success(memory_store):
    with memory_store.transaction() as listings:
        listings.append(make_listing("7"))
    assert [listing.id for listing in memory_store.read()] == ["7"]


def test_transaction_does_not_write_when_body_raises(memory_store):
    before = memory_store.backend.text
    with pytest.raises(RuntimeError):
        with memory_store.transaction() as listings:
            listings.append(make_listing("7"))
            raise RuntimeError("boom")
    assert memory_store.backend.text == before


def test_concurrent_likes_are_not_lost(file_store):
    file_store.write([make_listing("1")])
    service = ListingService(file_store)

    def like_many():
        for _ in range(10):
            service.like_listing("1")

    threads = [threading.Thread(target=like_many) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert file_store.read()[0].likes == 80


def test_read_deeply_nested_document_raises(listings_path):
    listings_path.parent.mkdir(parents=True)
    listings_path.write_text("[" * 200000 + "]" * 200000, encoding="utf-8")
    with pytest.raises(StoreReadError):
        ListingStore(FileBackend(listings_path)).read()
    assert ListingStore(FileBackend(listings_path), read_failure="empty").read() == []
