"""Tests for storage backends and store snapshot/load."""

import json
import logging

import pytest

from skyfreight.config import Settings
from skyfreight.models.shipment import ShipmentCreate, ShipmentUpdate
from skyfreight.services.store import DEFAULT_STORAGE_KEY, LoadOutcome, RecordStore
from skyfreight.storage.database import (
    MemoryStorage,
    NullStorage,
    SqliteStorage,
    build_storage,
)
from skyfreight.storage.seed import seed_flights, seed_shipments


def _dump(records):
    return [r.model_dump(mode="json", by_alias=True) for r in records]


# ---- payload shape --------------------------------------------------------


def test_every_mutation_writes_full_payload(store, storage):
    store.create_shipment(ShipmentCreate(sender="A", recipient="B"))
    payload = json.loads(storage.data[DEFAULT_STORAGE_KEY])
    assert set(payload) == {"shipments", "flights", "activity"}
    assert len(payload["shipments"]) == 4
    assert payload["shipments"][0]["weightKg"] == 0
    assert payload["flights"][0]["flightNumber"] == "HM451"
    assert payload["activity"][0]["text"] == "Shipment HM-2025-00004 created"


# ---- round trip -----------------------------------------------------------


def test_round_trip_into_fresh_store(store, storage, clock):
    store.create_shipment(ShipmentCreate(sender="A", recipient="B", weight_kg=10))
    store.update_shipment(1, ShipmentUpdate(status="In Transit"))
    store.delete_shipment(3)
    store.create_flight()

    fresh = RecordStore(storage=storage, clock=clock)
    assert fresh.load() is LoadOutcome.LOADED
    assert _dump(fresh.list_shipments()) == _dump(store.list_shipments())
    assert _dump(fresh.list_flights()) == _dump(store.list_flights())
    assert _dump(fresh.list_activity()) == _dump(store.list_activity())


def test_round_trip_through_sqlite(tmp_path, clock):
    storage = SqliteStorage(tmp_path / "state.db")
    store = RecordStore(
        shipments=seed_shipments(), flights=seed_flights(), storage=storage, clock=clock
    )
    store.advance_tracking("HM-2025-00001")

    fresh = RecordStore(storage=SqliteStorage(tmp_path / "state.db"), clock=clock)
    assert fresh.load() is LoadOutcome.LOADED
    assert _dump(fresh.list_shipments()) == _dump(store.list_shipments())
    assert fresh.get_shipment(1).status == "In Transit"


# ---- load outcomes --------------------------------------------------------


def test_load_without_payload_keeps_seed(store):
    assert store.load() is LoadOutcome.EMPTY
    assert len(store.list_shipments()) == 3


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        "null",
        '{"shipments": [{"id": "abc"}]}',
        '{"flights": "nope"}',
    ],
)
def test_malformed_payload_falls_back_to_seed(store, storage, raw, caplog):
    storage.data[DEFAULT_STORAGE_KEY] = raw
    with caplog.at_level(logging.WARNING, logger="skyfreight.services.store"):
        assert store.load() is LoadOutcome.MALFORMED
    assert "malformed" in caplog.text
    assert [s.id for s in store.list_shipments()] == [1, 2, 3]
    assert len(store.list_flights()) == 3


def test_partial_payload_only_replaces_present_collections(store, storage):
    storage.data[DEFAULT_STORAGE_KEY] = json.dumps(
        {"activity": [{"time": "2025-08-09T10:00:00Z", "text": "hello"}]}
    )
    assert store.load() is LoadOutcome.LOADED
    assert len(store.list_shipments()) == 3
    assert [e.text for e in store.list_activity()] == ["hello"]


def test_reload_picks_up_external_changes(store, storage):
    other = RecordStore(storage=storage)
    other.create_shipment()
    assert store.reload() is LoadOutcome.LOADED
    assert [s.id for s in store.list_shipments()] == [1]


def test_custom_storage_key(clock):
    storage = MemoryStorage()
    store = RecordStore(storage=storage, storage_key="other", clock=clock)
    store.create_shipment()
    assert list(storage.data) == ["other"]


# ---- backends -------------------------------------------------------------


def test_sqlite_storage_save_overwrites(tmp_path):
    storage = SqliteStorage(tmp_path / "nested" / "kv.db")
    assert storage.load("k") is None
    storage.save("k", '{"a": 1}')
    storage.save("k", '{"a": 2}')
    assert storage.load("k") == '{"a": 2}'
    assert storage.load("other") is None


def test_null_storage():
    storage = NullStorage()
    storage.save("k", "v")
    assert storage.load("k") is None


def test_build_storage_backends(tmp_path):
    assert isinstance(build_storage(Settings(storage_backend="memory")), MemoryStorage)
    assert isinstance(build_storage(Settings(storage_backend="none")), NullStorage)
    sqlite = build_storage(Settings(storage_backend="sqlite", data_dir=str(tmp_path)))
    assert isinstance(sqlite, SqliteStorage)
    assert sqlite.db_path == tmp_path / "skyfreight.db"
