from datetime import datetime, timezone

import pytest

from skyfreight.services.store import RecordStore
from skyfreight.storage.database import MemoryStorage
from skyfreight.storage.seed import seed_flights, seed_shipments

FIXED_NOW = datetime(2025, 8, 12, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture()
def clock():
    return lambda: FIXED_NOW


@pytest.fixture()
def storage():
    return MemoryStorage()


@pytest.fixture()
def store(storage, clock):
    """Store seeded with the three sample shipments and flights."""
    return RecordStore(
        shipments=seed_shipments(),
        flights=seed_flights(),
        storage=storage,
        clock=clock,
    )


@pytest.fixture()
def empty_store(storage, clock):
    return RecordStore(storage=storage, clock=clock)
