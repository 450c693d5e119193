"""In-memory shipment and flight records with write-through persistence.

The store is constructed once at startup (from seed data, then overlaid with
whatever the storage backend holds) and handed to every consumer. All reads
return deep copies, so callers can never mutate store state behind its back.
Every successful mutation appends one activity entry and saves the whole
snapshot through the injected :class:`~skyfreight.storage.database.Storage`.
"""

import copy
import logging
import random
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta
from enum import Enum

from pydantic import ValidationError

from skyfreight.config import Settings
from skyfreight.errors import DuplicateRecord, UnknownShipment
from skyfreight.models.activity import ActivityEntry
from skyfreight.models.flight import Flight, FlightCreate
from skyfreight.models.payload import StorePayload
from skyfreight.models.shipment import (
    HistoryEntry,
    Shipment,
    ShipmentCreate,
    ShipmentUpdate,
    coerce_status,
    utcnow,
)
from skyfreight.services import status as status_policy
from skyfreight.services.activity import DEFAULT_LIMIT, ActivityLog
from skyfreight.storage.database import NullStorage, Storage
from skyfreight.storage.seed import seed_flights, seed_shipments

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "hmavi_data_v1"


class LoadOutcome(str, Enum):
    LOADED = "loaded"
    EMPTY = "empty"
    MALFORMED = "malformed"


class RecordStore:
    def __init__(
        self,
        shipments: list[Shipment] | None = None,
        flights: list[Flight] | None = None,
        storage: Storage | None = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
        activity_limit: int = DEFAULT_LIMIT,
        tracking_prefix: str = "HM",
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._shipments: list[Shipment] = [s.model_copy(deep=True) for s in shipments or []]
        self._flights: list[Flight] = [f.model_copy(deep=True) for f in flights or []]
        self.storage: Storage = storage or NullStorage()
        self.storage_key = storage_key
        self.tracking_prefix = tracking_prefix
        self._clock = clock
        self.activity = ActivityLog(limit=activity_limit, clock=clock)

    @classmethod
    def from_settings(cls, config: Settings, storage: Storage) -> "RecordStore":
        """Seeded store configured from :class:`~skyfreight.config.Settings`."""
        return cls(
            shipments=seed_shipments(),
            flights=seed_flights(),
            storage=storage,
            storage_key=config.storage_key,
            activity_limit=config.activity_limit,
            tracking_prefix=config.tracking_prefix,
        )

    def now(self) -> datetime:
        return self._clock()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def snapshot(self) -> StorePayload:
        return StorePayload(
            shipments=[s.model_copy(deep=True) for s in self._shipments],
            flights=[f.model_copy(deep=True) for f in self._flights],
            activity=self.activity.list(),
        )

    def to_json(self) -> str:
        return self.snapshot().model_dump_json(by_alias=True)

    def load(self) -> LoadOutcome:
        """Overlay persisted state on the current collections.

        A malformed payload is discarded and the current data kept.
        """
        raw = self.storage.load(self.storage_key)
        if raw is None:
            return LoadOutcome.EMPTY

        try:
            payload = StorePayload.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"Discarding malformed persisted state under {self.storage_key!r}: "
                f"{e.error_count()} error(s)"
            )
            return LoadOutcome.MALFORMED

        if payload.shipments is not None:
            self._shipments = payload.shipments
        if payload.flights is not None:
            self._flights = payload.flights
        if payload.activity is not None:
            self.activity.load(payload.activity)
        logger.info(
            f"Loaded {len(self._shipments)} shipments, {len(self._flights)} flights "
            f"and {len(self.activity)} activity entries"
        )
        return LoadOutcome.LOADED

    def reload(self) -> LoadOutcome:
        return self.load()

    def _persist(self) -> None:
        self.storage.save(self.storage_key, self.to_json())

    @contextmanager
    def _commit(self, activity_text: str | None) -> Iterator[None]:
        """Apply a mutation as a unit: log it, save it, or undo it entirely."""
        shipments = copy.deepcopy(self._shipments)
        flights = copy.deepcopy(self._flights)
        activity = self.activity.list()
        try:
            yield
            if activity_text is not None:
                self.activity.append(activity_text)
            self._persist()
        except Exception:
            self._shipments = shipments
            self._flights = flights
            self.activity.load(activity)
            raise

    # ------------------------------------------------------------------
    # Shipments
    # ------------------------------------------------------------------

    def _find_shipment(self, shipment_id: int) -> Shipment | None:
        return next((s for s in self._shipments if s.id == shipment_id), None)

    def _find_tracking(self, code: str) -> Shipment | None:
        needle = code.strip().lower()
        return next((s for s in self._shipments if s.tracking.lower() == needle), None)

    def list_shipments(self, status: str | None = None, query: str | None = None) -> list[Shipment]:
        """Shipments matching an optional status and free-text query, newest first."""
        results = self._shipments
        if status:
            status = coerce_status(status)
            results = [s for s in results if s.status == status]
        q = (query or "").strip()
        if q:
            results = [s for s in results if s.matches(q)]
        return [s.model_copy(deep=True) for s in results]

    def get_shipment(self, shipment_id: int) -> Shipment | None:
        shipment = self._find_shipment(shipment_id)
        return shipment.model_copy(deep=True) if shipment else None

    def find_by_tracking(self, code: str) -> Shipment | None:
        shipment = self._find_tracking(code)
        return shipment.model_copy(deep=True) if shipment else None

    def next_shipment_id(self) -> int:
        return max((s.id for s in self._shipments), default=0) + 1

    def tracking_code_for(self, shipment_id: int) -> str:
        return f"{self.tracking_prefix}-{self._clock().year}-{shipment_id:05d}"

    def _free_tracking_code(self, seq: int) -> str:
        # A hand-picked code may already sit on this sequence number.
        while self._find_tracking(self.tracking_code_for(seq)) is not None:
            seq += 1
        return self.tracking_code_for(seq)

    def create_shipment(self, fields: ShipmentCreate | None = None) -> Shipment:
        """Create a Pending shipment at the front of the collection."""
        fields = fields or ShipmentCreate()
        new_id = self.next_shipment_id()
        tracking = (fields.tracking or "").strip()
        if not tracking:
            tracking = self._free_tracking_code(new_id)
        elif self._find_tracking(tracking) is not None:
            raise DuplicateRecord(f"Tracking code {tracking} already exists")

        shipment = Shipment(
            id=new_id,
            sender=fields.sender.strip(),
            recipient=fields.recipient.strip(),
            tracking=tracking,
            status="Pending",
            flight=(fields.flight or "").strip() or None,
            origin=fields.origin.strip(),
            destination=fields.destination.strip(),
            weight_kg=fields.weight_kg,
            history=[HistoryEntry(time=self._clock(), text="Shipment created")],
        )
        with self._commit(f"Shipment {shipment.tracking} created"):
            self._shipments.insert(0, shipment)
        logger.info(f"Created shipment {shipment.id} ({shipment.tracking})")
        return shipment.model_copy(deep=True)

    def add_shipment(self, record: Shipment) -> Shipment:
        """Insert a fully formed record as-is (admin/debug path)."""
        if self._find_shipment(record.id) is not None:
            raise DuplicateRecord(f"Shipment {record.id} already exists")
        if self._find_tracking(record.tracking) is not None:
            raise DuplicateRecord(f"Tracking code {record.tracking} already exists")

        shipment = record.model_copy(deep=True)
        with self._commit(f"Shipment {shipment.tracking} added"):
            self._shipments.insert(0, shipment)
        return shipment.model_copy(deep=True)

    def update_shipment(self, shipment_id: int, fields: ShipmentUpdate) -> Shipment | None:
        """Apply an edit; a status change must move forward.

        Raises InvalidTransition (leaving the shipment untouched) when the
        requested status is not later than the current one.
        """
        shipment = self._find_shipment(shipment_id)
        if shipment is None:
            return None

        changes = fields.model_dump(exclude_unset=True)
        new_status = changes.pop("status", None)
        status_changed = new_status is not None and new_status != shipment.status
        if status_changed:
            status_policy.ensure_transition(shipment.status, new_status)

        with self._commit(f"Shipment {shipment.tracking} updated"):
            for name, value in changes.items():
                if name == "flight":
                    value = (value or "").strip() or None
                elif value is None:
                    continue
                elif isinstance(value, str):
                    value = value.strip()
                setattr(shipment, name, value)
            if status_changed:
                shipment.status = new_status
                shipment.history.append(
                    HistoryEntry(time=self._clock(), text=f"Status changed to {new_status}")
                )
        return shipment.model_copy(deep=True)

    def delete_shipment(self, shipment_id: int) -> bool:
        """Remove a shipment. Flights keep any reference to its id."""
        shipment = self._find_shipment(shipment_id)
        if shipment is None:
            return False
        with self._commit(f"Shipment {shipment.tracking} deleted"):
            self._shipments = [s for s in self._shipments if s.id != shipment_id]
        logger.info(f"Deleted shipment {shipment_id} ({shipment.tracking})")
        return True

    def advance_tracking(self, code: str) -> Shipment | None:
        """Move the shipment with tracking *code* one status forward.

        Delivered shipments are returned unchanged.
        """
        shipment = self._find_tracking(code)
        if shipment is None:
            return None

        upcoming = status_policy.next_status(shipment.status)
        if upcoming is None:
            return shipment.model_copy(deep=True)

        with self._commit(f"Tracking {shipment.tracking} status → {upcoming}"):
            shipment.status = upcoming
            shipment.history.append(
                HistoryEntry(time=self._clock(), text=f"Status updated to {upcoming}")
            )
        logger.info(f"Advanced {shipment.tracking} to {upcoming}")
        return shipment.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Flights
    # ------------------------------------------------------------------

    def _find_flight(self, flight_id: str) -> Flight | None:
        return next((f for f in self._flights if f.id == flight_id), None)

    def list_flights(self) -> list[Flight]:
        return [f.model_copy(deep=True) for f in self._flights]

    def get_flight(self, flight_id: str) -> Flight | None:
        flight = self._find_flight(flight_id)
        return flight.model_copy(deep=True) if flight else None

    def _random_flight_number(self) -> str:
        taken = {f.id for f in self._flights}
        free = [n for n in range(100, 1000) if f"HM{n}" not in taken]
        if not free:
            raise DuplicateRecord("No free flight numbers left")
        return f"HM{random.choice(free)}"

    def create_flight(self, fields: FlightCreate | None = None) -> Flight:
        """Schedule a new flight at the front of the collection."""
        fields = fields or FlightCreate()
        number = (fields.flight_number or "").strip() or self._random_flight_number()
        if self._find_flight(number) is not None:
            raise DuplicateRecord(f"Flight {number} already exists")
        known = {s.id for s in self._shipments}
        missing = [i for i in fields.assigned if i not in known]
        if missing:
            raise UnknownShipment(missing)

        now = self._clock()
        flight = Flight(
            id=number,
            flight_number=number,
            origin=fields.origin,
            destination=fields.destination,
            etd=fields.etd or now + timedelta(hours=24),
            eta=fields.eta or now + timedelta(hours=26),
            assigned=fields.assigned,
            status=fields.status,
        )
        with self._commit(f"Flight {flight.flight_number} created"):
            self._flights.insert(0, flight)
        logger.info(f"Created flight {flight.id}")
        return flight.model_copy(deep=True)

    def assigned_shipments(self, flight_id: str) -> list[Shipment] | None:
        """Resolve a flight's assigned ids, skipping ids with no shipment."""
        flight = self._find_flight(flight_id)
        if flight is None:
            return None
        by_id = {s.id: s for s in self._shipments}
        return [by_id[i].model_copy(deep=True) for i in flight.assigned if i in by_id]

    # ------------------------------------------------------------------
    # Activity
    # ------------------------------------------------------------------

    def list_activity(self) -> list[ActivityEntry]:
        return self.activity.list()

    def clear_activity(self) -> None:
        with self._commit(None):
            self.activity.clear()
