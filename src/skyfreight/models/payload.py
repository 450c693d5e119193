from pydantic import BaseModel

from skyfreight.models.activity import ActivityEntry
from skyfreight.models.flight import Flight
from skyfreight.models.shipment import Shipment


class StorePayload(BaseModel):
    """Shape of the persisted blob.

    Every collection is optional so that a payload written by an older
    build (or edited by hand) only replaces what it actually contains.
    """

    shipments: list[Shipment] | None = None
    flights: list[Flight] | None = None
    activity: list[ActivityEntry] | None = None
