from datetime import datetime, timezone
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

ShipmentStatusName = Literal["Pending", "In Transit", "Delivered"]

# Ordered: a shipment may only move to the right.
SHIPMENT_STATUSES: tuple[ShipmentStatusName, ...] = ("Pending", "In Transit", "Delivered")

_STATUS_ALIASES = {
    "pending": "Pending",
    "in transit": "In Transit",
    "intransit": "In Transit",
    "in_transit": "In Transit",
    "delivered": "Delivered",
}


def coerce_status(value: Any) -> Any:
    if isinstance(value, str):
        return _STATUS_ALIASES.get(value.strip().lower(), value)
    return value


ShipmentStatus = Annotated[ShipmentStatusName, BeforeValidator(coerce_status)]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HistoryEntry(BaseModel):
    time: datetime
    text: str


class Shipment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    sender: str = ""
    recipient: str = ""
    tracking: str
    status: ShipmentStatus = "Pending"
    flight: str | None = None
    origin: str = ""
    destination: str = ""
    weight_kg: float = Field(default=0, ge=0, alias="weightKg")
    history: list[HistoryEntry] = Field(default_factory=list)

    @property
    def created_at(self) -> datetime | None:
        """Timestamp of the creation event, if the history has one."""
        if self.history:
            return self.history[0].time
        return None

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on sender, recipient or tracking code."""
        needle = query.lower()
        return (
            needle in self.sender.lower()
            or needle in self.recipient.lower()
            or needle in self.tracking.lower()
        )


class ShipmentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sender: str = "New Sender"
    recipient: str = "New Recipient"
    tracking: str | None = None
    flight: str | None = None
    origin: str = ""
    destination: str = ""
    weight_kg: float = Field(default=0, ge=0, alias="weightKg")


class ShipmentUpdate(BaseModel):
    """Partial edit; only fields that were explicitly set are applied."""

    model_config = ConfigDict(populate_by_name=True)

    sender: str | None = None
    recipient: str | None = None
    flight: str | None = None
    origin: str | None = None
    destination: str | None = None
    weight_kg: float | None = Field(default=None, ge=0, alias="weightKg")
    status: ShipmentStatus | None = None
