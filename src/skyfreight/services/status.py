"""Forward-only shipment status progression."""

from skyfreight.errors import InvalidTransition
from skyfreight.models.shipment import SHIPMENT_STATUSES, ShipmentStatusName

TERMINAL_STATUS: ShipmentStatusName = SHIPMENT_STATUSES[-1]


def rank(status: str) -> int:
    """Position of *status* in the Pending -> In Transit -> Delivered order."""
    try:
        return SHIPMENT_STATUSES.index(status)  # type: ignore[arg-type]
    except ValueError:
        raise ValueError(f"Unknown shipment status: {status!r}") from None


def can_transition(current: str, requested: str) -> bool:
    return rank(requested) > rank(current)


def ensure_transition(current: str, requested: str) -> None:
    """Raise InvalidTransition unless *requested* is strictly later than *current*."""
    if not can_transition(current, requested):
        raise InvalidTransition(current, requested)


def is_terminal(status: str) -> bool:
    return status == TERMINAL_STATUS


def next_status(status: str) -> ShipmentStatusName | None:
    """The status that follows *status*, or None when it is terminal."""
    idx = rank(status)
    if idx + 1 < len(SHIPMENT_STATUSES):
        return SHIPMENT_STATUSES[idx + 1]
    return None
