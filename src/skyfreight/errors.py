class StoreError(Exception):
    """Base class for record store failures the caller is expected to handle."""


class InvalidTransition(StoreError):
    """A shipment status change that does not move forward."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change status from {current} to {requested}")


class DuplicateRecord(StoreError):
    """A record with the same identifier or tracking code already exists."""


class UnknownShipment(StoreError):
    """A flight refers to shipment ids that do not exist."""

    def __init__(self, shipment_ids: list[int]):
        self.shipment_ids = shipment_ids
        super().__init__(f"Unknown shipment ids: {', '.join(map(str, shipment_ids))}")
