from fastapi import Request

from skyfreight.services.store import RecordStore
from skyfreight.tasks.scheduler import TrackingSimulator


def get_store(request: Request) -> RecordStore:
    """Dependency returning the store built at startup."""
    return request.app.state.store


def get_simulator(request: Request) -> TrackingSimulator:
    return request.app.state.simulator
