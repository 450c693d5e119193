from fastapi import APIRouter, Depends, HTTPException

from skyfreight.errors import DuplicateRecord, UnknownShipment
from skyfreight.models.flight import Flight, FlightCreate
from skyfreight.models.shipment import Shipment
from skyfreight.routers.deps import get_store
from skyfreight.services.store import RecordStore

router = APIRouter()


@router.get("", response_model=list[Flight])
async def list_flights(store: RecordStore = Depends(get_store)):
    return store.list_flights()


@router.get("/{flight_id}", response_model=Flight)
async def get_flight(flight_id: str, store: RecordStore = Depends(get_store)):
    flight = store.get_flight(flight_id)
    if flight is None:
        raise HTTPException(status_code=404, detail="Flight not found")
    return flight


@router.get("/{flight_id}/shipments", response_model=list[Shipment])
async def flight_shipments(flight_id: str, store: RecordStore = Depends(get_store)):
    """Shipments assigned to a flight that still exist."""
    shipments = store.assigned_shipments(flight_id)
    if shipments is None:
        raise HTTPException(status_code=404, detail="Flight not found")
    return shipments


@router.post("", response_model=Flight, status_code=201)
async def create_flight(fields: FlightCreate | None = None, store: RecordStore = Depends(get_store)):
    """Schedule a new flight."""
    try:
        return store.create_flight(fields)
    except DuplicateRecord as e:
        raise HTTPException(status_code=409, detail=str(e))
    except UnknownShipment as e:
        raise HTTPException(status_code=422, detail=str(e))
