"""Debug accessors for poking at the live store."""

from fastapi import APIRouter, Depends, HTTPException

from skyfreight.errors import DuplicateRecord
from skyfreight.models.flight import Flight
from skyfreight.models.shipment import Shipment
from skyfreight.routers.deps import get_store
from skyfreight.services.store import RecordStore

router = APIRouter()


@router.get("/shipments", response_model=list[Shipment])
async def get_shipments(store: RecordStore = Depends(get_store)):
    return store.list_shipments()


@router.get("/flights", response_model=list[Flight])
async def get_flights(store: RecordStore = Depends(get_store)):
    return store.list_flights()


@router.post("/shipments", response_model=Shipment, status_code=201)
async def add_shipment(shipment: Shipment, store: RecordStore = Depends(get_store)):
    """Insert a complete shipment record verbatim."""
    try:
        return store.add_shipment(shipment)
    except DuplicateRecord as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/shipments/{shipment_id}")
async def delete_shipment(shipment_id: int, store: RecordStore = Depends(get_store)):
    return {"deleted": store.delete_shipment(shipment_id)}


@router.post("/reload")
async def reload_data(store: RecordStore = Depends(get_store)):
    """Re-read persisted state from storage."""
    outcome = store.reload()
    return {"outcome": outcome.value}
