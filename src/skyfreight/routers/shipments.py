from fastapi import APIRouter, Depends, HTTPException, Response

from skyfreight.errors import DuplicateRecord, InvalidTransition
from skyfreight.models.shipment import Shipment, ShipmentCreate, ShipmentStatus, ShipmentUpdate
from skyfreight.routers.deps import get_store
from skyfreight.services.store import RecordStore

router = APIRouter()


@router.get("", response_model=list[Shipment])
async def list_shipments(
    status: ShipmentStatus | None = None,
    q: str | None = None,
    store: RecordStore = Depends(get_store),
):
    """List shipments, optionally filtered by status and a search string."""
    return store.list_shipments(status=status, query=q)


@router.get("/{shipment_id}", response_model=Shipment)
async def get_shipment(shipment_id: int, store: RecordStore = Depends(get_store)):
    shipment = store.get_shipment(shipment_id)
    if shipment is None:
        raise HTTPException(status_code=404, detail="Shipment not found")
    return shipment


@router.post("", response_model=Shipment, status_code=201)
async def create_shipment(
    fields: ShipmentCreate | None = None, store: RecordStore = Depends(get_store)
):
    """Create a new Pending shipment."""
    try:
        return store.create_shipment(fields)
    except DuplicateRecord as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.patch("/{shipment_id}", response_model=Shipment)
async def update_shipment(
    shipment_id: int, fields: ShipmentUpdate, store: RecordStore = Depends(get_store)
):
    """Edit a shipment. Status may only move forward."""
    try:
        shipment = store.update_shipment(shipment_id, fields)
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    if shipment is None:
        raise HTTPException(status_code=404, detail="Shipment not found")
    return shipment


@router.delete("/{shipment_id}", status_code=204)
async def delete_shipment(shipment_id: int, store: RecordStore = Depends(get_store)):
    """Delete a shipment."""
    if not store.delete_shipment(shipment_id):
        raise HTTPException(status_code=404, detail="Shipment not found")
    return Response(status_code=204)
