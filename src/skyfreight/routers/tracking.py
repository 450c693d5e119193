from fastapi import APIRouter, Depends, HTTPException

from skyfreight.models.shipment import Shipment
from skyfreight.routers.deps import get_simulator
from skyfreight.tasks.scheduler import TrackingSimulator

router = APIRouter()


@router.post("/{code}", response_model=Shipment)
async def track(code: str, simulator: TrackingSimulator = Depends(get_simulator)):
    """Look up a tracking code and start simulating its progress."""
    if not code.strip():
        raise HTTPException(status_code=400, detail="Please enter a tracking code")
    shipment = simulator.lookup(code)
    if shipment is None:
        raise HTTPException(status_code=404, detail="Tracking code not found")
    return shipment


@router.delete("/{code}")
async def stop_tracking(code: str, simulator: TrackingSimulator = Depends(get_simulator)):
    return {"stopped": simulator.stop(code)}
