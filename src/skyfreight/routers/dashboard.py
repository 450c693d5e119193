from fastapi import APIRouter, Depends, Query, Response

from skyfreight.models.activity import ActivityEntry
from skyfreight.models.dashboard import DailyCount, DashboardStats
from skyfreight.routers.deps import get_store
from skyfreight.services.dashboard import daily_created_counts, dashboard_stats
from skyfreight.services.store import RecordStore

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def stats(store: RecordStore = Depends(get_store)):
    return dashboard_stats(store)


@router.get("/daily", response_model=list[DailyCount])
async def daily(days: int = Query(7, ge=1, le=90), store: RecordStore = Depends(get_store)):
    """Shipments created per day, oldest day first."""
    return daily_created_counts(store, days=days)


@router.get("/activity", response_model=list[ActivityEntry])
async def activity(store: RecordStore = Depends(get_store)):
    return store.list_activity()


@router.delete("/activity", status_code=204)
async def clear_activity(store: RecordStore = Depends(get_store)):
    store.clear_activity()
    return Response(status_code=204)
