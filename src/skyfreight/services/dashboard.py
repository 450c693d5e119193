from datetime import date, timedelta, timezone

from skyfreight.models.dashboard import DailyCount, DashboardStats
from skyfreight.services.store import RecordStore


def dashboard_stats(store: RecordStore) -> DashboardStats:
    """Headline counters for the dashboard cards."""
    shipments = store.list_shipments()
    return DashboardStats(
        total_shipments=len(shipments),
        active_flights=sum(1 for f in store.list_flights() if f.status == "Active"),
        pending_shipments=sum(1 for s in shipments if s.status == "Pending"),
        delivered_shipments=sum(1 for s in shipments if s.status == "Delivered"),
    )


def daily_created_counts(
    store: RecordStore, days: int = 7, today: date | None = None
) -> list[DailyCount]:
    """Shipments created on each of the last *days* UTC dates, oldest first."""
    today = today or store.now().astimezone(timezone.utc).date()
    window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    counts = dict.fromkeys(window, 0)
    for shipment in store.list_shipments():
        created = shipment.created_at
        if created is None:
            continue
        if created.tzinfo is not None:
            created = created.astimezone(timezone.utc)
        day = created.date()
        if day in counts:
            counts[day] += 1
    return [DailyCount(day=day, count=count) for day, count in counts.items()]
