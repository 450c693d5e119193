from datetime import date

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_shipments: int
    active_flights: int
    pending_shipments: int
    delivered_shipments: int


class DailyCount(BaseModel):
    day: date
    count: int
