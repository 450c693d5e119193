from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

FlightStatus = Literal["Upcoming", "Active", "Completed"]


class Flight(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    flight_number: str = Field(default="", alias="flightNumber")
    origin: str = ""
    destination: str = ""
    etd: datetime
    eta: datetime
    assigned: list[int] = Field(default_factory=list)
    status: FlightStatus = "Upcoming"

    @model_validator(mode="after")
    def _fill_flight_number(self) -> "Flight":
        # The flight number doubles as the identifier.
        if not self.flight_number:
            self.flight_number = self.id
        return self

    @field_validator("assigned")
    @classmethod
    def _dedupe_assigned(cls, value: list[int]) -> list[int]:
        return list(dict.fromkeys(value))


class FlightCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    flight_number: str | None = Field(default=None, alias="flightNumber")
    origin: str = "LHR"
    destination: str = "CDG"
    etd: datetime | None = None
    eta: datetime | None = None
    assigned: list[int] = Field(default_factory=list)
    status: FlightStatus = "Upcoming"
