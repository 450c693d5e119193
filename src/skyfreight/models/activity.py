from datetime import datetime

from pydantic import BaseModel


class ActivityEntry(BaseModel):
    time: datetime
    text: str
