from datetime import time
from uuid import uuid4

from sqlmodel import Field, SQLModel


class Organization(SQLModel, table=True):
    __tablename__ = "organizations"
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str
    is_active: bool = True
    # Booking settings; NULL falls back to the service-wide defaults in Settings
    timezone: str | None = None
    advance_booking_hours: int | None = None
    max_advance_booking_days: int | None = None
    weekend_booking_enabled: bool | None = None
    booking_window_start: time | None = None
    booking_window_end: time | None = None
