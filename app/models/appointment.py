from datetime import UTC, date, datetime, time
from uuid import uuid4

from sqlmodel import Field, SQLModel

STATUS_CANCELLED = "cancelled"


def _utc_naive_now() -> datetime:
    """Naive UTC for TIMESTAMP WITHOUT TIME ZONE columns."""
    return datetime.now(UTC).replace(tzinfo=None)


class Appointment(SQLModel, table=True):
    """Existing bookings, read here only to mark occupied slots."""

    __tablename__ = "appointments"
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    organization_id: str = Field(foreign_key="organizations.id", index=True)
    provider_id: str = Field(foreign_key="providers.id", index=True)
    service_id: str | None = Field(default=None, foreign_key="services.id")
    appointment_date: date = Field(index=True)
    start_time: time
    end_time: time
    status: str = "scheduled"
    created_at: datetime = Field(default_factory=_utc_naive_now)
