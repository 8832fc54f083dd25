from datetime import datetime, time

from sqlmodel import Field, SQLModel


class WorkingHours(SQLModel, table=True):
    """Recurring weekly working hours. day_of_week: 0 = Sunday ... 6 = Saturday."""

    __tablename__ = "working_hours"
    id: int | None = Field(default=None, primary_key=True)
    provider_id: str = Field(foreign_key="providers.id", index=True)
    day_of_week: int = Field(ge=0, le=6, index=True)
    start_time: time
    end_time: time
    location_id: str | None = None
    is_active: bool = True


class AvailabilityBlock(SQLModel, table=True):
    """Vacations, sick days and other provider absences. Civil (timezone-less) datetimes."""

    __tablename__ = "availability_blocks"
    id: int | None = Field(default=None, primary_key=True)
    provider_id: str = Field(foreign_key="providers.id", index=True)
    start_datetime: datetime = Field(index=True)
    end_datetime: datetime = Field(index=True)
    reason: str | None = None
    block_type: str = "other"
