from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import SystemClock
from app.core.db import get_session
from app.services.availability_service import ClockFactory
from app.services.schedule_store import SqlScheduleStore

__all__ = ["get_session", "get_store", "get_clock_factory"]


def get_store(session: AsyncSession = Depends(get_session)) -> SqlScheduleStore:
    """Read-only schedule/booking lookups bound to the request's session."""
    return SqlScheduleStore(session)


def get_clock_factory() -> ClockFactory:
    """Builds the clock for an organization's timezone. Tests override this with a fixed clock."""
    return SystemClock
