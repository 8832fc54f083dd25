from fastapi import APIRouter, Depends, Query

from app.api.deps import get_clock_factory, get_store
from app.api.schemas.availability import (
    AvailabilityRangeResponse,
    AvailabilityResponse,
    DayAvailability,
)
from app.core.config import settings
from app.core.errors import InvalidDuration
from app.services.availability_service import ClockFactory, load_availability, load_availability_range
from app.services.civil_time import parse_civil_date
from app.services.domain import AvailabilityQuery
from app.services.schedule_store import SqlScheduleStore

router = APIRouter(prefix="/availability", tags=["availability"])


def _parse_duration(raw: str | None) -> int:
    if raw is None or raw == "":
        return settings.default_slot_duration_minutes
    try:
        return int(raw)
    except ValueError:
        raise InvalidDuration(f"durationMinutes must be a positive integer, got {raw!r}") from None


@router.get("", response_model=AvailabilityResponse)
async def get_availability(
    organization_id: str = Query(..., alias="organizationId"),
    date_param: str = Query(..., alias="date"),
    service_id: str = Query(..., alias="serviceId"),
    role: str = Query(...),
    duration_minutes: str | None = Query(None, alias="durationMinutes"),
    use_standard_rules: bool = Query(False, alias="useStandardRules"),
    location_id: str | None = Query(None, alias="locationId"),
    store: SqlScheduleStore = Depends(get_store),
    clock_factory: ClockFactory = Depends(get_clock_factory),
) -> AvailabilityResponse:
    """Slots for one civil date (YYYY-MM-DD). Each slot has available (bool) and, when not, a reason."""
    query = AvailabilityQuery(
        date=parse_civil_date(date_param),
        duration_minutes=_parse_duration(duration_minutes),
        role=role,
        override_to_standard_rules=use_standard_rules,
        organization_id=organization_id,
        service_id=service_id,
        location_id=location_id,
    )
    result = await load_availability(store, query, clock_factory)
    return AvailabilityResponse.from_result(result)


@router.get("/range", response_model=AvailabilityRangeResponse)
async def get_availability_range(
    organization_id: str = Query(..., alias="organizationId"),
    start_date: str = Query(..., alias="startDate"),
    end_date: str = Query(..., alias="endDate"),
    service_id: str = Query(..., alias="serviceId"),
    role: str = Query(...),
    duration_minutes: str | None = Query(None, alias="durationMinutes"),
    use_standard_rules: bool = Query(False, alias="useStandardRules"),
    location_id: str | None = Query(None, alias="locationId"),
    store: SqlScheduleStore = Depends(get_store),
    clock_factory: ClockFactory = Depends(get_clock_factory),
) -> AvailabilityRangeResponse:
    """Per-day availability for a date range (weekly selector), at most max_range_days days."""
    start = parse_civil_date(start_date)
    end = parse_civil_date(end_date)
    query = AvailabilityQuery(
        date=start,
        duration_minutes=_parse_duration(duration_minutes),
        role=role,
        override_to_standard_rules=use_standard_rules,
        organization_id=organization_id,
        service_id=service_id,
        location_id=location_id,
    )
    results = await load_availability_range(
        store, query, start, end, clock_factory, max_days=settings.max_range_days
    )
    return AvailabilityRangeResponse(
        days={d.isoformat(): DayAvailability.from_result(r) for d, r in results.items()}
    )
