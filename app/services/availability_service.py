import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Any, Protocol

from app.core.clock import CivilMoment, FixedClock
from app.core.errors import InvalidDate, InvalidDateRange
from app.services.booking_policy import BookingWindowPolicy, select_rule
from app.services.booking_settings_service import BookingSettings, build_policy
from app.services.civil_time import parse_civil_date
from app.services.domain import (
    AppliedRule,
    AvailabilityQuery,
    AvailabilityResult,
    BlockedInterval,
    BookedInterval,
    Role,
    Slot,
    WorkingHours,
)
from app.services.slot_service import generate_slots, validate_duration

logger = logging.getLogger(__name__)


class Clock(Protocol):
    def now(self) -> CivilMoment: ...


ClockFactory = Callable[[str], Clock]


def _coerce_date(value: date | str) -> date:
    if isinstance(value, datetime):
        raise InvalidDate(f"Expected a civil date, got a datetime {value!r}")
    if isinstance(value, date):
        return value
    return parse_civil_date(value)


def validate_query(query: AvailabilityQuery) -> tuple[AvailabilityQuery, AppliedRule]:
    """Fail fast on bad input before anything is computed or fetched.

    Returns the query with its date and role normalized, plus the rule it selects.
    """
    validate_duration(query.duration_minutes)
    rule = select_rule(query.role, query.override_to_standard_rules)
    return replace(query, date=_coerce_date(query.date), role=Role.parse(query.role)), rule


def compute_availability(
    query: AvailabilityQuery,
    provider_ids: Sequence[str],
    weekly_hours: Mapping[str, Sequence[WorkingHours]],
    bookings: Mapping[str, Sequence[BookedInterval]],
    clock: Clock,
    policy: BookingWindowPolicy | None = None,
    blocks: Mapping[str, Sequence[BlockedInterval]] | None = None,
) -> AvailabilityResult:
    """Bookable slots for the query's date across the given providers.

    Pure over its inputs: schedules and bookings are prefetched by the caller.
    An empty provider set is reported through ``no_providers_associated`` rather
    than as an unexplained empty list.
    """
    query, rule = validate_query(query)
    if not provider_ids:
        logger.info("Availability %s: no providers associated with service %s", query.date, query.service_id)
        return AvailabilityResult(slots=[], applied_rule=rule, no_providers_associated=True)

    policy = policy or BookingWindowPolicy()
    blocks = blocks or {}
    candidates: list[Slot] = []
    for provider_id in dict.fromkeys(provider_ids):
        candidates.extend(
            generate_slots(
                provider_id,
                query.date,
                query.duration_minutes,
                weekly_hours.get(provider_id, ()),
                bookings.get(provider_id, ()),
                blocks.get(provider_id, ()),
                location_id=query.location_id,
            )
        )

    now = clock.now()
    slots, rule = policy.apply(candidates, now, query.role, query.override_to_standard_rules)
    slots.sort(key=lambda s: s.sort_key)
    result = AvailabilityResult(slots=slots, applied_rule=rule, no_providers_associated=False)
    logger.info(
        "Availability %s role=%s rule=%s providers=%d slots=%d available=%d",
        query.date, query.role.value, rule.value, len(provider_ids), len(slots), len(result.available_slots),
    )
    return result


def summarize(result: AvailabilityResult) -> dict[str, int]:
    return {"total_slots": len(result.slots), "available_slots": len(result.available_slots)}


async def _prefetch_day(store, provider_ids: Sequence[str], d: date) -> tuple[dict, dict]:
    bookings: dict[str, list[BookedInterval]] = {}
    blocks: dict[str, list[BlockedInterval]] = {}
    # One AsyncSession cannot run queries concurrently, so fetch sequentially
    for provider_id in provider_ids:
        bookings[provider_id] = await store.get_booked_intervals(provider_id, d)
        blocks[provider_id] = await store.get_blocked_intervals(provider_id, d)
    return bookings, blocks


async def _prefetch_providers(store, query: AvailabilityQuery) -> tuple[list[str], dict]:
    if query.service_id is None:
        raise ValueError("service_id is required to resolve providers")
    provider_ids = await store.get_providers_for_service(query.service_id, query.organization_id)
    weekly_hours = {pid: await store.get_weekly_hours(pid) for pid in provider_ids}
    return provider_ids, weekly_hours


async def load_availability(
    store,
    query: AvailabilityQuery,
    clock_factory: ClockFactory,
    booking_settings: BookingSettings | None = None,
) -> AvailabilityResult:
    """Fetch the service's providers, schedules and bookings, then compute availability."""
    query, _ = validate_query(query)
    if booking_settings is None:
        booking_settings = await store.get_booking_settings(query.organization_id)
    provider_ids, weekly_hours = await _prefetch_providers(store, query)
    if not provider_ids:
        logger.warning(
            "Service %s in organization %s has no associated providers",
            query.service_id, query.organization_id,
        )
        return compute_availability(query, [], {}, {}, clock_factory(booking_settings.timezone))
    bookings, blocks = await _prefetch_day(store, provider_ids, query.date)
    return compute_availability(
        query,
        provider_ids,
        weekly_hours,
        bookings,
        clock_factory(booking_settings.timezone),
        policy=build_policy(booking_settings),
        blocks=blocks,
    )


async def load_availability_range(
    store,
    query: AvailabilityQuery,
    start: date | str,
    end: date | str,
    clock_factory: ClockFactory,
    max_days: int,
) -> dict[date, AvailabilityResult]:
    """One result per civil date in [start, end], for the weekly availability selector."""
    start, end = _coerce_date(start), _coerce_date(end)
    if end < start:
        raise InvalidDateRange(f"endDate {end} is before startDate {start}")
    days = (end - start).days + 1
    if days > max_days:
        raise InvalidDateRange(f"Range of {days} days exceeds the maximum of {max_days}")
    query, _ = validate_query(replace(query, date=start))

    booking_settings = await store.get_booking_settings(query.organization_id)
    provider_ids, weekly_hours = await _prefetch_providers(store, query)
    policy = build_policy(booking_settings)
    # a single "now" for the whole range
    clock = clock_factory(booking_settings.timezone)
    frozen = FixedClock(clock.now())

    out: dict[date, AvailabilityResult] = {}
    for offset in range(days):
        d = start + timedelta(days=offset)
        day_query = replace(query, date=d)
        if not provider_ids:
            out[d] = compute_availability(day_query, [], {}, {}, frozen)
            continue
        bookings, blocks = await _prefetch_day(store, provider_ids, d)
        out[d] = compute_availability(
            day_query, provider_ids, weekly_hours, bookings, frozen, policy=policy, blocks=blocks
        )
    return out


async def services_without_providers(store, organization_id: str) -> list[dict[str, Any]]:
    """Active services that no provider offers; these always show as "no providers" to patients."""
    services = await store.list_services_without_providers(organization_id)
    for s in services:
        logger.warning("Service %s (%s) has no associated providers", s.id, s.name)
    return [{"id": s.id, "name": s.name, "duration_minutes": s.duration_minutes} for s in services]
