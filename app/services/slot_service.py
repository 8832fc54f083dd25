import logging
from collections.abc import Iterable
from datetime import date, datetime, time

from app.core.errors import InvalidDuration
from app.services.civil_time import day_of_week, from_minutes, to_minutes
from app.services.domain import BlockedInterval, BookedInterval, Slot, WorkingHours

logger = logging.getLogger(__name__)

REASON_BOOKED = "booked"


def validate_duration(duration_minutes: int) -> int:
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int) or duration_minutes <= 0:
        raise InvalidDuration(f"durationMinutes must be a positive integer, got {duration_minutes!r}")
    return duration_minutes


def intervals_overlap(start1, end1, start2, end2) -> bool:
    """Half-open overlap: touching intervals (end1 == start2) do not overlap."""
    return start1 < end2 and start2 < end1


def _slot_minutes_for_interval(start: time, end: time, duration_minutes: int) -> list[int]:
    """Start minutes of every duration-sized step that fits entirely inside [start, end)."""
    out: list[int] = []
    current = to_minutes(start)
    end_minutes = to_minutes(end)
    while current + duration_minutes <= end_minutes:
        out.append(current)
        current += duration_minutes
    return out


def _blocking_reason(slot_start: datetime, slot_end: datetime, blocks: Iterable[BlockedInterval]) -> str | None:
    for block in blocks:
        if intervals_overlap(slot_start, slot_end, block.start, block.end):
            return block.reason
    return None


def generate_slots(
    provider_id: str,
    target_date: date,
    duration_minutes: int,
    weekly_hours: Iterable[WorkingHours],
    booked: Iterable[BookedInterval] = (),
    blocks: Iterable[BlockedInterval] = (),
    location_id: str | None = None,
) -> list[Slot]:
    """Candidate slots for one provider on one civil date.

    Walks each working-hours entry for the date's weekday in duration-sized steps.
    Slots overlapping a block or an existing booking are kept but marked unavailable.
    No entry for that weekday gives an empty list.
    """
    validate_duration(duration_minutes)
    weekday = day_of_week(target_date)
    booked = list(booked)
    blocks = list(blocks)

    slots: list[Slot] = []
    # entries are walked in start order, so one cursor is enough to keep slots disjoint
    emitted_end = 0
    for entry in sorted(weekly_hours, key=lambda e: (e.start_time, e.end_time)):
        if entry.provider_id != provider_id or entry.day_of_week != weekday:
            continue
        if location_id is not None and entry.location_id != location_id:
            continue
        if entry.start_time >= entry.end_time:
            logger.warning(
                "Skipping working hours for provider %s: start %s is not before end %s",
                provider_id, entry.start_time, entry.end_time,
            )
            continue
        for start_minutes in _slot_minutes_for_interval(entry.start_time, entry.end_time, duration_minutes):
            end_minutes = start_minutes + duration_minutes
            if start_minutes < emitted_end:
                continue
            emitted_end = end_minutes
            start = from_minutes(start_minutes)
            end = from_minutes(end_minutes)
            reason = _blocking_reason(
                datetime.combine(target_date, start), datetime.combine(target_date, end), blocks
            )
            if reason is None and any(intervals_overlap(start, end, b.start_time, b.end_time) for b in booked):
                reason = REASON_BOOKED
            slots.append(
                Slot(
                    provider_id=provider_id,
                    date=target_date,
                    start_time=start,
                    end_time=end,
                    location_id=entry.location_id,
                    available=reason is None,
                    reason=reason,
                )
            )
    return slots
