"""Value types shared by the slot generator, booking policy and assembler."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum

from app.core.errors import UnknownRole


class Role(str, Enum):
    PATIENT = "patient"
    ADMIN = "admin"
    STAFF = "staff"
    DOCTOR = "doctor"
    SUPERADMIN = "superadmin"

    @classmethod
    def parse(cls, value: "Role | str") -> "Role":
        """Strict lookup. Anything outside the closed set raises UnknownRole."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise UnknownRole(f"Unknown role {value!r}")
        try:
            return cls(value.strip())
        except ValueError:
            raise UnknownRole(f"Unknown role {value!r}") from None

    @property
    def is_privileged(self) -> bool:
        return self is not Role.PATIENT


class AppliedRule(str, Enum):
    STANDARD = "standard"
    PRIVILEGED = "privileged"


@dataclass(frozen=True)
class WorkingHours:
    """Recurring weekly entry: provider works start_time-end_time on day_of_week (0 = Sunday)."""

    provider_id: str
    day_of_week: int
    start_time: time
    end_time: time
    location_id: str | None = None


@dataclass(frozen=True)
class BookedInterval:
    start_time: time
    end_time: time


@dataclass(frozen=True)
class BlockedInterval:
    """Provider unavailability (vacation, sick day). May span several days."""

    start: datetime
    end: datetime
    reason: str = "blocked"


@dataclass(frozen=True)
class Slot:
    provider_id: str
    date: date
    start_time: time
    end_time: time
    location_id: str | None = None
    available: bool = True
    reason: str | None = None  # why the slot is unavailable

    @property
    def start(self) -> datetime:
        return datetime.combine(self.date, self.start_time)

    @property
    def end(self) -> datetime:
        return datetime.combine(self.date, self.end_time)

    @property
    def sort_key(self) -> tuple[str, date, time]:
        return (self.provider_id, self.date, self.start_time)


@dataclass(frozen=True)
class AvailabilityQuery:
    """One availability request. Built per request and never persisted."""

    date: date
    duration_minutes: int
    role: Role | str
    override_to_standard_rules: bool = False
    organization_id: str | None = None
    service_id: str | None = None
    location_id: str | None = None


@dataclass(frozen=True)
class AvailabilityResult:
    slots: list[Slot] = field(default_factory=list)
    applied_rule: AppliedRule = AppliedRule.STANDARD
    no_providers_associated: bool = False

    @property
    def available_slots(self) -> list[Slot]:
        return [s for s in self.slots if s.available]
