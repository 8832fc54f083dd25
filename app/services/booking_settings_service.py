import logging
from datetime import time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import InvalidTime, OrganizationNotFound
from app.models.organization import Organization
from app.services.booking_policy import BookingWindowPolicy
from app.services.civil_time import format_civil_time, parse_civil_time

logger = logging.getLogger(__name__)


def _normalize_hhmm(v: str) -> str:
    try:
        return format_civil_time(parse_civil_time(v))
    except InvalidTime as e:
        raise ValueError(str(e)) from e


class BookingSettings(BaseModel):
    advance_booking_hours: int = Field(ge=0, le=72)
    max_advance_booking_days: int = Field(ge=1, le=365)
    weekend_booking_enabled: bool
    timezone: str
    booking_window_start: str = "08:00"
    booking_window_end: str = "18:00"

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone {v!r}") from e
        return v

    @field_validator("booking_window_start", "booking_window_end")
    @classmethod
    def _hhmm(cls, v: str) -> str:
        return _normalize_hhmm(v)

    @model_validator(mode="after")
    def _window_order(self) -> "BookingSettings":
        if parse_civil_time(self.booking_window_start) >= parse_civil_time(self.booking_window_end):
            raise ValueError("booking_window_start must be before booking_window_end")
        return self

    @property
    def booking_window(self) -> tuple[time, time]:
        return parse_civil_time(self.booking_window_start), parse_civil_time(self.booking_window_end)


class BookingSettingsUpdate(BaseModel):
    advance_booking_hours: int | None = Field(default=None, ge=0, le=72)
    max_advance_booking_days: int | None = Field(default=None, ge=1, le=365)
    weekend_booking_enabled: bool | None = None
    timezone: str | None = None
    booking_window_start: str | None = None
    booking_window_end: str | None = None

    @field_validator("booking_window_start", "booking_window_end")
    @classmethod
    def _hhmm(cls, v: str | None) -> str | None:
        return None if v is None else _normalize_hhmm(v)


def default_booking_settings() -> BookingSettings:
    return BookingSettings(
        advance_booking_hours=settings.minimum_lead_time_hours,
        max_advance_booking_days=settings.max_advance_booking_days,
        weekend_booking_enabled=settings.weekend_booking_enabled,
        timezone=settings.organization_timezone,
        booking_window_start=settings.booking_window_start,
        booking_window_end=settings.booking_window_end,
    )


def _or_default(value, default):
    return value if value is not None else default


def settings_from_organization(org: Organization) -> BookingSettings:
    """Organization columns left NULL fall back to the service-wide defaults.

    Stored values that no longer validate (written outside the API) are ignored
    with a warning, the same way an unknown organization is.
    """
    defaults = default_booking_settings()
    try:
        return BookingSettings(
            advance_booking_hours=_or_default(org.advance_booking_hours, defaults.advance_booking_hours),
            max_advance_booking_days=_or_default(org.max_advance_booking_days, defaults.max_advance_booking_days),
            weekend_booking_enabled=_or_default(org.weekend_booking_enabled, defaults.weekend_booking_enabled),
            timezone=org.timezone or defaults.timezone,
            booking_window_start=(
                format_civil_time(org.booking_window_start)
                if org.booking_window_start is not None
                else defaults.booking_window_start
            ),
            booking_window_end=(
                format_civil_time(org.booking_window_end)
                if org.booking_window_end is not None
                else defaults.booking_window_end
            ),
        )
    except ValidationError as e:
        logger.warning(
            "Stored booking settings for organization %s are invalid, using defaults: %s",
            org.id, e.errors(include_url=False, include_context=False),
        )
        return defaults


def merge_booking_settings(current: BookingSettings, patch: BookingSettingsUpdate) -> BookingSettings:
    """Apply a partial update; the merged result is validated again as a whole."""
    data = current.model_dump()
    data.update(patch.model_dump(exclude_unset=True, exclude_none=True))
    return BookingSettings.model_validate(data)


def build_policy(booking_settings: BookingSettings) -> BookingWindowPolicy:
    return BookingWindowPolicy(
        minimum_lead_time=timedelta(hours=booking_settings.advance_booking_hours),
        max_advance_days=booking_settings.max_advance_booking_days,
        weekend_booking_enabled=booking_settings.weekend_booking_enabled,
        booking_window=booking_settings.booking_window,
    )


async def _get_active_organization(session: AsyncSession, organization_id: str) -> Organization | None:
    result = await session.execute(
        select(Organization).where(
            Organization.id == organization_id,
            Organization.is_active == True,  # noqa: E712
        )
    )
    return result.scalar_one_or_none()


async def get_booking_settings(session: AsyncSession, organization_id: str | None) -> BookingSettings:
    if organization_id is None:
        return default_booking_settings()
    org = await _get_active_organization(session, organization_id)
    if org is None:
        logger.warning("Organization %s not found or inactive, using default booking settings", organization_id)
        return default_booking_settings()
    return settings_from_organization(org)


async def update_booking_settings(
    session: AsyncSession, organization_id: str, patch: BookingSettingsUpdate
) -> BookingSettings:
    org = await _get_active_organization(session, organization_id)
    if org is None:
        raise OrganizationNotFound(f"Organization {organization_id} not found")
    merged = merge_booking_settings(settings_from_organization(org), patch)
    org.advance_booking_hours = merged.advance_booking_hours
    org.max_advance_booking_days = merged.max_advance_booking_days
    org.weekend_booking_enabled = merged.weekend_booking_enabled
    org.timezone = merged.timezone
    org.booking_window_start, org.booking_window_end = merged.booking_window
    session.add(org)
    await session.flush()
    logger.info("Updated booking settings for organization %s: %s", organization_id, merged.model_dump())
    return merged
