"""Read-only storage collaborators for availability, backed by async SQLAlchemy."""

from datetime import date, datetime, time, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.appointment import STATUS_CANCELLED, Appointment
from app.models.provider import Provider
from app.models.schedule import AvailabilityBlock
from app.models.schedule import WorkingHours as WorkingHoursRow
from app.models.service import Service, ServiceProvider
from app.services import booking_settings_service
from app.services.booking_settings_service import BookingSettings, BookingSettingsUpdate
from app.services.civil_time import parse_civil_time
from app.services.domain import BlockedInterval, BookedInterval, WorkingHours


def _as_time(value: time | str) -> time:
    # Some drivers hand TIME columns back as "HH:MM:SS" strings
    if isinstance(value, str):
        return parse_civil_time(value)
    return time(value.hour, value.minute)


class SqlScheduleStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_weekly_hours(self, provider_id: str) -> list[WorkingHours]:
        result = await self.session.execute(
            select(WorkingHoursRow)
            .where(
                WorkingHoursRow.provider_id == provider_id,
                WorkingHoursRow.is_active == True,  # noqa: E712
            )
            .order_by(WorkingHoursRow.day_of_week, WorkingHoursRow.start_time)
        )
        return [
            WorkingHours(
                provider_id=row.provider_id,
                day_of_week=row.day_of_week,
                start_time=_as_time(row.start_time),
                end_time=_as_time(row.end_time),
                location_id=row.location_id,
            )
            for row in result.scalars().all()
        ]

    async def get_booked_intervals(self, provider_id: str, d: date) -> list[BookedInterval]:
        result = await self.session.execute(
            select(Appointment.start_time, Appointment.end_time).where(
                Appointment.provider_id == provider_id,
                Appointment.appointment_date == d,
                Appointment.status != STATUS_CANCELLED,
            )
        )
        return [BookedInterval(_as_time(s), _as_time(e)) for s, e in result.all()]

    async def get_blocked_intervals(self, provider_id: str, d: date) -> list[BlockedInterval]:
        day_start = datetime(d.year, d.month, d.day)
        day_end = day_start + timedelta(days=1)
        result = await self.session.execute(
            select(AvailabilityBlock).where(
                AvailabilityBlock.provider_id == provider_id,
                AvailabilityBlock.start_datetime < day_end,
                AvailabilityBlock.end_datetime > day_start,
            )
        )
        return [
            BlockedInterval(start=b.start_datetime, end=b.end_datetime, reason=b.reason or b.block_type)
            for b in result.scalars().all()
        ]

    async def get_providers_for_service(self, service_id: str, organization_id: str | None = None) -> list[str]:
        q = (
            select(ServiceProvider.provider_id)
            .join(Provider, Provider.id == ServiceProvider.provider_id)
            .where(
                ServiceProvider.service_id == service_id,
                Provider.is_active == True,  # noqa: E712
            )
            .order_by(ServiceProvider.provider_id)
        )
        if organization_id is not None:
            q = q.where(Provider.organization_id == organization_id)
        result = await self.session.execute(q)
        return [row[0] for row in result.all()]

    async def list_services_without_providers(self, organization_id: str) -> list[Service]:
        linked = select(ServiceProvider.service_id).distinct()
        result = await self.session.execute(
            select(Service)
            .where(
                Service.organization_id == organization_id,
                Service.is_active == True,  # noqa: E712
                Service.id.not_in(linked),
            )
            .order_by(Service.name)
        )
        return list(result.scalars().all())

    async def get_booking_settings(self, organization_id: str | None) -> BookingSettings:
        return await booking_settings_service.get_booking_settings(self.session, organization_id)

    async def update_booking_settings(self, organization_id: str, patch: BookingSettingsUpdate) -> BookingSettings:
        return await booking_settings_service.update_booking_settings(self.session, organization_id, patch)
