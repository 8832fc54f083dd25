import asyncio
from datetime import date, datetime, time

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel import SQLModel

from app.core.errors import InvalidTime, OrganizationNotFound
from app.models import (
    Appointment,
    AvailabilityBlock,
    Organization,
    Provider,
    Service,
    ServiceProvider,
    WorkingHours,
)
from app.services.booking_settings_service import BookingSettingsUpdate, default_booking_settings
from app.services.domain import BlockedInterval, BookedInterval
from app.services.schedule_store import SqlScheduleStore, _as_time

MONDAY = date(2025, 6, 2)


def _seed_rows():
    return [
        Organization(id="org-1", name="Clinica Norte", advance_booking_hours=12, booking_window_start=time(7, 0)),
        Organization(id="org-2", name="Clinica Sur"),
        Organization(id="org-closed", name="Clinica Cerrada", is_active=False),
        Provider(id="doc-1", organization_id="org-1", full_name="Ana Rojas"),
        Provider(id="doc-2", organization_id="org-1", full_name="Luis Perez", is_active=False),
        Provider(id="doc-3", organization_id="org-2", full_name="Marta Gil"),
        Service(id="svc-consulta", organization_id="org-1", name="Consulta general"),
        Service(id="svc-orphan", organization_id="org-1", name="Optometria", duration_minutes=45),
        Service(id="svc-retired", organization_id="org-1", name="Audiometria", is_active=False),
        Service(id="svc-sur", organization_id="org-2", name="Pediatria"),
        ServiceProvider(service_id="svc-consulta", provider_id="doc-1"),
        ServiceProvider(service_id="svc-consulta", provider_id="doc-2"),
        ServiceProvider(service_id="svc-consulta", provider_id="doc-3"),
        WorkingHours(provider_id="doc-1", day_of_week=1, start_time=time(14, 0), end_time=time(18, 0)),
        WorkingHours(provider_id="doc-1", day_of_week=1, start_time=time(8, 0), end_time=time(12, 0)),
        WorkingHours(provider_id="doc-1", day_of_week=6, start_time=time(9, 0), end_time=time(12, 0), is_active=False),
        WorkingHours(provider_id="doc-3", day_of_week=1, start_time=time(8, 0), end_time=time(12, 0)),
        Appointment(
            organization_id="org-1", provider_id="doc-1", appointment_date=MONDAY,
            start_time=time(9, 0), end_time=time(9, 30),
        ),
        Appointment(
            organization_id="org-1", provider_id="doc-1", appointment_date=MONDAY,
            start_time=time(10, 0), end_time=time(10, 30), status="cancelled",
        ),
        Appointment(
            organization_id="org-1", provider_id="doc-1", appointment_date=MONDAY,
            start_time=time(11, 0), end_time=time(11, 30), status="completed",
        ),
        Appointment(
            organization_id="org-1", provider_id="doc-1", appointment_date=date(2025, 6, 3),
            start_time=time(9, 0), end_time=time(9, 30),
        ),
        AvailabilityBlock(
            provider_id="doc-1", start_datetime=datetime(2025, 6, 1, 12, 0),
            end_datetime=datetime(2025, 6, 3, 8, 0), reason="Vacaciones", block_type="vacation",
        ),
        AvailabilityBlock(
            provider_id="doc-1", start_datetime=datetime(2025, 5, 31, 8, 0),
            end_datetime=datetime(2025, 6, 2, 0, 0), block_type="sick_leave",
        ),
        AvailabilityBlock(
            provider_id="doc-1", start_datetime=datetime(2025, 6, 2, 13, 0),
            end_datetime=datetime(2025, 6, 2, 14, 0), block_type="meeting",
        ),
    ]


def _with_store(tmp_path, scenario):
    async def main():
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'schedule.db'}")
        try:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            async with AsyncSession(engine, expire_on_commit=False) as session:
                session.add_all(_seed_rows())
                await session.commit()
            async with AsyncSession(engine, expire_on_commit=False) as session:
                return await scenario(SqlScheduleStore(session))
        finally:
            await engine.dispose()

    return asyncio.run(main())


def test_weekly_hours_skip_inactive_rows(tmp_path):
    async def scenario(store):
        return await store.get_weekly_hours("doc-1")

    hours = _with_store(tmp_path, scenario)
    assert [(h.day_of_week, h.start_time, h.end_time) for h in hours] == [
        (1, time(8, 0), time(12, 0)),
        (1, time(14, 0), time(18, 0)),
    ]
    assert all(h.provider_id == "doc-1" for h in hours)


def test_every_status_but_cancelled_counts_as_booked(tmp_path):
    async def scenario(store):
        return await store.get_booked_intervals("doc-1", MONDAY)

    booked = _with_store(tmp_path, scenario)
    assert sorted(booked, key=lambda b: b.start_time) == [
        BookedInterval(time(9, 0), time(9, 30)),
        BookedInterval(time(11, 0), time(11, 30)),
    ]


def test_blocks_overlapping_the_day(tmp_path):
    async def scenario(store):
        return await store.get_blocked_intervals("doc-1", MONDAY)

    blocks = _with_store(tmp_path, scenario)
    # the sick leave ends exactly at midnight and does not touch Monday
    assert sorted(blocks, key=lambda b: b.start) == [
        BlockedInterval(datetime(2025, 6, 1, 12, 0), datetime(2025, 6, 3, 8, 0), "Vacaciones"),
        BlockedInterval(datetime(2025, 6, 2, 13, 0), datetime(2025, 6, 2, 14, 0), "meeting"),
    ]


def test_providers_are_active_and_in_the_organization(tmp_path):
    async def scenario(store):
        return (
            await store.get_providers_for_service("svc-consulta", "org-1"),
            await store.get_providers_for_service("svc-consulta", "org-2"),
            await store.get_providers_for_service("svc-consulta"),
            await store.get_providers_for_service("svc-orphan", "org-1"),
        )

    org_1, org_2, any_org, orphan = _with_store(tmp_path, scenario)
    assert org_1 == ["doc-1"]
    assert org_2 == ["doc-3"]
    assert any_org == ["doc-1", "doc-3"]
    assert orphan == []


def test_services_without_providers_only_lists_active_services_of_the_organization(tmp_path):
    async def scenario(store):
        return await store.list_services_without_providers("org-1")

    services = _with_store(tmp_path, scenario)
    assert [(s.id, s.duration_minutes) for s in services] == [("svc-orphan", 45)]


def test_booking_settings_read_organization_overrides(tmp_path):
    async def scenario(store):
        return (
            await store.get_booking_settings("org-1"),
            await store.get_booking_settings("org-closed"),
            await store.get_booking_settings("missing"),
        )

    org_1, closed, missing = _with_store(tmp_path, scenario)
    assert org_1.advance_booking_hours == 12
    assert (org_1.booking_window_start, org_1.booking_window_end) == ("07:00", "18:00")
    assert closed == default_booking_settings()
    assert missing == default_booking_settings()


def test_booking_settings_update_is_persisted(tmp_path):
    async def scenario(store):
        await store.update_booking_settings(
            "org-2", BookingSettingsUpdate(booking_window_start="09:15", weekend_booking_enabled=False)
        )
        await store.session.commit()
        org = await store.session.get(Organization, "org-2")
        await store.session.refresh(org)
        return org, await store.get_booking_settings("org-2")

    org, settings = _with_store(tmp_path, scenario)
    assert org.booking_window_start == time(9, 15)
    assert org.weekend_booking_enabled is False
    assert settings.booking_window_start == "09:15"


def test_update_of_inactive_organization_raises(tmp_path):
    async def scenario(store):
        with pytest.raises(OrganizationNotFound):
            await store.update_booking_settings("org-closed", BookingSettingsUpdate(advance_booking_hours=6))
        return True

    assert _with_store(tmp_path, scenario)


@pytest.mark.parametrize(
    "raw, expected",
    [("09:30:00", time(9, 30)), ("7:05", time(7, 5)), (time(16, 45, 30), time(16, 45))],
)
def test_as_time_accepts_driver_values(raw, expected):
    assert _as_time(raw) == expected


@pytest.mark.parametrize("raw", ["24:00:00", "09-30", "noon"])
def test_as_time_rejects_malformed_strings(raw):
    with pytest.raises(InvalidTime):
        _as_time(raw)
