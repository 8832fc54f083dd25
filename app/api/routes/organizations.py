from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from app.api.deps import get_store
from app.services.booking_settings_service import BookingSettings, BookingSettingsUpdate
from app.services.schedule_store import SqlScheduleStore

router = APIRouter(prefix="/organizations", tags=["organizations"])


@router.get("/{organization_id}/booking-settings", response_model=BookingSettings)
async def get_booking_settings(
    organization_id: str, store: SqlScheduleStore = Depends(get_store)
) -> BookingSettings:
    return await store.get_booking_settings(organization_id)


@router.put("/{organization_id}/booking-settings", response_model=BookingSettings)
async def update_booking_settings(
    organization_id: str,
    body: BookingSettingsUpdate,
    store: SqlScheduleStore = Depends(get_store),
) -> BookingSettings:
    try:
        return await store.update_booking_settings(organization_id, body)
    except ValidationError as e:
        # the merged settings failed validation (e.g. unknown timezone)
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False),
        ) from e
