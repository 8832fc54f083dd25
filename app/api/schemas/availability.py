from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.services.availability_service import summarize
from app.services.civil_time import format_civil_time
from app.services.domain import AvailabilityResult, Slot


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SlotInfo(CamelModel):
    provider_id: str
    date: str  # YYYY-MM-DD
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    available: bool
    location_id: str | None = None
    reason: str | None = None

    @classmethod
    def from_slot(cls, slot: Slot) -> "SlotInfo":
        return cls(
            provider_id=slot.provider_id,
            date=slot.date.isoformat(),
            start_time=format_civil_time(slot.start_time),
            end_time=format_civil_time(slot.end_time),
            available=slot.available,
            location_id=slot.location_id,
            reason=slot.reason,
        )


class AvailabilityResponse(CamelModel):
    slots: list[SlotInfo]
    applied_rule: str
    no_providers_associated: bool

    @classmethod
    def from_result(cls, result: AvailabilityResult) -> "AvailabilityResponse":
        return cls(
            slots=[SlotInfo.from_slot(s) for s in result.slots],
            applied_rule=result.applied_rule.value,
            no_providers_associated=result.no_providers_associated,
        )


class DayAvailability(AvailabilityResponse):
    total_slots: int
    available_slots: int

    @classmethod
    def from_result(cls, result: AvailabilityResult) -> "DayAvailability":
        base = AvailabilityResponse.from_result(result)
        return cls(**base.model_dump(), **summarize(result))


class AvailabilityRangeResponse(CamelModel):
    days: dict[str, DayAvailability]


class ServiceWithoutProviders(CamelModel):
    id: str
    name: str
    duration_minutes: int


class ServicesWithoutProvidersResponse(CamelModel):
    organization_id: str
    services: list[ServiceWithoutProviders]
