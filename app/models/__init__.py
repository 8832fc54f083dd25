from app.models.organization import Organization
from app.models.provider import Provider
from app.models.service import Service, ServiceProvider
from app.models.schedule import AvailabilityBlock, WorkingHours
from app.models.appointment import Appointment

__all__ = [
    "Organization",
    "Provider",
    "Service",
    "ServiceProvider",
    "WorkingHours",
    "AvailabilityBlock",
    "Appointment",
]
