from uuid import uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class Service(SQLModel, table=True):
    __tablename__ = "services"
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    organization_id: str = Field(foreign_key="organizations.id", index=True)
    name: str
    duration_minutes: int = 30
    is_active: bool = True


class ServiceProvider(SQLModel, table=True):
    """Which providers offer which service. A service with no rows here cannot be booked."""

    __tablename__ = "service_providers"
    __table_args__ = (UniqueConstraint("service_id", "provider_id"),)
    id: int | None = Field(default=None, primary_key=True)
    service_id: str = Field(foreign_key="services.id", index=True)
    provider_id: str = Field(foreign_key="providers.id", index=True)
