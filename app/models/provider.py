from uuid import uuid4

from sqlmodel import Field, SQLModel


class Provider(SQLModel, table=True):
    """A bookable resource, usually a doctor."""

    __tablename__ = "providers"
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    organization_id: str = Field(foreign_key="organizations.id", index=True)
    full_name: str
    specialization: str | None = None
    is_active: bool = True
