from fastapi import APIRouter, Depends, Query

from app.api.deps import get_store
from app.api.schemas.availability import ServicesWithoutProvidersResponse, ServiceWithoutProviders
from app.services.availability_service import services_without_providers
from app.services.schedule_store import SqlScheduleStore

router = APIRouter(prefix="/diagnostics", tags=["diagnostics"])


@router.get("/services-without-providers", response_model=ServicesWithoutProvidersResponse)
async def list_services_without_providers(
    organization_id: str = Query(..., alias="organizationId"),
    store: SqlScheduleStore = Depends(get_store),
) -> ServicesWithoutProvidersResponse:
    """Services nobody offers. Availability for these always reports noProvidersAssociated."""
    rows = await services_without_providers(store, organization_id)
    return ServicesWithoutProvidersResponse(
        organization_id=organization_id,
        services=[ServiceWithoutProviders(**r) for r in rows],
    )
