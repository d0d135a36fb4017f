"""
Services API Router
Services offered by providers
"""

from fastapi import APIRouter, Depends, HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.database import get_database
from app.models.service import (
    ServiceCreate, ServiceUpdate, ServiceResponse, ServiceWithProvider
)
from app.schemas.common import SingleResponse, ErrorResponse, ActionStatus
from app.services.revalidation_service import RevalidationService, get_revalidation_service
from app.services.service_catalog import ServiceCatalog

router = APIRouter()


def get_service_catalog(
    db: AsyncIOMotorDatabase = Depends(get_database),
    revalidator: RevalidationService = Depends(get_revalidation_service)
) -> ServiceCatalog:
    """Dependency injection for service actions"""
    return ServiceCatalog(db, revalidator)


@router.post(
    "",
    response_model=SingleResponse[ServiceResponse],
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Create service"
)
async def create_service(
    data: ServiceCreate,
    catalog: ServiceCatalog = Depends(get_service_catalog)
):
    """Create a service and add it to the provider's list"""
    result = await catalog.create_service(data)

    # A missing target here is the provider, not the service
    resource_type = "Provider" if result.status == ActionStatus.NOT_FOUND else "Service"
    return SingleResponse(data=result.unwrap(resource_type))


@router.get(
    "/{service_id}",
    response_model=SingleResponse[ServiceWithProvider],
    responses={404: {"model": ErrorResponse}},
    summary="Get service by ID"
)
async def get_service(
    service_id: str,
    catalog: ServiceCatalog = Depends(get_service_catalog)
):
    """Get service by ID with its provider"""
    service = await catalog.get_service(service_id)

    if service is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "SERVICE_NOT_FOUND", "message": "Service not found"}
        )

    return SingleResponse(data=service)


@router.put(
    "/{service_id}",
    response_model=SingleResponse[ServiceResponse],
    summary="Update service"
)
async def update_service(
    service_id: str,
    data: ServiceUpdate,
    catalog: ServiceCatalog = Depends(get_service_catalog)
):
    """Update service by ID; the stored image is kept when image_url is omitted"""
    result = await catalog.update_service(service_id, data)
    return SingleResponse(data=result.unwrap("Service"))
