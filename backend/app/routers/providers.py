"""
Providers API Router
Provider profiles, the profile form and the provider's services
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional

from app.database import get_database
from app.forms.profile_form import ProfileForm, image_preview
from app.models.provider import (
    ProviderResponse, ProfileUpdateRequest, ProviderProfileUpdate
)
from app.models.service import ServiceResponse
from app.schemas.common import SingleResponse, ListResponse, ErrorResponse, ActionStatus
from app.schemas.forms import FormSubmissionResponse, ImagePreviewResponse
from app.services.media_service import MediaUploadService, PendingImage, get_media_service
from app.services.provider_service import ProviderService
from app.services.revalidation_service import RevalidationService, get_revalidation_service
from app.services.service_catalog import ServiceCatalog

router = APIRouter()
logger = logging.getLogger(__name__)


def get_provider_service(
    db: AsyncIOMotorDatabase = Depends(get_database),
    revalidator: RevalidationService = Depends(get_revalidation_service)
) -> ProviderService:
    """Dependency injection for provider actions"""
    return ProviderService(db, revalidator)


async def read_pending_image(image: Optional[UploadFile]) -> Optional[PendingImage]:
    """Buffer an uploaded form file, None when no file was chosen"""
    if image is None or not image.filename:
        return None
    return PendingImage(
        filename=image.filename,
        content_type=image.content_type or "application/octet-stream",
        data=await image.read()
    )


async def load_provider_or_404(providers: ProviderService, user_id: str):
    provider = await providers.get_provider(user_id)
    if provider is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "PROVIDER_NOT_FOUND", "message": "Provider not found"}
        )
    return provider


@router.get(
    "/{user_id}",
    response_model=SingleResponse[ProviderResponse],
    summary="Get provider profile"
)
async def get_provider(
    user_id: str,
    providers: ProviderService = Depends(get_provider_service)
):
    """Get a provider's profile by account id"""
    provider = await load_provider_or_404(providers, user_id)
    return SingleResponse(data=ProviderResponse(**provider.model_dump()))


@router.get(
    "/{user_id}/services",
    response_model=ListResponse[ServiceResponse],
    summary="List provider services"
)
async def list_provider_services(
    user_id: str,
    providers: ProviderService = Depends(get_provider_service)
):
    """Services the provider offers, in the order they were added"""
    catalog = ServiceCatalog(providers.db, providers.revalidator, providers=providers)
    services = await catalog.fetch_services(user_id)
    return ListResponse(data=services, count=len(services))


@router.put(
    "/{user_id}/profile",
    response_model=SingleResponse[ProviderResponse],
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Update provider profile"
)
async def update_profile(
    user_id: str,
    data: ProfileUpdateRequest,
    providers: ProviderService = Depends(get_provider_service)
):
    """Update the profile; the stored image is kept when image_url is omitted"""
    result = await providers.update_profile(
        ProviderProfileUpdate(user_id=user_id, **data.model_dump())
    )
    resource_type = "Company" if result.status == ActionStatus.CONFLICT else "Provider"
    return SingleResponse(data=result.unwrap(resource_type))


@router.get(
    "/{user_id}/profile/form",
    response_model=SingleResponse[dict],
    summary="Get profile form values"
)
async def get_profile_form(
    user_id: str,
    providers: ProviderService = Depends(get_provider_service),
    media: MediaUploadService = Depends(get_media_service)
):
    """Values the profile form starts from"""
    provider = await load_provider_or_404(providers, user_id)
    form = ProfileForm(
        provider,
        path=f"/providers/{user_id}",
        update_profile=providers.update_profile,
        start_upload=media.start_upload
    )
    return SingleResponse(data=form.defaults())


@router.post(
    "/{user_id}/profile/form",
    response_model=FormSubmissionResponse,
    summary="Submit profile form"
)
async def submit_profile_form(
    user_id: str,
    company_name: str = Form(""),
    type_of_provider: str = Form(""),
    phone_number: str = Form(""),
    experience_years: str = Form(""),
    hourly_rate: str = Form(""),
    bio: str = Form(""),
    operating_days: list[str] = Form(default=[]),
    start_time: str = Form(""),
    end_time: str = Form(""),
    path: str = Form("/"),
    image: Optional[UploadFile] = File(None),
    providers: ProviderService = Depends(get_provider_service),
    media: MediaUploadService = Depends(get_media_service)
):
    """
    Submit the profile form

    Field errors and failures come back as a notification rather than an
    HTTP error, so the form can display them inline.
    """
    provider = await load_provider_or_404(providers, user_id)
    form = ProfileForm(
        provider,
        path=path,
        update_profile=providers.update_profile,
        start_upload=media.start_upload
    )

    pending = await read_pending_image(image)
    if pending is not None and form.select_image(pending) is None:
        logger.info(f"Ignoring non-image upload {pending.filename} for {user_id}")
        pending = None

    notification = await form.submit(
        {
            "company_name": company_name,
            "type_of_provider": type_of_provider,
            "phone_number": phone_number,
            "experience_years": experience_years,
            "hourly_rate": hourly_rate,
            "bio": bio,
            "operating_days": operating_days,
            "start_time": start_time,
            "end_time": end_time,
        },
        image=pending
    )

    return FormSubmissionResponse(
        success=not notification.is_error,
        notification=notification,
        errors=form.errors
    )


@router.post(
    "/{user_id}/profile/image-preview",
    response_model=ImagePreviewResponse,
    summary="Preview a profile image"
)
async def preview_profile_image(
    user_id: str,
    image: UploadFile = File(...)
):
    """Inline preview of a selected image; non-image files are ignored"""
    pending = await read_pending_image(image)
    return ImagePreviewResponse(preview=image_preview(pending) if pending else None)
