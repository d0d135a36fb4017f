"""
Cache API Router
Lets the frontend check whether a page path was revalidated
"""

from datetime import datetime
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from typing import Optional

from app.schemas.common import SingleResponse
from app.services.revalidation_service import (
    RevalidationService, get_revalidation_service, normalize_path
)

router = APIRouter()


class RevalidationStatus(BaseModel):
    path: str
    revalidated_at: Optional[datetime] = None


@router.get(
    "/revalidated",
    response_model=SingleResponse[RevalidationStatus],
    summary="Last revalidation of a path"
)
async def get_revalidation_status(
    path: str = Query(..., min_length=1),
    revalidator: RevalidationService = Depends(get_revalidation_service)
):
    """When content at ``path`` was last marked stale"""
    return SingleResponse(data=RevalidationStatus(
        path=normalize_path(path),
        revalidated_at=revalidator.last_revalidated(path)
    ))
