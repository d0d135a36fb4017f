"""
API Request/Response Schemas
"""

from app.schemas.common import (
    SingleResponse,
    ListResponse,
    ErrorResponse,
    ErrorDetail,
    ActionStatus,
    ActionResult
)
from app.schemas.forms import (
    Notification,
    NotificationVariant,
    FormSubmissionResponse,
    ImagePreviewResponse
)

__all__ = [
    # Common
    "SingleResponse",
    "ListResponse",
    "ErrorResponse",
    "ErrorDetail",
    "ActionStatus",
    "ActionResult",
    # Forms
    "Notification",
    "NotificationVariant",
    "FormSubmissionResponse",
    "ImagePreviewResponse"
]
