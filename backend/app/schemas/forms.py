"""
Form feedback schemas
Notifications shown to the user after a form submission
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class NotificationVariant(str, Enum):
    """Visual style of a notification"""
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """Toast-style message for the user"""
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

    @property
    def is_error(self) -> bool:
        return self.variant == NotificationVariant.DESTRUCTIVE


class FormSubmissionResponse(BaseModel):
    """Result of submitting a form"""
    success: bool
    notification: Notification
    errors: dict[str, str] = Field(default_factory=dict)


class ImagePreviewResponse(BaseModel):
    """Inline preview of a selected image"""
    success: bool = True
    preview: Optional[str] = None  # data: URL, None when the file was ignored
