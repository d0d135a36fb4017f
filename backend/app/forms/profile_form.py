"""
Profile Form
Seeds, validates and submits a provider's profile edits
"""

import base64
import logging
import re
from typing import Any, Awaitable, Callable, Optional, Union
from pydantic import ValidationError

from app.models.provider import (
    Provider, ProfileFormValues, ProviderProfileUpdate, ProviderResponse, WEEKDAY_NAMES
)
from app.schemas.common import ActionResult, ActionStatus
from app.schemas.forms import Notification, NotificationVariant
from app.services.media_service import PendingImage, UploadedFile
from app.utils.exceptions import ServiceHubException, ValidationException

logger = logging.getLogger(__name__)

UpdateAction = Callable[[ProviderProfileUpdate], Awaitable[ActionResult[ProviderResponse]]]
UploadAction = Callable[[list[PendingImage]], Awaitable[list[UploadedFile]]]

FORM_FIELDS = [
    "company_name", "type_of_provider", "phone_number", "experience_years",
    "hourly_rate", "bio", "operating_days", "start_time", "end_time"
]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_leading_int(value: Any) -> int:
    """Leading integer of ``value``, 0 when there is none (display default only)"""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    match = _LEADING_INT.match(str(value or ""))
    return int(match.group(1)) if match else 0


def image_preview(image: PendingImage) -> Optional[str]:
    """Inline data URL for an image, None for anything else"""
    if not image.is_image:
        return None
    encoded = base64.b64encode(image.data).decode("ascii")
    return f"data:{image.content_type};base64,{encoded}"


class ProfileForm:
    """
    Editable copy of a provider's profile

    The pending image is passed to ``submit`` explicitly; the form only
    keeps its preview for display.
    """

    def __init__(
        self,
        provider: Union[Provider, dict],
        path: str,
        update_profile: UpdateAction,
        start_upload: UploadAction
    ):
        if isinstance(provider, Provider):
            provider = provider.model_dump()

        self.user_id: str = provider["user_id"]
        self.path = path
        self._update_profile = update_profile
        self._start_upload = start_upload

        self.image_url: str = provider.get("image_url") or ""
        self.values: dict[str, Any] = {
            "company_name": provider.get("company_name") or "",
            "type_of_provider": provider.get("type_of_provider") or "",
            "phone_number": provider.get("phone_number") or "",
            "experience_years": parse_leading_int(provider.get("experience_years")),
            "hourly_rate": parse_leading_int(provider.get("hourly_rate")),
            "bio": provider.get("bio") or "",
            "operating_days": list(provider.get("operating_days") or []),
            "start_time": provider.get("start_time") or "",
            "end_time": provider.get("end_time") or "",
        }
        self.errors: dict[str, str] = {}
        self.is_loading = False

    def defaults(self) -> dict[str, Any]:
        """Current values plus the displayed image"""
        return {"image_url": self.image_url, **self.values}

    def toggle_operating_day(self, day: str, checked: bool) -> list[str]:
        """Add or remove one weekday, leaving the others in place"""
        if day not in WEEKDAY_NAMES:
            raise ValidationException([{
                "field": "operating_days",
                "message": f"'{day}' is not a weekday",
                "type": "enum"
            }])

        current = self.values["operating_days"]
        if checked:
            days = current if day in current else [*current, day]
        else:
            days = [d for d in current if d != day]
        self.values["operating_days"] = days
        return days

    def select_image(self, image: PendingImage) -> Optional[str]:
        """
        Preview a selected image without uploading it

        Non-image files are ignored and leave the displayed image unchanged.
        """
        preview = image_preview(image)
        if preview is not None:
            self.image_url = preview
        return preview

    def validate(self, values: dict[str, Any]) -> ProfileFormValues:
        """Check values against the profile schema, recording field errors"""
        try:
            validated = ProfileFormValues(**values)
        except ValidationError as e:
            exc = ValidationException.from_pydantic(e)
            self.errors = exc.field_errors
            raise exc from e
        self.errors = {}
        return validated

    async def submit(
        self,
        values: Optional[dict[str, Any]] = None,
        image: Optional[PendingImage] = None
    ) -> Notification:
        """
        Validate, upload the pending image, and apply the update

        Args:
            values: Field values; the form's own values when omitted
            image: Newly selected image to upload, if any

        Returns:
            Notification describing the outcome
        """
        if self.is_loading:
            return Notification(
                title="Please wait...",
                description="Your profile is already being updated.",
                variant=NotificationVariant.DESTRUCTIVE
            )

        self.is_loading = True
        try:
            if values is not None:
                self.values.update({k: v for k, v in values.items() if k in FORM_FIELDS})

            try:
                validated = self.validate(self.values)
            except ValidationException:
                return Notification(
                    title="Invalid profile details",
                    description="Please correct the highlighted fields.",
                    variant=NotificationVariant.DESTRUCTIVE
                )

            payload = ProviderProfileUpdate(
                **validated.model_dump(),
                user_id=self.user_id,
                path=self.path
            )

            if image is not None:
                uploaded = await self._start_upload([image])
                if uploaded:
                    self.image_url = uploaded[0].url
                    payload.image_url = uploaded[0].url

            result = await self._update_profile(payload)
            return self._notify(result)

        except ServiceHubException as e:
            logger.warning(f"Profile submission failed for {self.user_id}: {e.message}")
            return self._failure(e.message)
        except Exception as e:
            logger.error(f"Profile submission failed for {self.user_id}: {e}", exc_info=True)
            return self._failure(str(e))
        finally:
            self.is_loading = False

    def _notify(self, result: ActionResult[ProviderResponse]) -> Notification:
        if result.status == ActionStatus.OK:
            return Notification(
                title="Profile Updated!",
                description="You have successfully updated your profile."
            )
        if result.status == ActionStatus.CONFLICT:
            return Notification(
                title="Something went wrong...",
                description=result.message or "Company already exists",
                variant=NotificationVariant.DESTRUCTIVE
            )
        return Notification(
            title="Something went wrong...",
            description=result.message or "Provider not found",
            variant=NotificationVariant.DESTRUCTIVE
        )

    def _failure(self, message: str) -> Notification:
        return Notification(
            title="Something went wrong...",
            description=f"Error: {message}",
            variant=NotificationVariant.DESTRUCTIVE
        )
