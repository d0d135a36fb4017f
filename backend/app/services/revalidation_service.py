"""
Page Revalidation Service
Signals that content rendered at a path is stale after a write
"""

import logging
from datetime import datetime
from typing import Optional
import httpx

from app.config import get_settings
from app.models.common import utc_now

logger = logging.getLogger(__name__)
settings = get_settings()


def normalize_path(path: str) -> str:
    """Collapse a page path to one canonical form"""
    path = (path or "/").split("?", 1)[0].strip()
    if not path.startswith("/"):
        path = f"/{path}"
    if len(path) > 1:
        path = path.rstrip("/")
    return path


class RevalidationService:
    """
    Tracks revalidated paths and forwards them to the frontend

    The frontend can either poll ``last_revalidated`` or receive a webhook
    call when ``REVALIDATE_WEBHOOK_URL`` is configured.
    """

    def __init__(
        self,
        webhook_url: Optional[str] = None,
        secret: Optional[str] = None,
        timeout: float = 5.0
    ):
        self.webhook_url = webhook_url
        self.secret = secret
        self.timeout = timeout
        self._revalidated: dict[str, datetime] = {}

    @property
    def is_configured(self) -> bool:
        """Check if a webhook target is configured"""
        return bool(self.webhook_url)

    async def revalidate(self, path: str) -> None:
        """
        Mark ``path`` as stale

        Webhook failures are logged and never propagate: the write that
        triggered the revalidation has already succeeded.
        """
        path = normalize_path(path)
        self._revalidated[path] = utc_now()
        logger.info(f"Revalidated path {path}")

        if not self.is_configured:
            return

        headers = {}
        if self.secret:
            headers["X-Revalidate-Secret"] = self.secret

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url,
                    json={"path": path},
                    headers=headers
                )
            if response.status_code >= 400:
                logger.warning(
                    f"Revalidation webhook returned {response.status_code} for {path}"
                )
        except httpx.HTTPError as e:
            logger.warning(f"Revalidation webhook failed for {path}: {e}")

    def last_revalidated(self, path: str) -> Optional[datetime]:
        """When ``path`` was last revalidated, None if never"""
        return self._revalidated.get(normalize_path(path))


# Singleton instance
_revalidation_service: Optional[RevalidationService] = None


def get_revalidation_service() -> RevalidationService:
    """Get revalidation service singleton"""
    global _revalidation_service
    if _revalidation_service is None:
        _revalidation_service = RevalidationService(
            webhook_url=settings.REVALIDATE_WEBHOOK_URL,
            secret=settings.REVALIDATE_SECRET
        )
    return _revalidation_service
