"""
Media Upload Service
Stores selected images and returns durable URLs
"""

import logging
import mimetypes
import os
from dataclasses import dataclass
from typing import Optional
import httpx
from pydantic import BaseModel

from app.config import get_settings
from app.models.common import generate_id
from app.utils.exceptions import UploadError

logger = logging.getLogger(__name__)
settings = get_settings()


@dataclass
class PendingImage:
    """A file selected locally but not uploaded yet"""
    filename: str
    content_type: str
    data: bytes

    @property
    def is_image(self) -> bool:
        return (self.content_type or "").startswith("image/")

    @property
    def size(self) -> int:
        return len(self.data)


class UploadedFile(BaseModel):
    """A file stored on the media host"""
    url: str
    key: str
    name: str
    size: int


class MediaUploadService:
    """
    Uploads images either to a remote media host or to local disk

    Remote mode posts multipart data to ``MEDIA_UPLOAD_URL``; local mode
    writes under ``MEDIA_UPLOAD_DIR`` and serves from ``MEDIA_BASE_URL``.
    """

    def __init__(
        self,
        upload_url: Optional[str] = None,
        api_key: Optional[str] = None,
        upload_dir: str = "uploads/media",
        base_url: str = "http://localhost:8000/media",
        max_bytes: int = 4 * 1024 * 1024
    ):
        self.upload_url = upload_url
        self.api_key = api_key
        self.upload_dir = upload_dir
        self.base_url = base_url.rstrip("/")
        self.max_bytes = max_bytes

    @property
    def is_remote(self) -> bool:
        """Check if a remote media host is configured"""
        return bool(self.upload_url)

    async def start_upload(self, files: list[PendingImage]) -> list[UploadedFile]:
        """
        Upload files in order

        Args:
            files: Images to upload

        Returns:
            One UploadedFile per input, in submission order

        Raises:
            UploadError: on a rejected file or a failed upload
        """
        uploaded = []
        for file in files:
            self._check(file)
            if self.is_remote:
                uploaded.append(await self._upload_remote(file))
            else:
                uploaded.append(self._store_local(file))
        return uploaded

    def _check(self, file: PendingImage) -> None:
        if not file.is_image:
            raise UploadError(f"{file.filename} is not an image")
        if file.size == 0:
            raise UploadError(f"{file.filename} is empty")
        if file.size > self.max_bytes:
            raise UploadError(
                f"{file.filename} exceeds the {self.max_bytes // (1024 * 1024)}MB limit"
            )

    def _make_key(self, file: PendingImage) -> str:
        ext = os.path.splitext(file.filename)[1].lower()
        if not ext:
            ext = mimetypes.guess_extension(file.content_type) or ""
        return f"{generate_id('img')}{ext}"

    def _store_local(self, file: PendingImage) -> UploadedFile:
        key = self._make_key(file)
        try:
            os.makedirs(self.upload_dir, exist_ok=True)
            with open(os.path.join(self.upload_dir, key), "wb") as f:
                f.write(file.data)
        except OSError as e:
            logger.error(f"Failed to store {file.filename}: {e}")
            raise UploadError(f"Failed to store {file.filename}: {e}") from e

        logger.info(f"Stored media {key} ({file.size} bytes)")
        return UploadedFile(
            url=f"{self.base_url}/{key}",
            key=key,
            name=file.filename,
            size=file.size
        )

    async def _upload_remote(self, file: PendingImage) -> UploadedFile:
        headers = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.upload_url,
                    files={"file": (file.filename, file.data, file.content_type)},
                    headers=headers,
                    timeout=60.0
                )
        except httpx.HTTPError as e:
            logger.error(f"Media upload request failed: {e}")
            raise UploadError(f"Upload of {file.filename} failed: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Media host error: {response.status_code} - {response.text}")
            raise UploadError(
                f"Upload of {file.filename} failed with status {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Media host returned non-JSON body: {response.text[:200]}")
            raise UploadError(
                f"Media host returned an invalid response for {file.filename}"
            ) from e

        url = data.get("url") if isinstance(data, dict) else None
        if not url:
            raise UploadError(f"Media host returned no URL for {file.filename}")

        logger.info(f"Uploaded media {file.filename} to {url}")
        return UploadedFile(
            url=url,
            key=data.get("key") or url.rsplit("/", 1)[-1],
            name=file.filename,
            size=file.size
        )


# Singleton instance
_media_service: Optional[MediaUploadService] = None


def get_media_service() -> MediaUploadService:
    """Get media upload service singleton"""
    global _media_service
    if _media_service is None:
        _media_service = MediaUploadService(
            upload_url=settings.MEDIA_UPLOAD_URL,
            api_key=settings.MEDIA_API_KEY,
            upload_dir=settings.MEDIA_UPLOAD_DIR,
            base_url=settings.MEDIA_BASE_URL,
            max_bytes=settings.MEDIA_MAX_BYTES
        )
    return _media_service
