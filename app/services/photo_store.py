"""Photo Store - Supabase Storage integration for job and inspection photos.

Features:
- Upload a binary payload under a destination key, returning its public URL
- Bulk delete by public URL (failures are logged, never raised)
- No external SDK required (uses httpx)
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import urlparse

import httpx

from app.config import Settings
from app.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class PhotoStore(ABC):
    """Blob store contract consumed by the service record and inspection managers."""

    bucket: str

    @abstractmethod
    async def upload_blob(self, key: str, payload: bytes, content_type: str = "image/jpeg") -> str:
        """Store one payload under key and return its public URL."""

    @abstractmethod
    async def delete_blobs(self, urls: list[str]) -> None:
        """Best-effort delete of previously issued URLs."""

    async def aclose(self) -> None:
        return None


class SupabasePhotoStore(PhotoStore):
    """Stores photos in a Supabase Storage bucket.

    The storage container is addressed at /object/<bucket>/<path> (no
    /storage/v1 prefix); public URLs are /object/public/<bucket>/<path>.
    """

    def __init__(
        self,
        base_url: str,
        service_key: str,
        bucket: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = {"Authorization": f"Bearer {service_key}"}

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/object/public/{self.bucket}/{key}"

    def path_from_url(self, url: str) -> Optional[str]:
        """Object path inside the bucket, or None for URLs this store did not issue."""
        marker = f"/{self.bucket}/"
        path = urlparse(url).path
        if marker not in path:
            return None
        return path.split(marker, 1)[1]

    async def upload_blob(self, key: str, payload: bytes, content_type: str = "image/jpeg") -> str:
        """Upload one photo. Raises UpstreamError if the store rejects it."""
        try:
            response = await self._client.post(
                f"{self.base_url}/object/{self.bucket}/{key}",
                content=payload,
                headers={**self._headers, "Content-Type": content_type, "x-upsert": "false"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            try:
                message = e.response.json().get("message", "Unknown error")
            except ValueError:
                message = e.response.text or "Unknown error"
            logger.error(f"Photo upload failed for {key}: {e.response.status_code} {message}")
            raise UpstreamError("Photo store", f"upload failed: {message}") from e
        except httpx.HTTPError as e:
            logger.error(f"Photo upload failed for {key}: {e}")
            raise UpstreamError("Photo store", f"upload failed: {e}") from e

        return self.public_url(key)

    async def delete_blobs(self, urls: list[str]) -> None:
        paths = [path for path in (self.path_from_url(url) for url in urls) if path]
        if not paths:
            return

        try:
            response = await self._client.request(
                "DELETE",
                f"{self.base_url}/object/{self.bucket}",
                json={"prefixes": paths},
                headers=self._headers,
            )
            response.raise_for_status()
            logger.info(f"Deleted {len(paths)} photo(s) from {self.bucket}")
        except httpx.HTTPError as e:
            logger.error(f"Failed to delete photos {paths}: {e}")

    async def aclose(self) -> None:
        await self._client.aclose()


class MockPhotoStore(PhotoStore):
    """In-memory photo store for testing and local development."""

    def __init__(self, base_url: str = "http://photos.local", bucket: str = "inspection-photos"):
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket
        self.blobs: dict[str, bytes] = {}
        self.deleted_urls: list[str] = []

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/object/public/{self.bucket}/{key}"

    async def upload_blob(self, key: str, payload: bytes, content_type: str = "image/jpeg") -> str:
        url = self.public_url(key)
        self.blobs[url] = payload
        logger.info(f"Mock photo stored at {url} ({len(payload)} bytes)")
        return url

    async def delete_blobs(self, urls: list[str]) -> None:
        for url in urls:
            self.blobs.pop(url, None)
            self.deleted_urls.append(url)


def create_photo_store(settings: Settings) -> PhotoStore:
    """Build the process-wide photo store from settings."""
    if settings.photo_store_configured:
        return SupabasePhotoStore(
            base_url=settings.SUPABASE_URL,
            service_key=settings.SUPABASE_SERVICE_KEY,
            bucket=settings.PHOTO_BUCKET,
            timeout=settings.PHOTO_STORE_TIMEOUT_SECONDS,
        )

    logger.warning("SUPABASE_URL/SUPABASE_SERVICE_KEY not set - photos are kept in memory")
    return MockPhotoStore(bucket=settings.PHOTO_BUCKET)


def photo_key(prefix: str, index: int, timestamp_ms: int) -> str:
    """Destination key for the index-th photo of one submission."""
    return f"{prefix}/{timestamp_ms}-{index}-{uuid.uuid4().hex[:8]}.jpg"
