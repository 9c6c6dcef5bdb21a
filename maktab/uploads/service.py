import base64
import hashlib
import logging
import time
from typing import Optional

import httpx

from maktab.config.settings import settings

logger = logging.getLogger(__name__)

CLOUDINARY_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/auto/upload"


def to_data_url(content: bytes, content_type: Optional[str]) -> str:
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type or 'application/octet-stream'};base64,{encoded}"


def sign_params(folder: str, timestamp: int, api_secret: str) -> str:
    # Parameters in alphabetical order followed by the secret
    return hashlib.sha1(f"folder={folder}&timestamp={timestamp}{api_secret}".encode("utf-8")).hexdigest()


class UploadService:
    """
    Signed uploads to Cloudinary.

    When the upload cannot be completed the file is returned inline as a
    ``data:`` URL so notices and marksheets keep working offline.
    """

    def __init__(
        self,
        cloud_name: str = settings.CLOUDINARY_CLOUD_NAME,
        api_key: str = settings.CLOUDINARY_API_KEY,
        api_secret: str = settings.CLOUDINARY_API_SECRET,
        timeout: float = settings.UPLOAD_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    async def _upload_remote(self, content: bytes, filename: str, content_type: Optional[str], folder: str) -> str:
        timestamp = int(time.time())
        data = {
            "api_key": self.api_key,
            "timestamp": str(timestamp),
            "folder": folder,
            "signature": sign_params(folder, timestamp, self.api_secret),
        }
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        url = CLOUDINARY_UPLOAD_URL.format(cloud_name=self.cloud_name)
        async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout), transport=self.transport) as client:
            response = await client.post(url, data=data, files=files)
        body = response.json()
        if body.get("secure_url"):
            return body["secure_url"]
        message = (body.get("error") or {}).get("message", "Upload failed")
        raise RuntimeError(message)

    async def upload_file(self, content: bytes, filename: str, content_type: Optional[str], folder: str) -> str:
        """Upload ``content`` into ``folder`` and return a URL for it."""
        if not self.configured:
            logger.warning("Cloudinary is not configured, storing file inline")
            return to_data_url(content, content_type)
        try:
            url = await self._upload_remote(content, filename, content_type, folder)
            logger.info(f"Uploaded {filename} to {folder}")
            return url
        except (httpx.HTTPError, ValueError, RuntimeError) as e:
            logger.warning(f"Cloudinary upload failed for {filename}, storing file inline: {e}")
            return to_data_url(content, content_type)
