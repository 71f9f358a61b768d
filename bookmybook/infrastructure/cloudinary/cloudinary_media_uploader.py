"""
Cloudinary Media Uploader - unsigned image upload with an upload preset.

POST {CLOUDINARY_API_URL}/{cloud_name}/image/upload
  multipart: file=<bytes>, upload_preset=<preset>
Response JSON carries "secure_url" on success, {"error": {"message": ...}}
otherwise.
"""

import logging

import httpx

from bookmybook.config.settings import Config
from bookmybook.domain.exceptions import UploadError
from bookmybook.domain.ports.media_uploader import MediaUploader

logger = logging.getLogger(__name__)


class CloudinaryMediaUploader(MediaUploader):
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        cloud_name: str = Config.CLOUDINARY_CLOUD_NAME,
        upload_preset: str = Config.CLOUDINARY_UPLOAD_PRESET,
        api_url: str = Config.CLOUDINARY_API_URL,
    ):
        self._http = http_client
        self._cloud_name = cloud_name
        self._upload_preset = upload_preset
        self._api_url = api_url.rstrip("/")

    async def upload(self, filename: str, content: bytes, content_type: str) -> str:
        if not self._cloud_name or not self._upload_preset:
            raise UploadError("Image upload is not configured.")

        url = f"{self._api_url}/{self._cloud_name}/image/upload"
        try:
            response = await self._http.post(
                url,
                data={"upload_preset": self._upload_preset},
                files={"file": (filename, content, content_type)},
            )
        except httpx.HTTPError as e:
            logger.error(f"[Cloudinary] Upload of {filename} failed: {e}")
            raise UploadError() from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.status_code >= 400:
            detail = (payload.get("error") or {}).get("message", response.text[:200])
            logger.warning(f"[Cloudinary] Upload rejected ({response.status_code}): {detail}")
            raise UploadError()

        secure_url = payload.get("secure_url")
        if not secure_url:
            logger.warning(f"[Cloudinary] Upload response without secure_url: {payload}")
            raise UploadError()

        logger.info(f"[Cloudinary] Uploaded {filename} ({len(content)} bytes)")
        return secure_url
