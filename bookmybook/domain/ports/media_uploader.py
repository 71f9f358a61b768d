"""
Media Uploader Port - hosts an image and returns its public URL.
Implementation: bookmybook/infrastructure/cloudinary/cloudinary_media_uploader.py
"""

from abc import ABC, abstractmethod


class MediaUploader(ABC):
    @abstractmethod
    async def upload(self, filename: str, content: bytes, content_type: str) -> str:
        """Upload the file and return its secure URL. Raises UploadError."""
        ...
