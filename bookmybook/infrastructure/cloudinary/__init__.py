"""
Cloudinary Layer - Media upload adapter.
"""

from bookmybook.infrastructure.cloudinary.cloudinary_media_uploader import (
    CloudinaryMediaUploader,
)

__all__ = [
    "CloudinaryMediaUploader",
]
