"""Media commands."""

from .upload_image import UploadImageCommand, UploadImageHandler, check_upload_size

__all__ = [
    "check_upload_size",
    "UploadImageCommand",
    "UploadImageHandler",
]
