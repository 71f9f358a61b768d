"""
Upload Image Command - host a book cover and return its URL.

Only image/* content is accepted, up to MAX_UPLOAD_MB.
"""

from dataclasses import dataclass
from typing import Optional

from bookmybook.application.common.interfaces import Command, CommandHandler
from bookmybook.config.settings import Config
from bookmybook.domain.exceptions import ValidationError
from bookmybook.domain.ports.media_uploader import MediaUploader

MAX_UPLOAD_BYTES = int(Config.MAX_UPLOAD_MB * 1024 * 1024)


def check_upload_size(size: Optional[int]) -> None:
    """Reject uploads over MAX_UPLOAD_BYTES. An unknown size passes."""
    if size is not None and size > MAX_UPLOAD_BYTES:
        raise ValidationError(
            f"File too large. Maximum upload size is {Config.MAX_UPLOAD_MB} MB."
        )


@dataclass(frozen=True)
class UploadImageCommand(Command[str]):
    filename: str
    content: bytes
    content_type: str


class UploadImageHandler(CommandHandler[str]):
    def __init__(self, uploader: MediaUploader):
        self._uploader = uploader

    async def execute(self, command: UploadImageCommand) -> str:
        if not command.content:
            raise ValidationError("Uploaded file is empty")
        if not (command.content_type or "").startswith("image/"):
            raise ValidationError("Only image files can be uploaded")
        check_upload_size(len(command.content))
        return await self._uploader.upload(
            command.filename, command.content, command.content_type
        )
