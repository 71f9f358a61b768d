"""
Uploads API Router - book cover images.

POST /uploads/image (multipart/form-data, field "file") → {"url": "https://..."}
"""

from logging import getLogger

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, File, UploadFile
from pydantic import BaseModel

from bookmybook.application.commands.media import (
    UploadImageCommand,
    UploadImageHandler,
    check_upload_size,
)
from bookmybook.domain.entities.user import User
from bookmybook.presentation.dependencies.auth import get_current_user

logger = getLogger(__name__)


class UploadImageResponse(BaseModel):
    url: str


router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("/image", response_model=UploadImageResponse)
@inject
async def upload_image(
    handler: FromDishka[UploadImageHandler],
    current_user: User = Depends(get_current_user),
    file: UploadFile = File(...),
):
    # multipart parsing already spooled the file, reject before loading it
    check_upload_size(file.size)
    content = await file.read()
    url = await handler.execute(
        UploadImageCommand(
            filename=file.filename or "upload",
            content=content,
            content_type=file.content_type or "",
        )
    )
    logger.info(f"Image uploaded by {current_user.id.value}: {url}")
    return UploadImageResponse(url=url)
