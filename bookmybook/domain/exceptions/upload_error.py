"""
UploadError - Media upload service rejected or failed the upload.
Maps to: HTTP 502 Bad Gateway
"""


class UploadError(Exception):
    def __init__(self, message: str = "Failed to upload image. Please try again."):
        super().__init__(message)
        self.message = message
