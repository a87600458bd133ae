from __future__ import annotations

import logging

from employee_directory.models.upload import ImageUpload, RejectionReason, UploadDecision

logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5 MB

IMAGE_CONTENT_TYPE_PREFIX = "image/"


class ImageIntakeGuard:
    def __init__(self, max_size: int = MAX_IMAGE_SIZE) -> None:
        self.max_size = max_size

    def accept_upload(self, file: ImageUpload) -> UploadDecision:
        if file.size > self.max_size:
            logger.info("Rejected %s: %d bytes (max %d)", file.filename, file.size, self.max_size)
            return UploadDecision(reason=RejectionReason.FILE_TOO_LARGE)

        if not file.content_type.startswith(IMAGE_CONTENT_TYPE_PREFIX):
            logger.info("Rejected %s: unsupported content type %s", file.filename, file.content_type)
            return UploadDecision(reason=RejectionReason.UNSUPPORTED_TYPE)

        return UploadDecision(file=file)


image_intake = ImageIntakeGuard()
