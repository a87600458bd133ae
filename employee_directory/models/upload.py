"""Image upload models for profile pictures."""

from __future__ import annotations

import base64
from enum import Enum

from pydantic import BaseModel


class RejectionReason(str, Enum):
    FILE_TOO_LARGE = "file too large"
    UNSUPPORTED_TYPE = "unsupported type"


REJECTION_MESSAGES: dict[RejectionReason, str] = {
    RejectionReason.FILE_TOO_LARGE: "File size must be less than 5MB",
    RejectionReason.UNSUPPORTED_TYPE: "Only image files are allowed",
}


class ImageUpload(BaseModel):
    """A file picked by the user, held in memory until submission."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


class UploadDecision(BaseModel):
    """Outcome of an intake check: either the accepted file or a rejection reason."""

    file: ImageUpload | None = None
    reason: RejectionReason | None = None

    @property
    def accepted(self) -> bool:
        return self.reason is None

    @property
    def message(self) -> str | None:
        if self.reason is None:
            return None
        return REJECTION_MESSAGES[self.reason]
