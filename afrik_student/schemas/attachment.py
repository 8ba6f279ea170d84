# afrik_student/schemas/attachment.py
from uuid import UUID
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from afrik_student.modules.attachments.models import AttachmentType, ExternalLinkType


class ExternalLinkIn(BaseModel):
    """External resource (YouTube, Google Drive, ...) attached to a lesson.

    ``url`` is checked by the attachment store, so a malformed link aborts
    the surrounding lesson write instead of being dropped.
    """
    url: str
    name: str = Field(max_length=255)
    type: Optional[ExternalLinkType] = None


class AttachmentRead(BaseModel):
    id: UUID
    name: str
    url: str
    type: AttachmentType
    is_external: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AttachmentDownloadResponse(BaseModel):
    id: UUID
    url: str
    expires_in: int
