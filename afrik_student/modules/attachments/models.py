from __future__ import annotations

import enum
import uuid
import datetime as dt
from typing import NamedTuple

from sqlalchemy import BigInteger, DateTime, Enum, Index, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from afrik_student.db.base import Base


class AttachmentType(str, enum.Enum):
    # uploaded files
    video = "video"
    image = "image"
    pdf = "pdf"
    word = "word"
    excel = "excel"
    powerpoint = "powerpoint"
    archive = "archive"
    # external link services
    youtube = "youtube"
    google_drive = "google_drive"
    tiktok = "tiktok"
    vimeo = "vimeo"
    dropbox = "dropbox"
    onedrive = "onedrive"
    other = "other"


class ExternalLinkType(str, enum.Enum):
    """Types a caller may set explicitly on an external link."""
    youtube = "youtube"
    google_drive = "google_drive"
    tiktok = "tiktok"
    vimeo = "vimeo"
    dropbox = "dropbox"
    onedrive = "onedrive"
    other = "other"


LINK_SERVICE_TYPES = frozenset(
    AttachmentType(t.value) for t in ExternalLinkType if t is not ExternalLinkType.other
)


class OwnerKind(str, enum.Enum):
    lesson = "lesson"


class AttachmentOwner(NamedTuple):
    kind: OwnerKind
    id: uuid.UUID

    @classmethod
    def lesson(cls, lesson_id: uuid.UUID) -> "AttachmentOwner":
        return cls(OwnerKind.lesson, lesson_id)


def is_absolute_url(value: str) -> bool:
    return value.lower().startswith(("http://", "https://"))


class Attachment(Base):
    __tablename__ = "attachments"
    __table_args__ = (
        Index("ix_attachments_attachable", "attachable_type", "attachable_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # storage key for uploaded files, absolute URL for external links
    url: Mapped[str] = mapped_column(String(2048), nullable=False)

    type: Mapped[AttachmentType] = mapped_column(
        Enum(AttachmentType, name="attachment_type"),
        server_default=AttachmentType.other.value,
        nullable=False,
    )

    # tagged owner reference, no FK: the owner table depends on attachable_type
    attachable_type: Mapped[str] = mapped_column(String(50), nullable=False)
    attachable_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)

    mime_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    size_bytes: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        # set in Python so rows written in the same second keep insertion order
        default=lambda: dt.datetime.now(dt.timezone.utc),
        server_default=func.now(),
        nullable=False,
    )

    @property
    def owner(self) -> AttachmentOwner:
        return AttachmentOwner(OwnerKind(self.attachable_type), self.attachable_id)

    @property
    def is_external(self) -> bool:
        return self.type in LINK_SERVICE_TYPES or is_absolute_url(self.url)
