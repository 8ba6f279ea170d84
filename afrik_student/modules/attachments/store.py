"""Attachment records owned by a lesson, backed by blob storage.

An ``AttachmentStore`` is bound to one ``UnitOfWork``: records go through the
unit's session, blob writes are registered for rollback cleanup and blob
deletions wait for the commit.
"""

from __future__ import annotations

import re
import time
import uuid
from typing import Iterable
from urllib.parse import urlparse

from botocore.exceptions import BotoCoreError, ClientError

from afrik_student.core.content_constants import LESSON_ATTACHMENTS_PREFIX
from afrik_student.core.exceptions import StorageWriteError, ValidationError
from afrik_student.core.logging import get_logger
from afrik_student.db.unit_of_work import UnitOfWork
from afrik_student.modules.attachments.classifier import classify_file, resolve_link_type
from afrik_student.modules.attachments.models import Attachment, AttachmentOwner, is_absolute_url
from afrik_student.modules.attachments.repository import AttachmentRepository
from afrik_student.modules.attachments.uploads import FileUpload
from afrik_student.schemas.attachment import ExternalLinkIn

logger = get_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def build_storage_key(upload: FileUpload) -> str:
    """``lessons/attachments/<stem>_<timestamp>_<random>.<ext>``"""
    stem = _UNSAFE_CHARS.sub("_", upload.stem).strip("._") or "file"
    filename = f"{stem}_{int(time.time())}_{uuid.uuid4().hex[:13]}"
    if upload.extension:
        filename = f"{filename}.{upload.extension}"
    return f"{LESSON_ATTACHMENTS_PREFIX}/{filename}"


def _is_well_formed_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class AttachmentStore:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.storage = uow.storage
        self.attachment_repo = AttachmentRepository(uow.db)

    def attach(self, lesson_id: uuid.UUID, upload: FileUpload) -> Attachment:
        """Store the uploaded blob, then record it. No record without a blob."""
        key = build_storage_key(upload)
        size = upload.measure()
        upload.file.seek(0)

        try:
            self.storage.upload_fileobj(upload.file, key, upload.content_type)
        except (OSError, ValueError, BotoCoreError, ClientError) as e:
            logger.error("attachment upload failed", lesson_id=str(lesson_id), key=key, error=str(e))
            raise StorageWriteError(f"Failed to store file '{upload.filename}'") from e
        self.uow.record_write(key)

        attachment = self.attachment_repo.create(
            AttachmentOwner.lesson(lesson_id),
            name=upload.filename,
            url=key,
            type=classify_file(upload.content_type, upload.extension),
            mime_type=upload.content_type,
            size_bytes=size,
        )
        logger.info(
            "attachment stored",
            lesson_id=str(lesson_id),
            attachment_id=str(attachment.id),
            type=attachment.type.value,
        )
        return attachment

    def attach_link(self, lesson_id: uuid.UUID, link: ExternalLinkIn) -> Attachment:
        url = (link.url or "").strip()
        name = (link.name or "").strip()
        if not name:
            raise ValidationError("The external link name is required.", field="external_links.name")
        if not _is_well_formed_url(url):
            raise ValidationError("The external link URL must be valid.", field="external_links.url")

        attachment = self.attachment_repo.create(
            AttachmentOwner.lesson(lesson_id),
            name=name,
            url=url,
            type=resolve_link_type(url, link.type),
        )
        logger.info(
            "external link attached",
            lesson_id=str(lesson_id),
            attachment_id=str(attachment.id),
            type=attachment.type.value,
        )
        return attachment

    def detach_many(self, lesson_id: uuid.UUID, attachment_ids: Iterable[uuid.UUID]) -> None:
        """Delete the listed attachments that belong to the lesson; ignore the rest."""
        owned = self.attachment_repo.list_owned(AttachmentOwner.lesson(lesson_id), attachment_ids)
        for attachment in owned:
            self.remove(attachment)

    def detach_all(self, lesson_id: uuid.UUID) -> None:
        for attachment in self.attachment_repo.list_for_owner(AttachmentOwner.lesson(lesson_id)):
            self.remove(attachment)

    def remove(self, attachment: Attachment) -> None:
        # external links and empty paths have no blob
        if not attachment.is_external and attachment.url and not is_absolute_url(attachment.url):
            self.uow.defer_delete(attachment.url)
        self.attachment_repo.delete(attachment)
        logger.info("attachment removed", attachment_id=str(attachment.id))
