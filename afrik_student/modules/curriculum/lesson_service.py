"""Lesson aggregate: a lesson together with its attachments and external links.

Every mutation runs inside one ``UnitOfWork``, so a failure at any step
leaves neither the lesson row, its attachment records nor freshly written
blobs behind.
"""

from __future__ import annotations

import uuid
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from afrik_student.core.exceptions import NotFoundError
from afrik_student.core.logging import get_logger
from afrik_student.db.unit_of_work import UnitOfWork
from afrik_student.integrations.storage import StorageClient, get_storage_client
from afrik_student.modules.attachments.models import Attachment, AttachmentOwner
from afrik_student.modules.attachments.repository import AttachmentRepository
from afrik_student.modules.attachments.store import AttachmentStore
from afrik_student.modules.attachments.uploads import FileUpload, validate_uploads
from afrik_student.modules.curriculum.models import Lesson
from afrik_student.modules.curriculum.repository import (
    LessonRepository,
    ModuleInstructorRepository,
    ModuleRepository,
)
from afrik_student.schemas.lesson import LESSON_SCALAR_FIELDS, LessonCreate, LessonUpdate

logger = get_logger(__name__)


class LessonService:
    """Service layer for lesson operations."""

    def __init__(self, db: Session, storage: Optional[StorageClient] = None):
        self.db = db
        self.storage = storage or get_storage_client()
        self.lesson_repo = LessonRepository(db)
        self.module_repo = ModuleRepository(db)
        self.attachment_repo = AttachmentRepository(db)
        self.assignment_repo = ModuleInstructorRepository(db)

    def list_lessons(self) -> list[Lesson]:
        return self.lesson_repo.list_all()

    def get_lesson(self, lesson_id: uuid.UUID) -> Lesson:
        lesson = self.lesson_repo.get_by_id(lesson_id)
        if not lesson:
            raise NotFoundError("Lesson not found")
        return lesson

    def create_lesson(self, data: LessonCreate, attachments: Sequence[FileUpload] = ()) -> Lesson:
        """Create a lesson, then its uploaded files, then its external links."""
        validate_uploads(attachments)
        self._ensure_module_exists(data.module_id)

        with UnitOfWork(self.db, self.storage) as uow:
            store = AttachmentStore(uow)
            lesson = self.lesson_repo.create(**data.model_dump(include=LESSON_SCALAR_FIELDS))
            for upload in attachments:
                store.attach(lesson.id, upload)
            for link in data.external_links:
                store.attach_link(lesson.id, link)
            lesson_id = lesson.id

        logger.info(
            "created lesson",
            lesson_id=str(lesson_id),
            module_id=str(data.module_id) if data.module_id else None,
            uploads=len(attachments),
            links=len(data.external_links),
        )
        return self._reload(lesson_id)

    def update_lesson(
        self,
        lesson: Lesson,
        data: LessonUpdate,
        attachments: Sequence[FileUpload] = (),
    ) -> Lesson:
        """Apply an update in a fixed order.

        1. remove ``delete_attachments`` (only those owned by this lesson)
        2. copy scalar fields
        3. store new uploads
        4. record new external links

        Removing first lets a caller replace a file in a single request.
        """
        validate_uploads(attachments)
        scalars = data.model_dump(exclude_unset=True, include=LESSON_SCALAR_FIELDS)
        if "module_id" in scalars:
            self._ensure_module_exists(scalars["module_id"])

        with UnitOfWork(self.db, self.storage) as uow:
            store = AttachmentStore(uow)
            if data.delete_attachments:
                store.detach_many(lesson.id, data.delete_attachments)
            if scalars:
                self.lesson_repo.update(lesson, **scalars)
            for upload in attachments:
                store.attach(lesson.id, upload)
            for link in data.external_links:
                store.attach_link(lesson.id, link)

        logger.info(
            "updated lesson",
            lesson_id=str(lesson.id),
            removed=len(data.delete_attachments),
            uploads=len(attachments),
            links=len(data.external_links),
        )
        return self._reload(lesson.id)

    def delete_lesson(self, lesson: Lesson) -> None:
        """Delete the lesson with all its attachments (records and blobs)."""
        lesson_id = lesson.id
        with UnitOfWork(self.db, self.storage) as uow:
            AttachmentStore(uow).detach_all(lesson_id)
            self.lesson_repo.delete(lesson)
        logger.info("deleted lesson", lesson_id=str(lesson_id))

    def delete_attachment(self, lesson: Lesson, attachment_id: uuid.UUID) -> None:
        attachment = self._get_owned_attachment(lesson, attachment_id)
        with UnitOfWork(self.db, self.storage) as uow:
            AttachmentStore(uow).remove(attachment)

    def get_attachment(self, attachment_id: uuid.UUID) -> Attachment:
        attachment = self.attachment_repo.get_by_id(attachment_id)
        if not attachment:
            raise NotFoundError("Attachment not found")
        return attachment

    def attachment_url(self, attachment: Attachment, expires_in: Optional[int] = None) -> str:
        """Where a client fetches the attachment: the link itself, or a storage URL."""
        if attachment.is_external:
            return attachment.url
        return self.storage.generate_url(attachment.url, expires_in)

    def get_instructor_lessons(
        self,
        instructor_id: uuid.UUID,
        course_session_id: Optional[uuid.UUID] = None,
    ) -> list[Lesson]:
        """Lessons of every module the instructor currently teaches.

        Only assignments without ``ended_at`` count. A module taught in several
        sessions contributes its lessons once.
        """
        assignments = self.assignment_repo.list_active_for_instructor(instructor_id, course_session_id)
        module_ids = list(dict.fromkeys(a.module_id for a in assignments))
        lessons = self.lesson_repo.list_by_modules(module_ids)

        seen: set[uuid.UUID] = set()
        unique = []
        for lesson in lessons:
            if lesson.id in seen:
                continue
            seen.add(lesson.id)
            unique.append(lesson)
        return unique

    def _get_owned_attachment(self, lesson: Lesson, attachment_id: uuid.UUID) -> Attachment:
        owned = self.attachment_repo.list_owned(AttachmentOwner.lesson(lesson.id), [attachment_id])
        if not owned:
            raise NotFoundError("Attachment not found")
        return owned[0]

    def _ensure_module_exists(self, module_id: Optional[uuid.UUID]) -> None:
        if module_id is not None and self.module_repo.get_by_id(module_id) is None:
            raise NotFoundError("Module not found")

    def _reload(self, lesson_id: uuid.UUID) -> Lesson:
        # drop identity-map state so the viewonly attachments list is re-read
        self.db.expire_all()
        return self.get_lesson(lesson_id)
