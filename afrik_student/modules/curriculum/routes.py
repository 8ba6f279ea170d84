# afrik_student/modules/curriculum/routes.py
"""Lesson, attachment and instructor-lesson endpoints.

Lesson writes are multipart: a JSON ``payload`` form field with the lesson
fields plus zero or more ``attachments`` files.
"""

from uuid import UUID
from typing import List, Optional, Type, TypeVar

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from afrik_student.core.config import settings
from afrik_student.core.exceptions import ValidationError
from afrik_student.db.deps import get_db, get_storage
from afrik_student.integrations.storage import StorageClient
from afrik_student.modules.attachments.uploads import FileUpload
from afrik_student.modules.curriculum.lesson_service import LessonService
from afrik_student.schemas.attachment import AttachmentDownloadResponse
from afrik_student.schemas.lesson import (
    InstructorLessonRead,
    LessonCreate,
    LessonRead,
    LessonUpdate,
)

PayloadT = TypeVar("PayloadT", bound=BaseModel)

router = APIRouter(prefix="/lessons", tags=["lessons"])
attachments_router = APIRouter(prefix="/attachments", tags=["attachments"])
instructors_router = APIRouter(prefix="/instructors", tags=["instructors"])


def get_lesson_service(
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
) -> LessonService:
    return LessonService(db, storage)


def _parse_payload(model: Type[PayloadT], raw: Optional[str]) -> PayloadT:
    try:
        return model.model_validate_json(raw or "{}")
    except PydanticValidationError as e:
        raise ValidationError(e.errors(include_url=False, include_context=False)) from e


def _as_uploads(files: Optional[List[UploadFile]]) -> list[FileUpload]:
    return [FileUpload.from_upload_file(f) for f in (files or [])]


@router.get("", response_model=List[LessonRead])
def list_lessons(lesson_service: LessonService = Depends(get_lesson_service)):
    return lesson_service.list_lessons()


@router.post(
    "",
    response_model=LessonRead,
    status_code=status.HTTP_201_CREATED,
)
def create_lesson(
    payload: str = Form(...),
    attachments: Optional[List[UploadFile]] = File(default=None),
    lesson_service: LessonService = Depends(get_lesson_service),
):
    data = _parse_payload(LessonCreate, payload)
    return lesson_service.create_lesson(data, _as_uploads(attachments))


@router.get("/{lesson_id}", response_model=LessonRead)
def get_lesson(lesson_id: UUID, lesson_service: LessonService = Depends(get_lesson_service)):
    return lesson_service.get_lesson(lesson_id)


@router.patch("/{lesson_id}", response_model=LessonRead)
def update_lesson(
    lesson_id: UUID,
    payload: Optional[str] = Form(default=None),
    attachments: Optional[List[UploadFile]] = File(default=None),
    lesson_service: LessonService = Depends(get_lesson_service),
):
    """Update a lesson.

    ``delete_attachments`` are removed before new files and links are added.
    """
    lesson = lesson_service.get_lesson(lesson_id)
    data = _parse_payload(LessonUpdate, payload)
    return lesson_service.update_lesson(lesson, data, _as_uploads(attachments))


@router.delete("/{lesson_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_lesson(lesson_id: UUID, lesson_service: LessonService = Depends(get_lesson_service)):
    lesson = lesson_service.get_lesson(lesson_id)
    lesson_service.delete_lesson(lesson)
    return None


@router.delete(
    "/{lesson_id}/attachments/{attachment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_lesson_attachment(
    lesson_id: UUID,
    attachment_id: UUID,
    lesson_service: LessonService = Depends(get_lesson_service),
):
    lesson = lesson_service.get_lesson(lesson_id)
    lesson_service.delete_attachment(lesson, attachment_id)
    return None


@attachments_router.get("/{attachment_id}/download", response_model=AttachmentDownloadResponse)
def download_attachment(
    attachment_id: UUID,
    lesson_service: LessonService = Depends(get_lesson_service),
):
    """URL the client should fetch: the external link, or a storage URL for uploads."""
    attachment = lesson_service.get_attachment(attachment_id)
    expires_in = settings.STORAGE_URL_EXPIRY_SECONDS
    return AttachmentDownloadResponse(
        id=attachment.id,
        url=lesson_service.attachment_url(attachment, expires_in),
        expires_in=expires_in,
    )


@instructors_router.get("/{instructor_id}/lessons", response_model=List[InstructorLessonRead])
def list_instructor_lessons(
    instructor_id: UUID,
    course_session_id: Optional[UUID] = Query(default=None),
    lesson_service: LessonService = Depends(get_lesson_service),
):
    """Lessons of the modules the instructor is currently assigned to teach."""
    return lesson_service.get_instructor_lessons(instructor_id, course_session_id)
