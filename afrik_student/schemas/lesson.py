# afrik_student/schemas/lesson.py
from uuid import UUID
from typing import List, Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from afrik_student.schemas.attachment import AttachmentRead, ExternalLinkIn
from afrik_student.schemas.formation import FormationRead

# fields copied onto the Lesson row; everything else drives nested writes
LESSON_SCALAR_FIELDS = {"title", "content", "module_id", "order"}


class LessonCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: Optional[str] = None
    module_id: Optional[UUID] = None
    order: Optional[int] = Field(default=None, ge=1)
    external_links: List[ExternalLinkIn] = Field(default_factory=list)


class LessonUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = None
    module_id: Optional[UUID] = None
    order: Optional[int] = Field(default=None, ge=1)
    external_links: List[ExternalLinkIn] = Field(default_factory=list)
    # removed before anything is added, so a file can be replaced in one call
    delete_attachments: List[UUID] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("title may be omitted but not null")
        return value


class LessonModuleRead(BaseModel):
    """A lesson's module, without the module's own lesson list."""
    id: UUID
    title: str
    description: Optional[str] = None
    formation_id: UUID
    order: int

    model_config = ConfigDict(from_attributes=True)


class LessonRead(BaseModel):
    id: UUID
    title: str
    content: Optional[str] = None
    order: Optional[int] = None
    module_id: Optional[UUID] = None
    module: Optional[LessonModuleRead] = None
    attachments: List[AttachmentRead] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InstructorLessonModuleRead(LessonModuleRead):
    formation: Optional[FormationRead] = None


class InstructorLessonRead(LessonRead):
    module: Optional[InstructorLessonModuleRead] = None
    attachments_count: int
