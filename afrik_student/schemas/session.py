# afrik_student/schemas/session.py
from uuid import UUID
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from afrik_student.modules.sessions.models import DEFAULT_MAX_STUDENTS, SessionStatus
from afrik_student.schemas.formation import FormationRead
from afrik_student.schemas.user import UserSummary


class CourseSessionBase(BaseModel):
    formation_id: UUID
    instructor_id: UUID
    start_date: datetime
    end_date: datetime
    status: SessionStatus = SessionStatus.scheduled
    max_students: int = Field(default=DEFAULT_MAX_STUDENTS, ge=1)
    location: Optional[str] = Field(default=None, max_length=255)


class CourseSessionCreate(CourseSessionBase):
    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class CourseSessionUpdate(BaseModel):
    formation_id: Optional[UUID] = None
    instructor_id: Optional[UUID] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[SessionStatus] = None
    max_students: Optional[int] = Field(default=None, ge=1)
    location: Optional[str] = Field(default=None, max_length=255)

    @field_validator("formation_id", "instructor_id", "start_date", "end_date", "status", "max_students")
    @classmethod
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} may be omitted but not null")
        return value


class CourseSessionRead(CourseSessionBase):
    id: UUID
    enrolled_count: int
    available_spots: int
    is_full: bool
    formation: Optional[FormationRead] = None
    instructor: Optional[UserSummary] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ModuleInstructorAssign(BaseModel):
    module_id: UUID
    instructor_id: UUID


class ModuleInstructorRead(BaseModel):
    id: UUID
    module_id: UUID
    course_session_id: UUID
    instructor_id: UUID
    started_at: datetime
    ended_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
