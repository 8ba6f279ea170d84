from __future__ import annotations

import enum
import uuid
import datetime as dt
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from afrik_student.db.base import Base
from afrik_student.db.mixins import TimestampMixin
from afrik_student.modules.enrollments.models import Enrollment, EnrollmentStatus

if TYPE_CHECKING:
    from afrik_student.modules.curriculum.models import Module
    from afrik_student.modules.formations.models import Formation
    from afrik_student.modules.users.models import User


class SessionStatus(str, enum.Enum):
    scheduled = "scheduled"
    ongoing = "ongoing"
    completed = "completed"
    cancelled = "cancelled"


DEFAULT_MAX_STUDENTS = 30


class CourseSession(TimestampMixin, Base):
    __tablename__ = "course_sessions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    formation_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("formations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    instructor_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    start_date: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    status: Mapped[SessionStatus] = mapped_column(
        Enum(SessionStatus, name="session_status"),
        default=SessionStatus.scheduled,
        server_default=SessionStatus.scheduled.value,
        nullable=False,
    )

    max_students: Mapped[int] = mapped_column(
        Integer, default=DEFAULT_MAX_STUDENTS, server_default=str(DEFAULT_MAX_STUDENTS), nullable=False
    )
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    formation: Mapped["Formation"] = relationship(
        "Formation",
        back_populates="course_sessions",
    )

    instructor: Mapped["User"] = relationship(
        "User",
        back_populates="taught_sessions",
        foreign_keys=[instructor_id],
    )

    enrollments: Mapped[list["Enrollment"]] = relationship(
        "Enrollment",
        back_populates="course_session",
        cascade="all, delete-orphan",
    )

    module_instructors: Mapped[list["ModuleSessionInstructor"]] = relationship(
        "ModuleSessionInstructor",
        back_populates="course_session",
        cascade="all, delete-orphan",
    )

    @property
    def enrolled_count(self) -> int:
        """Enrollments that still hold a seat (anything not cancelled)."""
        return sum(1 for e in self.enrollments if e.status != EnrollmentStatus.cancelled)

    @property
    def available_spots(self) -> int:
        return max(self.max_students - self.enrolled_count, 0)

    @property
    def is_full(self) -> bool:
        return self.enrolled_count >= self.max_students


class ModuleSessionInstructor(TimestampMixin, Base):
    """An instructor teaching one module within a course session."""

    __tablename__ = "module_session_instructors"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    module_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("modules.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    course_session_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("course_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    instructor_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    started_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc), nullable=False
    )
    # NULL while the assignment is active
    ended_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    module: Mapped["Module"] = relationship("Module")
    course_session: Mapped["CourseSession"] = relationship(
        "CourseSession",
        back_populates="module_instructors",
    )
    instructor: Mapped["User"] = relationship("User")
