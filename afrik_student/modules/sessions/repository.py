from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from afrik_student.modules.enrollments.models import Enrollment, EnrollmentStatus
from afrik_student.modules.sessions.models import CourseSession, SessionStatus
from afrik_student.modules.users.models import Role, RoleName, User


class CourseSessionRepository:
    """Repository for CourseSession entity with CRUD operations."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(CourseSession).options(
            selectinload(CourseSession.formation),
            selectinload(CourseSession.instructor),
            selectinload(CourseSession.enrollments),
        )

    def get_by_id(self, session_id: uuid.UUID) -> Optional[CourseSession]:
        return self._query().filter(CourseSession.id == session_id).first()

    def list_all(self) -> list[CourseSession]:
        return self._query().order_by(CourseSession.start_date.desc()).all()

    def list_open(self) -> list[CourseSession]:
        """Sessions that are not cancelled."""
        return (
            self._query()
            .filter(CourseSession.status != SessionStatus.cancelled)
            .order_by(CourseSession.start_date.asc())
            .all()
        )

    def list_by_formation(self, formation_id: uuid.UUID) -> list[CourseSession]:
        return (
            self._query()
            .filter(CourseSession.formation_id == formation_id)
            .order_by(CourseSession.start_date.asc())
            .all()
        )

    def list_by_instructor(self, instructor_id: uuid.UUID) -> list[CourseSession]:
        return (
            self._query()
            .filter(CourseSession.instructor_id == instructor_id)
            .order_by(CourseSession.start_date.asc())
            .all()
        )

    def list_by_student(self, student_id: uuid.UUID) -> list[CourseSession]:
        return (
            self._query()
            .join(Enrollment, Enrollment.course_session_id == CourseSession.id)
            .filter(Enrollment.student_id == student_id)
            .order_by(CourseSession.start_date.asc())
            .all()
        )

    def list_enrolled_students(self, session_id: uuid.UUID) -> list[User]:
        """Students holding a seat (enrollment not cancelled)."""
        return (
            self.db.query(User)
            .join(Enrollment, Enrollment.student_id == User.id)
            .filter(
                Enrollment.course_session_id == session_id,
                Enrollment.status != EnrollmentStatus.cancelled,
            )
            .order_by(User.last_name, User.first_name)
            .all()
        )

    def list_unenrolled_students(self, session_id: uuid.UUID) -> list[User]:
        """Users with the student role and no enrollment in the session."""
        enrolled = select(Enrollment.student_id).where(Enrollment.course_session_id == session_id)
        return (
            self.db.query(User)
            .join(User.roles)
            .filter(Role.name == RoleName.student.value, User.id.not_in(enrolled))
            .order_by(User.last_name, User.first_name)
            .all()
        )

    def create(self, **kwargs) -> CourseSession:
        course_session = CourseSession(**kwargs)
        self.db.add(course_session)
        self.db.flush()
        return course_session

    def update(self, course_session: CourseSession, **kwargs) -> CourseSession:
        for key, value in kwargs.items():
            if hasattr(course_session, key):
                setattr(course_session, key, value)
        self.db.flush()
        return course_session

    def delete(self, course_session: CourseSession) -> None:
        self.db.delete(course_session)
        self.db.flush()
