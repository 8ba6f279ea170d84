from __future__ import annotations

import uuid
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from afrik_student.modules.enrollments.models import Enrollment


class EnrollmentRepository:
    """Repository for Enrollment entity with CRUD operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, enrollment_id: uuid.UUID) -> Optional[Enrollment]:
        """Get enrollment by ID."""
        return self.db.query(Enrollment).filter(Enrollment.id == enrollment_id).first()

    def get_by_student_and_session(
        self, student_id: uuid.UUID, course_session_id: uuid.UUID
    ) -> Optional[Enrollment]:
        return (
            self.db.query(Enrollment)
            .filter(
                Enrollment.student_id == student_id,
                Enrollment.course_session_id == course_session_id,
            )
            .first()
        )

    def list_by_student(self, student_id: uuid.UUID) -> list[Enrollment]:
        return (
            self.db.query(Enrollment)
            .filter(Enrollment.student_id == student_id)
            .order_by(Enrollment.enrollment_date.desc())
            .all()
        )

    def list_by_session(self, course_session_id: uuid.UUID) -> list[Enrollment]:
        return (
            self.db.query(Enrollment)
            .filter(Enrollment.course_session_id == course_session_id)
            .order_by(Enrollment.enrollment_date.asc())
            .all()
        )

    def create(self, **kwargs) -> Enrollment:
        enrollment = Enrollment(**kwargs)
        self.db.add(enrollment)
        self.db.flush()
        return enrollment

    def update(self, enrollment: Enrollment, **kwargs) -> Enrollment:
        for key, value in kwargs.items():
            if hasattr(enrollment, key):
                setattr(enrollment, key, value)
        self.db.flush()
        return enrollment

    def delete(self, enrollment: Enrollment) -> None:
        self.db.delete(enrollment)
        self.db.flush()

    def delete_for_students(self, course_session_id: uuid.UUID, student_ids: Iterable[uuid.UUID]) -> int:
        enrollments = (
            self.db.query(Enrollment)
            .filter(
                Enrollment.course_session_id == course_session_id,
                Enrollment.student_id.in_(list(student_ids)),
            )
            .all()
        )
        for enrollment in enrollments:
            self.db.delete(enrollment)
        self.db.flush()
        return len(enrollments)
