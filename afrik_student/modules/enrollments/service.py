from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from afrik_student.core.exceptions import ConflictError, NotFoundError, ValidationError
from afrik_student.core.logging import get_logger
from afrik_student.db.unit_of_work import UnitOfWork
from afrik_student.modules.enrollments.models import Enrollment, EnrollmentStatus, PaymentStatus
from afrik_student.modules.enrollments.repository import EnrollmentRepository
from afrik_student.modules.sessions.models import SessionStatus
from afrik_student.modules.sessions.repository import CourseSessionRepository
from afrik_student.modules.users.models import RoleName
from afrik_student.modules.users.repository import UserRepository
from afrik_student.schemas.enrollment import EnrollmentCreate

logger = get_logger(__name__)


class EnrollmentService:
    """Service layer for enrollment operations."""

    def __init__(self, db: Session):
        self.db = db
        self.enrollment_repo = EnrollmentRepository(db)
        self.session_repo = CourseSessionRepository(db)
        self.user_repo = UserRepository(db)

    def get_enrollment(self, enrollment_id: uuid.UUID) -> Enrollment:
        enrollment = self.enrollment_repo.get_by_id(enrollment_id)
        if not enrollment:
            raise NotFoundError("Enrollment not found")
        return enrollment

    def list_by_session(self, course_session_id: uuid.UUID) -> list[Enrollment]:
        return self.enrollment_repo.list_by_session(course_session_id)

    def list_by_student(self, student_id: uuid.UUID) -> list[Enrollment]:
        return self.enrollment_repo.list_by_student(student_id)

    def create_enrollment(self, data: EnrollmentCreate) -> Enrollment:
        """Enroll a student in a session.

        Fails with ``ConflictError`` when the pair already exists, the session
        is cancelled or the session is full.
        """
        student = self.user_repo.get_by_id(data.student_id)
        if not student:
            raise NotFoundError("Student not found")
        if not student.has_role(RoleName.student):
            raise ValidationError("The selected user is not a student.", field="student_id")

        course_session = self.session_repo.get_by_id(data.course_session_id)
        if not course_session:
            raise NotFoundError("Course session not found")

        if self.enrollment_repo.get_by_student_and_session(data.student_id, data.course_session_id):
            raise ConflictError("Student is already enrolled in this session")
        if course_session.status == SessionStatus.cancelled:
            raise ConflictError("Cannot enroll in a cancelled session")
        if course_session.is_full:
            logger.warning(
                "course session is full",
                session_id=str(course_session.id),
                max_students=course_session.max_students,
            )
            raise ConflictError(f"Course session is full. Maximum capacity: {course_session.max_students}")

        with UnitOfWork(self.db):
            try:
                enrollment = self.enrollment_repo.create(
                    student_id=data.student_id,
                    course_session_id=data.course_session_id,
                    payment_amount=data.payment_amount,
                )
            except IntegrityError as e:
                # a concurrent request enrolled the same pair first
                raise ConflictError("Student is already enrolled in this session") from e

        self.db.refresh(enrollment)
        logger.info(
            "created enrollment",
            enrollment_id=str(enrollment.id),
            student_id=str(data.student_id),
            session_id=str(data.course_session_id),
        )
        return enrollment

    def confirm(self, enrollment: Enrollment) -> Enrollment:
        return self._set_status(enrollment, EnrollmentStatus.confirmed)

    def cancel(self, enrollment: Enrollment) -> Enrollment:
        return self._set_status(enrollment, EnrollmentStatus.cancelled)

    def mark_paid(self, enrollment: Enrollment, payment_amount: Optional[Decimal] = None) -> Enrollment:
        fields = {"payment_status": PaymentStatus.paid}
        if payment_amount is not None:
            fields["payment_amount"] = payment_amount
        with UnitOfWork(self.db):
            self.enrollment_repo.update(enrollment, **fields)
        self.db.refresh(enrollment)
        logger.info("enrollment paid", enrollment_id=str(enrollment.id))
        return enrollment

    def delete_enrollment(self, enrollment: Enrollment) -> None:
        enrollment_id = enrollment.id
        with UnitOfWork(self.db):
            self.enrollment_repo.delete(enrollment)
        logger.info("deleted enrollment", enrollment_id=str(enrollment_id))

    def unenroll_students(self, course_session_id: uuid.UUID, student_ids: list[uuid.UUID]) -> int:
        """Remove the listed students from a session; unknown ids are ignored."""
        if not self.session_repo.get_by_id(course_session_id):
            raise NotFoundError("Course session not found")
        with UnitOfWork(self.db):
            removed = self.enrollment_repo.delete_for_students(course_session_id, student_ids)
        logger.info("unenrolled students", session_id=str(course_session_id), removed=removed)
        return removed

    def _set_status(self, enrollment: Enrollment, status: EnrollmentStatus) -> Enrollment:
        with UnitOfWork(self.db):
            self.enrollment_repo.update(enrollment, status=status)
        self.db.refresh(enrollment)
        logger.info("enrollment status changed", enrollment_id=str(enrollment.id), status=status.value)
        return enrollment
