"""
Tests for enrollment rules.
"""
from decimal import Decimal
from uuid import uuid4

import pytest

from afrik_student.core.exceptions import ConflictError, NotFoundError, ValidationError
from afrik_student.modules.enrollments.models import Enrollment, EnrollmentStatus, PaymentStatus
from afrik_student.modules.enrollments.service import EnrollmentService
from afrik_student.modules.sessions.models import SessionStatus
from afrik_student.schemas.enrollment import EnrollmentCreate


def _payload(student, course_session, **kwargs):
    return EnrollmentCreate(student_id=student.id, course_session_id=course_session.id, **kwargs)


class TestCreateEnrollment:
    def test_new_enrollment_is_pending_and_unpaid(self, db, course_session, student_user):
        enrollment = EnrollmentService(db).create_enrollment(_payload(student_user, course_session))

        assert enrollment.status == EnrollmentStatus.pending
        assert enrollment.payment_status == PaymentStatus.unpaid
        assert enrollment.is_paid is False

    def test_duplicate_enrollment_conflicts(self, db, course_session, student_user):
        """Second enrollment of the same pair fails; the first is untouched."""
        service = EnrollmentService(db)
        first = service.create_enrollment(_payload(student_user, course_session))
        first_id = first.id

        with pytest.raises(ConflictError) as exc:
            service.create_enrollment(_payload(student_user, course_session))

        assert exc.value.status_code == 409
        assert db.query(Enrollment).count() == 1
        assert service.get_enrollment(first_id).status == EnrollmentStatus.pending

    def test_full_session_conflicts(self, db, course_session, make_student):
        service = EnrollmentService(db)
        service.create_enrollment(_payload(make_student(), course_session))
        service.create_enrollment(_payload(make_student(), course_session))

        with pytest.raises(ConflictError):
            service.create_enrollment(_payload(make_student(), course_session))

    def test_cancelled_seat_can_be_reused(self, db, course_session, make_student):
        service = EnrollmentService(db)
        service.cancel(service.create_enrollment(_payload(make_student(), course_session)))
        service.create_enrollment(_payload(make_student(), course_session))

        third = service.create_enrollment(_payload(make_student(), course_session))
        assert third.id is not None

    def test_cancelled_session_conflicts(self, db, course_session, student_user):
        course_session.status = SessionStatus.cancelled
        db.commit()

        with pytest.raises(ConflictError):
            EnrollmentService(db).create_enrollment(_payload(student_user, course_session))

    def test_non_student_rejected(self, db, course_session, instructor_user):
        with pytest.raises(ValidationError):
            EnrollmentService(db).create_enrollment(_payload(instructor_user, course_session))

    def test_unknown_session_is_not_found(self, db, student_user):
        with pytest.raises(NotFoundError):
            EnrollmentService(db).create_enrollment(
                EnrollmentCreate(student_id=student_user.id, course_session_id=uuid4())
            )


class TestEnrollmentTransitions:
    def test_confirm_then_cancel(self, db, course_session, student_user):
        service = EnrollmentService(db)
        enrollment = service.create_enrollment(_payload(student_user, course_session))

        assert service.confirm(enrollment).status == EnrollmentStatus.confirmed
        assert service.cancel(enrollment).status == EnrollmentStatus.cancelled

    def test_mark_paid_records_amount(self, db, course_session, student_user):
        service = EnrollmentService(db)
        enrollment = service.create_enrollment(_payload(student_user, course_session))

        paid = service.mark_paid(enrollment, Decimal("150000.00"))

        assert paid.is_paid is True
        assert paid.payment_amount == Decimal("150000.00")

    def test_unenroll_students(self, db, course_session, make_student):
        service = EnrollmentService(db)
        a, b = make_student(), make_student()
        service.create_enrollment(_payload(a, course_session))
        service.create_enrollment(_payload(b, course_session))

        removed = service.unenroll_students(course_session.id, [a.id, uuid4()])

        assert removed == 1
        assert [e.student_id for e in service.list_by_session(course_session.id)] == [b.id]
