"""
Tests for course-session rules and queries.
"""
import datetime as dt

import pytest

from afrik_student.core.exceptions import NotFoundError, ValidationError
from afrik_student.modules.curriculum.models import Module
from afrik_student.modules.enrollments.models import Enrollment, EnrollmentStatus
from afrik_student.modules.formations.models import Formation
from afrik_student.modules.sessions.models import SessionStatus
from afrik_student.modules.sessions.service import CourseSessionService
from afrik_student.schemas.session import CourseSessionCreate, CourseSessionUpdate


def _enroll(db, course_session, student, status=EnrollmentStatus.confirmed):
    db.add(Enrollment(student_id=student.id, course_session_id=course_session.id, status=status))
    db.commit()


class TestFullness:
    """A session is full once non-cancelled enrollments reach max_students."""

    def test_two_active_enrollments_fill_two_seats(self, db, course_session, make_student):
        _enroll(db, course_session, make_student(), EnrollmentStatus.pending)
        _enroll(db, course_session, make_student(), EnrollmentStatus.confirmed)

        course_session = CourseSessionService(db).get_session(course_session.id)
        assert CourseSessionService.is_full(course_session) is True
        assert course_session.available_spots == 0

    def test_cancelled_enrollment_frees_a_seat(self, db, course_session, make_student):
        _enroll(db, course_session, make_student(), EnrollmentStatus.cancelled)
        _enroll(db, course_session, make_student(), EnrollmentStatus.confirmed)

        course_session = CourseSessionService(db).get_session(course_session.id)
        assert CourseSessionService.is_full(course_session) is False
        assert course_session.enrolled_count == 1
        assert course_session.available_spots == 1


class TestSessionQueries:
    def test_available_excludes_full_and_cancelled(self, db, formation, instructor_user, course_session, make_student):
        service = CourseSessionService(db)
        now = dt.datetime.now(dt.timezone.utc)
        cancelled = service.create_session(CourseSessionCreate(
            formation_id=formation.id,
            instructor_id=instructor_user.id,
            start_date=now + dt.timedelta(days=1),
            end_date=now + dt.timedelta(days=10),
            status=SessionStatus.cancelled,
        ))
        open_session = service.create_session(CourseSessionCreate(
            formation_id=formation.id,
            instructor_id=instructor_user.id,
            start_date=now + dt.timedelta(days=3),
            end_date=now + dt.timedelta(days=40),
        ))
        _enroll(db, course_session, make_student())
        _enroll(db, course_session, make_student())

        available_ids = [s.id for s in service.get_available_sessions()]

        assert available_ids == [open_session.id]
        assert cancelled.id not in available_ids

    def test_students_and_available_students(self, db, course_session, make_student):
        enrolled = make_student()
        cancelled = make_student()
        free = make_student()
        _enroll(db, course_session, enrolled)
        _enroll(db, course_session, cancelled, EnrollmentStatus.cancelled)

        service = CourseSessionService(db)
        assert [u.id for u in service.get_session_students(course_session)] == [enrolled.id]
        assert [u.id for u in service.get_available_students(course_session)] == [free.id]

    def test_sessions_by_student(self, db, course_session, student_user):
        _enroll(db, course_session, student_user)
        sessions = CourseSessionService(db).list_by_student(student_user.id)
        assert [s.id for s in sessions] == [course_session.id]


class TestSessionWrites:
    def test_create_requires_instructor_role(self, db, formation, student_user):
        now = dt.datetime.now(dt.timezone.utc)
        with pytest.raises(ValidationError):
            CourseSessionService(db).create_session(CourseSessionCreate(
                formation_id=formation.id,
                instructor_id=student_user.id,
                start_date=now,
                end_date=now + dt.timedelta(days=1),
            ))

    def test_update_rejects_inverted_dates(self, db, course_session):
        service = CourseSessionService(db)
        with pytest.raises(ValidationError):
            service.update_session(
                course_session,
                CourseSessionUpdate(end_date=course_session.start_date - dt.timedelta(days=1)),
            )

    def test_update_status(self, db, course_session):
        service = CourseSessionService(db)
        updated = service.update_session(course_session, CourseSessionUpdate(status=SessionStatus.ongoing))
        assert updated.status == SessionStatus.ongoing

    def test_delete_removes_enrollments(self, db, course_session, student_user):
        _enroll(db, course_session, student_user)
        service = CourseSessionService(db)
        service.delete_session(service.get_session(course_session.id))
        assert db.query(Enrollment).count() == 0


class TestModuleInstructors:
    def test_reassignment_ends_previous(self, db, module, course_session, instructor_user, instructor_role):
        from afrik_student.modules.users.models import User, UserRole

        substitute = User(email="sub@test.com", first_name="Moussa", last_name="Ba")
        db.add(substitute)
        db.flush()
        db.add(UserRole(user_id=substitute.id, role_id=instructor_role.id))
        db.commit()

        service = CourseSessionService(db)
        first = service.assign_module_instructor(course_session, module.id, instructor_user.id)
        second = service.assign_module_instructor(course_session, module.id, substitute.id)

        db.refresh(first)
        assert first.ended_at is not None
        assert second.ended_at is None

        ended = service.end_module_instructor(course_session, second.id)
        assert ended.ended_at is not None

    def test_module_from_other_formation_rejected(self, db, course_session, instructor_user):
        other = Formation(title="Design")
        db.add(other)
        db.flush()
        foreign_module = Module(formation_id=other.id, title="Color theory")
        db.add(foreign_module)
        db.commit()

        with pytest.raises(ValidationError):
            CourseSessionService(db).assign_module_instructor(
                course_session, foreign_module.id, instructor_user.id
            )

    def test_unknown_assignment_is_404(self, db, course_session):
        from uuid import uuid4

        with pytest.raises(NotFoundError):
            CourseSessionService(db).end_module_instructor(course_session, uuid4())
