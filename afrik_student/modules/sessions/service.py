from __future__ import annotations

import uuid
import datetime as dt

from sqlalchemy.orm import Session

from afrik_student.core.exceptions import NotFoundError, ValidationError
from afrik_student.core.logging import get_logger
from afrik_student.db.unit_of_work import UnitOfWork
from afrik_student.modules.curriculum.repository import ModuleInstructorRepository, ModuleRepository
from afrik_student.modules.formations.repository import FormationRepository
from afrik_student.modules.sessions.models import CourseSession, ModuleSessionInstructor
from afrik_student.modules.sessions.repository import CourseSessionRepository
from afrik_student.modules.users.models import RoleName, User
from afrik_student.modules.users.repository import UserRepository
from afrik_student.schemas.session import CourseSessionCreate, CourseSessionUpdate

logger = get_logger(__name__)


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class CourseSessionService:
    """Service layer for course sessions and their module-teaching assignments."""

    def __init__(self, db: Session):
        self.db = db
        self.session_repo = CourseSessionRepository(db)
        self.formation_repo = FormationRepository(db)
        self.module_repo = ModuleRepository(db)
        self.user_repo = UserRepository(db)
        self.assignment_repo = ModuleInstructorRepository(db)

    @staticmethod
    def is_full(course_session: CourseSession) -> bool:
        """True once non-cancelled enrollments reach ``max_students``."""
        return course_session.is_full

    def list_sessions(self) -> list[CourseSession]:
        return self.session_repo.list_all()

    def get_available_sessions(self) -> list[CourseSession]:
        """Sessions that are neither cancelled nor full."""
        return [s for s in self.session_repo.list_open() if not s.is_full]

    def get_session(self, session_id: uuid.UUID) -> CourseSession:
        course_session = self.session_repo.get_by_id(session_id)
        if not course_session:
            raise NotFoundError("Course session not found")
        return course_session

    def list_by_formation(self, formation_id: uuid.UUID) -> list[CourseSession]:
        return self.session_repo.list_by_formation(formation_id)

    def list_by_instructor(self, instructor_id: uuid.UUID) -> list[CourseSession]:
        return self.session_repo.list_by_instructor(instructor_id)

    def list_by_student(self, student_id: uuid.UUID) -> list[CourseSession]:
        return self.session_repo.list_by_student(student_id)

    def get_session_students(self, course_session: CourseSession) -> list[User]:
        return self.session_repo.list_enrolled_students(course_session.id)

    def get_available_students(self, course_session: CourseSession) -> list[User]:
        """Students that could still be enrolled in the session."""
        return self.session_repo.list_unenrolled_students(course_session.id)

    def create_session(self, data: CourseSessionCreate) -> CourseSession:
        self._ensure_formation_exists(data.formation_id)
        self._ensure_instructor(data.instructor_id)

        with UnitOfWork(self.db):
            course_session = self.session_repo.create(**data.model_dump())
            session_id = course_session.id

        logger.info("created course session", session_id=str(session_id), formation_id=str(data.formation_id))
        return self._reload(session_id)

    def update_session(self, course_session: CourseSession, data: CourseSessionUpdate) -> CourseSession:
        fields = data.model_dump(exclude_unset=True)
        if fields.get("formation_id") is not None:
            self._ensure_formation_exists(fields["formation_id"])
        if fields.get("instructor_id") is not None:
            self._ensure_instructor(fields["instructor_id"])

        start = fields.get("start_date") or course_session.start_date
        end = fields.get("end_date") or course_session.end_date
        if _naive(end) <= _naive(start):
            raise ValidationError("end_date must be after start_date", field="end_date")

        with UnitOfWork(self.db):
            self.session_repo.update(course_session, **fields)

        return self._reload(course_session.id)

    def delete_session(self, course_session: CourseSession) -> None:
        """Delete a session with its enrollments and teaching assignments."""
        session_id = course_session.id
        with UnitOfWork(self.db):
            self.session_repo.delete(course_session)
        logger.info("deleted course session", session_id=str(session_id))

    def list_module_instructors(self, course_session: CourseSession) -> list[ModuleSessionInstructor]:
        return self.assignment_repo.list_for_session(course_session.id)

    def assign_module_instructor(
        self,
        course_session: CourseSession,
        module_id: uuid.UUID,
        instructor_id: uuid.UUID,
    ) -> ModuleSessionInstructor:
        """Make ``instructor_id`` the active instructor of a module in this session.

        A previous active assignment for the same module and session is ended.
        """
        module = self.module_repo.get_by_id(module_id)
        if module is None:
            raise NotFoundError("Module not found")
        if module.formation_id != course_session.formation_id:
            raise ValidationError(
                "The module does not belong to the session's formation.", field="module_id"
            )
        self._ensure_instructor(instructor_id)

        now = _utcnow()
        with UnitOfWork(self.db):
            for current in self.assignment_repo.list_for_session(course_session.id):
                if current.module_id == module_id and current.ended_at is None:
                    current.ended_at = now
            assignment = self.assignment_repo.create(
                module_id=module_id,
                course_session_id=course_session.id,
                instructor_id=instructor_id,
                started_at=now,
            )

        self.db.refresh(assignment)
        logger.info(
            "assigned module instructor",
            session_id=str(course_session.id),
            module_id=str(module_id),
            instructor_id=str(instructor_id),
        )
        return assignment

    def end_module_instructor(
        self,
        course_session: CourseSession,
        assignment_id: uuid.UUID,
    ) -> ModuleSessionInstructor:
        assignment = self.assignment_repo.get_by_id(assignment_id)
        if assignment is None or assignment.course_session_id != course_session.id:
            raise NotFoundError("Module assignment not found")
        if assignment.ended_at is None:
            with UnitOfWork(self.db):
                assignment.ended_at = _utcnow()
            self.db.refresh(assignment)
        return assignment

    def _ensure_formation_exists(self, formation_id: uuid.UUID) -> None:
        if self.formation_repo.get_by_id(formation_id) is None:
            raise NotFoundError("Formation not found")

    def _ensure_instructor(self, user_id: uuid.UUID) -> User:
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("Instructor not found")
        if not user.has_role(RoleName.instructor):
            raise ValidationError("The selected user is not an instructor.", field="instructor_id")
        return user

    def _reload(self, session_id: uuid.UUID) -> CourseSession:
        self.db.expire_all()
        return self.get_session(session_id)


def _naive(value: dt.datetime) -> dt.datetime:
    # sqlite hands back naive datetimes; compare everything in UTC without tzinfo
    if value.tzinfo is None:
        return value
    return value.astimezone(dt.timezone.utc).replace(tzinfo=None)
