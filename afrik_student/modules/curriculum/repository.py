from __future__ import annotations

import uuid
from typing import Iterable, Optional

from sqlalchemy.orm import Session, selectinload

from afrik_student.modules.curriculum.models import Lesson, Module
from afrik_student.modules.sessions.models import ModuleSessionInstructor


class ModuleRepository:
    """Repository for Module entity with CRUD operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, module_id: uuid.UUID) -> Optional[Module]:
        """Get module by ID, with its lessons and formation loaded."""
        return (
            self.db.query(Module)
            .options(selectinload(Module.lessons), selectinload(Module.formation))
            .filter(Module.id == module_id)
            .first()
        )

    def list_all(self) -> list[Module]:
        return (
            self.db.query(Module)
            .options(selectinload(Module.lessons), selectinload(Module.formation))
            .order_by(Module.created_at.desc())
            .all()
        )

    def create(self, **kwargs) -> Module:
        module = Module(**kwargs)
        self.db.add(module)
        self.db.flush()
        return module

    def update(self, module: Module, **kwargs) -> Module:
        for key, value in kwargs.items():
            if hasattr(module, key):
                setattr(module, key, value)
        self.db.flush()
        return module

    def delete(self, module: Module) -> None:
        self.db.delete(module)
        self.db.flush()


class LessonRepository:
    """Repository for Lesson entity with CRUD operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, lesson_id: uuid.UUID) -> Optional[Lesson]:
        """Get lesson by ID, with its module and attachments loaded."""
        return (
            self.db.query(Lesson)
            .options(selectinload(Lesson.module), selectinload(Lesson.attachments))
            .filter(Lesson.id == lesson_id)
            .first()
        )

    def list_all(self) -> list[Lesson]:
        return (
            self.db.query(Lesson)
            .options(selectinload(Lesson.module), selectinload(Lesson.attachments))
            .order_by(Lesson.created_at.desc())
            .all()
        )

    def list_by_modules(self, module_ids: Iterable[uuid.UUID]) -> list[Lesson]:
        ids = list(module_ids)
        if not ids:
            return []
        return (
            self.db.query(Lesson)
            .options(
                selectinload(Lesson.module).selectinload(Module.formation),
                selectinload(Lesson.attachments),
            )
            .filter(Lesson.module_id.in_(ids))
            .order_by(Lesson.module_id, Lesson.order)
            .all()
        )

    def create(self, **kwargs) -> Lesson:
        lesson = Lesson(**kwargs)
        self.db.add(lesson)
        self.db.flush()
        return lesson

    def update(self, lesson: Lesson, **kwargs) -> Lesson:
        for key, value in kwargs.items():
            if hasattr(lesson, key):
                setattr(lesson, key, value)
        self.db.flush()
        return lesson

    def detach_from_module(self, module_id: uuid.UUID, lesson_ids: Optional[Iterable[uuid.UUID]] = None) -> int:
        """Set ``module_id`` to NULL on the module's lessons (all of them, or just ``lesson_ids``).

        Lessons that do not belong to the module are left alone.
        """
        query = self.db.query(Lesson).filter(Lesson.module_id == module_id)
        if lesson_ids is not None:
            ids = list(lesson_ids)
            if not ids:
                return 0
            query = query.filter(Lesson.id.in_(ids))
        lessons = query.all()
        for lesson in lessons:
            lesson.module_id = None
        self.db.flush()
        return len(lessons)

    def delete(self, lesson: Lesson) -> None:
        self.db.delete(lesson)
        self.db.flush()


class ModuleInstructorRepository:
    """Module-teaching assignments within course sessions."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, assignment_id: uuid.UUID) -> Optional[ModuleSessionInstructor]:
        return (
            self.db.query(ModuleSessionInstructor)
            .filter(ModuleSessionInstructor.id == assignment_id)
            .first()
        )

    def list_active_for_instructor(
        self,
        instructor_id: uuid.UUID,
        course_session_id: Optional[uuid.UUID] = None,
    ) -> list[ModuleSessionInstructor]:
        query = self.db.query(ModuleSessionInstructor).filter(
            ModuleSessionInstructor.instructor_id == instructor_id,
            ModuleSessionInstructor.ended_at.is_(None),
        )
        if course_session_id is not None:
            query = query.filter(ModuleSessionInstructor.course_session_id == course_session_id)
        return query.order_by(ModuleSessionInstructor.started_at).all()

    def list_for_session(self, course_session_id: uuid.UUID) -> list[ModuleSessionInstructor]:
        return (
            self.db.query(ModuleSessionInstructor)
            .filter(ModuleSessionInstructor.course_session_id == course_session_id)
            .order_by(ModuleSessionInstructor.started_at)
            .all()
        )

    def create(self, **kwargs) -> ModuleSessionInstructor:
        assignment = ModuleSessionInstructor(**kwargs)
        self.db.add(assignment)
        self.db.flush()
        return assignment
