from __future__ import annotations

import uuid

from sqlalchemy.orm import Session

from afrik_student.core.exceptions import NotFoundError
from afrik_student.core.logging import get_logger
from afrik_student.db.unit_of_work import UnitOfWork
from afrik_student.modules.curriculum.models import Module
from afrik_student.modules.curriculum.repository import LessonRepository, ModuleRepository
from afrik_student.modules.formations.repository import FormationRepository
from afrik_student.schemas.module import (
    MODULE_SCALAR_FIELDS,
    ModuleCreate,
    ModuleLessonAssign,
    ModuleUpdate,
)

logger = get_logger(__name__)


class ModuleService:
    """Service layer for module operations, including nested lesson writes."""

    def __init__(self, db: Session):
        self.db = db
        self.module_repo = ModuleRepository(db)
        self.lesson_repo = LessonRepository(db)
        self.formation_repo = FormationRepository(db)

    def list_modules(self) -> list[Module]:
        return self.module_repo.list_all()

    def get_module(self, module_id: uuid.UUID) -> Module:
        module = self.module_repo.get_by_id(module_id)
        if not module:
            raise NotFoundError("Module not found")
        return module

    def create_module(self, data: ModuleCreate) -> Module:
        """Create a module and, in the same transaction, its nested lessons."""
        self._ensure_formation_exists(data.formation_id)

        with UnitOfWork(self.db):
            module = self.module_repo.create(**data.model_dump(include=MODULE_SCALAR_FIELDS))
            for entry in data.lessons:
                self.lesson_repo.create(module_id=module.id, **entry.model_dump())
            module_id = module.id

        logger.info("created module", module_id=str(module_id), lessons=len(data.lessons))
        return self._reload(module_id)

    def update_module(self, module: Module, data: ModuleUpdate) -> Module:
        """Apply an update in a fixed order.

        1. detach ``delete_lessons`` from this module (the lessons survive)
        2. copy scalar fields
        3. for each ``lessons`` entry, move an existing lesson here or create one

        An entry with an ``id`` is looked up regardless of its current module,
        so this is also how a lesson moves between modules.
        """
        scalars = data.model_dump(exclude_unset=True, include=MODULE_SCALAR_FIELDS)
        if scalars.get("formation_id") is not None:
            self._ensure_formation_exists(scalars["formation_id"])

        with UnitOfWork(self.db):
            if data.delete_lessons:
                self.lesson_repo.detach_from_module(module.id, data.delete_lessons)
            if scalars:
                self.module_repo.update(module, **scalars)
            for entry in data.lessons:
                fields = entry.model_dump(exclude_unset=True, exclude={"id"})
                if isinstance(entry, ModuleLessonAssign):
                    lesson = self.lesson_repo.get_by_id(entry.id)
                    if lesson is None:
                        raise NotFoundError(f"Lesson {entry.id} not found")
                    self.lesson_repo.update(lesson, module_id=module.id, **fields)
                else:
                    self.lesson_repo.create(module_id=module.id, **fields)

        logger.info(
            "updated module",
            module_id=str(module.id),
            detached=len(data.delete_lessons),
            lessons=len(data.lessons),
        )
        return self._reload(module.id)

    def delete_module(self, module: Module) -> None:
        """Delete a module; its lessons are detached, not deleted."""
        module_id = module.id
        with UnitOfWork(self.db):
            detached = self.lesson_repo.detach_from_module(module_id)
            self.module_repo.delete(module)
        logger.info("deleted module", module_id=str(module_id), detached_lessons=detached)

    def _ensure_formation_exists(self, formation_id: uuid.UUID) -> None:
        if self.formation_repo.get_by_id(formation_id) is None:
            raise NotFoundError("Formation not found")

    def _reload(self, module_id: uuid.UUID) -> Module:
        self.db.expire_all()
        return self.get_module(module_id)
