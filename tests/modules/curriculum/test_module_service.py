"""
Tests for the module aggregate service.
"""
from uuid import uuid4

import pytest

from afrik_student.core.exceptions import NotFoundError
from afrik_student.modules.curriculum.models import Lesson, Module
from afrik_student.modules.curriculum.module_service import ModuleService
from afrik_student.schemas.module import (
    ModuleCreate,
    ModuleLessonAssign,
    ModuleLessonCreate,
    ModuleUpdate,
)


class TestCreateModule:
    def test_module_with_nested_lessons(self, db, formation):
        module = ModuleService(db).create_module(
            ModuleCreate(
                title="Databases",
                formation_id=formation.id,
                order=2,
                lessons=[{"title": "SQL basics", "order": 1}, {"title": "Joins", "order": 2}],
            )
        )

        assert module.formation.id == formation.id
        assert [lesson.title for lesson in module.lessons] == ["SQL basics", "Joins"]
        assert all(lesson.module_id == module.id for lesson in module.lessons)

    def test_unknown_formation_rejected(self, db):
        with pytest.raises(NotFoundError):
            ModuleService(db).create_module(ModuleCreate(title="Lost", formation_id=uuid4()))
        assert db.query(Module).count() == 0


class TestUpdateModule:
    """Nested lesson writes: detach, reassign, create."""

    def test_delete_lessons_only_detaches(self, db, module, lessons):
        service = ModuleService(db)
        target_id = lessons[0].id

        updated = service.update_module(service.get_module(module.id), ModuleUpdate(delete_lessons=[target_id]))

        assert target_id not in [lesson.id for lesson in updated.lessons]
        detached = db.get(Lesson, target_id)
        assert detached is not None
        assert detached.module_id is None

    def test_detach_ignores_lessons_of_other_modules(self, db, module, other_module, lessons):
        foreign = Lesson(module_id=other_module.id, title="Promises")
        db.add(foreign)
        db.commit()

        service = ModuleService(db)
        service.update_module(service.get_module(module.id), ModuleUpdate(delete_lessons=[foreign.id]))

        db.expire_all()
        assert db.get(Lesson, foreign.id).module_id == other_module.id

    def test_reassign_lesson_between_modules(self, db, module, other_module, lessons):
        service = ModuleService(db)
        moved_id = lessons[0].id

        target = service.update_module(
            service.get_module(other_module.id),
            ModuleUpdate(lessons=[{"id": str(moved_id), "title": "Moved lesson", "order": 1}]),
        )

        assert [lesson.id for lesson in target.lessons] == [moved_id]
        assert target.lessons[0].title == "Moved lesson"
        source = service.get_module(module.id)
        assert moved_id not in [lesson.id for lesson in source.lessons]

    def test_entries_discriminated_by_id(self, db, module, lessons):
        data = ModuleUpdate(lessons=[{"id": str(lessons[0].id)}, {"title": "Brand new"}])
        assert isinstance(data.lessons[0], ModuleLessonAssign)
        assert isinstance(data.lessons[1], ModuleLessonCreate)

        updated = ModuleService(db).update_module(ModuleService(db).get_module(module.id), data)

        assert sorted(lesson.title for lesson in updated.lessons) == [
            "Brand new", "Lesson 1", "Lesson 2", "Lesson 3",
        ]

    def test_scalar_update(self, db, module):
        service = ModuleService(db)
        updated = service.update_module(service.get_module(module.id), ModuleUpdate(title="HTML5", order=4))
        assert updated.title == "HTML5"
        assert updated.order == 4

    def test_missing_lesson_rolls_back_everything(self, db, module, lessons):
        service = ModuleService(db)
        with pytest.raises(NotFoundError):
            service.update_module(
                service.get_module(module.id),
                ModuleUpdate(
                    title="Should not stick",
                    delete_lessons=[lessons[0].id],
                    lessons=[{"id": str(uuid4())}],
                ),
            )

        db.expire_all()
        assert db.get(Module, module.id).title == "HTML & CSS"
        assert db.get(Lesson, lessons[0].id).module_id == module.id


class TestDeleteModule:
    def test_lessons_survive_module_deletion(self, db, module, lessons):
        service = ModuleService(db)
        lesson_ids = [lesson.id for lesson in lessons]

        service.delete_module(service.get_module(module.id))

        assert db.get(Module, module.id) is None
        remaining = db.query(Lesson).filter(Lesson.id.in_(lesson_ids)).all()
        assert len(remaining) == 3
        assert all(lesson.module_id is None for lesson in remaining)
