# afrik_student/modules/curriculum/module_routes.py
from uuid import UUID
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from afrik_student.db.deps import get_db
from afrik_student.modules.curriculum.module_service import ModuleService
from afrik_student.schemas.module import ModuleCreate, ModuleRead, ModuleUpdate

router = APIRouter(prefix="/modules", tags=["modules"])


@router.get("", response_model=List[ModuleRead])
def list_modules(db: Session = Depends(get_db)):
    return ModuleService(db).list_modules()


@router.post(
    "",
    response_model=ModuleRead,
    status_code=status.HTTP_201_CREATED,
)
def create_module(payload: ModuleCreate, db: Session = Depends(get_db)):
    """Create a module, optionally with new lessons inside it."""
    return ModuleService(db).create_module(payload)


@router.get("/{module_id}", response_model=ModuleRead)
def get_module(module_id: UUID, db: Session = Depends(get_db)):
    return ModuleService(db).get_module(module_id)


@router.patch("/{module_id}", response_model=ModuleRead)
def update_module(module_id: UUID, payload: ModuleUpdate, db: Session = Depends(get_db)):
    """Update a module.

    ``lessons`` entries with an ``id`` move that lesson into this module;
    entries without one create a new lesson. ``delete_lessons`` only detaches.
    """
    module_service = ModuleService(db)
    module = module_service.get_module(module_id)
    return module_service.update_module(module, payload)


@router.delete("/{module_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_module(module_id: UUID, db: Session = Depends(get_db)):
    module_service = ModuleService(db)
    module = module_service.get_module(module_id)
    module_service.delete_module(module)
    return None
