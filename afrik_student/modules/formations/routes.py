# afrik_student/modules/formations/routes.py
from uuid import UUID
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from afrik_student.db.deps import get_db
from afrik_student.modules.formations.service import FormationService
from afrik_student.schemas.formation import FormationCreate, FormationRead, FormationUpdate

router = APIRouter(prefix="/formations", tags=["formations"])


@router.get("", response_model=List[FormationRead])
def list_formations(db: Session = Depends(get_db)):
    return FormationService(db).list_formations()


@router.post(
    "",
    response_model=FormationRead,
    status_code=status.HTTP_201_CREATED,
)
def create_formation(payload: FormationCreate, db: Session = Depends(get_db)):
    return FormationService(db).create_formation(payload)


@router.get("/{formation_id}", response_model=FormationRead)
def get_formation(formation_id: UUID, db: Session = Depends(get_db)):
    return FormationService(db).get_formation(formation_id)


@router.patch("/{formation_id}", response_model=FormationRead)
def update_formation(formation_id: UUID, payload: FormationUpdate, db: Session = Depends(get_db)):
    formation_service = FormationService(db)
    formation = formation_service.get_formation(formation_id)
    return formation_service.update_formation(formation, payload)


@router.delete("/{formation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_formation(formation_id: UUID, db: Session = Depends(get_db)):
    """Delete a formation with its modules and course sessions."""
    formation_service = FormationService(db)
    formation = formation_service.get_formation(formation_id)
    formation_service.delete_formation(formation)
    return None
