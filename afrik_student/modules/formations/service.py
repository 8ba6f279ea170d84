from __future__ import annotations

import uuid

from sqlalchemy.orm import Session

from afrik_student.core.exceptions import NotFoundError
from afrik_student.core.logging import get_logger
from afrik_student.db.unit_of_work import UnitOfWork
from afrik_student.modules.formations.models import Formation
from afrik_student.modules.formations.repository import FormationRepository
from afrik_student.schemas.formation import FormationCreate, FormationUpdate

logger = get_logger(__name__)


class FormationService:
    """Service layer for formation operations."""

    def __init__(self, db: Session):
        self.db = db
        self.formation_repo = FormationRepository(db)

    def list_formations(self) -> list[Formation]:
        return self.formation_repo.list_all()

    def get_formation(self, formation_id: uuid.UUID) -> Formation:
        formation = self.formation_repo.get_by_id(formation_id)
        if not formation:
            raise NotFoundError("Formation not found")
        return formation

    def create_formation(self, data: FormationCreate) -> Formation:
        with UnitOfWork(self.db):
            formation = self.formation_repo.create(title=data.title, description=data.description)

        self.db.refresh(formation)
        logger.info("created formation", formation_id=str(formation.id))
        return formation

    def update_formation(self, formation: Formation, data: FormationUpdate) -> Formation:
        with UnitOfWork(self.db):
            self.formation_repo.update(formation, **data.model_dump(exclude_unset=True))

        self.db.refresh(formation)
        return formation

    def delete_formation(self, formation: Formation) -> None:
        """Delete a formation; its modules go with it, their lessons are detached."""
        formation_id = formation.id
        with UnitOfWork(self.db):
            self.formation_repo.delete(formation)
        logger.info("deleted formation", formation_id=str(formation_id))
