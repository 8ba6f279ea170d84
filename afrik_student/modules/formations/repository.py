from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy.orm import Session

from afrik_student.modules.formations.models import Formation


class FormationRepository:
    """Repository for Formation entity with CRUD operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, formation_id: uuid.UUID) -> Optional[Formation]:
        """Get formation by ID."""
        return self.db.query(Formation).filter(Formation.id == formation_id).first()

    def list_all(self) -> list[Formation]:
        """List all formations, newest first."""
        return self.db.query(Formation).order_by(Formation.created_at.desc()).all()

    def create(self, title: str, description: Optional[str] = None) -> Formation:
        """Create a new formation."""
        formation = Formation(title=title, description=description)
        self.db.add(formation)
        self.db.flush()
        return formation

    def update(self, formation: Formation, **kwargs) -> Formation:
        """Update formation fields."""
        for key, value in kwargs.items():
            if hasattr(formation, key):
                setattr(formation, key, value)
        self.db.flush()
        return formation

    def delete(self, formation: Formation) -> None:
        """Delete formation (modules and course sessions cascade)."""
        self.db.delete(formation)
        self.db.flush()
