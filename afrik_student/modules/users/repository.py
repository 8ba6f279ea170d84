from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy.orm import Session

from afrik_student.modules.users.models import User


class UserRepository:
    """Read access to users; accounts are managed outside this service."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()
