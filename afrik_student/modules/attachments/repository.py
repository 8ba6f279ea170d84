from __future__ import annotations

import uuid
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from afrik_student.modules.attachments.models import Attachment, AttachmentOwner


class AttachmentRepository:
    """Repository for Attachment records, always addressed through their owner."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, attachment_id: uuid.UUID) -> Optional[Attachment]:
        return self.db.query(Attachment).filter(Attachment.id == attachment_id).first()

    def list_for_owner(self, owner: AttachmentOwner) -> list[Attachment]:
        return (
            self.db.query(Attachment)
            .filter(
                Attachment.attachable_type == owner.kind.value,
                Attachment.attachable_id == owner.id,
            )
            .order_by(Attachment.created_at.asc(), Attachment.id.asc())
            .all()
        )

    def list_owned(self, owner: AttachmentOwner, attachment_ids: Iterable[uuid.UUID]) -> list[Attachment]:
        """Attachments among ``attachment_ids`` that belong to ``owner``."""
        ids = list(attachment_ids)
        if not ids:
            return []
        return (
            self.db.query(Attachment)
            .filter(
                Attachment.id.in_(ids),
                Attachment.attachable_type == owner.kind.value,
                Attachment.attachable_id == owner.id,
            )
            .all()
        )

    def create(self, owner: AttachmentOwner, **kwargs) -> Attachment:
        attachment = Attachment(
            attachable_type=owner.kind.value,
            attachable_id=owner.id,
            **kwargs,
        )
        self.db.add(attachment)
        self.db.flush()
        return attachment

    def delete(self, attachment: Attachment) -> None:
        self.db.delete(attachment)
        self.db.flush()
