from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text, and_
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, foreign, mapped_column, relationship

from afrik_student.db.base import Base
from afrik_student.db.mixins import TimestampMixin
from afrik_student.modules.attachments.models import Attachment, OwnerKind

if TYPE_CHECKING:
    from afrik_student.modules.formations.models import Formation


class Module(TimestampMixin, Base):
    __tablename__ = "modules"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    formation_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("formations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # display position within the formation, duplicates allowed
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    formation: Mapped["Formation"] = relationship(
        "Formation",
        back_populates="modules",
    )

    # no delete cascade: removing a module detaches its lessons
    lessons: Mapped[list["Lesson"]] = relationship(
        "Lesson",
        back_populates="module",
        order_by="Lesson.order",
    )


class Lesson(TimestampMixin, Base):
    __tablename__ = "lessons"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    module_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("modules.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    order: Mapped[int | None] = mapped_column(Integer, nullable=True)

    module: Mapped["Module | None"] = relationship(
        "Module",
        back_populates="lessons",
    )

    # written only through AttachmentStore
    attachments: Mapped[list["Attachment"]] = relationship(
        "Attachment",
        primaryjoin=lambda: and_(
            foreign(Attachment.attachable_id) == Lesson.id,
            Attachment.attachable_type == OwnerKind.lesson.value,
        ),
        order_by=lambda: [Attachment.created_at, Attachment.id],
        viewonly=True,
    )

    @property
    def attachments_count(self) -> int:
        return len(self.attachments)
