from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from afrik_student.db.base import Base
from afrik_student.db.mixins import TimestampMixin

if TYPE_CHECKING:
    from afrik_student.modules.curriculum.models import Module
    from afrik_student.modules.sessions.models import CourseSession


class Formation(TimestampMixin, Base):
    __tablename__ = "formations"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    modules: Mapped[list["Module"]] = relationship(
        "Module",
        back_populates="formation",
        cascade="all, delete-orphan",
        order_by="Module.order",
    )

    course_sessions: Mapped[list["CourseSession"]] = relationship(
        "CourseSession",
        back_populates="formation",
        cascade="all, delete-orphan",
    )
