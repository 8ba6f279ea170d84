from __future__ import annotations

import enum
import uuid
import datetime as dt
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from afrik_student.db.base import Base
from afrik_student.db.mixins import TimestampMixin

if TYPE_CHECKING:
    from afrik_student.modules.sessions.models import CourseSession
    from afrik_student.modules.users.models import User


class EnrollmentStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"


class PaymentStatus(str, enum.Enum):
    unpaid = "unpaid"
    paid = "paid"


class Enrollment(TimestampMixin, Base):
    __tablename__ = "enrollments"
    __table_args__ = (
        UniqueConstraint("student_id", "course_session_id", name="uq_enrollments_student_session"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    student_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    course_session_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("course_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    enrollment_date: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: dt.datetime.now(dt.timezone.utc),
        nullable=False,
    )

    status: Mapped[EnrollmentStatus] = mapped_column(
        Enum(EnrollmentStatus, name="enrollment_status"),
        default=EnrollmentStatus.pending,
        server_default=EnrollmentStatus.pending.value,
        nullable=False,
    )

    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, name="payment_status"),
        default=PaymentStatus.unpaid,
        server_default=PaymentStatus.unpaid.value,
        nullable=False,
    )

    payment_amount: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)

    student: Mapped["User"] = relationship("User", back_populates="enrollments")
    course_session: Mapped["CourseSession"] = relationship(
        "CourseSession", back_populates="enrollments"
    )

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.paid
