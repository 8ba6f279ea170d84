# afrik_student/schemas/enrollment.py
from uuid import UUID
from typing import List, Optional
from decimal import Decimal
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from afrik_student.modules.enrollments.models import EnrollmentStatus, PaymentStatus


class EnrollmentCreate(BaseModel):
    student_id: UUID
    course_session_id: UUID
    payment_amount: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class EnrollmentPayment(BaseModel):
    payment_amount: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class BulkUnenroll(BaseModel):
    course_session_id: UUID
    student_ids: List[UUID] = Field(min_length=1)


class BulkUnenrollResult(BaseModel):
    course_session_id: UUID
    removed: int


class EnrollmentRead(BaseModel):
    id: UUID
    student_id: UUID
    course_session_id: UUID
    enrollment_date: datetime
    status: EnrollmentStatus
    payment_status: PaymentStatus
    payment_amount: Optional[Decimal] = None
    is_paid: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
