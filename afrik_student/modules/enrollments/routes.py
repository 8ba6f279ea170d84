# afrik_student/modules/enrollments/routes.py
from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from afrik_student.db.deps import get_db
from afrik_student.modules.enrollments.service import EnrollmentService
from afrik_student.schemas.enrollment import (
    BulkUnenroll,
    BulkUnenrollResult,
    EnrollmentCreate,
    EnrollmentPayment,
    EnrollmentRead,
)

router = APIRouter(prefix="/enrollments", tags=["enrollments"])


@router.post(
    "",
    response_model=EnrollmentRead,
    status_code=status.HTTP_201_CREATED,
)
def create_enrollment(payload: EnrollmentCreate, db: Session = Depends(get_db)):
    """Enroll a student; 409 if already enrolled or the session is full."""
    return EnrollmentService(db).create_enrollment(payload)


@router.post("/unenroll", response_model=BulkUnenrollResult)
def unenroll_students(payload: BulkUnenroll, db: Session = Depends(get_db)):
    removed = EnrollmentService(db).unenroll_students(payload.course_session_id, payload.student_ids)
    return BulkUnenrollResult(course_session_id=payload.course_session_id, removed=removed)


@router.get("/by-session/{course_session_id}", response_model=List[EnrollmentRead])
def list_enrollments_by_session(course_session_id: UUID, db: Session = Depends(get_db)):
    return EnrollmentService(db).list_by_session(course_session_id)


@router.get("/by-student/{student_id}", response_model=List[EnrollmentRead])
def list_enrollments_by_student(student_id: UUID, db: Session = Depends(get_db)):
    return EnrollmentService(db).list_by_student(student_id)


@router.get("/{enrollment_id}", response_model=EnrollmentRead)
def get_enrollment(enrollment_id: UUID, db: Session = Depends(get_db)):
    return EnrollmentService(db).get_enrollment(enrollment_id)


@router.post("/{enrollment_id}/confirm", response_model=EnrollmentRead)
def confirm_enrollment(enrollment_id: UUID, db: Session = Depends(get_db)):
    enrollment_service = EnrollmentService(db)
    return enrollment_service.confirm(enrollment_service.get_enrollment(enrollment_id))


@router.post("/{enrollment_id}/cancel", response_model=EnrollmentRead)
def cancel_enrollment(enrollment_id: UUID, db: Session = Depends(get_db)):
    enrollment_service = EnrollmentService(db)
    return enrollment_service.cancel(enrollment_service.get_enrollment(enrollment_id))


@router.post("/{enrollment_id}/pay", response_model=EnrollmentRead)
def pay_enrollment(
    enrollment_id: UUID,
    payload: Optional[EnrollmentPayment] = Body(default=None),
    db: Session = Depends(get_db),
):
    enrollment_service = EnrollmentService(db)
    enrollment = enrollment_service.get_enrollment(enrollment_id)
    amount = payload.payment_amount if payload else None
    return enrollment_service.mark_paid(enrollment, amount)


@router.delete("/{enrollment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_enrollment(enrollment_id: UUID, db: Session = Depends(get_db)):
    enrollment_service = EnrollmentService(db)
    enrollment_service.delete_enrollment(enrollment_service.get_enrollment(enrollment_id))
    return None
