# afrik_student/modules/sessions/routes.py
from uuid import UUID
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from afrik_student.db.deps import get_db
from afrik_student.modules.sessions.service import CourseSessionService
from afrik_student.schemas.session import (
    CourseSessionCreate,
    CourseSessionRead,
    CourseSessionUpdate,
    ModuleInstructorAssign,
    ModuleInstructorRead,
)
from afrik_student.schemas.user import UserSummary

router = APIRouter(prefix="/course-sessions", tags=["course-sessions"])


@router.get("", response_model=List[CourseSessionRead])
def list_sessions(db: Session = Depends(get_db)):
    return CourseSessionService(db).list_sessions()


@router.get("/available", response_model=List[CourseSessionRead])
def list_available_sessions(db: Session = Depends(get_db)):
    """Sessions that are not cancelled and still have free seats."""
    return CourseSessionService(db).get_available_sessions()


@router.get("/by-formation/{formation_id}", response_model=List[CourseSessionRead])
def list_sessions_by_formation(formation_id: UUID, db: Session = Depends(get_db)):
    return CourseSessionService(db).list_by_formation(formation_id)


@router.get("/by-instructor/{instructor_id}", response_model=List[CourseSessionRead])
def list_sessions_by_instructor(instructor_id: UUID, db: Session = Depends(get_db)):
    return CourseSessionService(db).list_by_instructor(instructor_id)


@router.get("/by-student/{student_id}", response_model=List[CourseSessionRead])
def list_sessions_by_student(student_id: UUID, db: Session = Depends(get_db)):
    return CourseSessionService(db).list_by_student(student_id)


@router.post(
    "",
    response_model=CourseSessionRead,
    status_code=status.HTTP_201_CREATED,
)
def create_session(payload: CourseSessionCreate, db: Session = Depends(get_db)):
    return CourseSessionService(db).create_session(payload)


@router.get("/{session_id}", response_model=CourseSessionRead)
def get_session(session_id: UUID, db: Session = Depends(get_db)):
    return CourseSessionService(db).get_session(session_id)


@router.patch("/{session_id}", response_model=CourseSessionRead)
def update_session(session_id: UUID, payload: CourseSessionUpdate, db: Session = Depends(get_db)):
    session_service = CourseSessionService(db)
    course_session = session_service.get_session(session_id)
    return session_service.update_session(course_session, payload)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: UUID, db: Session = Depends(get_db)):
    session_service = CourseSessionService(db)
    course_session = session_service.get_session(session_id)
    session_service.delete_session(course_session)
    return None


@router.get("/{session_id}/students", response_model=List[UserSummary])
def list_session_students(session_id: UUID, db: Session = Depends(get_db)):
    session_service = CourseSessionService(db)
    return session_service.get_session_students(session_service.get_session(session_id))


@router.get("/{session_id}/available-students", response_model=List[UserSummary])
def list_available_students(session_id: UUID, db: Session = Depends(get_db)):
    """Students not yet enrolled in this session."""
    session_service = CourseSessionService(db)
    return session_service.get_available_students(session_service.get_session(session_id))


@router.get("/{session_id}/module-instructors", response_model=List[ModuleInstructorRead])
def list_module_instructors(session_id: UUID, db: Session = Depends(get_db)):
    session_service = CourseSessionService(db)
    return session_service.list_module_instructors(session_service.get_session(session_id))


@router.post(
    "/{session_id}/module-instructors",
    response_model=ModuleInstructorRead,
    status_code=status.HTTP_201_CREATED,
)
def assign_module_instructor(
    session_id: UUID,
    payload: ModuleInstructorAssign,
    db: Session = Depends(get_db),
):
    session_service = CourseSessionService(db)
    course_session = session_service.get_session(session_id)
    return session_service.assign_module_instructor(
        course_session, payload.module_id, payload.instructor_id
    )


@router.post(
    "/{session_id}/module-instructors/{assignment_id}/end",
    response_model=ModuleInstructorRead,
)
def end_module_instructor(session_id: UUID, assignment_id: UUID, db: Session = Depends(get_db)):
    session_service = CourseSessionService(db)
    course_session = session_service.get_session(session_id)
    return session_service.end_module_instructor(course_session, assignment_id)
