# afrik_student/api.py
from fastapi import APIRouter

from afrik_student.modules.curriculum.module_routes import router as modules_router
from afrik_student.modules.curriculum.routes import (
    attachments_router,
    instructors_router,
    router as lessons_router,
)
from afrik_student.modules.enrollments.routes import router as enrollments_router
from afrik_student.modules.formations.routes import router as formations_router
from afrik_student.modules.sessions.routes import router as sessions_router

api_router = APIRouter()
api_router.include_router(formations_router)
api_router.include_router(modules_router)
api_router.include_router(lessons_router)
api_router.include_router(attachments_router)
api_router.include_router(instructors_router)
api_router.include_router(sessions_router)
api_router.include_router(enrollments_router)
