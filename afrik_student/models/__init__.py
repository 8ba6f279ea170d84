# afrik_student/models/__init__.py
# Imports every mapped class so string relationships resolve and
# Base.metadata is complete (Alembic, test fixtures).

from afrik_student.modules.users.models import User, Role, UserRole
from afrik_student.modules.formations.models import Formation
from afrik_student.modules.curriculum.models import Module, Lesson
from afrik_student.modules.attachments.models import Attachment
from afrik_student.modules.sessions.models import CourseSession, ModuleSessionInstructor
from afrik_student.modules.enrollments.models import Enrollment

__all__ = [
    "User",
    "Role",
    "UserRole",
    "Formation",
    "Module",
    "Lesson",
    "Attachment",
    "CourseSession",
    "ModuleSessionInstructor",
    "Enrollment",
]
