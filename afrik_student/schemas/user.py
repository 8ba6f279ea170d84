# afrik_student/schemas/user.py
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from afrik_student.modules.users.models import UserStatus


class UserSummary(BaseModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    status: UserStatus

    model_config = ConfigDict(from_attributes=True)
