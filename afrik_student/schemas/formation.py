from uuid import UUID
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FormationBase(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None


class FormationCreate(FormationBase):
    pass


class FormationUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("title may be omitted but not null")
        return value


class FormationRead(FormationBase):
    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
