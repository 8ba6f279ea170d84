# afrik_student/schemas/module.py
from uuid import UUID
from typing import Annotated, Any, List, Optional, Union
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator

from afrik_student.schemas.formation import FormationRead

MODULE_SCALAR_FIELDS = {"title", "description", "formation_id", "order"}


class ModuleLessonCreate(BaseModel):
    """New lesson created inside the module."""
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, max_length=255)
    content: Optional[str] = None
    order: Optional[int] = Field(default=None, ge=1)


class ModuleLessonAssign(BaseModel):
    """Existing lesson moved into the module, with optional field updates."""
    model_config = ConfigDict(extra="forbid")

    id: UUID
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = None
    order: Optional[int] = Field(default=None, ge=1)

    @field_validator("title")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("title may be omitted but not null")
        return value


def _lesson_entry_kind(value: Any) -> str:
    if isinstance(value, dict):
        return "assign" if value.get("id") is not None else "create"
    return "assign" if getattr(value, "id", None) is not None else "create"


ModuleLessonEntry = Annotated[
    Union[
        Annotated[ModuleLessonAssign, Tag("assign")],
        Annotated[ModuleLessonCreate, Tag("create")],
    ],
    Discriminator(_lesson_entry_kind),
]


class ModuleCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    formation_id: UUID
    order: int = Field(default=1, ge=1)
    lessons: List[ModuleLessonCreate] = Field(default_factory=list)


class ModuleUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    formation_id: Optional[UUID] = None
    order: Optional[int] = Field(default=None, ge=1)
    lessons: List[ModuleLessonEntry] = Field(default_factory=list)
    # detached (module_id set to NULL), never deleted
    delete_lessons: List[UUID] = Field(default_factory=list)

    @field_validator("title", "formation_id", "order")
    @classmethod
    def reject_null(cls, value, info):
        # omitted fields are left alone, an explicit null would hit NOT NULL
        if value is None:
            raise ValueError(f"{info.field_name} may be omitted but not null")
        return value


class ModuleLessonRead(BaseModel):
    id: UUID
    title: str
    content: Optional[str] = None
    order: Optional[int] = None
    module_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ModuleRead(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    formation_id: UUID
    order: int
    formation: Optional[FormationRead] = None
    lessons: List[ModuleLessonRead] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
