# backend/schemas/project.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Body for both creating and replacing a project
class ProjectPayload(BaseModel):
    name: str = Field(..., min_length=1, description="Project name")
    description: Optional[str] = Field(None, description="Project description")


class ProjectOut(ORMBase):
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
