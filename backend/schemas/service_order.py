from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# Body for both creating and replacing a service order
class ServiceOrderPayload(BaseModel):
    name: str = Field(..., min_length=1, description="Service order name")
    category: str = Field(..., min_length=1, description="Service category")
    description: Optional[str] = Field(None, description="Service order description")
    project_id: int = Field(..., description="ID of the associated project")
    is_approved: bool = Field(False, description="Approval status")


# Full service order representation, enriched with the owning project's name
class ServiceOrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str
    description: Optional[str] = None
    project_id: int
    is_approved: bool
    created_date: datetime
    updated_date: datetime
    project_name: Optional[str] = None
