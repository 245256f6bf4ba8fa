from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

class JobDescriptionBase(BaseModel):
    title: str
    company: Optional[str] = None
    description: str
    requirements: Optional[str] = None

class JobDescriptionCreate(JobDescriptionBase):
    pass

class JobDescriptionUpdate(BaseModel):
    title: Optional[str] = None
    company: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[str] = None

class JobDescriptionResponse(JobDescriptionBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
