from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

class ResumeUpdate(BaseModel):
    title: Optional[str] = None
    content_text: Optional[str] = None

class ResumeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    file_name: str
    file_path: str
    file_size: Optional[int]
    content_text: Optional[str]
    created_at: datetime
    updated_at: datetime
