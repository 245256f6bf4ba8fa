from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime

class RecentResume(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    file_name: str
    created_at: datetime

class RecentJobDescription(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    company: Optional[str]
    created_at: datetime

class DashboardResponse(BaseModel):
    recent_resumes: List[RecentResume]
    recent_job_descriptions: List[RecentJobDescription]
    resume_count: int
    job_description_count: int
    report_count: int
