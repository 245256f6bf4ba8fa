import math

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime

# --- MODEL OUTPUT ---

class AnalysisResult(BaseModel):
    """The JSON object the model is asked to return."""
    relevance_score: int = Field(ge=0, le=100)
    missing_skills: List[str]
    strengths: List[str]
    weaknesses: List[str]
    improvement_suggestions: str
    ai_summary: str
    interview_questions: List[str]

    @field_validator("relevance_score", mode="before")
    @classmethod
    def round_score(cls, value):
        # Models often answer 82.5 or "82"
        if isinstance(value, str):
            value = value.strip().rstrip("%")
            try:
                value = float(value)
            except ValueError:
                return value
        # Infinity and NaN are left for the range check to reject
        if isinstance(value, float) and math.isfinite(value):
            return round(value)
        return value

# --- REQUEST / RESPONSE ---

class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resume_id: Optional[str] = Field(default=None, alias="resumeId")
    job_description_id: Optional[str] = Field(default=None, alias="jobDescriptionId")

class AnalysisReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    resume_id: str
    job_description_id: str
    relevance_score: Optional[int]
    missing_skills: Optional[List[str]]
    strengths: Optional[List[str]]
    weaknesses: Optional[List[str]]
    improvement_suggestions: Optional[str]
    ai_summary: Optional[str]
    interview_questions: Optional[List[str]]
    created_at: datetime
    updated_at: datetime

class AnalysisEnvelope(BaseModel):
    success: bool = True
    analysis: AnalysisReportResponse

# --- REPORT LISTING ---

class ResumeRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str

class JobDescriptionRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str
    company: Optional[str] = None

class ReportResponse(AnalysisReportResponse):
    resume: Optional[ResumeRef] = None
    job_description: Optional[JobDescriptionRef] = None
