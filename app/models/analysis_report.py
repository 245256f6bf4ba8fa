from sqlalchemy import Column, Integer, String, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship
from app.core.access_policy import OwnedMixin
from app.database import Base
from app.models.mixins import TimestampMixin, new_uuid


class AnalysisReport(OwnedMixin, TimestampMixin, Base):
    """AI comparison of one resume against one job description. Written only by the analysis service."""
    __tablename__ = "analysis_reports"

    id = Column(String(36), primary_key=True, default=new_uuid)
    resume_id = Column(String(36), ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    job_description_id = Column(String(36), ForeignKey("job_descriptions.id", ondelete="CASCADE"), nullable=False, index=True)

    relevance_score = Column(Integer, nullable=True)
    missing_skills = Column(JSON, nullable=True)
    strengths = Column(JSON, nullable=True)
    weaknesses = Column(JSON, nullable=True)
    improvement_suggestions = Column(Text, nullable=True)
    ai_summary = Column(Text, nullable=True)
    interview_questions = Column(JSON, nullable=True)

    resume = relationship("Resume", back_populates="reports")
    job_description = relationship("JobDescription", back_populates="reports")
