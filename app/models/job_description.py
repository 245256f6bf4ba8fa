from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship
from app.core.access_policy import OwnedMixin
from app.database import Base
from app.models.mixins import TimestampMixin, new_uuid


class JobDescription(OwnedMixin, TimestampMixin, Base):
    __tablename__ = "job_descriptions"

    id = Column(String(36), primary_key=True, default=new_uuid)
    title = Column(String, nullable=False, index=True)
    company = Column(String, nullable=True)
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=True)

    reports = relationship(
        "AnalysisReport",
        back_populates="job_description",
        cascade="all, delete-orphan",
    )
