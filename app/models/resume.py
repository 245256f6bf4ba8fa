from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from app.core.access_policy import OwnedMixin
from app.database import Base
from app.models.mixins import TimestampMixin, new_uuid


class Resume(OwnedMixin, TimestampMixin, Base):
    __tablename__ = "resumes"

    id = Column(String(36), primary_key=True, default=new_uuid)
    title = Column(String, nullable=False)
    file_name = Column(String, nullable=False)
    file_path = Column(String, nullable=False)
    file_size = Column(Integer, nullable=True)
    content_text = Column(Text, nullable=True)

    reports = relationship(
        "AnalysisReport",
        back_populates="resume",
        cascade="all, delete-orphan",
    )
