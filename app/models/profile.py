from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from app.core.access_policy import OwnedMixin
from app.database import Base
from app.models.mixins import TimestampMixin, new_uuid


class Profile(OwnedMixin, TimestampMixin, Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=new_uuid)
    # One profile per identity
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    email = Column(String, nullable=True)
    full_name = Column(String, nullable=True)

    user = relationship("User", back_populates="profile")
