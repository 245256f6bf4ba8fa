# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import user, profile, resume, job_description, analysis_report

# Explicit class exports for cleaner imports
from .user import User, UserSession
from .profile import Profile
from .resume import Resume
from .job_description import JobDescription
from .analysis_report import AnalysisReport

__all__ = [
    "User",
    "UserSession",
    "Profile",
    "Resume",
    "JobDescription",
    "AnalysisReport",
]
