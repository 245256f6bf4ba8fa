from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.analysis_report import AnalysisReport
from app.models.job_description import JobDescription
from app.models.resume import Resume
from app.models.user import User
from app.routers.auth_deps import get_current_user
from app.schemas.dashboard import DashboardResponse, RecentJobDescription, RecentResume

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

RECENT_LIMIT = 3


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return DashboardResponse(
        recent_resumes=[
            RecentResume.model_validate(r)
            for r in db.query(Resume).order_by(Resume.created_at.desc()).limit(RECENT_LIMIT)
        ],
        recent_job_descriptions=[
            RecentJobDescription.model_validate(j)
            for j in db.query(JobDescription).order_by(JobDescription.created_at.desc()).limit(RECENT_LIMIT)
        ],
        resume_count=db.query(Resume).count(),
        job_description_count=db.query(JobDescription).count(),
        report_count=db.query(AnalysisReport).count(),
    )
