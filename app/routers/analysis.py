from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.routers.auth_deps import get_current_user
from app.schemas.analysis import AnalysisEnvelope, AnalyzeRequest
from app.services import resume_ai

router = APIRouter(tags=["Analysis"])


@router.post("/analyze-resume", response_model=AnalysisEnvelope)
def analyze_resume(
    request: AnalyzeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Compare a resume with a job description using the AI model and save the report.
    Failures are returned as {success: false, error}.
    """
    report = resume_ai.run_analysis(
        db,
        current_user.id,
        request.resume_id,
        request.job_description_id,
    )
    return {"success": True, "analysis": report}
