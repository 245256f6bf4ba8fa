import json
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.database import get_db
from app.models.analysis_report import AnalysisReport
from app.models.user import User
from app.routers.auth_deps import get_current_user
from app.schemas.analysis import ReportResponse

router = APIRouter(prefix="/reports", tags=["Reports"])


def _get_report(db: Session, report_id: str) -> AnalysisReport:
    report = db.query(AnalysisReport).filter(AnalysisReport.id == report_id).first()
    if not report:
        raise NotFoundError("Report not found")
    return report


@router.get("", response_model=List[ReportResponse])
def list_reports(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Reports newest first, with the resume and job description titles attached."""
    return db.query(AnalysisReport).order_by(AnalysisReport.created_at.desc()).all()


@router.get("/{report_id}", response_model=ReportResponse)
def get_report(
    report_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _get_report(db, report_id)


@router.get("/{report_id}/download")
def download_report(
    report_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    report = _get_report(db, report_id)
    body = json.dumps(ReportResponse.model_validate(report, from_attributes=True).model_dump(mode="json"), indent=2)
    return Response(
        content=body,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="analysis-{report.id}.json"'},
    )


@router.delete("/{report_id}")
def delete_report(
    report_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    report = _get_report(db, report_id)
    db.delete(report)
    db.commit()
    return {"success": True, "message": "Report deleted successfully"}
