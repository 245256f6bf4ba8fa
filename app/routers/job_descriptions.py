from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.core.exceptions import NotFoundError, ValidationAppError
from app.database import get_db
from app.models.job_description import JobDescription
from app.models.user import User
from app.routers.auth_deps import get_current_user
from app.schemas.job_description import (
    JobDescriptionCreate, JobDescriptionUpdate, JobDescriptionResponse
)

router = APIRouter(
    prefix="/job-descriptions",
    tags=["Job Descriptions"],
)


def _require_title_and_description(title, description):
    if not (title or "").strip() or not (description or "").strip():
        raise ValidationAppError("Title and Description are required")


def _get_job_description(db: Session, job_id: str) -> JobDescription:
    job = db.query(JobDescription).filter(JobDescription.id == job_id).first()
    if not job:
        raise NotFoundError("Job description not found")
    return job


@router.post("", response_model=JobDescriptionResponse, status_code=status.HTTP_201_CREATED)
def create_job_description(
    job_in: JobDescriptionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Save a job description for later analysis.
    """
    _require_title_and_description(job_in.title, job_in.description)
    db_job = JobDescription(**job_in.model_dump(), user_id=current_user.id)
    db.add(db_job)
    db.commit()
    db.refresh(db_job)
    return db_job


@router.get("", response_model=List[JobDescriptionResponse])
def list_job_descriptions(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return (
        db.query(JobDescription)
        .order_by(JobDescription.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


@router.get("/{job_id}", response_model=JobDescriptionResponse)
def get_job_description(
    job_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _get_job_description(db, job_id)


@router.put("/{job_id}", response_model=JobDescriptionResponse)
def update_job_description(
    job_id: str,
    job_in: JobDescriptionUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    job = _get_job_description(db, job_id)
    update_data = job_in.model_dump(exclude_unset=True)
    _require_title_and_description(
        update_data.get("title", job.title),
        update_data.get("description", job.description),
    )
    for field, value in update_data.items():
        setattr(job, field, value)
    db.commit()
    db.refresh(job)
    return job


@router.delete("/{job_id}")
def delete_job_description(
    job_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete a job description; its analysis reports go with it."""
    job = _get_job_description(db, job_id)
    db.delete(job)
    db.commit()
    return {"success": True, "message": "Job description deleted successfully"}
