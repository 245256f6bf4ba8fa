import logging
from typing import List

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from sqlalchemy.orm import Session

from app.core.exceptions import ValidationAppError
from app.database import get_db
from app.models.resume import Resume
from app.models.user import User
from app.routers.auth_deps import get_current_user
from app.schemas.resume import ResumeResponse, ResumeUpdate
from app.services import resume_service
from app.services.storage import ObjectStorage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", tags=["Resumes"])


@router.post("", response_model=ResumeResponse, status_code=status.HTTP_201_CREATED)
async def upload_resume(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    current_user: User = Depends(get_current_user)
):
    """
    Upload a resume (PDF or DOCX, max 5MB).
    Stored under {user_id}/{timestamp}.{ext}.
    """
    logger.info(f"Resume upload: {file.filename} ({file.content_type}) by {current_user.id}")
    return await resume_service.upload_resume(db, storage, current_user.id, file)


@router.get("", response_model=List[ResumeResponse])
def list_resumes(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return db.query(Resume).order_by(Resume.created_at.desc()).all()


@router.get("/{resume_id}", response_model=ResumeResponse)
def get_resume(
    resume_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return resume_service.get_resume(db, resume_id)


@router.patch("/{resume_id}", response_model=ResumeResponse)
def update_resume(
    resume_id: str,
    update: ResumeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    resume = resume_service.get_resume(db, resume_id)
    update_data = update.model_dump(exclude_unset=True)
    if "title" in update_data and not (update_data["title"] or "").strip():
        raise ValidationAppError("Title cannot be empty")
    for field, value in update_data.items():
        setattr(resume, field, value)
    db.commit()
    db.refresh(resume)
    return resume


@router.get("/{resume_id}/file")
def download_resume_file(
    resume_id: str,
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    current_user: User = Depends(get_current_user)
):
    resume = resume_service.get_resume(db, resume_id)
    content = storage.download(current_user.id, resume.file_path)
    media_type = resume_service.CONTENT_TYPES_BY_EXTENSION.get(
        resume_service.file_extension(resume.file_name).lower(), "application/octet-stream"
    )
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{resume.file_name}"'},
    )


@router.delete("/{resume_id}")
def delete_resume(
    resume_id: str,
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    current_user: User = Depends(get_current_user)
):
    """Delete a resume; its analysis reports go with it."""
    resume_service.delete_resume(db, storage, current_user.id, resume_id)
    return {"success": True, "message": "Resume deleted successfully"}
