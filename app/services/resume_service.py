"""
Resume upload and lifecycle.

Files are validated before anything touches storage. A failed metadata insert
after a successful storage write leaves the blob in place.
"""
import logging
import re
import time
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, PersistenceError, ValidationAppError, AppException
from app.models.resume import Resume
from app.services.storage import ObjectStorage

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
ALLOWED_CONTENT_TYPES = {PDF_CONTENT_TYPE, DOCX_CONTENT_TYPE}
MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB

CONTENT_TYPES_BY_EXTENSION = {"pdf": PDF_CONTENT_TYPE, "docx": DOCX_CONTENT_TYPE}


def validate_resume_file(content_type: Optional[str], size: int) -> None:
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationAppError("Please upload a PDF or DOCX file")
    if size > MAX_FILE_SIZE:
        raise ValidationAppError("Please upload a file smaller than 5MB")


def file_extension(filename: str) -> str:
    # Text after the last dot; a name without a dot is its own extension
    return filename.rsplit(".", 1)[-1]


def title_from_filename(filename: str) -> str:
    return re.sub(r"\.[^/.]+$", "", filename)


def build_object_key(identity: str, filename: str, timestamp_ms: Optional[int] = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{identity}/{timestamp_ms}.{file_extension(filename)}"


async def upload_resume(db: Session, storage: ObjectStorage, identity: str, file: UploadFile) -> Resume:
    filename = file.filename or "resume"
    content = await file.read()
    size = len(content)

    validate_resume_file(file.content_type, size)

    timestamp_ms = int(time.time() * 1000)
    key = build_object_key(identity, filename, timestamp_ms)
    while storage.exists(identity, key):
        # Two uploads in the same millisecond
        timestamp_ms += 1
        key = build_object_key(identity, filename, timestamp_ms)
    storage.upload(identity, key, content)

    resume = Resume(
        user_id=identity,
        title=title_from_filename(filename),
        file_name=filename,
        file_path=key,
        file_size=size,
    )
    db.add(resume)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Resume metadata insert failed, blob {key} left in storage: {e}")
        raise PersistenceError("Failed to save resume") from e
    db.refresh(resume)

    logger.info(f"Resume {resume.id} uploaded for user {identity} ({size} bytes)")
    return resume


def get_resume(db: Session, resume_id: str) -> Resume:
    resume = db.query(Resume).filter(Resume.id == resume_id).first()
    if not resume:
        raise NotFoundError("Resume not found")
    return resume


def delete_resume(db: Session, storage: ObjectStorage, identity: str, resume_id: str) -> None:
    """Delete the row (its reports cascade) and then the stored file."""
    resume = get_resume(db, resume_id)
    file_path = resume.file_path
    db.delete(resume)
    db.commit()

    try:
        storage.remove(identity, file_path)
    except (OSError, AppException) as e:
        logger.warning(f"Resume {resume_id} deleted but its file {file_path} was not removed: {e}")
