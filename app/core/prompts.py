"""
Centralized AI Prompt Repository
- Keeps the analysis prompt out of business logic
- Literal braces in templates are doubled for str.format
"""

# --- RESUME ANALYSIS PROMPTS ---
RESUME_ANALYSIS_SYSTEM = (
    "You are an expert HR professional and ATS system analyzer. "
    "Provide detailed, actionable resume feedback in the requested JSON format."
)

RESUME_ANALYSIS_USER_TEMPLATE = """
Analyze the following resume against the job description and provide a comprehensive analysis.

RESUME:
{resume_text}

JOB DESCRIPTION:
Title: {title}
Company: {company}
Description: {description}
Requirements: {requirements}

Please provide a detailed analysis in the following JSON format:
{{
  "relevance_score": <number between 0-100>,
  "missing_skills": ["skill1", "skill2"],
  "strengths": ["strength1", "strength2"],
  "weaknesses": ["weakness1", "weakness2"],
  "improvement_suggestions": "Detailed suggestions for improvement",
  "ai_summary": "Brief summary of the resume",
  "interview_questions": ["question1", "question2", "question3", "question4", "question5"]
}}

Focus on:
1. ATS compatibility and keyword matching
2. Skills alignment with job requirements
3. Experience relevance
4. Areas for improvement
5. Predicted interview questions based on the role

Provide actionable, specific feedback."""

NOT_SPECIFIED = "Not specified"

# Stands in for extracted text until a resume has content_text
RESUME_TEXT_PLACEHOLDER = "Resume content would be extracted from the uploaded file"

# helper to build prompts
def get_prompt(template: str, **kwargs) -> str:
    return template.format(**kwargs)
