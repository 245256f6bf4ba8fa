from fastapi import APIRouter
from app.routers import (
    auth, profile, resume, job_descriptions, analysis, reports, chat, dashboard
)

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(profile.router, tags=["Profile"])
api_router.include_router(dashboard.router, tags=["Dashboard"])
api_router.include_router(resume.router, tags=["Resumes"])
api_router.include_router(job_descriptions.router, tags=["Job Descriptions"])
api_router.include_router(analysis.router, tags=["Analysis"])
api_router.include_router(reports.router, tags=["Reports"])
api_router.include_router(chat.router, tags=["Chat"])
