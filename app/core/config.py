import os
import logging
from pydantic import BaseModel, Field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

class AISettings(BaseModel):
    openai_api_key: Optional[str] = Field(default=os.getenv("OPENAI_API_KEY"))
    api_url: str = Field(default=os.getenv("AI_API_URL", "https://api.openai.com/v1/chat/completions"))
    model_name: str = Field(default=os.getenv("AI_MODEL_NAME", "gpt-4o-mini"))
    temperature: float = 0.3
    max_tokens: int = 2000
    timeout_seconds: int = int(os.getenv("AI_TIMEOUT_SECONDS", "60"))

class Config(BaseModel):
    app_name: str = "Resume Optimizer"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./resume_optimizer.db")

    # Auth
    secret_key: str = os.getenv("SECRET_KEY", "dev-only-insecure-key-DO-NOT-USE-IN-PROD")
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    refresh_token_expire_days: int = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))

    # Object storage for uploaded resume files
    storage_dir: str = os.getenv("STORAGE_DIR", "storage")
    storage_bucket: str = os.getenv("STORAGE_BUCKET", "resumes")

    # AI Components
    ai: AISettings = AISettings()

    # CORS: comma-separated origins loaded from env.
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:5173,http://localhost:8080,"
                "http://127.0.0.1:5173,http://127.0.0.1:8080",
            ).split(",")
            if o.strip()
        ]
    )

settings = Config()

# --- Startup Validation for Production ---
_logger = logging.getLogger(__name__)
if settings.environment != "development":
    if "dev-only" in settings.secret_key:
        raise RuntimeError(
            "FATAL: SECRET_KEY must be set for non-development environments. "
            "Set it as an environment variable."
        )
else:
    if "dev-only" in settings.secret_key:
        _logger.warning("Using insecure default SECRET_KEY, only acceptable in development.")
