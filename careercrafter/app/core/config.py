"""
Application configuration settings.
Loads from .env file first (overrides shell env for local dev), then pydantic reads from environment.
Production: set env vars in the platform (Docker, K8s, etc.); .env is optional.

All backend-related configs and constants are centralized here.
"""
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env path: careercrafter/.env (absolute path, works regardless of cwd)
_BASE_DIR = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = (_BASE_DIR / ".env").resolve()

# Load .env into environment BEFORE pydantic reads. override=True ensures .env
# values override any shell env. When .env doesn't exist (prod), this is a no-op.
if _ENV_FILE.exists():
    load_dotenv(_ENV_FILE, override=True)


class Settings(BaseSettings):
    """Application settings. Source: env vars (after dotenv load)."""

    # App
    app_name: str = "CareerCrafter"
    app_version: str = "1.0.0"
    port: int = 8001

    # Database
    database_url: str = "sqlite:///./careercrafter.db"

    # Auth
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # HTTP / network
    http_request_timeout: int = 30

    # AI text generation (any OpenAI-compatible chat completions endpoint)
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = ""  # e.g. https://api.groq.com/openai/v1
    openai_temperature: float = 0.7

    # CORS
    cors_origins: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


# --- Constants (non-env, business config) ---

# AI output budgets (max tokens per operation)
AI_SUMMARY_MAX_TOKENS: int = 500
AI_EXPERIENCE_MAX_TOKENS: int = 800
AI_JOB_MATCH_MAX_TOKENS: int = 1000
AI_SKILLS_MAX_TOKENS: int = 400

# Job match fallback when the model's analysis can't be parsed
JOB_MATCH_FALLBACK_SCORE: int = 75
JOB_MATCH_FALLBACK_STRENGTH: str = "Professional experience matches job requirements"
JOB_MATCH_FALLBACK_SUGGESTION: str = "Consider adding more specific technical skills"

# PDF generator
PDF_DEFAULT_TITLE: str = "Resume"
PDF_LINE_HEIGHT: int = 14
PDF_FONT_SIZE_TITLE: int = 14
PDF_FONT_SIZE_BODY: int = 10
