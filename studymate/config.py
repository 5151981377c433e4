"""
StudyMate API - Configuration
Values are read from the environment (or a local .env file).
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    env: str = "dev"  # dev | test | prod
    db_url: str = "sqlite+aiosqlite:///./studymate.db"
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 30 * 24 * 60  # 30 days, dev tokens only
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    # Performance tracking
    weak_topic_threshold: float = 60.0  # accuracy percent

    # Exams
    upcoming_exam_limit: int = 5
    default_reminder_days: list[int] = [7, 3, 1]

    class Config:
        env_file = ".env"


settings = Settings()
