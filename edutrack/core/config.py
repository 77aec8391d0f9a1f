from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    project_name: str = "EduTrack API"

    # Database
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "edutrack"
    db_pool_size: int = 10
    # Seconds to wait for a free pooled connection; None waits indefinitely
    db_pool_timeout: Optional[float] = None

    # Accounts
    admin_email: str = "admin@ieti.edu.ph"
    admin_redirect: str = "/static/admin-dashboard.html"
    teacher_redirect: str = "teacher/dashboard.html"
    student_redirect: str = "student/student-dashboard.html"

    # Dashboard activity feed
    activity_timezone: str = "Asia/Manila"

    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"
    port: int = 3000

    @property
    def sqlalchemy_url(self) -> str:
        """Async SQLAlchemy URL built from DATABASE_URL or the DB_* parts"""
        url = self.database_url or (
            f"postgresql://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url


settings = Settings()
