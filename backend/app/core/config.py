from datetime import timedelta
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    """
    应用程序配置设置类，从环境变量或.env文件加载所有配置项。
    使用Pydantic进行数据验证和类型检查。

    Holds the server, database, identity provider, lesson content and
    streak policy settings. Required settings are validated on startup.
    """
    # Server
    BACKEND_PORT: int = 8000

    # Identity provider (GoTrue-compatible auth REST API)
    AUTH_API_URL: str
    AUTH_API_KEY: str
    AUTH_TIMEOUT_SECONDS: float = 10.0
    OAUTH_PROVIDERS: List[str] = ["google"]

    # Model configuration tells Pydantic where to find the .env file.
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=True
    )

    PROJECT_NAME: str = "30 Days Of Python"
    API_V1_STR: str = "/api/v1"
    FRONTEND_URL: str = "http://localhost:3000"

    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    DATABASE_URL: str = "sqlite:///./database.db"

    # Lesson content, served as day-<n>.html / day-<n>.md
    CONTENT_DIR: str = "./backend/data/content"
    TOTAL_DAYS: int = 30

    # Streak policy: activity gaps up to this many hours keep the streak alive
    STREAK_WINDOW_HOURS: float = 24

    LOG_LEVEL: str = "INFO"

    @property
    def streak_window(self) -> timedelta:
        return timedelta(hours=self.STREAK_WINDOW_HOURS)

# Create a single, globally accessible instance of the settings.
# This will raise a validation error on startup if required settings are missing.
settings = Settings()
