from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Loaded once at process start and handed to ``create_app``; the object
    is frozen so request code can share it without copying.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
    )

    # Database
    DATABASE_URL: str = "sqlite:///./jobboard.db"

    # Runtime environment
    APP_ENV: Literal["development", "production", "test"] = "development"

    # Session Authentication
    SESSION_COOKIE_NAME: str = "session_token"
    SESSION_DURATION_DAYS: int = 7
    BCRYPT_ROUNDS: int = 12

    # Application
    APP_NAME: str = "JobBoard"
    LOG_LEVEL: str = "INFO"
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:3000,"
        "http://127.0.0.1:3000"
    )

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def cors_origins(self) -> list[str]:
        return [
            origin.strip()
            for origin in self.BACKEND_CORS_ORIGINS.split(",")
            if origin.strip()
        ]


settings = Settings()
