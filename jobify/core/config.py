# jobify/core/config.py
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    APP_ENV: str = "development"
    APP_NAME: str = "Jobify"
    # No fallback: tokens can't be issued or verified until this is set
    SECRET_KEY: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    # environment values are strings; pydantic coerces to int
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 12

    # MongoDB
    MONGODB_URI: str = "mongodb://localhost:27017/jobify"
    MONGODB_DB: str = "jobify"

    # comma separated list, "*" allows any origin
    BACKEND_CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    # Pydantic v2 settings: read from .env file
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.BACKEND_CORS_ORIGINS.split(",") if o.strip()]


def check_settings(s: Settings) -> None:
    """Fail fast on configuration the server must not run without."""
    if not s.SECRET_KEY or not s.SECRET_KEY.strip():
        raise RuntimeError(
            "SECRET_KEY is not set. Export SECRET_KEY (or add it to .env) "
            "before starting the server."
        )


# single shared settings instance
settings = Settings()
