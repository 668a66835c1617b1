# student_registry/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Database
    DATABASE_URL: str = "sqlite:///./data/students.db"
    SQLITE_WAL: bool = True

    # Dispatch mode: local store when True, HTTP API otherwise
    DESKTOP_MODE: bool = True
    API_BASE_URL: str = "http://127.0.0.1:8000"

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"

    # Bulk import defaults
    PLACEHOLDER_NAME: str = "Unknown"
    PLACEHOLDER_ID_PREFIX: str = "temp-"


settings = Settings()
