from pydantic_settings import BaseSettings
from typing import Optional, List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Training Engine"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./training.db"
    TEST_DATABASE_URL: Optional[str] = None
    DATABASE_ECHO: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Reminder sweep
    SCHEDULER_ENABLED: bool = True
    REMINDER_SWEEP_INTERVAL_MINUTES: int = 60

    class Config:
        env_file = ".env"

settings = Settings()
