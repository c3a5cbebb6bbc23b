"""
Application Configuration
"""

from pydantic_settings import BaseSettings
from typing import List
from dotenv import load_dotenv, find_dotenv

load_dotenv(find_dotenv())


class Settings(BaseSettings):
    """Application settings"""

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # API
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "NR Student Tax"
    VERSION: str = "1.0.0"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # Console renderer in development, JSON lines otherwise

    # Tax rules
    TAX_YEAR: int = 2024  # Bracket schedule, SALT cap and standard deduction are 2024 figures

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
