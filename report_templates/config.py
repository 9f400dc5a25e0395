"""
Application Configuration

Environment variable management using Pydantic Settings.
"""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables

    All settings can be overridden via .env file or environment variables.
    """

    # Application
    APP_NAME: str = "Report Template Registry"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development | staging | production

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./report_templates.db"

    # Template storage
    REPORT_TEMPLATE_HOME: Path = Path("mrrt_templates")

    # DICOM
    # Root under which study instance UIDs are generated
    DICOM_UID_ORG_ROOT: str = "2.25"

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG | INFO | WARNING | ERROR | CRITICAL
    LOG_FORMAT: str = "json"  # json | text

    @field_validator("REPORT_TEMPLATE_HOME", mode="before")
    @classmethod
    def validate_template_home(cls, v):
        """Reject a blank template home and resolve it to an absolute path."""
        if v is None or not str(v).strip():
            raise ValueError("REPORT_TEMPLATE_HOME cannot be blank")
        return Path(str(v).strip()).expanduser().resolve()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Return the process-wide settings instance"""
    return settings
