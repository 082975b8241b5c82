# -*- coding: utf-8 -*-


from pathlib import Path
from dataclasses import dataclass
import os

from dotenv import load_dotenv

# ============================================================================
# Load .env file for local environment configuration
# ============================================================================
load_dotenv()

# ============================================================================
# Read settings from environment variables (from .env or system)
# ============================================================================
# API Settings
_API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8080/api/v1")
_API_TIMEOUT = int(os.getenv("API_TIMEOUT", "30"))
_API_MAX_RETRIES = int(os.getenv("API_MAX_RETRIES", "3"))
_API_USERNAME = os.getenv("API_USERNAME", "academic@educenter.local")
_API_PASSWORD = os.getenv("API_PASSWORD", "")
_API_VERIFY_SSL = os.getenv("API_VERIFY_SSL", "true").lower() in ("true", "1", "yes")

# UI Settings
_UI_LANGUAGE = os.getenv("UI_LANGUAGE", "en")

# Query cache
_QUERY_CACHE_TTL_SECONDS = int(os.getenv("QUERY_CACHE_TTL_SECONDS", "60"))

# Logging
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() == "true"


@dataclass
class Config:
    """Application configuration."""

    # Application Info
    APP_NAME: str = "EduCenter"
    APP_TITLE: str = "Education Center Academic Affairs"
    VERSION: str = "1.0.0"
    ORGANIZATION: str = "EduCenter"

    # HTTP API Backend Settings
    # Reads from .env (API_BASE_URL, API_TIMEOUT, API_MAX_RETRIES, ...)
    API_BASE_URL: str = _API_BASE_URL
    API_TIMEOUT: int = _API_TIMEOUT
    API_MAX_RETRIES: int = _API_MAX_RETRIES
    API_USERNAME: str = _API_USERNAME
    API_PASSWORD: str = _API_PASSWORD
    API_VERIFY_SSL: bool = _API_VERIFY_SSL

    # Seconds before a token expires at which it gets refreshed
    TOKEN_REFRESH_MARGIN_SECONDS: int = 300

    # Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # Logging
    LOG_FILE: str = "app.log"
    LOG_PATH: Path = LOGS_DIR / LOG_FILE
    LOG_LEVEL: str = _LOG_LEVEL
    LOG_TO_FILE: bool = _LOG_TO_FILE
    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 3

    # UI Settings
    UI_LANGUAGE: str = _UI_LANGUAGE
    WIZARD_MIN_WIDTH: int = 880
    WIZARD_MIN_HEIGHT: int = 620

    # Query cache
    QUERY_CACHE_TTL_SECONDS: int = _QUERY_CACHE_TTL_SECONDS

    # Transfer wizard rules (client-side form checks only)
    TRANSFER_REASON_MIN_LENGTH: int = 10
    OVERRIDE_REASON_MIN_LENGTH: int = 20
    EFFECTIVE_DATE_MAX_DAYS: int = 60
    STUDENT_SEARCH_MIN_CHARS: int = 2

    # Support contact shown on the contact-support branch
    SUPPORT_EMAIL: str = "academic@educenter.local"

    # Date/Time Formats
    DATE_FORMAT: str = "%Y-%m-%d"
    DATETIME_FORMAT: str = "%Y-%m-%d %H:%M:%S"
    DATE_FORMAT_DISPLAY: str = "%d/%m/%Y"


# User roles
class Roles:
    ADMIN = "ADMIN"
    ACADEMIC_AFFAIR = "ACADEMIC_AFFAIR"
    CENTER_HEAD = "CENTER_HEAD"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"

    # Roles that may submit a transfer on behalf of a student
    ON_BEHALF_ROLES = ("ACADEMIC_AFFAIR", "CENTER_HEAD", "ADMIN")

    @classmethod
    def get_display_name(cls, role: str) -> str:
        names = {
            cls.ADMIN: "Administrator",
            cls.ACADEMIC_AFFAIR: "Academic Affairs",
            cls.CENTER_HEAD: "Center Head",
            cls.TEACHER: "Teacher",
            cls.STUDENT: "Student",
        }
        return names.get(role, role)
