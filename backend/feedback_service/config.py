"""Configuration management for the feedback alert server."""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple
from dotenv import load_dotenv

# Backend directory (contains main.py and this package)
BACKEND_ROOT = Path(__file__).resolve().parents[1]

# Load .env from the working directory. Values already present in the
# process environment win over the file.
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_SMTP_PORT = 587
DEFAULT_ALERT_TO = "alerts@example.com"
DEFAULT_ADMIN_USER = "admin"
DEFAULT_ADMIN_PASS = "admin123"


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing required values."""
    pass


@dataclass(frozen=True)
class MailSettings:
    """SMTP transport settings for feedback alerts."""

    host: Optional[str]
    port: int
    user: Optional[str]
    password: Optional[str]
    alert_to: str

    @property
    def configured(self) -> bool:
        return bool(self.host and self.user and self.password)


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got: {raw}")


def get_host() -> str:
    """Get the interface the HTTP server binds to."""
    return os.getenv('HOST', '0.0.0.0')


def get_port() -> int:
    """Get the HTTP listen port from environment, default to 3000."""
    return _get_int('PORT', DEFAULT_PORT)


def get_mail_settings() -> MailSettings:
    """Get SMTP settings. Mail is disabled unless host, user and password are all set."""
    return MailSettings(
        host=os.getenv('SMTP_HOST') or None,
        port=_get_int('SMTP_PORT', DEFAULT_SMTP_PORT),
        user=os.getenv('SMTP_USER') or None,
        password=os.getenv('SMTP_PASS') or None,
        alert_to=os.getenv('ALERT_TO') or DEFAULT_ALERT_TO,
    )


def get_admin_credentials() -> Tuple[str, str]:
    """Get the single admin username/password pair."""
    return (
        os.getenv('ADMIN_USER') or DEFAULT_ADMIN_USER,
        os.getenv('ADMIN_PASS') or DEFAULT_ADMIN_PASS,
    )


def is_using_default_admin_credentials() -> bool:
    """Check whether either admin credential falls back to its built-in default."""
    return not (os.getenv('ADMIN_USER') and os.getenv('ADMIN_PASS'))


def get_feedback_file_path() -> Path:
    """Get the path of the JSON file holding stored feedback."""
    configured = os.getenv('FEEDBACK_FILE')
    if configured:
        return Path(configured)
    return BACKEND_ROOT / 'feedbacks.json'


def get_cors_origins() -> List[str]:
    """Get allowed CORS origins (comma separated), default to all."""
    raw = os.getenv('CORS_ORIGINS', '')
    origins = [origin.strip() for origin in raw.split(',') if origin.strip()]
    return origins or ['*']


def get_log_level() -> str:
    """Get log level from environment, default to INFO."""
    level = os.getenv('LOG_LEVEL', 'INFO').upper()
    valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

    if level not in valid_levels:
        logger.warning("Invalid log level '%s', defaulting to INFO", level)
        return 'INFO'

    return level


def get_log_format() -> str:
    """Get log output format ('json' or 'simple'), default to json."""
    log_format = os.getenv('LOG_FORMAT', '').lower()
    if log_format not in ('json', 'simple'):
        return 'json'
    return log_format
