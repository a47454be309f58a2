"""
Run settings for the daily digest job.

Values come from the process environment (a local .env file is loaded first
with python-dotenv). Secrets are required; everything else has a default.
"""

import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from shared.errors import ConfigurationError

load_dotenv()

# Defaults shared by DigestSettings and the digest functions
DEFAULT_FROM_EMAIL = "Alert365 <no-reply@alert365.fr>"
DEFAULT_SUBJECT = "Alert365 : ton programme pour demain"
DEFAULT_TIMEZONE = "Europe/Paris"
DEFAULT_ALERTS_URL = "https://alert365.fr"
DEFAULT_BATCH_SIZE = 5
DEFAULT_DELAY_BETWEEN_EMAILS = 0.6
DEFAULT_DELAY_BETWEEN_BATCHES = 2.0

REQUIRED_ENV_VARS = ("RESEND_API_KEY", "SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY")

# Environment variable -> settings field for optional values
OPTIONAL_ENV_VARS = {
    "DIGEST_FROM_EMAIL": "from_email",
    "DIGEST_SUBJECT": "subject",
    "DIGEST_TIMEZONE": "timezone",
    "DIGEST_BATCH_SIZE": "batch_size",
    "DIGEST_DELAY_BETWEEN_EMAILS": "delay_between_emails",
    "DIGEST_DELAY_BETWEEN_BATCHES": "delay_between_batches",
    "DIGEST_DRY_RUN": "dry_run",
    "ALERTS_BASE_URL": "alerts_base_url",
}


class DigestSettings(BaseModel):
    """Validated configuration for one digest run."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    resend_api_key: str = Field(..., min_length=1)
    supabase_url: str = Field(..., min_length=1)
    supabase_service_role_key: str = Field(..., min_length=1)

    from_email: str = DEFAULT_FROM_EMAIL
    subject: str = DEFAULT_SUBJECT
    timezone: str = DEFAULT_TIMEZONE
    alerts_base_url: str = DEFAULT_ALERTS_URL

    # Pacing for the email transport's rate limits (seconds)
    batch_size: int = Field(DEFAULT_BATCH_SIZE, ge=1)
    delay_between_emails: float = Field(DEFAULT_DELAY_BETWEEN_EMAILS, ge=0)
    delay_between_batches: float = Field(DEFAULT_DELAY_BETWEEN_BATCHES, ge=0)

    dry_run: bool = False

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone {value!r}") from e
        return value


def load_settings() -> DigestSettings:
    """
    Build settings from environment variables.

    Raises:
        ConfigurationError: if a required variable is missing or blank, or an
            optional one has an invalid value
    """
    missing = [name for name in REQUIRED_ENV_VARS if not (os.getenv(name) or "").strip()]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    values = {name.lower(): os.getenv(name) for name in REQUIRED_ENV_VARS}
    for env_name, field_name in OPTIONAL_ENV_VARS.items():
        raw = os.getenv(env_name)
        if raw is not None and raw.strip():
            values[field_name] = raw.strip()

    try:
        return DigestSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid digest settings: {e}") from e
