"""
Name: Portal Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match the institution's current policy

Collaborators:
  - identity/email_roles.py: email domain, program duration, year-digit range
  - application/registration.py: admin account email
  - application/content_moderation.py: keyword overrides, moderation switch
  - crosscutting/logger.py: log level and format

Constraints:
  - No business logic: pure configuration
  - Keyword overrides arrive as JSON and are parsed by the moderation module

Notes:
  - Singleton via lru_cache; tests call get_settings.cache_clear()
  - enrollment_year_max_digits=None means "the current year's last two digits"
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Portal settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/production/test)
        log_level: Root level for the portal logger (default: INFO)
        log_json: Emit JSON log lines (default: True)
        institutional_email_domain: Required email suffix (default: @kongu.edu)
        program_duration_years: Years between joining and graduation (default: 4)
        enrollment_year_min_digits: Lowest accepted two-digit joining year (default: 1)
        enrollment_year_max_digits: Highest accepted two-digit joining year
            (default: None, meaning the current year mod 100)
        admin_account_email: Account that registers as ADMIN without a
            name.YYdept local part (default: admin@kongu.edu)
        moderation_enabled: Run the keyword moderator on submissions (default: True)
        moderation_keywords_config: JSON with per-category keyword overrides
    """

    # Environment
    app_env: str = "development"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Institutional email policy
    institutional_email_domain: str = "@kongu.edu"
    program_duration_years: int = 4
    enrollment_year_min_digits: int = 1
    enrollment_year_max_digits: int | None = None
    admin_account_email: str = "admin@kongu.edu"

    # Content moderation
    # JSON: {"scam": ["easy money", ...], "suspicious_links": ["t.me/"]}
    moderation_enabled: bool = True
    moderation_keywords_config: str = ""

    @field_validator("institutional_email_domain")
    @classmethod
    def email_domain_must_start_with_at(cls, v: str) -> str:
        domain = (v or "").strip().lower()
        if not domain.startswith("@") or len(domain) < 2:
            raise ValueError("institutional_email_domain must look like '@example.edu'")
        return domain

    @field_validator("admin_account_email")
    @classmethod
    def admin_email_normalized(cls, v: str) -> str:
        return (v or "").strip().lower()

    @field_validator("program_duration_years")
    @classmethod
    def program_duration_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("program_duration_years must be greater than 0")
        return v

    @field_validator("enrollment_year_min_digits", "enrollment_year_max_digits")
    @classmethod
    def year_digits_in_range(cls, v: int | None) -> int | None:
        if v is not None and not 0 <= v <= 99:
            raise ValueError("enrollment year digits must be between 0 and 99")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_upper(cls, v: str) -> str:
        return (v or "INFO").strip().upper()

    @model_validator(mode="after")
    def validate_year_window(self):
        if (
            self.enrollment_year_max_digits is not None
            and self.enrollment_year_min_digits > self.enrollment_year_max_digits
        ):
            raise ValueError(
                f"enrollment_year_min_digits ({self.enrollment_year_min_digits}) "
                f"must not exceed enrollment_year_max_digits "
                f"({self.enrollment_year_max_digits})"
            )
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
