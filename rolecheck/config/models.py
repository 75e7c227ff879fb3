"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class MatchPolicy(str, Enum):
    """Which roles on a profile may satisfy the expected company."""

    ANY_CURRENT = "any-current"
    MOST_RECENT = "most-recent"


class LabelStyle(str, Enum):
    """Verdict label sets used in the report."""

    REVIEW = "review"
    NEW_ROLE = "new-role"


class ReportFormat(str, Enum):
    """Report output formats."""

    JSON = "json"
    LINES = "lines"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class RosterConfig(BaseModel):
    """CSV column names for the input roster."""

    url_column: str = Field("LinkedIn URL", min_length=1, description="Profile URL column")
    company_column: str = Field("Company", min_length=1, description="Expected company column")
    position_column: Optional[str] = Field(
        "Position", description="Optional recorded position column"
    )

    @field_validator("url_column", "company_column")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from column names."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Column name cannot be empty or whitespace-only")
        return stripped

    @field_validator("position_column")
    @classmethod
    def strip_optional_column(cls, v: Optional[str]) -> Optional[str]:
        """Blank position column disables it."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped if stripped else None


class MatchingConfig(BaseModel):
    """Role matching rules."""

    policy: MatchPolicy = Field(
        MatchPolicy.ANY_CURRENT, description="any-current or most-recent"
    )

    model_config = {"use_enum_values": True}


class ReportConfig(BaseModel):
    """Report output settings."""

    labels: LabelStyle = Field(LabelStyle.REVIEW, description="Verdict label style")
    format: ReportFormat = Field(ReportFormat.JSON, description="json or lines")

    model_config = {"use_enum_values": True}


class BrowserConfig(BaseModel):
    """Browser automation settings."""

    headless: bool = Field(False, description="Run Chromium without a window")
    slow_mo_ms: int = Field(0, ge=0, le=5000, description="Delay between browser actions")
    login_url: str = Field(
        "https://www.linkedin.com/login", min_length=1, description="Login page URL"
    )
    selector_timeout_ms: int = Field(
        30000, ge=1000, le=300000, description="Timeout for required page elements"
    )
    education_timeout_ms: int = Field(
        5000, ge=100, le=60000, description="Timeout for optional sections (contact info, education)"
    )
    storage_state_path: Optional[str] = Field(
        None, description="File for saved cookies; reused to skip login when present"
    )
    manual_2fa: bool = Field(True, description="Pause for manual 2FA after login")

    @field_validator("login_url")
    @classmethod
    def strip_login_url(cls, v: str) -> str:
        """Strip whitespace from login URL."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("login_url cannot be empty")
        return stripped


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the role checker.

    Every section has defaults, so an empty config is valid.
    """

    roster: RosterConfig = Field(default_factory=RosterConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
