"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        li_email: Optional[str] = None,
        li_password: Optional[str] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        """Initialize environment configuration."""
        self.li_email = li_email
        self.li_password = li_password
        self.log_level = log_level
        self.environment = environment or "local"

    @property
    def has_credentials(self) -> bool:
        """Whether both login credentials are set."""
        return bool(self.li_email and self.li_password)


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Optional environment variables:
    - LI_EMAIL: Login email for the networking site
    - LI_PASSWORD: Login password (must be set together with LI_EMAIL)
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment label added to every log record

    Credentials are only required when no saved browser state is available;
    that check happens at login time.

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If variables are inconsistent or invalid
    """
    errors = []

    li_email = os.getenv("LI_EMAIL")
    li_password = os.getenv("LI_PASSWORD")
    log_level = os.getenv("LOG_LEVEL")
    environment = os.getenv("ENVIRONMENT")

    if li_email and not li_password:
        errors.append(
            "LI_EMAIL is set but LI_PASSWORD is not. Both must be set for login."
        )
    elif li_password and not li_email:
        errors.append(
            "LI_PASSWORD is set but LI_EMAIL is not. Both must be set for login."
        )

    if log_level:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if log_level.upper() not in valid_levels:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(valid_levels)}"
            )
        else:
            log_level = log_level.upper()

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your credentials",
                "Set LI_EMAIL and LI_PASSWORD together, or neither",
            ],
        )

    return EnvironmentConfig(
        li_email=li_email,
        li_password=li_password,
        log_level=log_level,
        environment=environment,
    )
