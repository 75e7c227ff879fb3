"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    browser = config_dict.get("browser", {})
    if isinstance(browser, dict):
        # Manual 2FA needs a visible window to type the code into
        if browser.get("headless") is True and browser.get("manual_2fa", True):
            warning_messages.append(
                "browser.headless is true while manual_2fa is enabled; "
                "the 2FA prompt cannot be completed without a visible window"
            )

        timeout = browser.get("selector_timeout_ms")
        if isinstance(timeout, int) and 1000 <= timeout < 5000:
            warning_messages.append(
                f"Short selector_timeout_ms ({timeout}) may mark slow profiles as errors"
            )

    roster = config_dict.get("roster", {})
    if isinstance(roster, dict):
        url_column = roster.get("url_column")
        company_column = roster.get("company_column")
        if isinstance(url_column, str) and url_column == company_column:
            warning_messages.append(
                f"roster.url_column and roster.company_column are both '{url_column}'"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
