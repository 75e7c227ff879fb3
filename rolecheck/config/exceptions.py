"""Custom exceptions for configuration management."""

from rolecheck.exceptions import RoleCheckError


class ConfigurationError(RoleCheckError):
    """Raised when the YAML config or environment variables are invalid."""

    def add_error(self, error: str) -> None:
        """Add a validation error and refresh the formatted message."""
        self.errors.append(error)
        self.args = (self._format_message(),)

    def add_suggestion(self, suggestion: str) -> None:
        """Add a helpful suggestion and refresh the formatted message."""
        self.suggestions.append(suggestion)
        self.args = (self._format_message(),)
