"""Exceptions raised by the normalization layer."""

from typing import Optional


class ParseError(ValueError):
    """Raised when a normalizer receives text it cannot interpret.

    Attributes:
        field: Name of the field being parsed (e.g. "name", "tenure")
        value: The offending raw value
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value
