"""
cot-proto error types.
"""

from typing import Any, Optional


class CotError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ParseError(CotError):
    """Base class for every failure while turning XML text into a message."""

    def __init__(self, message: str, code: str = "parse_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class TokenizationError(ParseError):
    """The input is not well-formed XML."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, "tokenization_error", details)


class MissingFieldError(ParseError):
    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"missing required field '{field}'", "missing_field", {"field": field})
        self.field = field


class MalformedTimestampError(ParseError):
    def __init__(self, value: str, field: Optional[str] = None):
        where = f" in '{field}'" if field else ""
        super().__init__(
            f"malformed RFC3339 timestamp{where}: {value!r}",
            "malformed_timestamp",
            {"value": value, "field": field},
        )
        self.value = value
        self.field = field


class InvalidFieldError(ParseError):
    def __init__(self, field: str, message: str):
        super().__init__(message, "invalid_field", {"field": field})
        self.field = field
