"""Exception types raised by FileLens."""
from __future__ import annotations

__all__ = ["InvalidArgumentError", "ConfigError"]


class InvalidArgumentError(ValueError):
    """Raised when a call falls outside the documented input domain."""

    def __init__(self, message: str, **details: object) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ConfigError(InvalidArgumentError):
    """Raised when settings cannot be parsed or hold an invalid value."""

    @classmethod
    def invalid_value(cls, field: str, value: object, reason: str) -> "ConfigError":
        return cls(f"Invalid value for '{field}': {reason}", field=field, value=str(value))

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(f"Failed to parse config at {path}: {reason}", path=path, reason=reason)
