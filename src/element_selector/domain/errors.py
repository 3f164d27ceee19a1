"""Domain-specific errors.

Configuration errors are raised once at startup; the HTTP layer maps the
input errors to status codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class SelectorFilterError(Exception):
    """Base class for all domain errors."""


@dataclass(frozen=True)
class DomainErrorInfo:
    code: str
    message: str
    detail: Optional[str] = None


class InvalidSelectorError(SelectorFilterError):
    """Raised when a configured selector string cannot be parsed."""

    def __init__(self, message: str, selector: str = "", position: int | None = None):
        super().__init__(message)
        self.selector = selector
        self.position = position
        detail = f"selector={selector!r}"
        if position is not None:
            detail += f" position={position}"
        self.info = DomainErrorInfo(code="INVALID_SELECTOR", message=message, detail=detail)


class ConfigurationError(SelectorFilterError):
    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="CONFIGURATION_ERROR", message=message, detail=detail)


class InvalidInputError(SelectorFilterError):
    """Raised when request validation fails."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="INVALID_INPUT", message=message, detail=detail)
