"""
Custom Exception Hierarchy

The evaluation pipeline is total over its input domain: missing and
out-of-range clinical values are absorbed as diagnostics, never raised.
These exceptions cover the remaining cases where a caller hands the
pipeline something it cannot interpret at all.
"""
from typing import Optional, Dict, Any


class FertilityEngineError(Exception):
    """Base exception for all evaluation engine errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a serialisable dictionary."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class IntakeError(FertilityEngineError):
    """The raw intake cannot be interpreted (e.g. no usable age)."""

    def __init__(
        self,
        message: str,
        field: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="INTAKE_ERROR",
            details={"field": field, **(details or {})}
        )
        self.field = field


class ContentLookupError(FertilityEngineError):
    """A clinical content lookup was attempted with an unknown key."""

    def __init__(
        self,
        message: str,
        key: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="CONTENT_ERROR",
            details={"key": key, **(details or {})}
        )
        self.key = key
