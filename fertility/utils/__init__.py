"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    FertilityEngineError,
    IntakeError,
    ContentLookupError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "FertilityEngineError",
    "IntakeError",
    "ContentLookupError",
]
