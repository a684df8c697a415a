"""
Validation Module - intake schema and input normalization
"""
from .intake import PatientIntake
from .normalizer import (
    normalize_input,
    NormalizationResult,
    NormalizationWarning,
    WarningType,
)

__all__ = [
    "PatientIntake",
    "normalize_input",
    "NormalizationResult",
    "NormalizationWarning",
    "WarningType",
]
