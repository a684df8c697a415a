"""
Reports Module - prognosis classification and clinical findings
"""
from .prognosis_report import (
    generate_report,
    classify_prognosis,
    cumulative_probability,
    build_finding,
    CATEGORY_EMOJI,
)

__all__ = [
    "generate_report",
    "classify_prognosis",
    "cumulative_probability",
    "build_finding",
    "CATEGORY_EMOJI",
]
