"""
Static clinical reference data: finding keys, content library and
population benchmarks.
"""
from .keys import FindingKey
from .library import ClinicalContent, CLINICAL_CONTENT, get_clinical_content
from .benchmarks import benchmark_for_age, compare_to_benchmark

__all__ = [
    "FindingKey",
    "ClinicalContent",
    "CLINICAL_CONTENT",
    "get_clinical_content",
    "benchmark_for_age",
    "compare_to_benchmark",
]
