"""
Services - pipeline orchestration and optional memoization
"""
from .cache import EvaluationCache, input_hash
from .evaluation import (
    FertilityEvaluationService,
    EvaluationResult,
    evaluate_patient,
)

__all__ = [
    "EvaluationCache",
    "input_hash",
    "FertilityEvaluationService",
    "EvaluationResult",
    "evaluate_patient",
]
