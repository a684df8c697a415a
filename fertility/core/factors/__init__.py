"""
Factor Evaluation Module

Per-dimension evaluators and the aggregation step that combines them.
"""
from .aggregation import FactorEvaluation, evaluate_factors, aggregate
from .structural import RecanalizationAssessment, assess_recanalization

__all__ = [
    "FactorEvaluation",
    "evaluate_factors",
    "aggregate",
    "RecanalizationAssessment",
    "assess_recanalization",
]
