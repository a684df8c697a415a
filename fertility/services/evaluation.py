"""
Evaluation Service

Thin, deterministic, synchronous wrapper running the whole pipeline:

    raw intake → normalize → factors → aggregate → interactions
               → report + treatment suggestions

Usage:
    from fertility.services import FertilityEvaluationService, EvaluationCache

    service = FertilityEvaluationService(cache=EvaluationCache())
    result = service.evaluate({"age": 32, "bmi": 23.1, "amh": 2.4})
    print(result.report.category, [t.title for t in result.treatments])

The service holds no per-evaluation state; the optional cache is supplied
and owned by the caller.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from fertility.core.base import Diagnostics, FactorSet, Report, TreatmentSuggestion
from fertility.core.clinical.engine import apply_interactions, summarise
from fertility.core.factors.aggregation import evaluate_factors
from fertility.core.reports.prognosis_report import generate_report
from fertility.core.treatment.suggester import suggest_treatments
from fertility.core.validation.intake import PatientIntake
from fertility.core.validation.normalizer import NormalizationWarning, normalize_input
from fertility.services.cache import EvaluationCache, input_hash
from fertility.utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CoreResult:
    """Everything derived purely from the normalized input (what the cache stores)."""
    report: Report
    treatments: Tuple[TreatmentSuggestion, ...]
    factors: FactorSet
    diagnostics: Diagnostics
    interactions: Dict[str, Any]


@dataclass(frozen=True)
class EvaluationResult:
    """Output of one evaluation call."""
    report: Report
    treatments: List[TreatmentSuggestion]
    factors: FactorSet
    diagnostics: Diagnostics
    input_hash: str
    interactions: Dict[str, Any] = field(default_factory=dict)
    warnings: List[NormalizationWarning] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input_hash": self.input_hash,
            "report": self.report.to_dict(),
            "treatments": [t.to_dict() for t in self.treatments],
            "factors": self.factors.to_dict(),
            "diagnostics": self.diagnostics.to_dict(),
            "interactions": dict(self.interactions),
            "warnings": [w.to_dict() for w in self.warnings],
        }


class FertilityEvaluationService:
    """
    Runs the evaluation pipeline end to end.

    Stateless apart from the optional caller-owned cache; safe to call from
    multiple threads.
    """

    def __init__(self, cache: Optional[EvaluationCache] = None):
        self.cache = cache

    def evaluate(self, raw: Union[Mapping[str, Any], PatientIntake]) -> EvaluationResult:
        """
        Evaluate one patient intake.

        Args:
            raw: Mapping of intake fields or a parsed PatientIntake

        Returns:
            EvaluationResult with report, treatments and diagnostics

        Raises:
            IntakeError: if the intake has no usable age
        """
        normalized = normalize_input(raw)
        patient = normalized.patient
        key = input_hash(patient)

        if self.cache is not None:
            core = self.cache.get_or_compute(key, lambda: self._run(patient))
        else:
            core = self._run(patient)

        return EvaluationResult(
            report=core.report,
            treatments=list(core.treatments),
            factors=core.factors,
            diagnostics=copy.deepcopy(core.diagnostics),
            input_hash=key,
            interactions=copy.deepcopy(core.interactions),
            warnings=list(normalized.warnings),
        )

    @staticmethod
    def _run(patient) -> CoreResult:
        evaluation = evaluate_factors(patient)
        outcome = apply_interactions(patient, evaluation.factors, evaluation.raw_prognosis)
        report = generate_report(patient, evaluation, outcome)
        treatments = suggest_treatments(patient, evaluation.factors, evaluation.diagnostics)

        logger.info(
            f"Evaluation complete: age={patient.age}, prognosis={report.numeric_prognosis:.2f}%, "
            f"category={report.category.value}, treatments={len(treatments)}"
        )

        return CoreResult(
            report=report,
            treatments=tuple(treatments),
            factors=evaluation.factors,
            diagnostics=evaluation.diagnostics,
            interactions=summarise(outcome),
        )


def evaluate_patient(
    raw: Union[Mapping[str, Any], PatientIntake],
    cache: Optional[EvaluationCache] = None,
) -> EvaluationResult:
    """Functional shortcut for ``FertilityEvaluationService(cache).evaluate(raw)``."""
    return FertilityEvaluationService(cache=cache).evaluate(raw)
