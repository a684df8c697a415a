"""
Prognosis Report Generator

Turns the final number, the diagnostics and the fired interaction/decision
keys into an immutable ``Report``:
  - ordered clinical findings with their static content,
  - a prognosis category with emoji and phrase,
  - a comparison against the population average for the patient's age.
"""
from __future__ import annotations

from typing import Dict, List, Tuple

from fertility.core.base import (
    ClinicalFinding,
    PatientInput,
    PrognosisCategory,
    Report,
)
from fertility.core.clinical.engine import InteractionOutcome
from fertility.core.content.benchmarks import compare_to_benchmark
from fertility.core.content.keys import FindingKey
from fertility.core.content.library import get_clinical_content
from fertility.core.factors.aggregation import FactorEvaluation
from fertility.utils import get_logger

logger = get_logger(__name__)

# ── Classification thresholds (% per cycle) ───────────────────────────────────
GOOD_THRESHOLD     = 15.0
MODERATE_THRESHOLD = 5.0
CYCLES_PER_YEAR    = 12

CATEGORY_EMOJI: Dict[PrognosisCategory, str] = {
    PrognosisCategory.GOOD:     "🟢",
    PrognosisCategory.MODERATE: "🟡",
    PrognosisCategory.LOW:      "🔴",
}

CATEGORY_LABELS: Dict[PrognosisCategory, str] = {
    PrognosisCategory.GOOD:     "Your prognosis is GOOD",
    PrognosisCategory.MODERATE: "Your prognosis is MODERATE",
    PrognosisCategory.LOW:      "Your prognosis is LOW",
}

CATEGORY_ADVICE: Dict[PrognosisCategory, str] = {
    PrognosisCategory.GOOD:     "",
    PrognosisCategory.MODERATE: " Some factors can be optimized.",
    PrognosisCategory.LOW:      " Specialist evaluation is recommended.",
}

BENCHMARK_NOT_APPLICABLE = (
    "A population comparison does not apply while a tubal ligation is present."
)

AGE_FACTOR = "base_age_probability"


def classify_prognosis(value: float) -> PrognosisCategory:
    if value >= GOOD_THRESHOLD:
        return PrognosisCategory.GOOD
    if value >= MODERATE_THRESHOLD:
        return PrognosisCategory.MODERATE
    return PrognosisCategory.LOW


def cumulative_probability(per_cycle: float, cycles: int = CYCLES_PER_YEAR) -> float:
    """Probability (%) of at least one conception over ``cycles`` cycles."""
    p = per_cycle / 100.0
    return (1.0 - (1.0 - p) ** cycles) * 100.0


def _prognosis_phrase(category: PrognosisCategory, value: float) -> str:
    yearly = cumulative_probability(value)
    return (
        f"{CATEGORY_LABELS[category]}: {value:.1f}% per cycle "
        f"({yearly:.1f}% over 12 months).{CATEGORY_ADVICE[category]}"
    )


def _finding_keys(evaluation: FactorEvaluation, outcome: InteractionOutcome) -> List[FindingKey]:
    """Age first (unless subsumed), then diagnostics, interactions and decisions."""
    diagnostics = evaluation.diagnostics
    ordered: List[FindingKey] = []

    age_key = diagnostics.finding_keys.get(AGE_FACTOR)
    if age_key is not None and not outcome.subsumes_age:
        ordered.append(age_key)

    ordered.extend(
        key for name, key in diagnostics.finding_keys.items() if name != AGE_FACTOR
    )
    ordered.extend(outcome.fired_keys)
    ordered.extend(outcome.decisions)

    seen = set()
    unique: List[FindingKey] = []
    for key in ordered:
        if key not in seen:
            seen.add(key)
            unique.append(key)
    return unique


def build_finding(key: FindingKey) -> ClinicalFinding:
    content = get_clinical_content(key)
    return ClinicalFinding(
        key=key,
        title=content.title,
        definition=content.definition,
        justification=content.justification,
        explanation=content.explanation,
        recommendations=content.recommendations,
        sources=content.sources,
    )


def _categorize(
    evaluation: FactorEvaluation, outcome: InteractionOutcome
) -> Tuple[PrognosisCategory, str]:
    """Category and phrase, applying the categorical short-circuits first."""
    value = outcome.prognosis

    if evaluation.factors.otb == 0.0:
        phrase = get_clinical_content(FindingKey.TUBAL_LIGATION).explanation
        return PrognosisCategory.LOW, phrase

    if outcome.pinned_low:
        phrase = get_clinical_content(outcome.override.key).explanation
        return PrognosisCategory.LOW, phrase

    category = classify_prognosis(value)
    return category, _prognosis_phrase(category, value)


def generate_report(
    patient: PatientInput,
    evaluation: FactorEvaluation,
    outcome: InteractionOutcome,
) -> Report:
    """
    Assemble the final report for one evaluation.

    Args:
        patient: Normalized input
        evaluation: FactorSet and Diagnostics
        outcome: Result of the interaction layer

    Returns:
        Immutable Report
    """
    category, phrase = _categorize(evaluation, outcome)

    if evaluation.factors.otb == 0.0:
        benchmark = BENCHMARK_NOT_APPLICABLE
    else:
        benchmark = compare_to_benchmark(outcome.prognosis, patient.age)

    insights = tuple(build_finding(key) for key in _finding_keys(evaluation, outcome))

    logger.info(
        f"Report generated: {outcome.prognosis:.2f}% ({category.value}), "
        f"{len(insights)} finding(s)"
    )

    return Report(
        numeric_prognosis=outcome.prognosis,
        category=category,
        emoji=CATEGORY_EMOJI[category],
        prognosis_phrase=phrase,
        benchmark_phrase=benchmark,
        clinical_insights=insights,
        override_key=outcome.override.key if outcome.override else None,
    )
