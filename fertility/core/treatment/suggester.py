"""
Treatment Suggestion Engine

Independent rule cascade producing treatment options, ranked by clinical
complexity:

    1. Tubal-reversal candidacy (only with a tubal ligation)
    2. High-complexity indications (IVF / ICSI / egg donation)
    3. Low-complexity indications (IUI / timed intercourse), only when
       nothing in 1 or 2 fired
    4. Specialist consultation when nothing else applies

IVF justified by bilateral tubal obstruction is dropped when tubal reversal
is already suggested, so the output never contradicts itself.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from fertility.core.base import (
    Diagnostics,
    FactorSet,
    HsgResult,
    PatientInput,
    TreatmentCategory,
    TreatmentSuggestion,
)
from fertility.core.clinical.interactions import ge, lt
from fertility.core.content.keys import FindingKey
from fertility.core.content.library import get_clinical_content

logger = logging.getLogger(__name__)

# ── Tubal reversal candidacy ──────────────────────────────────────────────────
REVERSAL_AGE_CANDIDATE = 37     # candidate below this age
REVERSAL_AGE_POOR      = 40     # poor candidate at or above this age
REVERSAL_MIN_TUBE_CM   = 4.0
REVERSAL_ENDO_GRADE    = 2

# ── High complexity ───────────────────────────────────────────────────────────
IVF_AGE                = 38
IVF_AMH                = 0.8
EGG_DONATION_AGE       = 43
EGG_DONATION_AMH       = 0.5
TMSC_LOW               = 5.0    # million motile sperm per ejaculate
ICSI_CONCENTRATION     = 5.0
ICSI_MOTILITY          = 20.0
ICSI_MORPHOLOGY        = 2.0

# ── Low complexity ────────────────────────────────────────────────────────────
IUI_MAX_AGE            = 35
GOOD_PROFILE_MAX_AGE   = 35
GOOD_PROFILE_MIN_AMH_FACTOR   = 0.85
GOOD_PROFILE_MIN_CYCLE_FACTOR = 0.75
GOOD_PROFILE_MIN_STRUCTURAL   = 0.85
SHORT_INFERTILITY_YEARS       = 2


class ReversalCandidacy(str, Enum):
    CANDIDATE    = "candidate"
    POOR         = "poor"
    INCONCLUSIVE = "inconclusive"


_CATEGORY_BY_KEY = {
    FindingKey.TREATMENT_RECANALIZATION:          TreatmentCategory.SURGICAL,
    FindingKey.TREATMENT_RECANALIZATION_WORKUP:   TreatmentCategory.FURTHER_STUDY,
    FindingKey.TREATMENT_IVF_RECANALIZATION_POOR: TreatmentCategory.HIGH_COMPLEXITY,
    FindingKey.TREATMENT_IVF_TUBAL:               TreatmentCategory.HIGH_COMPLEXITY,
    FindingKey.TREATMENT_IVF_OVARIAN_RESERVE:     TreatmentCategory.HIGH_COMPLEXITY,
    FindingKey.TREATMENT_EGG_DONATION:            TreatmentCategory.HIGH_COMPLEXITY,
    FindingKey.TREATMENT_ICSI_MALE_FACTOR:        TreatmentCategory.HIGH_COMPLEXITY,
    FindingKey.TREATMENT_IUI:                     TreatmentCategory.LOW_COMPLEXITY,
    FindingKey.TREATMENT_TIMED_INTERCOURSE:       TreatmentCategory.LOW_COMPLEXITY,
    FindingKey.TREATMENT_SPECIALIST_CONSULTATION: TreatmentCategory.CONSULTATION,
}

# High-complexity items justified by bilateral tubal obstruction
_BILATERAL_OBSTRUCTION_KEYS = {FindingKey.TREATMENT_IVF_TUBAL}


def build_suggestion(key: FindingKey, note: Optional[str] = None) -> TreatmentSuggestion:
    content = get_clinical_content(key)
    details = " ".join([content.explanation, *content.recommendations])
    if note:
        details = f"{details} {note}"
    return TreatmentSuggestion(
        key=key,
        category=_CATEGORY_BY_KEY[key],
        title=content.title,
        details=details,
        source=content.sources[0] if content.sources else "",
    )


# ── Step 1: tubal reversal ────────────────────────────────────────────────────

def _has_other_factors(patient: PatientInput, factors: FactorSet) -> bool:
    return bool(patient.has_other_infertility_factors) or (
        patient.endometriosis_grade >= REVERSAL_ENDO_GRADE or factors.male < 1.0
    )


def reversal_candidacy(patient: PatientInput, factors: FactorSet) -> ReversalCandidacy:
    """Classify a patient with a tubal ligation for surgical reversal."""
    length = patient.remaining_tube_length

    if (
        patient.age < REVERSAL_AGE_CANDIDATE
        and patient.otb_method.is_favorable
        and (length is None or length > REVERSAL_MIN_TUBE_CM)
        and not _has_other_factors(patient, factors)
    ):
        return ReversalCandidacy.CANDIDATE

    if (
        patient.age >= REVERSAL_AGE_POOR
        or patient.otb_method.is_unfavorable
        or lt(length, REVERSAL_MIN_TUBE_CM)
        or patient.endometriosis_grade >= REVERSAL_ENDO_GRADE
        or factors.male < 1.0
    ):
        return ReversalCandidacy.POOR

    return ReversalCandidacy.INCONCLUSIVE


_REVERSAL_KEYS = {
    ReversalCandidacy.CANDIDATE:    FindingKey.TREATMENT_RECANALIZATION,
    ReversalCandidacy.POOR:         FindingKey.TREATMENT_IVF_RECANALIZATION_POOR,
    ReversalCandidacy.INCONCLUSIVE: FindingKey.TREATMENT_RECANALIZATION_WORKUP,
}


# ── Step 2: high complexity ───────────────────────────────────────────────────

def total_motile_sperm_count(patient: PatientInput) -> Optional[float]:
    """Millions of progressively motile sperm per ejaculate, when computable."""
    if (
        patient.semen_volume is None
        or patient.sperm_concentration is None
        or patient.sperm_progressive_motility is None
    ):
        return None
    return (
        patient.semen_volume
        * patient.sperm_concentration
        * patient.sperm_progressive_motility
        / 100.0
    )


def needs_icsi(patient: PatientInput) -> bool:
    tmsc = total_motile_sperm_count(patient)
    if tmsc is not None and tmsc < TMSC_LOW:
        return True
    return (
        lt(patient.sperm_concentration, ICSI_CONCENTRATION)
        or lt(patient.sperm_progressive_motility, ICSI_MOTILITY)
        or lt(patient.sperm_normal_morphology, ICSI_MORPHOLOGY)
    )


def _high_complexity(patient: PatientInput) -> List[TreatmentSuggestion]:
    items: List[TreatmentSuggestion] = []

    if patient.hsg_result == HsgResult.BILATERAL:
        items.append(build_suggestion(FindingKey.TREATMENT_IVF_TUBAL))

    if patient.age >= IVF_AGE or lt(patient.amh, IVF_AMH):
        items.append(build_suggestion(FindingKey.TREATMENT_IVF_OVARIAN_RESERVE))
        if patient.age >= EGG_DONATION_AGE and lt(patient.amh, EGG_DONATION_AMH):
            items.append(build_suggestion(FindingKey.TREATMENT_EGG_DONATION))

    if needs_icsi(patient):
        tmsc = total_motile_sperm_count(patient)
        note = f"Total motile sperm count: {tmsc:.1f} million." if tmsc is not None else None
        items.append(build_suggestion(FindingKey.TREATMENT_ICSI_MALE_FACTOR, note))

    return items


# ── Step 3: low complexity ────────────────────────────────────────────────────

def has_good_profile(patient: PatientInput, factors: FactorSet) -> bool:
    structural = (factors.endometriosis, factors.myoma, factors.adenomyosis, factors.polyp)
    return (
        patient.age < GOOD_PROFILE_MAX_AGE
        and factors.male == 1.0
        and factors.amh >= GOOD_PROFILE_MIN_AMH_FACTOR
        and factors.cycle >= GOOD_PROFILE_MIN_CYCLE_FACTOR
        and factors.hsg == 1.0
        and factors.otb == 1.0
        and all(w >= GOOD_PROFILE_MIN_STRUCTURAL for w in structural)
    )


def _low_complexity(patient: PatientInput, factors: FactorSet) -> List[TreatmentSuggestion]:
    items: List[TreatmentSuggestion] = []

    if patient.hsg_result == HsgResult.UNILATERAL and patient.age < IUI_MAX_AGE:
        items.append(build_suggestion(FindingKey.TREATMENT_IUI))

    short_infertility = not ge(patient.infertility_duration, SHORT_INFERTILITY_YEARS)
    if has_good_profile(patient, factors) and short_infertility:
        items.append(build_suggestion(FindingKey.TREATMENT_TIMED_INTERCOURSE))

    return items


def suggest_treatments(
    patient: PatientInput,
    factors: FactorSet,
    diagnostics: Diagnostics,
) -> List[TreatmentSuggestion]:
    """
    Run the treatment cascade.

    Args:
        patient: Normalized input
        factors: FactorSet from the aggregation step
        diagnostics: Diagnostics from the aggregation step

    Returns:
        Suggestions ordered from highest to lowest clinical complexity
    """
    suggestions: List[TreatmentSuggestion] = []
    reversal_suggested = False

    if patient.has_otb:
        candidacy = reversal_candidacy(patient, factors)
        note = None
        if diagnostics.recanalization_score is not None:
            note = f"Reversal prognosis score: {diagnostics.recanalization_score:.2f}."
        suggestions.append(build_suggestion(_REVERSAL_KEYS[candidacy], note))
        reversal_suggested = candidacy == ReversalCandidacy.CANDIDATE
        logger.debug(f"Tubal reversal candidacy: {candidacy.value}")

    high = _high_complexity(patient)
    if reversal_suggested:
        high = [s for s in high if s.key not in _BILATERAL_OBSTRUCTION_KEYS]
    suggestions.extend(s for s in high if s.key not in {x.key for x in suggestions})

    if not suggestions:
        suggestions.extend(_low_complexity(patient, factors))

    if not suggestions:
        suggestions.append(build_suggestion(FindingKey.TREATMENT_SPECIALIST_CONSULTATION))

    suggestions.sort(key=lambda s: -s.category.complexity_rank)
    return suggestions
