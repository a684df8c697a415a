"""
Interaction Rules

Multi-field clinical combinations whose joint effect is not captured by
multiplying the individual factors.

Design principles:
  - Each predicate is pure: (PatientInput, FactorSet) → bool. A missing
    value never satisfies a threshold comparison.
  - The table is ordered by clinical priority; every rule that fires emits
    one finding, in table order.
  - CAP rules override the aggregated number (the result becomes at most
    the cap). When several caps match, the first in table order wins.
    Earlier caps are never higher than later ones, so adding a condition
    can only lower the result.
  - MULTIPLY rules adjust the aggregate; FLAG rules only add a finding.

References:
  - ESHRE Guideline: Endometriosis (2022)
  - International evidence-based PCOS guideline (2023)
  - ESHRE Guideline: Ovarian stimulation for IVF/ICSI (2019)
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from fertility.core.base import (
    AdenomyosisType,
    FactorSet,
    HsgResult,
    MyomaType,
    PatientInput,
    PolypType,
)
from fertility.core.content.keys import FindingKey

Predicate = Callable[[PatientInput, FactorSet], bool]


class RuleEffect(str, Enum):
    CAP      = "cap"        # override: result = min(result, value)
    MULTIPLY = "multiply"   # adjustment: result *= value
    FLAG     = "flag"       # finding only


@dataclass(frozen=True)
class InteractionRule:
    """One row of the interaction table."""
    key: FindingKey
    predicate: Predicate
    effect: RuleEffect = RuleEffect.FLAG
    value: float = 1.0
    involves_age: bool = False   # subsumes the stand-alone age finding

    def matches(self, patient: PatientInput, factors: FactorSet) -> bool:
        return self.predicate(patient, factors)


# ── None-safe comparisons ─────────────────────────────────────────────────────

def lt(value: Optional[float], threshold: float) -> bool:
    return value is not None and value < threshold


def le(value: Optional[float], threshold: float) -> bool:
    return value is not None and value <= threshold


def gt(value: Optional[float], threshold: float) -> bool:
    return value is not None and value > threshold


def ge(value: Optional[float], threshold: float) -> bool:
    return value is not None and value >= threshold


def between(value: Optional[float], low: float, high: float) -> bool:
    return value is not None and low <= value <= high


# ── Predicates ────────────────────────────────────────────────────────────────

def _age40_ovarian_failure(p: PatientInput, f: FactorSet) -> bool:
    return p.age >= 40 and lt(p.amh, 0.3) and (gt(p.cycle_duration, 45) or f.cycle < 1.0)


def _severe_endo_male(p: PatientInput, f: FactorSet) -> bool:
    return p.endometriosis_grade >= 3 and f.male < 1.0


def _critical_amh_age(p: PatientInput, f: FactorSet) -> bool:
    return p.age >= 40 and lt(p.amh, 0.5)


def _tubal_ligation_advanced_age(p: PatientInput, f: FactorSet) -> bool:
    return p.has_otb and p.age > 37


def _severe_endo_age_low_amh(p: PatientInput, f: FactorSet) -> bool:
    return p.endometriosis_grade >= 3 and p.age > 39 and lt(p.amh, 1.0)


def _pcos_severe_obesity(p: PatientInput, f: FactorSet) -> bool:
    return p.has_pcos and ge(p.bmi, 35.0)


def _pcos_insulin_resistance(p: PatientInput, f: FactorSet) -> bool:
    return p.has_pcos and ge(p.homa_ir, 3.5)


def _age_low_amh(p: PatientInput, f: FactorSet) -> bool:
    return p.age >= 38 and lt(p.amh, 0.8)


def _diffuse_adenomyosis_age(p: PatientInput, f: FactorSet) -> bool:
    return p.adenomyosis_type == AdenomyosisType.DIFFUSE and p.age >= 38


def _long_infertility_multiple_surgeries(p: PatientInput, f: FactorSet) -> bool:
    return ge(p.infertility_duration, 5) and ge(p.pelvic_surgery_count, 2)


def _hypothyroidism_tpo(p: PatientInput, f: FactorSet) -> bool:
    return gt(p.tsh, 4.0) and p.tpo_ab_positive


def _pcos_long_cycles_high_prolactin(p: PatientInput, f: FactorSet) -> bool:
    return p.has_pcos and gt(p.cycle_duration, 60) and gt(p.prolactin, 50)


def _low_amh_teratozoospermia(p: PatientInput, f: FactorSet) -> bool:
    return lt(p.amh, 1.0) and lt(p.sperm_normal_morphology, 2)


def _submucosal_myoma_endometriosis(p: PatientInput, f: FactorSet) -> bool:
    return p.myoma_type == MyomaType.SUBMUCOSAL and p.endometriosis_grade >= 1


def _unilateral_hsg_male(p: PatientInput, f: FactorSet) -> bool:
    return p.hsg_result == HsgResult.UNILATERAL and f.male < 1.0


def _small_polyp_young_favorable(p: PatientInput, f: FactorSet) -> bool:
    return (
        p.age < 34
        and p.polyp_type == PolypType.SMALL
        and between(p.cycle_duration, 24, 35)
        and ge(p.sperm_normal_morphology, 4)
    )


def _young_pcos_optimal_markers(p: PatientInput, f: FactorSet) -> bool:
    return (
        p.age < 30
        and p.has_pcos
        and gt(p.amh, 5.0)
        and lt(p.homa_ir, 2.0)
        and between(p.tsh, 0.5, 2.5)
    )


def _mild_endo_young_normal_amh(p: PatientInput, f: FactorSet) -> bool:
    return 1 <= p.endometriosis_grade <= 2 and ge(p.amh, 1.5) and p.age < 35


def _unilateral_hsg_young_normal_semen(p: PatientInput, f: FactorSet) -> bool:
    return (
        p.hsg_result == HsgResult.UNILATERAL
        and p.age < 35
        and ge(p.sperm_concentration, 16)
        and ge(p.sperm_progressive_motility, 30)
    )


def _young_pcos_high_responder(p: PatientInput, f: FactorSet) -> bool:
    return (
        p.age < 32
        and p.has_pcos
        and gt(p.amh, 4.5)
        and ge(p.sperm_normal_morphology, 4)
        and ge(p.sperm_concentration, 16)
    )


# ── Table (priority order) ────────────────────────────────────────────────────
INTERACTION_RULES: List[InteractionRule] = [
    # Overrides
    InteractionRule(FindingKey.INT_AGE40_OVARIAN_FAILURE, _age40_ovarian_failure,
                    RuleEffect.CAP, 1.0, involves_age=True),
    InteractionRule(FindingKey.INT_SEVERE_ENDO_MALE_FACTOR, _severe_endo_male,
                    RuleEffect.CAP, 2.0),
    InteractionRule(FindingKey.INT_CRITICAL_AMH_AGE, _critical_amh_age,
                    RuleEffect.FLAG, involves_age=True),
    InteractionRule(FindingKey.INT_TUBAL_LIGATION_ADVANCED_AGE, _tubal_ligation_advanced_age,
                    RuleEffect.CAP, 0.0, involves_age=True),
    InteractionRule(FindingKey.INT_SEVERE_ENDO_AGE_LOW_AMH, _severe_endo_age_low_amh,
                    RuleEffect.CAP, 3.0, involves_age=True),

    # Negative adjustments
    InteractionRule(FindingKey.INT_PCOS_SEVERE_OBESITY, _pcos_severe_obesity,
                    RuleEffect.MULTIPLY, 0.60),
    InteractionRule(FindingKey.INT_PCOS_INSULIN_RESISTANCE, _pcos_insulin_resistance,
                    RuleEffect.MULTIPLY, 0.70),
    InteractionRule(FindingKey.INT_AGE_LOW_AMH, _age_low_amh,
                    RuleEffect.MULTIPLY, 0.40, involves_age=True),
    InteractionRule(FindingKey.INT_DIFFUSE_ADENOMYOSIS_AGE, _diffuse_adenomyosis_age,
                    RuleEffect.MULTIPLY, 0.50, involves_age=True),
    InteractionRule(FindingKey.INT_LONG_INFERTILITY_MULTIPLE_SURGERIES, _long_infertility_multiple_surgeries,
                    RuleEffect.MULTIPLY, 0.60),
    InteractionRule(FindingKey.INT_HYPOTHYROIDISM_TPO_AB, _hypothyroidism_tpo,
                    RuleEffect.MULTIPLY, 0.70),
    InteractionRule(FindingKey.INT_PCOS_LONG_CYCLES_HIGH_PROLACTIN, _pcos_long_cycles_high_prolactin,
                    RuleEffect.MULTIPLY, 0.55),
    InteractionRule(FindingKey.INT_LOW_AMH_TERATOZOOSPERMIA, _low_amh_teratozoospermia,
                    RuleEffect.MULTIPLY, 0.50),
    InteractionRule(FindingKey.INT_SUBMUCOSAL_MYOMA_ENDOMETRIOSIS, _submucosal_myoma_endometriosis,
                    RuleEffect.MULTIPLY, 0.65),
    InteractionRule(FindingKey.INT_UNILATERAL_HSG_MALE_FACTOR, _unilateral_hsg_male,
                    RuleEffect.MULTIPLY, 0.50),

    # Favorable combinations
    InteractionRule(FindingKey.INT_SMALL_POLYP_YOUNG_FAVORABLE, _small_polyp_young_favorable,
                    RuleEffect.FLAG),
    InteractionRule(FindingKey.INT_YOUNG_PCOS_OPTIMAL_MARKERS, _young_pcos_optimal_markers,
                    RuleEffect.MULTIPLY, 1.20),
    InteractionRule(FindingKey.INT_MILD_ENDO_YOUNG_NORMAL_AMH, _mild_endo_young_normal_amh,
                    RuleEffect.MULTIPLY, 1.10),
    InteractionRule(FindingKey.INT_UNILATERAL_HSG_YOUNG_NORMAL_SEMEN, _unilateral_hsg_young_normal_semen,
                    RuleEffect.MULTIPLY, 1.05),
    InteractionRule(FindingKey.INT_YOUNG_PCOS_HIGH_RESPONDER, _young_pcos_high_responder,
                    RuleEffect.MULTIPLY, 1.15),
]
