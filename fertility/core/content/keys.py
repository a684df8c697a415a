"""
Finding Keys

Every diagnostic, interaction, decision and treatment the pipeline can emit
is identified by one member of ``FindingKey``. The clinical content library
must hold an entry for each member (checked when the library is imported).
"""
from __future__ import annotations

from enum import Enum


class FindingKey(str, Enum):
    """Stable identifiers used to look up static clinical content."""

    # ── Age ───────────────────────────────────────────────────────────────
    AGE_TOO_YOUNG       = "AGE_TOO_YOUNG"
    AGE_ADOLESCENT      = "AGE_ADOLESCENT"
    AGE_PEAK            = "AGE_PEAK"
    AGE_OPTIMAL         = "AGE_OPTIMAL"
    AGE_GOOD            = "AGE_GOOD"
    AGE_DECLINING       = "AGE_DECLINING"
    AGE_LOW             = "AGE_LOW"
    AGE_VERY_LOW        = "AGE_VERY_LOW"
    AGE_EXTREME         = "AGE_EXTREME"

    # ── Body mass / cycle / PCOS ──────────────────────────────────────────
    BMI_UNDERWEIGHT     = "BMI_UNDERWEIGHT"
    BMI_OVERWEIGHT      = "BMI_OVERWEIGHT"
    CYCLE_SHORT         = "CYCLE_SHORT"
    CYCLE_VERY_SHORT    = "CYCLE_VERY_SHORT"
    CYCLE_LONG          = "CYCLE_LONG"
    CYCLE_OLIGOMENORRHEA = "CYCLE_OLIGOMENORRHEA"
    PCOS_MILD           = "PCOS_MILD"
    PCOS_MODERATE       = "PCOS_MODERATE"
    PCOS_SEVERE         = "PCOS_SEVERE"

    # ── Structural ────────────────────────────────────────────────────────
    ENDOMETRIOSIS_MILD      = "ENDOMETRIOSIS_MILD"
    ENDOMETRIOSIS_SEVERE    = "ENDOMETRIOSIS_SEVERE"
    MYOMA_SUBMUCOSAL        = "MYOMA_SUBMUCOSAL"
    MYOMA_INTRAMURAL_LARGE  = "MYOMA_INTRAMURAL_LARGE"
    MYOMA_SUBSEROSAL        = "MYOMA_SUBSEROSAL"
    ADENOMYOSIS_FOCAL       = "ADENOMYOSIS_FOCAL"
    ADENOMYOSIS_DIFFUSE     = "ADENOMYOSIS_DIFFUSE"
    POLYP_SMALL             = "POLYP_SMALL"
    POLYP_LARGE             = "POLYP_LARGE"
    POLYP_OSTIUM            = "POLYP_OSTIUM"
    HSG_UNILATERAL          = "HSG_UNILATERAL"
    HSG_BILATERAL           = "HSG_BILATERAL"
    HSG_MALFORMATION        = "HSG_MALFORMATION"
    TUBAL_LIGATION          = "TUBAL_LIGATION"

    # ── Endocrine / metabolic ─────────────────────────────────────────────
    AMH_HIGH            = "AMH_HIGH"
    AMH_SLIGHTLY_LOW    = "AMH_SLIGHTLY_LOW"
    AMH_LOW             = "AMH_LOW"
    AMH_VERY_LOW        = "AMH_VERY_LOW"
    AMH_IMPLAUSIBLE     = "AMH_IMPLAUSIBLE"
    PROLACTIN_HIGH      = "PROLACTIN_HIGH"
    PROLACTIN_SEVERE    = "PROLACTIN_SEVERE"
    PROLACTIN_IMPLAUSIBLE = "PROLACTIN_IMPLAUSIBLE"
    TSH_SUBOPTIMAL      = "TSH_SUBOPTIMAL"
    TSH_HYPOTHYROID     = "TSH_HYPOTHYROID"
    TSH_IMPLAUSIBLE     = "TSH_IMPLAUSIBLE"
    TPO_AB_POSITIVE     = "TPO_AB_POSITIVE"
    HOMA_MILD           = "HOMA_MILD"
    HOMA_SIGNIFICANT    = "HOMA_SIGNIFICANT"
    HOMA_SEVERE         = "HOMA_SEVERE"
    HOMA_IMPLAUSIBLE    = "HOMA_IMPLAUSIBLE"

    # ── History ───────────────────────────────────────────────────────────
    INFERTILITY_MODERATE    = "INFERTILITY_MODERATE"
    INFERTILITY_PROLONGED   = "INFERTILITY_PROLONGED"
    PELVIC_SURGERY_SINGLE   = "PELVIC_SURGERY_SINGLE"
    PELVIC_SURGERY_MULTIPLE = "PELVIC_SURGERY_MULTIPLE"

    # ── Male factor ───────────────────────────────────────────────────────
    MALE_AZOOSPERMIA        = "MALE_AZOOSPERMIA"
    MALE_OLIGOZOOSPERMIA    = "MALE_OLIGOZOOSPERMIA"
    MALE_ASTHENOZOOSPERMIA  = "MALE_ASTHENOZOOSPERMIA"
    MALE_TERATOZOOSPERMIA   = "MALE_TERATOZOOSPERMIA"
    MALE_IMPLAUSIBLE        = "MALE_IMPLAUSIBLE"

    # ── Interactions (table order) ────────────────────────────────────────
    INT_AGE40_OVARIAN_FAILURE               = "INT_AGE40_OVARIAN_FAILURE"
    INT_SEVERE_ENDO_MALE_FACTOR             = "INT_SEVERE_ENDO_MALE_FACTOR"
    INT_CRITICAL_AMH_AGE                    = "INT_CRITICAL_AMH_AGE"
    INT_TUBAL_LIGATION_ADVANCED_AGE         = "INT_TUBAL_LIGATION_ADVANCED_AGE"
    INT_SEVERE_ENDO_AGE_LOW_AMH             = "INT_SEVERE_ENDO_AGE_LOW_AMH"
    INT_PCOS_SEVERE_OBESITY                 = "INT_PCOS_SEVERE_OBESITY"
    INT_PCOS_INSULIN_RESISTANCE             = "INT_PCOS_INSULIN_RESISTANCE"
    INT_AGE_LOW_AMH                         = "INT_AGE_LOW_AMH"
    INT_DIFFUSE_ADENOMYOSIS_AGE             = "INT_DIFFUSE_ADENOMYOSIS_AGE"
    INT_LONG_INFERTILITY_MULTIPLE_SURGERIES = "INT_LONG_INFERTILITY_MULTIPLE_SURGERIES"
    INT_HYPOTHYROIDISM_TPO_AB               = "INT_HYPOTHYROIDISM_TPO_AB"
    INT_PCOS_LONG_CYCLES_HIGH_PROLACTIN     = "INT_PCOS_LONG_CYCLES_HIGH_PROLACTIN"
    INT_LOW_AMH_TERATOZOOSPERMIA            = "INT_LOW_AMH_TERATOZOOSPERMIA"
    INT_SUBMUCOSAL_MYOMA_ENDOMETRIOSIS      = "INT_SUBMUCOSAL_MYOMA_ENDOMETRIOSIS"
    INT_UNILATERAL_HSG_MALE_FACTOR          = "INT_UNILATERAL_HSG_MALE_FACTOR"
    INT_SMALL_POLYP_YOUNG_FAVORABLE         = "INT_SMALL_POLYP_YOUNG_FAVORABLE"
    INT_YOUNG_PCOS_OPTIMAL_MARKERS          = "INT_YOUNG_PCOS_OPTIMAL_MARKERS"
    INT_MILD_ENDO_YOUNG_NORMAL_AMH          = "INT_MILD_ENDO_YOUNG_NORMAL_AMH"
    INT_UNILATERAL_HSG_YOUNG_NORMAL_SEMEN   = "INT_UNILATERAL_HSG_YOUNG_NORMAL_SEMEN"
    INT_YOUNG_PCOS_HIGH_RESPONDER           = "INT_YOUNG_PCOS_HIGH_RESPONDER"

    # ── Strategic decisions ───────────────────────────────────────────────
    DECISION_IVF_AGE_AMH_CRITICAL   = "DECISION_IVF_AGE_AMH_CRITICAL"
    DECISION_IVF_SEVERE_ENDO_MALE   = "DECISION_IVF_SEVERE_ENDO_MALE"
    DECISION_IVF_PCOS_METABOLIC     = "DECISION_IVF_PCOS_METABOLIC"
    DECISION_IVF_TUBAL_FACTOR       = "DECISION_IVF_TUBAL_FACTOR"
    DECISION_ESCALATE_IVF           = "DECISION_ESCALATE_IVF"

    # ── Treatments ────────────────────────────────────────────────────────
    TREATMENT_RECANALIZATION            = "TREATMENT_RECANALIZATION"
    TREATMENT_RECANALIZATION_WORKUP     = "TREATMENT_RECANALIZATION_WORKUP"
    TREATMENT_IVF_RECANALIZATION_POOR   = "TREATMENT_IVF_RECANALIZATION_POOR"
    TREATMENT_IVF_TUBAL                 = "TREATMENT_IVF_TUBAL"
    TREATMENT_IVF_OVARIAN_RESERVE       = "TREATMENT_IVF_OVARIAN_RESERVE"
    TREATMENT_EGG_DONATION              = "TREATMENT_EGG_DONATION"
    TREATMENT_ICSI_MALE_FACTOR          = "TREATMENT_ICSI_MALE_FACTOR"
    TREATMENT_IUI                       = "TREATMENT_IUI"
    TREATMENT_TIMED_INTERCOURSE         = "TREATMENT_TIMED_INTERCOURSE"
    TREATMENT_SPECIALIST_CONSULTATION   = "TREATMENT_SPECIALIST_CONSULTATION"

    @property
    def is_interaction(self) -> bool:
        return self.value.startswith("INT_")

    @property
    def is_decision(self) -> bool:
        return self.value.startswith("DECISION_")

    @property
    def is_treatment(self) -> bool:
        return self.value.startswith("TREATMENT_")
