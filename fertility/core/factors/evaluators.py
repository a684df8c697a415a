"""
Factor Evaluators — Demographic, Endocrine and Male Factors

Each evaluator is a pure function ``(relevant fields) -> FactorResult``.

Design principles:
  - A factor of 1.0 means "no effect"; lower values reduce the per-cycle
    probability multiplicatively. Age is the exception: it returns the
    absolute baseline in percentage points.
  - Every threshold is a named module-level constant.
  - Values outside a table's validated range (negative, or implausibly
    high) get their own low-confidence factor and comment instead of being
    folded into the nearest in-range band.
  - Only load-bearing fields (BMI, AMH, semen analysis) report "missing";
    the rest default to neutral with a "not evaluated" comment.

References:
  - ASRM Practice Committee (2020): Female age-related fertility decline
  - WHO Laboratory Manual for the Examination of Human Semen, 6th ed. (2021)
  - Rotterdam ESHRE/ASRM consensus on PCOS (2004)
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from fertility.core.base import FactorResult, PcosSeverity
from fertility.core.content.keys import FindingKey

# ── Missing-data labels (load-bearing fields) ─────────────────────────────────
MISSING_BMI    = "Body Mass Index (BMI)"
MISSING_AMH    = "Anti-Müllerian Hormone (AMH)"
MISSING_SEMEN  = "Complete semen analysis"

# ── Age baseline (% per cycle) ────────────────────────────────────────────────
AGE_UNDERAGE_LIMIT   = 15
AGE_ADULT_LIMIT      = 18
AGE_UNDERAGE_BASE    = 0.1
AGE_ADOLESCENT_BASE  = 15.0
# (upper bound inclusive, baseline, finding key, comment)
AGE_BANDS: List[Tuple[int, float, FindingKey, str]] = [
    (24, 25.0, FindingKey.AGE_PEAK,      "Peak fertility"),
    (29, 22.5, FindingKey.AGE_OPTIMAL,   "Excellent fertility"),
    (34, 17.5, FindingKey.AGE_GOOD,      "Good fertility, gradual decline starting"),
    (39, 10.0, FindingKey.AGE_DECLINING, "Marked decline in fertility"),
    (44, 5.0,  FindingKey.AGE_LOW,       "Low fertility"),
    (49, 1.5,  FindingKey.AGE_VERY_LOW,  "Very low fertility"),
]
AGE_EXTREME_BASE = 0.5

# ── BMI ───────────────────────────────────────────────────────────────────────
BMI_UNDERWEIGHT   = 18.5
BMI_NORMAL_MAX    = 24.9
BMI_UNDERWEIGHT_FACTOR = 0.8
BMI_OVERWEIGHT_FACTOR  = 0.85

# ── Cycle length (days) ───────────────────────────────────────────────────────
CYCLE_NORMAL_MIN  = 21
CYCLE_NORMAL_MAX  = 35
CYCLE_LONG_MAX    = 45
CYCLE_SHORT_MIN   = 15

# ── PCOS ──────────────────────────────────────────────────────────────────────
PCOS_BMI_MODERATE    = 25.0
PCOS_BMI_SEVERE      = 30.0
PCOS_CYCLE_MODERATE  = 35
PCOS_CYCLE_SEVERE    = 45
PCOS_BMI_PENALTY     = 0.9
PCOS_CYCLE_PENALTY   = 0.85

# ── AMH (ng/mL) ───────────────────────────────────────────────────────────────
AMH_IMPLAUSIBLE_HIGH = 50.0
AMH_HIGH             = 4.0
AMH_NORMAL           = 2.0
AMH_SLIGHTLY_LOW     = 1.0
AMH_LOW              = 0.5

# ── Prolactin (ng/mL) ─────────────────────────────────────────────────────────
PROLACTIN_HIGH       = 25.0
PROLACTIN_SEVERE     = 200.0

# ── TSH (mUI/L) ───────────────────────────────────────────────────────────────
TSH_OPTIMAL_MAX      = 2.5
TSH_HYPOTHYROID      = 10.0

# ── HOMA-IR ───────────────────────────────────────────────────────────────────
HOMA_MILD            = 2.5
HOMA_SIGNIFICANT     = 4.0
HOMA_IMPLAUSIBLE     = 20.0

# ── History ───────────────────────────────────────────────────────────────────
INFERTILITY_MODERATE_YEARS  = 3
INFERTILITY_PROLONGED_YEARS = 5
SURGERY_MULTIPLE            = 2

# ── Male factor (WHO 2021 lower reference limits) ─────────────────────────────
SPERM_CONCENTRATION_SEVERE = 5.0
SPERM_CONCENTRATION_LOW    = 16.0
SPERM_MOTILITY_SEVERE      = 20.0
SPERM_MOTILITY_LOW         = 30.0
SPERM_MORPHOLOGY_LOW       = 4.0


# ── Age ───────────────────────────────────────────────────────────────────────

def evaluate_age(age: int) -> FactorResult:
    """Absolute per-cycle baseline for the patient's age."""
    if age < AGE_UNDERAGE_LIMIT:
        return FactorResult(
            factor=AGE_UNDERAGE_BASE,
            comment="Very young age: reproductive axis usually not yet mature",
            finding_key=FindingKey.AGE_TOO_YOUNG,
        )
    if age < AGE_ADULT_LIMIT:
        return FactorResult(
            factor=AGE_ADOLESCENT_BASE,
            comment="Adolescence: irregular ovulation is common",
            finding_key=FindingKey.AGE_ADOLESCENT,
        )
    for upper, base, key, comment in AGE_BANDS:
        if age <= upper:
            return FactorResult(factor=base, comment=comment, finding_key=key)
    return FactorResult(
        factor=AGE_EXTREME_BASE,
        comment="Extremely low fertility, egg donation usually required",
        finding_key=FindingKey.AGE_EXTREME,
    )


# ── BMI / cycle / PCOS ────────────────────────────────────────────────────────

def evaluate_bmi(bmi: Optional[float]) -> FactorResult:
    if bmi is None:
        return FactorResult(missing=MISSING_BMI)
    if bmi < BMI_UNDERWEIGHT:
        return FactorResult(
            factor=BMI_UNDERWEIGHT_FACTOR,
            comment="Underweight",
            finding_key=FindingKey.BMI_UNDERWEIGHT,
        )
    if bmi <= BMI_NORMAL_MAX:
        return FactorResult(factor=1.0, comment="Normal weight")
    return FactorResult(
        factor=BMI_OVERWEIGHT_FACTOR,
        comment="Overweight or obesity",
        finding_key=FindingKey.BMI_OVERWEIGHT,
    )


def evaluate_cycle(cycle_duration: Optional[int]) -> FactorResult:
    if cycle_duration is None:
        return FactorResult(factor=1.0, comment="Cycle length not evaluated")
    if CYCLE_NORMAL_MIN <= cycle_duration <= CYCLE_NORMAL_MAX:
        return FactorResult(factor=1.0, comment="Regular cycle")
    if CYCLE_NORMAL_MAX < cycle_duration <= CYCLE_LONG_MAX:
        return FactorResult(
            factor=0.75,
            comment="Mildly long cycle, possible irregular ovulation",
            finding_key=FindingKey.CYCLE_LONG,
        )
    if CYCLE_SHORT_MIN <= cycle_duration < CYCLE_NORMAL_MIN:
        return FactorResult(
            factor=0.80,
            comment="Mildly short cycle, possible luteal phase defect",
            finding_key=FindingKey.CYCLE_SHORT,
        )
    if cycle_duration > CYCLE_LONG_MAX:
        return FactorResult(
            factor=0.60,
            comment="Very long cycle (oligomenorrhea), likely anovulation",
            finding_key=FindingKey.CYCLE_OLIGOMENORRHEA,
        )
    return FactorResult(
        factor=0.50,
        comment="Very short cycle, significant ovulatory dysfunction",
        finding_key=FindingKey.CYCLE_VERY_SHORT,
    )


def pcos_severity(bmi: Optional[float], cycle_duration: Optional[int]) -> PcosSeverity:
    if (bmi is not None and bmi >= PCOS_BMI_SEVERE) or (
        cycle_duration is not None and cycle_duration > PCOS_CYCLE_SEVERE
    ):
        return PcosSeverity.SEVERE
    if (bmi is not None and bmi >= PCOS_BMI_MODERATE) or (
        cycle_duration is not None and cycle_duration > PCOS_CYCLE_MODERATE
    ):
        return PcosSeverity.MODERATE
    return PcosSeverity.MILD


_PCOS_KEYS = {
    PcosSeverity.MILD: FindingKey.PCOS_MILD,
    PcosSeverity.MODERATE: FindingKey.PCOS_MODERATE,
    PcosSeverity.SEVERE: FindingKey.PCOS_SEVERE,
}


def evaluate_pcos(
    has_pcos: bool, bmi: Optional[float], cycle_duration: Optional[int]
) -> FactorResult:
    """PCOS factor; BMI and cycle penalties compound multiplicatively."""
    if not has_pcos:
        return FactorResult(factor=1.0)

    factor = 1.0
    if bmi is not None and bmi >= PCOS_BMI_MODERATE:
        factor *= PCOS_BMI_PENALTY
    if cycle_duration is not None and cycle_duration > PCOS_CYCLE_MODERATE:
        factor *= PCOS_CYCLE_PENALTY

    severity = pcos_severity(bmi, cycle_duration)
    return FactorResult(
        factor=factor,
        comment=f"PCOS, severity {severity.value}",
        finding_key=_PCOS_KEYS[severity],
    )


# ── Endocrine ─────────────────────────────────────────────────────────────────

def evaluate_amh(amh: Optional[float]) -> FactorResult:
    """Ovarian reserve from AMH (ng/mL)."""
    if amh is None:
        return FactorResult(missing=MISSING_AMH)
    if amh < 0:
        return FactorResult(
            factor=0.1,
            comment="Implausible negative AMH value, result low-confidence",
            finding_key=FindingKey.AMH_IMPLAUSIBLE,
        )
    if amh > AMH_IMPLAUSIBLE_HIGH:
        return FactorResult(
            factor=0.7,
            comment="Extremely high AMH, verify the measurement",
            finding_key=FindingKey.AMH_IMPLAUSIBLE,
        )
    if amh >= AMH_HIGH:
        return FactorResult(
            factor=0.9,
            comment="High ovarian reserve, consistent with PCOS pattern",
            finding_key=FindingKey.AMH_HIGH,
        )
    if amh >= AMH_NORMAL:
        return FactorResult(factor=1.0, comment="Normal ovarian reserve")
    if amh >= AMH_SLIGHTLY_LOW:
        return FactorResult(
            factor=0.85,
            comment="Slightly reduced ovarian reserve",
            finding_key=FindingKey.AMH_SLIGHTLY_LOW,
        )
    if amh >= AMH_LOW:
        return FactorResult(
            factor=0.6,
            comment="Low ovarian reserve",
            finding_key=FindingKey.AMH_LOW,
        )
    return FactorResult(
        factor=0.3,
        comment="Very low ovarian reserve",
        finding_key=FindingKey.AMH_VERY_LOW,
    )


def evaluate_prolactin(prolactin: Optional[float]) -> FactorResult:
    if prolactin is None:
        return FactorResult(factor=1.0, comment="Prolactin not evaluated")
    if prolactin < 0:
        return FactorResult(
            factor=1.0,
            comment="Implausible negative prolactin value, ignored",
            finding_key=FindingKey.PROLACTIN_IMPLAUSIBLE,
        )
    if prolactin > PROLACTIN_SEVERE:
        return FactorResult(
            factor=0.3,
            comment="Severe hyperprolactinemia, rule out pituitary adenoma",
            finding_key=FindingKey.PROLACTIN_SEVERE,
        )
    if prolactin >= PROLACTIN_HIGH:
        return FactorResult(
            factor=0.7,
            comment="Hyperprolactinemia",
            finding_key=FindingKey.PROLACTIN_HIGH,
        )
    return FactorResult(factor=1.0, comment="Normal prolactin")


def evaluate_tsh(tsh: Optional[float]) -> FactorResult:
    if tsh is None:
        return FactorResult(factor=1.0, comment="TSH not evaluated")
    if tsh < 0:
        return FactorResult(
            factor=0.5,
            comment="Implausible negative TSH value, result low-confidence",
            finding_key=FindingKey.TSH_IMPLAUSIBLE,
        )
    if tsh > TSH_HYPOTHYROID:
        return FactorResult(
            factor=0.4,
            comment="Overt hypothyroidism",
            finding_key=FindingKey.TSH_HYPOTHYROID,
        )
    if tsh > TSH_OPTIMAL_MAX:
        return FactorResult(
            factor=0.8,
            comment="TSH above the preconception target",
            finding_key=FindingKey.TSH_SUBOPTIMAL,
        )
    return FactorResult(factor=1.0, comment="Optimal TSH")


def evaluate_homa(homa_ir: Optional[float]) -> FactorResult:
    """Insulin resistance; absence is not evaluated rather than missing."""
    if homa_ir is None:
        return FactorResult(factor=1.0, comment="Insulin resistance not evaluated")
    if homa_ir < 0:
        return FactorResult(
            factor=1.0,
            comment="Implausible negative HOMA-IR value, ignored",
            finding_key=FindingKey.HOMA_IMPLAUSIBLE,
        )
    if homa_ir > HOMA_IMPLAUSIBLE:
        return FactorResult(
            factor=0.7,
            comment="Extremely high HOMA-IR, verify the measurement",
            finding_key=FindingKey.HOMA_SEVERE,
        )
    if homa_ir >= HOMA_SIGNIFICANT:
        return FactorResult(
            factor=0.9,
            comment="Significant insulin resistance",
            finding_key=FindingKey.HOMA_SIGNIFICANT,
        )
    if homa_ir >= HOMA_MILD:
        return FactorResult(
            factor=0.95,
            comment="Mild insulin resistance",
            finding_key=FindingKey.HOMA_MILD,
        )
    return FactorResult(factor=1.0, comment="Normal insulin sensitivity")


def evaluate_tpo_ab(tpo_ab_positive: bool) -> FactorResult:
    """Thyroid autoimmunity is informational; it only weighs in via interactions."""
    if not tpo_ab_positive:
        return FactorResult(factor=1.0)
    return FactorResult(
        factor=1.0,
        comment="Positive thyroid peroxidase antibodies",
        finding_key=FindingKey.TPO_AB_POSITIVE,
    )


# ── History ───────────────────────────────────────────────────────────────────

def evaluate_infertility_duration(years: Optional[float]) -> FactorResult:
    if years is None:
        return FactorResult(factor=1.0)
    if years >= INFERTILITY_PROLONGED_YEARS:
        return FactorResult(
            factor=0.85,
            comment=f"Prolonged infertility ({years:g} years)",
            finding_key=FindingKey.INFERTILITY_PROLONGED,
        )
    if years >= INFERTILITY_MODERATE_YEARS:
        return FactorResult(
            factor=0.93,
            comment=f"Infertility of {years:g} years",
            finding_key=FindingKey.INFERTILITY_MODERATE,
        )
    return FactorResult(factor=1.0)


def evaluate_pelvic_surgery(count: Optional[int]) -> FactorResult:
    if not count:
        return FactorResult(factor=1.0)
    if count >= SURGERY_MULTIPLE:
        return FactorResult(
            factor=0.88,
            comment=f"{count} prior pelvic surgeries",
            finding_key=FindingKey.PELVIC_SURGERY_MULTIPLE,
        )
    return FactorResult(
        factor=0.95,
        comment="One prior pelvic surgery",
        finding_key=FindingKey.PELVIC_SURGERY_SINGLE,
    )


# ── Male factor ───────────────────────────────────────────────────────────────

def _concentration_alteration(value: float) -> Optional[Tuple[float, str, FindingKey]]:
    if value < 0:
        return 0.1, "implausible concentration value", FindingKey.MALE_IMPLAUSIBLE
    if value == 0:
        return 0.05, "azoospermia", FindingKey.MALE_AZOOSPERMIA
    if value < SPERM_CONCENTRATION_SEVERE:
        return 0.25, "severe oligozoospermia", FindingKey.MALE_OLIGOZOOSPERMIA
    if value < SPERM_CONCENTRATION_LOW:
        return 0.7, "oligozoospermia", FindingKey.MALE_OLIGOZOOSPERMIA
    return None


def _motility_alteration(value: float) -> Optional[Tuple[float, str, FindingKey]]:
    if value < 0 or value > 100:
        return 0.1, "implausible motility value", FindingKey.MALE_IMPLAUSIBLE
    if value == 0:
        return 0.1, "asthenozoospermia (no progressive motility)", FindingKey.MALE_ASTHENOZOOSPERMIA
    if value < SPERM_MOTILITY_SEVERE:
        return 0.4, "severe asthenozoospermia", FindingKey.MALE_ASTHENOZOOSPERMIA
    if value < SPERM_MOTILITY_LOW:
        return 0.85, "asthenozoospermia", FindingKey.MALE_ASTHENOZOOSPERMIA
    return None


def _morphology_alteration(value: float) -> Optional[Tuple[float, str, FindingKey]]:
    if value < 0 or value > 100:
        return 0.1, "implausible morphology value", FindingKey.MALE_IMPLAUSIBLE
    if value < SPERM_MORPHOLOGY_LOW:
        return 0.5, "teratozoospermia", FindingKey.MALE_TERATOZOOSPERMIA
    return None


def evaluate_male_factor(
    concentration: Optional[float],
    motility: Optional[float],
    morphology: Optional[float],
) -> FactorResult:
    """
    Semen analysis triad.

    The factor is the single most severe alteration, not the product of all
    of them; every alteration label is still reported.
    """
    if concentration is None and motility is None and morphology is None:
        return FactorResult(missing=MISSING_SEMEN)

    alterations: List[Tuple[float, str, FindingKey]] = []
    for value, check in (
        (concentration, _concentration_alteration),
        (motility, _motility_alteration),
        (morphology, _morphology_alteration),
    ):
        if value is None:
            continue
        alteration = check(value)
        if alteration is not None:
            alterations.append(alteration)

    if not alterations:
        return FactorResult(factor=1.0, comment="Normal semen analysis (WHO 2021)")

    worst = min(alterations, key=lambda a: a[0])
    return FactorResult(
        factor=worst[0],
        comment=", ".join(label for _, label, _ in alterations),
        finding_key=worst[2],
    )
