"""
Factor Evaluators — Structural Factors and Tubal Ligation

Direct lookup tables from a finite clinical category to a fixed factor and
comment. Tubal patency is load-bearing: an unknown HSG result is reported
as missing, never defaulted.

Tubal ligation (OTB) has two outputs:
  - the spontaneous-conception factor, which is exactly 0.0 whenever a
    ligation is present (ligated tubes cannot conduct gametes);
  - a recanalization score, the product of the five sub-scores below, which
    estimates how well surgical reversal would restore fertility and drives
    the treatment engine.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from fertility.core.base import (
    AdenomyosisType,
    FactorResult,
    HsgResult,
    MyomaType,
    OtbMethod,
    PolypType,
)
from fertility.core.content.keys import FindingKey

MISSING_HSG = "Hysterosalpingography (HSG) result"

# ── Lookup tables: category → (factor, comment, finding key) ──────────────────
MYOMA_TABLE: Dict[MyomaType, Tuple[float, str, Optional[FindingKey]]] = {
    MyomaType.NONE:             (1.0, "No myomas", None),
    MyomaType.SUBMUCOSAL:       (0.3, "Submucosal myoma distorting the cavity", FindingKey.MYOMA_SUBMUCOSAL),
    MyomaType.INTRAMURAL_LARGE: (0.6, "Large intramural myoma", FindingKey.MYOMA_INTRAMURAL_LARGE),
    MyomaType.SUBSEROSAL:       (1.0, "Subserosal myoma, no cavity impact", FindingKey.MYOMA_SUBSEROSAL),
}

ADENOMYOSIS_TABLE: Dict[AdenomyosisType, Tuple[float, str, Optional[FindingKey]]] = {
    AdenomyosisType.NONE:    (1.0, "No adenomyosis", None),
    AdenomyosisType.FOCAL:   (0.8, "Focal adenomyosis", FindingKey.ADENOMYOSIS_FOCAL),
    AdenomyosisType.DIFFUSE: (0.5, "Diffuse adenomyosis", FindingKey.ADENOMYOSIS_DIFFUSE),
}

POLYP_TABLE: Dict[PolypType, Tuple[float, str, Optional[FindingKey]]] = {
    PolypType.NONE:   (1.0, "No polyps", None),
    PolypType.SMALL:  (0.85, "Small endometrial polyp", FindingKey.POLYP_SMALL),
    PolypType.LARGE:  (0.7, "Large endometrial polyp", FindingKey.POLYP_LARGE),
    PolypType.OSTIUM: (0.5, "Polyp obstructing a tubal ostium", FindingKey.POLYP_OSTIUM),
}

HSG_TABLE: Dict[HsgResult, Tuple[float, str, Optional[FindingKey]]] = {
    HsgResult.NORMAL:       (1.0, "Both tubes patent", None),
    HsgResult.UNILATERAL:   (0.7, "Unilateral tubal obstruction", FindingKey.HSG_UNILATERAL),
    HsgResult.BILATERAL:    (0.0, "Bilateral tubal obstruction", FindingKey.HSG_BILATERAL),
    HsgResult.MALFORMATION: (0.3, "Uterine malformation on HSG", FindingKey.HSG_MALFORMATION),
}

# ── Endometriosis (ASRM stage) ────────────────────────────────────────────────
ENDOMETRIOSIS_MILD_FACTOR   = 0.85   # stage I-II
ENDOMETRIOSIS_SEVERE_FACTOR = 0.6    # stage III-IV
ENDOMETRIOSIS_SEVERE_GRADE  = 3

# ── Recanalization sub-scores ─────────────────────────────────────────────────
OTB_AGE_POOR          = 40
OTB_AGE_REDUCED       = 35
OTB_SHORT_TUBE_CM     = 4.0


def _from_table(table, category) -> FactorResult:
    factor, comment, key = table[category]
    return FactorResult(factor=factor, comment=comment, finding_key=key)


def evaluate_endometriosis(grade: int) -> FactorResult:
    if grade <= 0:
        return FactorResult(factor=1.0)
    if grade < ENDOMETRIOSIS_SEVERE_GRADE:
        return FactorResult(
            factor=ENDOMETRIOSIS_MILD_FACTOR,
            comment=f"Endometriosis stage {grade} (mild)",
            finding_key=FindingKey.ENDOMETRIOSIS_MILD,
        )
    return FactorResult(
        factor=ENDOMETRIOSIS_SEVERE_FACTOR,
        comment=f"Endometriosis stage {grade} (advanced)",
        finding_key=FindingKey.ENDOMETRIOSIS_SEVERE,
    )


def evaluate_myoma(myoma_type: MyomaType) -> FactorResult:
    return _from_table(MYOMA_TABLE, myoma_type)


def evaluate_adenomyosis(adenomyosis_type: AdenomyosisType) -> FactorResult:
    return _from_table(ADENOMYOSIS_TABLE, adenomyosis_type)


def evaluate_polyp(polyp_type: PolypType) -> FactorResult:
    return _from_table(POLYP_TABLE, polyp_type)


def evaluate_hsg(hsg_result: HsgResult) -> FactorResult:
    if hsg_result == HsgResult.UNKNOWN:
        return FactorResult(missing=MISSING_HSG)
    return _from_table(HSG_TABLE, hsg_result)


# ── Tubal ligation ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RecanalizationAssessment:
    """Product of the recanalization sub-scores and their sentences."""
    score: float
    notes: Tuple[str, ...]

    @property
    def summary(self) -> str:
        return " ".join(self.notes)


def assess_recanalization(
    age: int,
    method: OtbMethod,
    remaining_tube_length: Optional[float],
    has_other_infertility_factors: Optional[bool],
    desires_multiple_pregnancies: Optional[bool],
) -> RecanalizationAssessment:
    """Score each recanalization criterion in order; sentences keep that order."""
    notes: List[str] = []
    score = 1.0

    if age >= OTB_AGE_POOR:
        score *= 0.2
        notes.append("Age 40 or over makes recanalization much less effective.")
    elif age >= OTB_AGE_REDUCED:
        score *= 0.5
        notes.append("Age 35-39 reduces recanalization success.")
    else:
        notes.append("Age under 35 is favorable for recanalization.")

    if method.is_unfavorable:
        score *= 0.1
        notes.append("The ligation method destroyed a long tubal segment, reversal is rarely viable.")
    elif method.is_favorable:
        score *= 0.8
        notes.append("The ligation method (clips, rings or simple ligation) is favorable for reversal.")
    else:
        notes.append("Ligation method unknown, the operative report should be reviewed.")

    if remaining_tube_length is None:
        notes.append("Remaining tube length unknown, to be measured before surgery.")
    elif remaining_tube_length < OTB_SHORT_TUBE_CM:
        score *= 0.3
        notes.append("Remaining tube length under 4 cm predicts poor function after reversal.")
    else:
        notes.append("Remaining tube length of 4 cm or more is adequate for reversal.")

    if has_other_infertility_factors:
        score *= 0.5
        notes.append("Other infertility factors are present, favoring in-vitro fertilization.")
    else:
        notes.append("No other infertility factors reported.")

    if desires_multiple_pregnancies:
        notes.append("Desire for several future pregnancies favors reversal over repeated IVF cycles.")
    elif desires_multiple_pregnancies is not None:
        notes.append("A single desired pregnancy makes IVF an efficient alternative.")

    return RecanalizationAssessment(score=score, notes=tuple(notes))


def evaluate_otb(
    has_otb: bool,
    age: int,
    method: OtbMethod,
    remaining_tube_length: Optional[float],
    has_other_infertility_factors: Optional[bool],
    desires_multiple_pregnancies: Optional[bool],
) -> Tuple[FactorResult, Optional[RecanalizationAssessment]]:
    """Spontaneous-conception factor for tubal ligation plus the reversal assessment."""
    if not has_otb:
        return FactorResult(factor=1.0), None

    assessment = assess_recanalization(
        age,
        method,
        remaining_tube_length,
        has_other_infertility_factors,
        desires_multiple_pregnancies,
    )
    result = FactorResult(
        factor=0.0,
        comment=assessment.summary,
        finding_key=FindingKey.TUBAL_LIGATION,
    )
    return result, assessment
