"""
Evaluation Pipeline — Base Types

Value objects passed between the pipeline stages. Every instance is created
fresh per evaluation call; nothing here carries shared mutable state.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from fertility.core.content.keys import FindingKey


# ── Enumerated clinical fields ────────────────────────────────────────────────

class MyomaType(str, Enum):
    NONE             = "none"
    SUBMUCOSAL       = "submucosal"
    INTRAMURAL_LARGE = "intramural_large"
    SUBSEROSAL       = "subserosal"


class AdenomyosisType(str, Enum):
    NONE    = "none"
    FOCAL   = "focal"
    DIFFUSE = "diffuse"


class PolypType(str, Enum):
    NONE   = "none"
    SMALL  = "small"
    LARGE  = "large"
    OSTIUM = "ostium"


class HsgResult(str, Enum):
    """Hysterosalpingography (tubal patency) result."""
    UNKNOWN      = "unknown"
    NORMAL       = "normal"
    UNILATERAL   = "unilateral"
    BILATERAL    = "bilateral"
    MALFORMATION = "malformation"


class OtbMethod(str, Enum):
    """Tubal ligation technique, grouped by how much tube it destroys."""
    UNKNOWN                 = "unknown"
    CLIPS                   = "clips"
    RINGS                   = "rings"
    LIGATION                = "ligation"
    EXTENSIVE_CAUTERIZATION = "extensive_cauterization"
    PARTIAL_SALPINGECTOMY   = "partial_salpingectomy"

    @property
    def is_favorable(self) -> bool:
        return self in (OtbMethod.CLIPS, OtbMethod.RINGS, OtbMethod.LIGATION)

    @property
    def is_unfavorable(self) -> bool:
        return self in (OtbMethod.EXTENSIVE_CAUTERIZATION, OtbMethod.PARTIAL_SALPINGECTOMY)


class PcosSeverity(str, Enum):
    MILD     = "Mild"
    MODERATE = "Moderate"
    SEVERE   = "Severe"


class PrognosisCategory(str, Enum):
    """
    Coarse classification of the per-cycle probability.

    GOOD      – ≥ 15 %
    MODERATE  – 5 – 14.9 %
    LOW       – < 5 %, or any categorical short-circuit
    """
    GOOD     = "GOOD"
    MODERATE = "MODERATE"
    LOW      = "LOW"


class TreatmentCategory(str, Enum):
    """Treatment families, ranked by clinical complexity (highest first)."""
    HIGH_COMPLEXITY = "high_complexity"
    SURGICAL        = "surgical"
    LOW_COMPLEXITY  = "low_complexity"
    FURTHER_STUDY   = "further_study"
    CONSULTATION    = "consultation"

    @property
    def complexity_rank(self) -> int:
        return _COMPLEXITY_RANK[self]


_COMPLEXITY_RANK = {
    TreatmentCategory.HIGH_COMPLEXITY: 4,
    TreatmentCategory.SURGICAL:        3,
    TreatmentCategory.LOW_COMPLEXITY:  2,
    TreatmentCategory.FURTHER_STUDY:   1,
    TreatmentCategory.CONSULTATION:    0,
}


# ── Normalized patient input ──────────────────────────────────────────────────

@dataclass(frozen=True)
class PatientInput:
    """
    Normalized clinical intake.

    Only ``age`` is required. Every other field is independently optional;
    ``None`` means "not supplied" and must degrade gracefully downstream.
    """
    age: int

    # ── Demographics / cycle ──────────────────────────────────────────────
    bmi: Optional[float] = None
    cycle_duration: Optional[int] = None          # days
    infertility_duration: Optional[float] = None  # years

    # ── Gynaecological history ────────────────────────────────────────────
    has_pcos: bool = False
    endometriosis_grade: int = 0                  # 0 = absent, 1-4 ASRM stage
    myoma_type: MyomaType = MyomaType.NONE
    adenomyosis_type: AdenomyosisType = AdenomyosisType.NONE
    polyp_type: PolypType = PolypType.NONE
    hsg_result: HsgResult = HsgResult.UNKNOWN

    # ── Tubal ligation ────────────────────────────────────────────────────
    has_otb: bool = False
    otb_method: OtbMethod = OtbMethod.UNKNOWN
    remaining_tube_length: Optional[float] = None  # cm
    has_other_infertility_factors: Optional[bool] = None
    desires_multiple_pregnancies: Optional[bool] = None

    # ── Surgical history ──────────────────────────────────────────────────
    has_pelvic_surgery: bool = False
    pelvic_surgery_count: Optional[int] = None

    # ── Laboratory ────────────────────────────────────────────────────────
    amh: Optional[float] = None                   # ng/mL
    prolactin: Optional[float] = None             # ng/mL
    tsh: Optional[float] = None                   # mUI/L
    tpo_ab_positive: bool = False
    homa_ir: Optional[float] = None

    # ── Male factor (WHO 2021 semen analysis) ─────────────────────────────
    sperm_concentration: Optional[float] = None         # million/mL
    sperm_progressive_motility: Optional[float] = None  # %
    sperm_normal_morphology: Optional[float] = None     # %
    semen_volume: Optional[float] = None                # mL

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, Enum):
                data[key] = value.value
        return data


# ── Evaluator output ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FactorResult:
    """
    Uniform return shape of every factor evaluator.

    ``factor`` is None only when the value is missing; ``missing`` then holds
    the label surfaced to the user for load-bearing fields.
    """
    factor: Optional[float] = None
    comment: Optional[str] = None
    missing: Optional[str] = None
    finding_key: Optional[FindingKey] = None


@dataclass(frozen=True)
class FactorSet:
    """
    Fixed-shape set of multiplicative weights plus the age baseline.

    ``base_age_probability`` is in percentage points; every weight is in
    [0, 1] and defaults to 1.0 ("no effect").
    """
    base_age_probability: float = 0.0
    bmi: float = 1.0
    cycle: float = 1.0
    pcos: float = 1.0
    endometriosis: float = 1.0
    myoma: float = 1.0
    adenomyosis: float = 1.0
    polyp: float = 1.0
    hsg: float = 1.0
    otb: float = 1.0
    amh: float = 1.0
    prolactin: float = 1.0
    tsh: float = 1.0
    homa: float = 1.0
    male: float = 1.0
    infertility_duration: float = 1.0
    pelvic_surgery: float = 1.0

    def weights(self) -> Dict[str, float]:
        """All multiplicative weights, excluding the baseline."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "base_age_probability"
        }

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class Diagnostics:
    """Explanatory text produced alongside the FactorSet."""
    comments: Dict[str, str] = field(default_factory=dict)
    finding_keys: Dict[str, FindingKey] = field(default_factory=dict)
    missing_data: List[str] = field(default_factory=list)
    recanalization_score: Optional[float] = None

    def add_missing(self, label: str) -> None:
        if label not in self.missing_data:
            self.missing_data.append(label)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "comments": dict(self.comments),
            "finding_keys": {name: key.value for name, key in self.finding_keys.items()},
            "missing_data": list(self.missing_data),
            "recanalization_score": self.recanalization_score,
        }


# ── Report output ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ClinicalFinding:
    """One fired diagnostic, interaction or decision, with its clinical content."""
    key: FindingKey
    title: str
    definition: str
    justification: str
    explanation: str
    recommendations: Tuple[str, ...] = ()
    sources: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key.value,
            "title": self.title,
            "definition": self.definition,
            "justification": self.justification,
            "explanation": self.explanation,
            "recommendations": list(self.recommendations),
            "sources": list(self.sources),
        }


@dataclass(frozen=True)
class Report:
    """Final evaluation report; immutable and owned by the caller."""
    numeric_prognosis: float
    category: PrognosisCategory
    emoji: str
    prognosis_phrase: str
    benchmark_phrase: str
    clinical_insights: Tuple[ClinicalFinding, ...] = ()
    override_key: Optional[FindingKey] = None

    @property
    def display_prognosis(self) -> float:
        """Value rounded for presentation; ``numeric_prognosis`` keeps full precision."""
        return round(self.numeric_prognosis, 1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "numeric_prognosis": self.numeric_prognosis,
            "display_prognosis": self.display_prognosis,
            "category": self.category.value,
            "emoji": self.emoji,
            "prognosis_phrase": self.prognosis_phrase,
            "benchmark_phrase": self.benchmark_phrase,
            "clinical_insights": [f.to_dict() for f in self.clinical_insights],
            "override_key": self.override_key.value if self.override_key else None,
        }


@dataclass(frozen=True)
class TreatmentSuggestion:
    """One proposed treatment option."""
    key: FindingKey
    category: TreatmentCategory
    title: str
    details: str
    source: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key.value,
            "category": self.category.value,
            "title": self.title,
            "details": self.details,
            "source": self.source,
        }
