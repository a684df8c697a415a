"""
Input Normalizer

Single point where malformed intake is absorbed. Converts a raw intake
(mapping or ``PatientIntake``) into a ``PatientInput`` whose values all lie
inside hard plausibility limits, and reports every adjustment as a warning.

Two tiers of limits are involved:
  - Hard limits (here): values that cannot be real measurements are either
    clamped to the nearest bound or dropped to "missing".
  - Validated ranges (in the factor evaluators): values that are possible
    but outside the tables' calibrated range are kept and down-weighted
    with a distinguishing comment.

Field content never raises; only an intake without a usable age does.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, Union

from pydantic import ValidationError as PydanticValidationError

from fertility.core.base import (
    AdenomyosisType,
    HsgResult,
    MyomaType,
    OtbMethod,
    PatientInput,
    PolypType,
)
from fertility.core.validation.intake import (
    CATEGORY_FIELDS,
    NUMERIC_FIELDS,
    PatientIntake,
)
from fertility.utils import IntakeError, get_logger

logger = get_logger(__name__)

# ── Hard limits ───────────────────────────────────────────────────────────────
AGE_MIN = 10
AGE_MAX = 60
ENDOMETRIOSIS_MAX_GRADE = 4

# field: (lower, upper, clamp_high). Below lower → missing.
# Above upper → clamped when clamp_high, otherwise missing.
HARD_LIMITS: Dict[str, Tuple[float, float, bool]] = {
    "bmi":                        (10.0, 80.0, False),
    "cycle_duration":             (7.0, 180.0, False),
    "infertility_duration":       (0.0, 30.0, True),
    "remaining_tube_length":      (0.0, 15.0, True),
    "pelvic_surgery_count":       (0.0, 10.0, True),
    "amh":                        (0.0, 100.0, True),
    "prolactin":                  (0.0, 500.0, True),
    "tsh":                        (0.0, 50.0, True),
    "homa_ir":                    (0.0, 100.0, True),
    "sperm_concentration":        (0.0, 500.0, True),
    "sperm_progressive_motility": (0.0, 100.0, True),
    "sperm_normal_morphology":    (0.0, 100.0, True),
    "semen_volume":               (0.0, 15.0, True),
}

INTEGER_FIELDS = ("cycle_duration", "pelvic_surgery_count")

CATEGORY_TYPES: Dict[str, Type[Enum]] = {
    "myoma_type": MyomaType,
    "adenomyosis_type": AdenomyosisType,
    "polyp_type": PolypType,
    "hsg_result": HsgResult,
    "otb_method": OtbMethod,
}

CATEGORY_DEFAULTS: Dict[str, Enum] = {
    "myoma_type": MyomaType.NONE,
    "adenomyosis_type": AdenomyosisType.NONE,
    "polyp_type": PolypType.NONE,
    "hsg_result": HsgResult.UNKNOWN,
    "otb_method": OtbMethod.UNKNOWN,
}

# Free-text answers that legitimately mean "not known"
UNKNOWN_MARKERS = {"", "unknown", "n/a", "na", "none", "-", "?"}


class WarningType(str, Enum):
    """Kinds of adjustment the normalizer can make."""
    OUT_OF_RANGE_CLAMPED = "out_of_range_clamped"
    IMPLAUSIBLE_DISCARDED = "implausible_discarded"
    UNRECOGNIZED_CATEGORY = "unrecognized_category"
    UNPARSEABLE_VALUE = "unparseable_value"
    INFERRED_VALUE = "inferred_value"


@dataclass
class NormalizationWarning:
    """A single adjustment made to the intake."""
    field: str
    warning_type: WarningType
    message: str
    original_value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "type": self.warning_type.value,
            "message": self.message,
            "original_value": self.original_value,
        }


@dataclass
class NormalizationResult:
    """Normalized input plus every adjustment made to get there."""
    patient: PatientInput
    warnings: List[NormalizationWarning] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.warnings

    def to_dict(self) -> Dict[str, Any]:
        return {
            "patient": self.patient.to_dict(),
            "warning_count": len(self.warnings),
            "warnings": [w.to_dict() for w in self.warnings],
        }


def normalize_input(raw: Union[Mapping[str, Any], PatientIntake]) -> NormalizationResult:
    """
    Normalize a raw intake into a ``PatientInput``.

    Args:
        raw: Mapping of intake fields or an already-parsed ``PatientIntake``

    Returns:
        NormalizationResult with the normalized patient and warnings

    Raises:
        IntakeError: if no usable age is present
    """
    warnings: List[NormalizationWarning] = []

    if isinstance(raw, PatientIntake):
        intake = raw
        raw_values: Mapping[str, Any] = {}
    else:
        intake = _parse_intake(raw)
        raw_values = raw

    values: Dict[str, Any] = {"age": _normalize_age(intake.age, warnings)}

    for name in NUMERIC_FIELDS:
        parsed = getattr(intake, name)
        if parsed is None:
            _flag_unparseable(name, raw_values.get(name), warnings)
            values[name] = None
            continue
        values[name] = _apply_hard_limits(name, parsed, warnings)

    for name in INTEGER_FIELDS:
        if values[name] is not None:
            values[name] = int(round(values[name]))

    for name in CATEGORY_FIELDS:
        values[name] = _normalize_category(name, getattr(intake, name), warnings)

    values["endometriosis_grade"] = _normalize_grade(intake.endometriosis_grade, warnings)

    has_pelvic_surgery = intake.has_pelvic_surgery
    surgery_count = values["pelvic_surgery_count"]
    if has_pelvic_surgery and surgery_count is None:
        surgery_count = 1
        warnings.append(NormalizationWarning(
            field="pelvic_surgery_count",
            warning_type=WarningType.INFERRED_VALUE,
            message="Prior pelvic surgery reported without a count; assuming one procedure",
        ))
    elif surgery_count is not None and surgery_count > 0:
        has_pelvic_surgery = True
    values["pelvic_surgery_count"] = surgery_count

    patient = PatientInput(
        has_pcos=intake.has_pcos,
        has_otb=intake.has_otb,
        has_other_infertility_factors=intake.has_other_infertility_factors,
        desires_multiple_pregnancies=intake.desires_multiple_pregnancies,
        has_pelvic_surgery=has_pelvic_surgery,
        tpo_ab_positive=intake.tpo_ab_positive,
        **values,
    )

    for warning in warnings:
        logger.warning(f"Intake '{warning.field}' adjusted: {warning.message}")

    return NormalizationResult(patient=patient, warnings=warnings)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _parse_intake(raw: Mapping[str, Any]) -> PatientIntake:
    try:
        return PatientIntake.model_validate(dict(raw))
    except PydanticValidationError as exc:
        raise IntakeError(
            "Intake has no usable age; cannot evaluate",
            field="age",
            details={"value": raw.get("age"), "errors": exc.errors(include_url=False)},
        ) from exc


def _normalize_age(age: int, warnings: List[NormalizationWarning]) -> int:
    clamped = max(AGE_MIN, min(int(age), AGE_MAX))
    if clamped != age:
        warnings.append(NormalizationWarning(
            field="age",
            warning_type=WarningType.OUT_OF_RANGE_CLAMPED,
            message=f"Age {age} outside {AGE_MIN}-{AGE_MAX}; clamped to {clamped}",
            original_value=age,
        ))
    return clamped


def _flag_unparseable(name: str, original: Any, warnings: List[NormalizationWarning]) -> None:
    if original is None or isinstance(original, bool):
        return
    if isinstance(original, str) and original.strip().lower() in UNKNOWN_MARKERS:
        return
    warnings.append(NormalizationWarning(
        field=name,
        warning_type=WarningType.UNPARSEABLE_VALUE,
        message=f"Could not read {original!r} as a number; treated as not supplied",
        original_value=original,
    ))


def _apply_hard_limits(
    name: str, value: float, warnings: List[NormalizationWarning]
) -> Optional[float]:
    lower, upper, clamp_high = HARD_LIMITS[name]

    if value < lower:
        warnings.append(NormalizationWarning(
            field=name,
            warning_type=WarningType.IMPLAUSIBLE_DISCARDED,
            message=f"Value {value} below plausible minimum {lower}; treated as not supplied",
            original_value=value,
        ))
        return None

    if value > upper:
        if clamp_high:
            warnings.append(NormalizationWarning(
                field=name,
                warning_type=WarningType.OUT_OF_RANGE_CLAMPED,
                message=f"Value {value} above plausible maximum {upper}; clamped",
                original_value=value,
            ))
            return upper
        warnings.append(NormalizationWarning(
            field=name,
            warning_type=WarningType.IMPLAUSIBLE_DISCARDED,
            message=f"Value {value} above plausible maximum {upper}; treated as not supplied",
            original_value=value,
        ))
        return None

    return value


def _normalize_category(
    name: str, value: Optional[str], warnings: List[NormalizationWarning]
) -> Enum:
    default = CATEGORY_DEFAULTS[name]
    if value is None or value in UNKNOWN_MARKERS:
        return default
    try:
        return CATEGORY_TYPES[name](value)
    except ValueError:
        warnings.append(NormalizationWarning(
            field=name,
            warning_type=WarningType.UNRECOGNIZED_CATEGORY,
            message=f"Unrecognized value {value!r}; using '{default.value}'",
            original_value=value,
        ))
        return default


def _normalize_grade(value: Union[int, str, None], warnings: List[NormalizationWarning]) -> int:
    if value is None:
        return 0
    if isinstance(value, str):
        if value.strip().lower() not in UNKNOWN_MARKERS:
            warnings.append(NormalizationWarning(
                field="endometriosis_grade",
                warning_type=WarningType.UNRECOGNIZED_CATEGORY,
                message=f"Unrecognized grade {value!r}; assuming no endometriosis",
                original_value=value,
            ))
        return 0
    clamped = max(0, min(int(value), ENDOMETRIOSIS_MAX_GRADE))
    if clamped != value:
        warnings.append(NormalizationWarning(
            field="endometriosis_grade",
            warning_type=WarningType.OUT_OF_RANGE_CLAMPED,
            message=f"Grade {value} outside 0-{ENDOMETRIOSIS_MAX_GRADE}; clamped to {clamped}",
            original_value=value,
        ))
    return clamped
