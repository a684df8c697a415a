"""
Raw Intake Schema

Pydantic model describing what the intake flow sends. It is deliberately
lenient: free-text answers such as "unknown" or "" parse to None instead of
failing, so the normalizer can decide what to do with them. Only ``age`` is
mandatory.
"""
import math
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

_TRUE_STRINGS = {"true", "yes", "y", "si", "sí", "1", "on"}
_FALSE_STRINGS = {"false", "no", "n", "0", "off", ""}

NUMERIC_FIELDS = (
    "bmi",
    "cycle_duration",
    "infertility_duration",
    "remaining_tube_length",
    "pelvic_surgery_count",
    "amh",
    "prolactin",
    "tsh",
    "homa_ir",
    "sperm_concentration",
    "sperm_progressive_motility",
    "sperm_normal_morphology",
    "semen_volume",
)

CATEGORY_FIELDS = (
    "myoma_type",
    "adenomyosis_type",
    "polyp_type",
    "hsg_result",
    "otb_method",
)


def parse_number(value: Any) -> Optional[float]:
    """Best-effort numeric parse; returns None for anything non-numeric.

    NaN and infinities count as non-numeric.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip().replace(",", ".")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def parse_flag(value: Any) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    return None


class PatientIntake(BaseModel):
    """Clinical intake exactly as received, before range normalization."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    age: int = Field(..., description="Patient age in whole years")

    bmi: Optional[float] = Field(default=None, description="Body mass index, kg/m²")
    cycle_duration: Optional[float] = Field(default=None, description="Menstrual cycle length, days")
    infertility_duration: Optional[float] = Field(default=None, description="Years trying to conceive")

    has_pcos: bool = False
    endometriosis_grade: Union[int, str, None] = 0
    myoma_type: Optional[str] = "none"
    adenomyosis_type: Optional[str] = "none"
    polyp_type: Optional[str] = "none"
    hsg_result: Optional[str] = "unknown"

    has_otb: bool = False
    otb_method: Optional[str] = "unknown"
    remaining_tube_length: Optional[float] = Field(default=None, description="Remaining tube length, cm")
    has_other_infertility_factors: Optional[bool] = None
    desires_multiple_pregnancies: Optional[bool] = None

    has_pelvic_surgery: bool = False
    pelvic_surgery_count: Optional[float] = None

    amh: Optional[float] = Field(default=None, description="Anti-Müllerian hormone, ng/mL")
    prolactin: Optional[float] = Field(default=None, description="Prolactin, ng/mL")
    tsh: Optional[float] = Field(default=None, description="TSH, mUI/L")
    tpo_ab_positive: bool = False
    homa_ir: Optional[float] = None

    sperm_concentration: Optional[float] = Field(default=None, description="Million/mL")
    sperm_progressive_motility: Optional[float] = Field(default=None, description="Progressive motility, %")
    sperm_normal_morphology: Optional[float] = Field(default=None, description="Normal forms, %")
    semen_volume: Optional[float] = Field(default=None, description="Ejaculate volume, mL")

    @field_validator("age", mode="before")
    @classmethod
    def _parse_age(cls, value: Any) -> int:
        number = parse_number(value)
        if number is None:
            raise ValueError("age must be a number")
        return int(number)

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def _parse_optional_number(cls, value: Any) -> Optional[float]:
        return parse_number(value)

    @field_validator(
        "has_pcos", "has_otb", "has_pelvic_surgery", "tpo_ab_positive", mode="before"
    )
    @classmethod
    def _parse_required_flag(cls, value: Any) -> bool:
        return bool(parse_flag(value))

    @field_validator(
        "has_other_infertility_factors", "desires_multiple_pregnancies", mode="before"
    )
    @classmethod
    def _parse_optional_flag(cls, value: Any) -> Optional[bool]:
        return parse_flag(value)

    @field_validator(*CATEGORY_FIELDS, mode="before")
    @classmethod
    def _lower_category(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value).strip().lower()

    @field_validator("endometriosis_grade", mode="before")
    @classmethod
    def _parse_grade(cls, value: Any) -> Union[int, str, None]:
        number = parse_number(value)
        if number is None:
            return None if value is None else str(value)
        return int(number)
