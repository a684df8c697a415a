"""
Aggregation Core

Runs every factor evaluator once, collects the resulting weights into a
``FactorSet`` and the explanatory text into ``Diagnostics``, and combines
them into the raw per-cycle probability:

    raw = base_age_probability × Π(weights), clamped to [0, 100]

Full precision is kept; rounding happens only at presentation time.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

import numpy as np

from fertility.core.base import Diagnostics, FactorResult, FactorSet, PatientInput
from fertility.core.factors import evaluators as ev
from fertility.core.factors import structural as st

logger = logging.getLogger(__name__)

PROGNOSIS_MIN = 0.0
PROGNOSIS_MAX = 100.0

# ── Registry ──────────────────────────────────────────────────────────────────
# Evaluation order is the order diagnostics and missing labels are reported in.
# Names that are not FactorSet fields (e.g. "tpo_ab") contribute text only.
_FACTOR_EVALUATORS: List[Tuple[str, Callable[[PatientInput], FactorResult]]] = [
    ("base_age_probability", lambda p: ev.evaluate_age(p.age)),
    ("bmi",                  lambda p: ev.evaluate_bmi(p.bmi)),
    ("cycle",                lambda p: ev.evaluate_cycle(p.cycle_duration)),
    ("pcos",                 lambda p: ev.evaluate_pcos(p.has_pcos, p.bmi, p.cycle_duration)),
    ("endometriosis",        lambda p: st.evaluate_endometriosis(p.endometriosis_grade)),
    ("myoma",                lambda p: st.evaluate_myoma(p.myoma_type)),
    ("adenomyosis",          lambda p: st.evaluate_adenomyosis(p.adenomyosis_type)),
    ("polyp",                lambda p: st.evaluate_polyp(p.polyp_type)),
    ("hsg",                  lambda p: st.evaluate_hsg(p.hsg_result)),
    ("amh",                  lambda p: ev.evaluate_amh(p.amh)),
    ("prolactin",            lambda p: ev.evaluate_prolactin(p.prolactin)),
    ("tsh",                  lambda p: ev.evaluate_tsh(p.tsh)),
    ("tpo_ab",               lambda p: ev.evaluate_tpo_ab(p.tpo_ab_positive)),
    ("homa",                 lambda p: ev.evaluate_homa(p.homa_ir)),
    ("male",                 lambda p: ev.evaluate_male_factor(
                                 p.sperm_concentration,
                                 p.sperm_progressive_motility,
                                 p.sperm_normal_morphology,
                             )),
    ("infertility_duration", lambda p: ev.evaluate_infertility_duration(p.infertility_duration)),
    ("pelvic_surgery",       lambda p: ev.evaluate_pelvic_surgery(p.pelvic_surgery_count)),
]

_FACTOR_FIELDS = set(FactorSet().to_dict())


@dataclass(frozen=True)
class FactorEvaluation:
    """FactorSet and Diagnostics produced by one evaluation pass."""
    factors: FactorSet
    diagnostics: Diagnostics

    @property
    def raw_prognosis(self) -> float:
        return aggregate(self.factors)


def _record(
    name: str,
    result: FactorResult,
    weights: Dict[str, float],
    diagnostics: Diagnostics,
) -> None:
    if result.factor is not None and name in _FACTOR_FIELDS:
        weights[name] = result.factor
    if result.comment:
        diagnostics.comments[name] = result.comment
    if result.finding_key is not None:
        diagnostics.finding_keys[name] = result.finding_key
    if result.missing:
        diagnostics.add_missing(result.missing)


def evaluate_factors(patient: PatientInput) -> FactorEvaluation:
    """
    Run every registered evaluator against a normalized patient.

    Args:
        patient: Normalized input

    Returns:
        FactorEvaluation with every FactorSet key populated
    """
    weights: Dict[str, float] = {}
    diagnostics = Diagnostics()

    for name, evaluator in _FACTOR_EVALUATORS:
        _record(name, evaluator(patient), weights, diagnostics)
        if name == "hsg":
            # OTB is reported right after tubal patency
            otb_result, assessment = st.evaluate_otb(
                patient.has_otb,
                patient.age,
                patient.otb_method,
                patient.remaining_tube_length,
                patient.has_other_infertility_factors,
                patient.desires_multiple_pregnancies,
            )
            _record("otb", otb_result, weights, diagnostics)
            if assessment is not None:
                diagnostics.recanalization_score = assessment.score

    factors = FactorSet(**weights)
    logger.debug(
        f"Factors evaluated: baseline={factors.base_age_probability}, "
        f"missing={diagnostics.missing_data}"
    )
    return FactorEvaluation(factors=factors, diagnostics=diagnostics)


def aggregate(factors: FactorSet) -> float:
    """Baseline × product of all weights, clamped to a valid percentage."""
    product = np.prod(np.fromiter(factors.weights().values(), dtype=float))
    raw = factors.base_age_probability * product
    return float(np.clip(raw, PROGNOSIS_MIN, PROGNOSIS_MAX))
