"""
Strategic Decision Rules

Combinations where the recommended strategy is to go straight to in-vitro
fertilization. Every firing rule emits its own finding; any firing also adds
a single DECISION_ESCALATE_IVF finding. These rules never change the number.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from fertility.core.base import FactorSet, PatientInput
from fertility.core.clinical.interactions import Predicate, ge, gt, lt
from fertility.core.content.keys import FindingKey

ESCALATION_KEY = FindingKey.DECISION_ESCALATE_IVF


@dataclass(frozen=True)
class DecisionRule:
    key: FindingKey
    predicate: Predicate

    def matches(self, patient: PatientInput, factors: FactorSet) -> bool:
        return self.predicate(patient, factors)


def _age_amh_critical(p: PatientInput, f: FactorSet) -> bool:
    return p.age >= 40 and lt(p.amh, 1.0)


def _severe_endo_male(p: PatientInput, f: FactorSet) -> bool:
    return p.endometriosis_grade >= 3 and f.male < 1.0


def _pcos_metabolic(p: PatientInput, f: FactorSet) -> bool:
    return (
        p.has_pcos
        and ge(p.homa_ir, 4.0)
        and gt(p.cycle_duration, 60)
        and gt(p.prolactin, 50)
    )


def _tubal_factor(p: PatientInput, f: FactorSet) -> bool:
    return f.otb == 0.0 or f.hsg == 0.0


DECISION_RULES: List[DecisionRule] = [
    DecisionRule(FindingKey.DECISION_IVF_AGE_AMH_CRITICAL, _age_amh_critical),
    DecisionRule(FindingKey.DECISION_IVF_SEVERE_ENDO_MALE, _severe_endo_male),
    DecisionRule(FindingKey.DECISION_IVF_PCOS_METABOLIC, _pcos_metabolic),
    DecisionRule(FindingKey.DECISION_IVF_TUBAL_FACTOR, _tubal_factor),
]


def evaluate_decisions(patient: PatientInput, factors: FactorSet) -> List[FindingKey]:
    """Keys of every firing decision rule, plus the escalation key when any fire."""
    fired = [rule.key for rule in DECISION_RULES if rule.matches(patient, factors)]
    if fired:
        fired.append(ESCALATION_KEY)
    return fired
