"""
Interaction & Decision Engine

Applies the interaction table and the strategic decision table to one
evaluation and returns the adjusted number together with the fired keys.

Usage:
    from fertility.core.clinical import apply_interactions

    outcome = apply_interactions(patient, evaluation.factors, evaluation.raw_prognosis)
    print(outcome.prognosis, outcome.fired_keys, outcome.decisions)

Resolution order:
    1. An active tubal ligation (OTB factor 0.0) blocks every numeric change;
       rules still fire and report their findings.
    2. MULTIPLY rules adjust the aggregate.
    3. The first matching CAP rule in table order overrides the result.

Adding a rule:
    1. Write the predicate in interactions.py (or decisions.py)
    2. Add its FindingKey and clinical content entry
    3. Insert it into the table at its priority position
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from fertility.core.base import FactorSet, PatientInput
from fertility.core.clinical.decisions import DECISION_RULES, evaluate_decisions
from fertility.core.clinical.interactions import (
    INTERACTION_RULES,
    InteractionRule,
    RuleEffect,
)
from fertility.core.content.keys import FindingKey

logger = logging.getLogger(__name__)

PINNED_LOW_THRESHOLD = 3.0


@dataclass(frozen=True)
class InteractionOutcome:
    """Result of the interaction layer for one evaluation."""
    raw_prognosis: float
    prognosis: float
    fired: List[InteractionRule] = field(default_factory=list)
    override: Optional[InteractionRule] = None
    decisions: List[FindingKey] = field(default_factory=list)
    blocked_by_otb: bool = False

    @property
    def fired_keys(self) -> List[FindingKey]:
        return [rule.key for rule in self.fired]

    @property
    def subsumes_age(self) -> bool:
        """True when a fired interaction already speaks about the patient's age."""
        return any(rule.involves_age for rule in self.fired)

    @property
    def pinned_low(self) -> bool:
        return self.override is not None and self.prognosis <= PINNED_LOW_THRESHOLD


def apply_interactions(
    patient: PatientInput,
    factors: FactorSet,
    raw_prognosis: float,
) -> InteractionOutcome:
    """
    Evaluate every interaction and decision rule.

    Args:
        patient: Normalized input
        factors: FactorSet from the aggregation step
        raw_prognosis: Aggregated per-cycle probability

    Returns:
        InteractionOutcome with the final number and fired rules
    """
    fired = [rule for rule in INTERACTION_RULES if rule.matches(patient, factors)]
    decisions = evaluate_decisions(patient, factors)

    if fired:
        logger.debug("Interactions fired: " + ", ".join(r.key.value for r in fired))
    if decisions:
        logger.debug("Decisions fired: " + ", ".join(k.value for k in decisions))

    if factors.otb == 0.0:
        return InteractionOutcome(
            raw_prognosis=raw_prognosis,
            prognosis=raw_prognosis,
            fired=fired,
            decisions=decisions,
            blocked_by_otb=True,
        )

    value = raw_prognosis
    for rule in fired:
        if rule.effect == RuleEffect.MULTIPLY:
            value *= rule.value

    override = next((r for r in fired if r.effect == RuleEffect.CAP), None)
    if override is not None:
        value = min(value, override.value)
        logger.info(f"Prognosis capped at {override.value} by {override.key.value}")

    return InteractionOutcome(
        raw_prognosis=raw_prognosis,
        prognosis=float(np.clip(value, 0.0, 100.0)),
        fired=fired,
        override=override,
        decisions=decisions,
    )


def registered_rules() -> Dict[str, List[FindingKey]]:
    """Keys of every registered interaction and decision rule, in table order."""
    return {
        "interactions": [rule.key for rule in INTERACTION_RULES],
        "decisions": [rule.key for rule in DECISION_RULES],
    }


def summarise(outcome: InteractionOutcome) -> Dict:
    """Compact, serialisable summary of an outcome."""
    return {
        "raw_prognosis": outcome.raw_prognosis,
        "prognosis": outcome.prognosis,
        "interactions": [k.value for k in outcome.fired_keys],
        "override": outcome.override.key.value if outcome.override else None,
        "decisions": [k.value for k in outcome.decisions],
        "blocked_by_otb": outcome.blocked_by_otb,
    }
