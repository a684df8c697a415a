"""
Clinical Interaction Layer

Non-linear interaction overrides and strategic decision rules applied on top
of the aggregated factor product.
"""
from .interactions import INTERACTION_RULES, InteractionRule, RuleEffect
from .decisions import DECISION_RULES, DecisionRule, evaluate_decisions
from .engine import InteractionOutcome, apply_interactions, registered_rules, summarise

__all__ = [
    "INTERACTION_RULES",
    "InteractionRule",
    "RuleEffect",
    "DECISION_RULES",
    "DecisionRule",
    "evaluate_decisions",
    "InteractionOutcome",
    "apply_interactions",
    "registered_rules",
    "summarise",
]
