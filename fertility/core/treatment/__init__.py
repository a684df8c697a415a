"""
Treatment Module - ranked treatment suggestions
"""
from .suggester import (
    suggest_treatments,
    reversal_candidacy,
    ReversalCandidacy,
    needs_icsi,
    total_motile_sperm_count,
    has_good_profile,
)

__all__ = [
    "suggest_treatments",
    "reversal_candidacy",
    "ReversalCandidacy",
    "needs_icsi",
    "total_motile_sperm_count",
    "has_good_profile",
]
