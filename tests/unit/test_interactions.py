"""
Unit Tests for the Interaction & Decision Engine

Tests for rule matching, override resolution, the tubal-ligation block and
strategic decision escalation.
"""
import pytest

from fertility.core.clinical import (
    DECISION_RULES,
    INTERACTION_RULES,
    RuleEffect,
    apply_interactions,
    evaluate_decisions,
    registered_rules,
    summarise,
)
from fertility.core.clinical.interactions import between, ge, gt, le, lt
from fertility.core.content.keys import FindingKey
from fertility.core.factors import evaluate_factors


def run(patient):
    evaluation = evaluate_factors(patient)
    return apply_interactions(patient, evaluation.factors, evaluation.raw_prognosis)


class TestComparisons:
    """Tests for the None-safe comparison helpers."""

    def test_none_never_matches(self):
        assert not lt(None, 1)
        assert not le(None, 1)
        assert not gt(None, 1)
        assert not ge(None, 1)
        assert not between(None, 0, 1)

    def test_values(self):
        assert lt(0.2, 0.3)
        assert le(0.3, 0.3)
        assert gt(5, 4)
        assert ge(4, 4)
        assert between(30, 24, 35)


class TestRuleTable:
    """Tests for the static rule tables."""

    def test_rule_counts(self):
        assert len(INTERACTION_RULES) == 20
        assert len(DECISION_RULES) == 4

    def test_caps_never_increase_down_the_table(self):
        """An earlier cap is never looser than a later one (tubal ligation aside)."""
        caps = [r.value for r in INTERACTION_RULES if r.effect == RuleEffect.CAP and r.value > 0]
        assert caps == sorted(caps)

    def test_rule_keys_belong_to_their_table(self):
        keys = registered_rules()
        assert all(k.is_interaction for k in keys["interactions"])
        assert all(k.is_decision for k in keys["decisions"])


class TestApplyInteractions:
    """Tests for numeric resolution."""

    def test_no_rule_fires_for_ideal_profile(self, make_patient):
        outcome = run(make_patient())
        assert outcome.fired == []
        assert outcome.decisions == []
        assert outcome.prognosis == pytest.approx(outcome.raw_prognosis)
        assert outcome.override is None

    def test_cap_lowers_result(self, make_patient):
        """Severe endometriosis with male factor is capped at 2%."""
        outcome = run(make_patient(age=28, endometriosis_grade=3, sperm_concentration=10))
        assert outcome.raw_prognosis == pytest.approx(22.5 * 0.6 * 0.7)
        assert outcome.prognosis == 2.0
        assert outcome.override.key == FindingKey.INT_SEVERE_ENDO_MALE_FACTOR
        assert outcome.pinned_low

    def test_cap_never_raises_result(self, make_patient):
        """The cap is an upper bound; a lower aggregate is kept."""
        outcome = run(make_patient(age=41, amh=0.2, cycle_duration=50))
        assert outcome.override.key == FindingKey.INT_AGE40_OVARIAN_FAILURE
        assert outcome.raw_prognosis == pytest.approx(5.0 * 0.3 * 0.6)
        assert outcome.prognosis == pytest.approx(5.0 * 0.3 * 0.6 * 0.4)

    def test_first_cap_wins(self, make_patient):
        """With several caps matching, the first in table order overrides."""
        outcome = run(make_patient(age=41, amh=0.2, cycle_duration=50, endometriosis_grade=3))
        assert FindingKey.INT_SEVERE_ENDO_AGE_LOW_AMH in outcome.fired_keys
        assert outcome.override.key == FindingKey.INT_AGE40_OVARIAN_FAILURE
        assert outcome.prognosis <= 1.0

    def test_multiplier(self, make_patient):
        outcome = run(make_patient(has_pcos=True, bmi=36.0))
        assert outcome.fired_keys == [FindingKey.INT_PCOS_SEVERE_OBESITY]
        assert outcome.prognosis == pytest.approx(outcome.raw_prognosis * 0.60)

    def test_favorable_multiplier(self, make_patient):
        outcome = run(make_patient(endometriosis_grade=1, amh=2.0))
        assert outcome.fired_keys == [FindingKey.INT_MILD_ENDO_YOUNG_NORMAL_AMH]
        assert outcome.prognosis == pytest.approx(17.5 * 0.85 * 1.10)

    def test_young_pcos_high_amh_raises_result(self, make_patient):
        """Both PCOS favorable multipliers compound above the raw aggregate."""
        outcome = run(make_patient(age=28, has_pcos=True, amh=6.0))
        assert outcome.fired_keys == [
            FindingKey.INT_YOUNG_PCOS_OPTIMAL_MARKERS,
            FindingKey.INT_YOUNG_PCOS_HIGH_RESPONDER,
        ]
        assert outcome.prognosis == pytest.approx(outcome.raw_prognosis * 1.20 * 1.15)
        assert outcome.prognosis > outcome.raw_prognosis

    def test_fired_in_table_order(self, make_patient):
        outcome = run(make_patient(age=41, amh=0.2, cycle_duration=50))
        assert outcome.fired_keys == [
            FindingKey.INT_AGE40_OVARIAN_FAILURE,
            FindingKey.INT_CRITICAL_AMH_AGE,
            FindingKey.INT_AGE_LOW_AMH,
        ]
        assert outcome.subsumes_age

    def test_missing_value_never_fires(self, make_patient):
        """AMH not supplied cannot satisfy a low-AMH condition."""
        outcome = run(make_patient(age=42, amh=None))
        assert FindingKey.INT_CRITICAL_AMH_AGE not in outcome.fired_keys
        assert FindingKey.INT_AGE_LOW_AMH not in outcome.fired_keys

    def test_tubal_ligation_blocks_numeric_changes(self, make_patient):
        """Rules still fire, but the number stays at the OTB result."""
        outcome = run(make_patient(age=39, has_otb=True))
        assert outcome.blocked_by_otb
        assert outcome.prognosis == 0.0
        assert outcome.override is None
        assert FindingKey.INT_TUBAL_LIGATION_ADVANCED_AGE in outcome.fired_keys
        assert FindingKey.DECISION_IVF_TUBAL_FACTOR in outcome.decisions

    def test_summarise(self, make_patient):
        summary = summarise(run(make_patient(age=28, endometriosis_grade=4, sperm_concentration=3)))
        assert summary["override"] == "INT_SEVERE_ENDO_MALE_FACTOR"
        assert summary["decisions"] == ["DECISION_IVF_SEVERE_ENDO_MALE", "DECISION_ESCALATE_IVF"]
        assert summary["blocked_by_otb"] is False


class TestMonotonicity:
    """Worsening one finding never improves the result."""

    @pytest.mark.parametrize("overrides", [
        {},
        {"age": 41, "amh": 0.8, "sperm_concentration": 10},
        {"age": 28, "sperm_concentration": 10},
        {"myoma_type": "submucosal"},
        {"age": 38, "amh": 0.9},
    ])
    def test_endometriosis_grade(self, make_patient, overrides):
        results = [run(make_patient(endometriosis_grade=g, **overrides)).prognosis for g in range(5)]
        assert all(later <= earlier + 1e-9 for earlier, later in zip(results, results[1:]))

    @pytest.mark.parametrize("amh", [3.0, 1.5, 0.9, 0.6, 0.4, 0.2])
    def test_adding_male_factor(self, make_patient, amh):
        normal = run(make_patient(amh=amh, endometriosis_grade=3)).prognosis
        altered = run(make_patient(amh=amh, endometriosis_grade=3, sperm_concentration=10)).prognosis
        assert altered <= normal


class TestDecisions:
    """Tests for strategic decision escalation."""

    def test_no_decision(self, make_patient):
        patient = make_patient()
        assert evaluate_decisions(patient, evaluate_factors(patient).factors) == []

    def test_multiple_decisions_single_escalation(self, make_patient):
        """Every fired decision is reported; escalation appears once, last."""
        patient = make_patient(age=41, amh=0.5, hsg_result="bilateral")
        decisions = evaluate_decisions(patient, evaluate_factors(patient).factors)
        assert decisions == [
            FindingKey.DECISION_IVF_AGE_AMH_CRITICAL,
            FindingKey.DECISION_IVF_TUBAL_FACTOR,
            FindingKey.DECISION_ESCALATE_IVF,
        ]

    def test_pcos_metabolic(self, make_patient):
        patient = make_patient(has_pcos=True, homa_ir=4.5, cycle_duration=70, prolactin=60)
        decisions = evaluate_decisions(patient, evaluate_factors(patient).factors)
        assert FindingKey.DECISION_IVF_PCOS_METABOLIC in decisions

    def test_decisions_do_not_change_number(self, make_patient):
        outcome = run(make_patient(hsg_result="bilateral"))
        assert outcome.decisions
        assert outcome.prognosis == outcome.raw_prognosis == 0.0
