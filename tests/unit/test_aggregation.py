"""
Unit Tests for Factor Aggregation

Tests for the evaluator registry, missing-data reporting and the
multiplicative aggregate.
"""
import pytest

from fertility.core.base import FactorSet
from fertility.core.content.keys import FindingKey
from fertility.core.factors import aggregate, evaluate_factors
from fertility.core.factors.evaluators import MISSING_AMH, MISSING_BMI, MISSING_SEMEN
from fertility.core.factors.structural import MISSING_HSG
from fertility.core.validation import normalize_input


class TestEvaluateFactors:
    """Tests for the full evaluator pass."""

    def test_ideal_profile(self, make_patient):
        """No pathology and complete data gives the age baseline unchanged."""
        evaluation = evaluate_factors(make_patient())
        assert evaluation.factors.base_age_probability == 17.5
        assert all(w == 1.0 for w in evaluation.factors.weights().values())
        assert evaluation.raw_prognosis == pytest.approx(17.5)
        assert evaluation.diagnostics.missing_data == []

    def test_factors_compound(self, make_patient):
        """Overweight and suboptimal TSH multiply into the baseline."""
        evaluation = evaluate_factors(make_patient(bmi=27.0, tsh=3.5))
        assert evaluation.factors.bmi == 0.85
        assert evaluation.factors.tsh == 0.8
        assert evaluation.raw_prognosis == pytest.approx(17.5 * 0.85 * 0.8)

    def test_missing_amh_and_hsg(self, make_patient):
        """Load-bearing gaps are reported in evaluation order."""
        evaluation = evaluate_factors(make_patient(amh=None, hsg_result="unknown"))
        assert evaluation.diagnostics.missing_data == [MISSING_HSG, MISSING_AMH]
        assert evaluation.factors.amh == 1.0
        assert evaluation.factors.hsg == 1.0

    def test_age_only_intake(self):
        """Age alone is enough to evaluate; every load-bearing field is listed."""
        patient = normalize_input({"age": 30}).patient
        evaluation = evaluate_factors(patient)
        assert set(evaluation.diagnostics.missing_data) == {
            MISSING_BMI, MISSING_HSG, MISSING_AMH, MISSING_SEMEN,
        }
        assert evaluation.raw_prognosis == pytest.approx(17.5)

    def test_unmeasured_labs_not_missing(self, make_patient):
        evaluation = evaluate_factors(make_patient(prolactin=None, tsh=None, homa_ir=None, cycle_duration=None))
        assert evaluation.diagnostics.missing_data == []

    def test_finding_keys_collected(self, make_patient):
        evaluation = evaluate_factors(make_patient(myoma_type="submucosal", amh=0.7))
        keys = evaluation.diagnostics.finding_keys
        assert keys["base_age_probability"] == FindingKey.AGE_GOOD
        assert keys["myoma"] == FindingKey.MYOMA_SUBMUCOSAL
        assert keys["amh"] == FindingKey.AMH_LOW

    def test_tubal_ligation_sets_score(self, make_patient):
        """OTB zeroes the aggregate and records the reversal score."""
        evaluation = evaluate_factors(make_patient(has_otb=True, otb_method="clips", remaining_tube_length=6))
        assert evaluation.factors.otb == 0.0
        assert evaluation.raw_prognosis == 0.0
        assert evaluation.diagnostics.recanalization_score == pytest.approx(0.8)
        assert evaluation.diagnostics.finding_keys["otb"] == FindingKey.TUBAL_LIGATION

    def test_deterministic(self, make_patient):
        """The same input always produces the same output."""
        first = evaluate_factors(make_patient(bmi=31, has_pcos=True))
        second = evaluate_factors(make_patient(bmi=31, has_pcos=True))
        assert first.factors == second.factors
        assert first.diagnostics.to_dict() == second.diagnostics.to_dict()


class TestAggregate:
    """Tests for the multiplicative aggregate."""

    def test_default_set_is_zero(self):
        assert aggregate(FactorSet()) == 0.0

    def test_product(self):
        factors = FactorSet(base_age_probability=20.0, bmi=0.5, amh=0.5)
        assert aggregate(factors) == pytest.approx(5.0)

    def test_clamped_to_percentage(self):
        factors = FactorSet(base_age_probability=250.0)
        assert aggregate(factors) == 100.0

    def test_returns_plain_float(self):
        assert type(aggregate(FactorSet(base_age_probability=10.0))) is float
