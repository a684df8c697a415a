"""
Unit Tests for Treatment Suggestions

Tests for the reversal candidacy, high/low complexity indications, the
consultation fallback and complexity ranking.
"""
import pytest

from fertility.core.base import TreatmentCategory
from fertility.core.content.keys import FindingKey
from fertility.core.factors import evaluate_factors
from fertility.core.treatment import (
    ReversalCandidacy,
    has_good_profile,
    needs_icsi,
    reversal_candidacy,
    suggest_treatments,
    total_motile_sperm_count,
)


def suggest(patient):
    evaluation = evaluate_factors(patient)
    return suggest_treatments(patient, evaluation.factors, evaluation.diagnostics)


def keys_of(suggestions):
    return [s.key for s in suggestions]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def ligated(make_patient):
    """Factory for a patient with a tubal ligation."""
    def _make(**overrides):
        values = {"has_otb": True, "otb_method": "clips", "remaining_tube_length": 6.0}
        values.update(overrides)
        return make_patient(**values)
    return _make


class TestReversalCandidacy:
    """Tests for tubal reversal classification."""

    def test_candidate(self, ligated):
        patient = ligated()
        assert reversal_candidacy(patient, evaluate_factors(patient).factors) == ReversalCandidacy.CANDIDATE

    @pytest.mark.parametrize("overrides", [
        {"age": 41},
        {"otb_method": "partial_salpingectomy"},
        {"remaining_tube_length": 3.0},
        {"endometriosis_grade": 2},
        {"sperm_concentration": 10.0},
    ])
    def test_poor(self, ligated, overrides):
        patient = ligated(**overrides)
        assert reversal_candidacy(patient, evaluate_factors(patient).factors) == ReversalCandidacy.POOR

    @pytest.mark.parametrize("overrides", [
        {"otb_method": "unknown"},
        {"age": 38},
        {"has_other_infertility_factors": True},
    ])
    def test_inconclusive(self, ligated, overrides):
        patient = ligated(**overrides)
        assert reversal_candidacy(patient, evaluate_factors(patient).factors) == ReversalCandidacy.INCONCLUSIVE


class TestSemenHelpers:
    """Tests for TMSC and the ICSI indication."""

    def test_tmsc(self, make_patient):
        patient = make_patient(semen_volume=2.0, sperm_concentration=10.0, sperm_progressive_motility=20.0)
        assert total_motile_sperm_count(patient) == pytest.approx(4.0)
        assert needs_icsi(patient)

    def test_tmsc_requires_volume(self, make_patient):
        assert total_motile_sperm_count(make_patient()) is None

    def test_normal_semen(self, make_patient):
        assert not needs_icsi(make_patient())

    def test_missing_semen_is_not_icsi(self, make_patient):
        patient = make_patient(
            sperm_concentration=None, sperm_progressive_motility=None, sperm_normal_morphology=None
        )
        assert not needs_icsi(patient)


class TestSuggestTreatments:
    """Tests for the full treatment cascade."""

    def test_ovarian_reserve_and_male_factor(self, make_patient):
        """Age 38 with low AMH and severe oligozoospermia: IVF and ICSI, nothing low-complexity."""
        suggestions = suggest(make_patient(age=38, amh=0.9, sperm_concentration=3.0))
        keys = keys_of(suggestions)
        assert keys == [FindingKey.TREATMENT_IVF_OVARIAN_RESERVE, FindingKey.TREATMENT_ICSI_MALE_FACTOR]
        assert FindingKey.TREATMENT_IUI not in keys
        assert FindingKey.TREATMENT_TIMED_INTERCOURSE not in keys

    def test_reversal_candidate(self, ligated):
        suggestions = suggest(ligated())
        assert keys_of(suggestions) == [FindingKey.TREATMENT_RECANALIZATION]
        assert suggestions[0].category == TreatmentCategory.SURGICAL
        assert "Reversal prognosis score: 0.80." in suggestions[0].details

    def test_reversal_suppresses_tubal_ivf(self, ligated):
        """Suggested reversal and IVF for tubal obstruction never appear together."""
        keys = keys_of(suggest(ligated(hsg_result="bilateral")))
        assert FindingKey.TREATMENT_RECANALIZATION in keys
        assert FindingKey.TREATMENT_IVF_TUBAL not in keys

    def test_poor_candidate(self, ligated):
        keys = keys_of(suggest(ligated(age=41)))
        assert keys == [
            FindingKey.TREATMENT_IVF_RECANALIZATION_POOR,
            FindingKey.TREATMENT_IVF_OVARIAN_RESERVE,
        ]

    def test_ranked_by_complexity(self, ligated):
        """High-complexity options come before further study."""
        suggestions = suggest(ligated(age=38, otb_method="unknown"))
        assert keys_of(suggestions) == [
            FindingKey.TREATMENT_IVF_OVARIAN_RESERVE,
            FindingKey.TREATMENT_RECANALIZATION_WORKUP,
        ]
        ranks = [s.category.complexity_rank for s in suggestions]
        assert ranks == sorted(ranks, reverse=True)

    def test_bilateral_obstruction(self, make_patient):
        assert keys_of(suggest(make_patient(hsg_result="bilateral"))) == [FindingKey.TREATMENT_IVF_TUBAL]

    def test_egg_donation(self, make_patient):
        keys = keys_of(suggest(make_patient(age=44, amh=0.3)))
        assert keys == [FindingKey.TREATMENT_IVF_OVARIAN_RESERVE, FindingKey.TREATMENT_EGG_DONATION]

    def test_icsi_details_include_tmsc(self, make_patient):
        suggestions = suggest(make_patient(semen_volume=2.0, sperm_concentration=10.0, sperm_progressive_motility=20.0))
        assert keys_of(suggestions) == [FindingKey.TREATMENT_ICSI_MALE_FACTOR]
        assert "Total motile sperm count: 4.0 million." in suggestions[0].details

    def test_unilateral_young(self, make_patient):
        assert keys_of(suggest(make_patient(hsg_result="unilateral"))) == [FindingKey.TREATMENT_IUI]

    @pytest.mark.parametrize("years", [None, 1])
    def test_timed_intercourse(self, make_patient, years):
        """Good profile and short infertility: expectant management with timing."""
        patient = make_patient(infertility_duration=years)
        assert has_good_profile(patient, evaluate_factors(patient).factors)
        assert keys_of(suggest(patient)) == [FindingKey.TREATMENT_TIMED_INTERCOURSE]

    def test_consultation_fallback(self, make_patient):
        """Nothing triggered: refer to a specialist."""
        suggestions = suggest(make_patient(infertility_duration=3))
        assert keys_of(suggestions) == [FindingKey.TREATMENT_SPECIALIST_CONSULTATION]
        assert suggestions[0].category == TreatmentCategory.CONSULTATION

    def test_never_empty(self, make_patient):
        assert suggest(make_patient(age=36, hsg_result="unknown"))

    def test_suggestion_to_dict(self, make_patient):
        data = suggest(make_patient(hsg_result="bilateral"))[0].to_dict()
        assert data["key"] == "TREATMENT_IVF_TUBAL"
        assert data["category"] == "high_complexity"
        assert data["source"]
