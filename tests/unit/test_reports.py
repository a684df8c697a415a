"""
Unit Tests for Prognosis Reports

Tests for classification, categorical short-circuits, benchmark phrasing,
finding order and the clinical content library.
"""
import pytest

from fertility.core.base import PrognosisCategory
from fertility.core.clinical import apply_interactions
from fertility.core.content import (
    CLINICAL_CONTENT,
    FindingKey,
    benchmark_for_age,
    compare_to_benchmark,
    get_clinical_content,
)
from fertility.core.factors import evaluate_factors
from fertility.core.reports import (
    CATEGORY_EMOJI,
    build_finding,
    classify_prognosis,
    cumulative_probability,
    generate_report,
)
from fertility.core.reports.prognosis_report import BENCHMARK_NOT_APPLICABLE
from fertility.utils import ContentLookupError


def report_for(patient):
    evaluation = evaluate_factors(patient)
    outcome = apply_interactions(patient, evaluation.factors, evaluation.raw_prognosis)
    return generate_report(patient, evaluation, outcome)


class TestClassification:
    """Tests for the category thresholds."""

    @pytest.mark.parametrize("value,expected", [
        (25.0, PrognosisCategory.GOOD),
        (15.0, PrognosisCategory.GOOD),
        (14.99, PrognosisCategory.MODERATE),
        (5.0, PrognosisCategory.MODERATE),
        (4.99, PrognosisCategory.LOW),
        (0.0, PrognosisCategory.LOW),
    ])
    def test_thresholds(self, value, expected):
        assert classify_prognosis(value) == expected

    def test_cumulative_probability(self):
        assert cumulative_probability(0.0) == 0.0
        assert cumulative_probability(100.0) == 100.0
        assert cumulative_probability(20.0, cycles=1) == pytest.approx(20.0)
        assert cumulative_probability(17.5) > 17.5


class TestBenchmarks:
    """Tests for the population comparison."""

    @pytest.mark.parametrize("age,expected", [(25, 22.5), (30, 17.5), (36, 12.5), (40, 7.5), (42, 3.5), (45, 1.0)])
    def test_age_bands(self, age, expected):
        assert benchmark_for_age(age) == expected

    def test_similar(self):
        assert "similar to" in compare_to_benchmark(17.5, 30)
        assert "similar to" in compare_to_benchmark(15.5, 30)

    def test_above_and_below(self):
        assert "notably below" in compare_to_benchmark(10.0, 30)
        assert "notably above" in compare_to_benchmark(20.0, 36)

    def test_phrase_shows_average(self):
        assert compare_to_benchmark(17.5, 30).endswith("(17.5% per cycle).")


class TestGenerateReport:
    """Tests for full report assembly."""

    def test_ideal_profile(self, make_patient):
        report = report_for(make_patient())
        assert report.numeric_prognosis == pytest.approx(17.5)
        assert report.category == PrognosisCategory.GOOD
        assert report.emoji == CATEGORY_EMOJI[PrognosisCategory.GOOD]
        assert "17.5% per cycle" in report.prognosis_phrase
        assert "similar to" in report.benchmark_phrase
        assert report.override_key is None

    def test_age_finding_first(self, make_patient):
        report = report_for(make_patient(bmi=27.0, tsh=3.5))
        keys = [f.key for f in report.clinical_insights]
        assert keys == [FindingKey.AGE_GOOD, FindingKey.BMI_OVERWEIGHT, FindingKey.TSH_SUBOPTIMAL]
        assert report.category == PrognosisCategory.MODERATE
        assert report.display_prognosis == 11.9

    def test_tubal_ligation_short_circuit(self, make_patient):
        """OTB forces LOW with the ligation explanation as the phrase."""
        report = report_for(make_patient(has_otb=True))
        assert report.numeric_prognosis == 0.0
        assert report.category == PrognosisCategory.LOW
        assert report.prognosis_phrase == get_clinical_content(FindingKey.TUBAL_LIGATION).explanation
        assert report.benchmark_phrase == BENCHMARK_NOT_APPLICABLE

    def test_tubal_ligation_beats_other_overrides(self, make_patient):
        """The ligation phrase wins even when an interaction cap also fires."""
        report = report_for(make_patient(has_otb=True, age=41, amh=0.2, cycle_duration=50))
        assert report.prognosis_phrase == get_clinical_content(FindingKey.TUBAL_LIGATION).explanation
        assert report.override_key is None

    def test_pinned_low_override(self, make_patient):
        """A cap at or below 3% uses the override's explanation."""
        report = report_for(make_patient(age=41, amh=0.2, cycle_duration=50))
        assert report.category == PrognosisCategory.LOW
        assert report.override_key == FindingKey.INT_AGE40_OVARIAN_FAILURE
        assert report.prognosis_phrase == get_clinical_content(FindingKey.INT_AGE40_OVARIAN_FAILURE).explanation

    def test_age_subsumed_by_interaction(self, make_patient):
        """An age-related interaction replaces the stand-alone age finding."""
        report = report_for(make_patient(age=41, amh=0.2, cycle_duration=50))
        keys = [f.key for f in report.clinical_insights]
        assert FindingKey.AGE_LOW not in keys
        assert keys[-2:] == [FindingKey.DECISION_IVF_AGE_AMH_CRITICAL, FindingKey.DECISION_ESCALATE_IVF]

    def test_findings_unique(self, make_patient):
        report = report_for(make_patient(age=41, amh=0.3, hsg_result="bilateral", endometriosis_grade=4))
        keys = [f.key for f in report.clinical_insights]
        assert len(keys) == len(set(keys))
        assert keys.count(FindingKey.DECISION_ESCALATE_IVF) == 1

    def test_full_precision_kept(self, make_patient):
        report = report_for(make_patient(bmi=27.0, tsh=3.5))
        assert report.numeric_prognosis == pytest.approx(17.5 * 0.85 * 0.8)
        assert report.to_dict()["display_prognosis"] == 11.9


class TestClinicalContent:
    """Tests for the static content library."""

    def test_total_over_keys(self):
        """Every finding key has content."""
        assert set(CLINICAL_CONTENT) == set(FindingKey)

    def test_content_fields_populated(self):
        for key, content in CLINICAL_CONTENT.items():
            assert content.title, key
            assert content.explanation, key

    def test_lookup_by_string(self):
        assert get_clinical_content("AMH_LOW") is CLINICAL_CONTENT[FindingKey.AMH_LOW]

    def test_unknown_key_raises(self):
        with pytest.raises(ContentLookupError) as exc_info:
            get_clinical_content("NOT_A_KEY")
        assert exc_info.value.code == "CONTENT_ERROR"
        assert exc_info.value.key == "NOT_A_KEY"

    def test_build_finding(self):
        finding = build_finding(FindingKey.HSG_BILATERAL)
        assert finding.title == CLINICAL_CONTENT[FindingKey.HSG_BILATERAL].title
        assert finding.to_dict()["key"] == "HSG_BILATERAL"
