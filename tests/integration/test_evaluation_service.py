"""
Integration Tests for the Evaluation Service

End-to-end scenarios from raw intake to report and treatment suggestions.
"""
import pytest

from fertility.core.base import PrognosisCategory
from fertility.core.content import FindingKey, get_clinical_content
from fertility.core.factors.evaluators import MISSING_AMH
from fertility.core.factors.structural import MISSING_HSG
from fertility.services import EvaluationCache, FertilityEvaluationService, evaluate_patient
from fertility.utils import IntakeError


class TestScenarios:
    """Representative patients run through the whole pipeline."""

    def test_ideal_young_patient(self, service, ideal_intake):
        result = service.evaluate(ideal_intake)
        assert result.report.numeric_prognosis == pytest.approx(17.5)
        assert result.report.category == PrognosisCategory.GOOD
        assert result.diagnostics.missing_data == []
        assert result.warnings == []
        assert [t.key for t in result.treatments] == [FindingKey.TREATMENT_TIMED_INTERCOURSE]

    def test_tubal_ligation(self, service, ideal_intake):
        result = service.evaluate({**ideal_intake, "has_otb": "yes", "otb_method": "rings"})
        report = result.report
        assert report.numeric_prognosis == 0.0
        assert report.category == PrognosisCategory.LOW
        assert report.prognosis_phrase == get_clinical_content(FindingKey.TUBAL_LIGATION).explanation
        assert result.interactions["blocked_by_otb"] is True
        assert result.treatments[0].key == FindingKey.TREATMENT_RECANALIZATION

    def test_overweight_suboptimal_tsh(self, service, ideal_intake):
        result = service.evaluate({**ideal_intake, "bmi": 27, "tsh": 3.5})
        assert result.report.numeric_prognosis == pytest.approx(11.9)
        assert result.report.category == PrognosisCategory.MODERATE

    def test_missing_amh_and_hsg(self, service, ideal_intake):
        intake = {k: v for k, v in ideal_intake.items() if k not in ("amh", "hsg_result")}
        result = service.evaluate(intake)
        assert MISSING_AMH in result.diagnostics.missing_data
        assert MISSING_HSG in result.diagnostics.missing_data

    def test_low_reserve_with_male_factor(self, service, ideal_intake):
        result = service.evaluate({**ideal_intake, "age": 38, "amh": 0.9, "sperm_concentration": 3})
        keys = [t.key for t in result.treatments]
        assert FindingKey.TREATMENT_IVF_OVARIAN_RESERVE in keys
        assert FindingKey.TREATMENT_ICSI_MALE_FACTOR in keys
        assert FindingKey.TREATMENT_IUI not in keys
        assert FindingKey.TREATMENT_TIMED_INTERCOURSE not in keys

    def test_messy_intake_is_absorbed(self, service):
        """Garbage fields become warnings, never exceptions."""
        result = service.evaluate({
            "age": "35",
            "bmi": "n/a",
            "amh": -3,
            "tsh": 999,
            "myoma_type": "huge",
            "hsg_result": "normal",
        })
        assert {w.field for w in result.warnings} == {"amh", "tsh", "myoma_type"}
        assert result.report.category in set(PrognosisCategory)
        assert result.treatments

    def test_nan_amh_is_missing(self, service, ideal_intake):
        """A NaN lab value is reported as missing data, not scored."""
        result = service.evaluate({**ideal_intake, "amh": "NaN"})
        assert MISSING_AMH in result.diagnostics.missing_data
        assert result.report.numeric_prognosis == pytest.approx(17.5)
        assert [w.field for w in result.warnings] == ["amh"]


class TestServiceBehaviour:
    """Tests for determinism, caching and error handling."""

    def test_missing_age_raises(self, service):
        with pytest.raises(IntakeError):
            service.evaluate({"bmi": 22})

    def test_idempotent(self, service, ideal_intake):
        first = service.evaluate({**ideal_intake, "has_pcos": True, "bmi": 31})
        second = service.evaluate({**ideal_intake, "has_pcos": True, "bmi": 31})
        assert first.to_dict() == second.to_dict()

    def test_cache_hit_matches_miss(self, ideal_intake):
        cache = EvaluationCache(max_entries=4)
        cached_service = FertilityEvaluationService(cache=cache)
        uncached = FertilityEvaluationService().evaluate(ideal_intake)

        miss = cached_service.evaluate(ideal_intake)
        hit = cached_service.evaluate(ideal_intake)

        assert cache.misses == 1
        assert cache.hits == 1
        assert hit.report is miss.report
        assert hit.to_dict() == miss.to_dict() == uncached.to_dict()

    def test_cached_result_isolated_from_caller(self, ideal_intake):
        """Mutating one returned result never alters later cache hits."""
        intake = {k: v for k, v in ideal_intake.items() if k != "amh"}
        cache = EvaluationCache(max_entries=4)
        cached_service = FertilityEvaluationService(cache=cache)
        expected = FertilityEvaluationService().evaluate(intake).to_dict()

        first = cached_service.evaluate(intake)
        first.diagnostics.missing_data.append("tampered")
        first.diagnostics.comments["bmi"] = "tampered"
        first.diagnostics.recanalization_score = 99.0
        first.interactions["interactions"].append("tampered")

        second = cached_service.evaluate(intake)
        assert cache.hits == 1
        assert "tampered" not in second.diagnostics.missing_data
        assert second.diagnostics.comments.get("bmi") != "tampered"
        assert "tampered" not in second.interactions["interactions"]
        assert second.to_dict() == expected

    def test_warnings_not_cached(self, ideal_intake):
        """Two raw spellings share a cache entry but keep their own warnings."""
        cache = EvaluationCache(max_entries=4)
        clean = evaluate_patient(ideal_intake, cache=cache)
        noisy = evaluate_patient({**ideal_intake, "tsh": "1.8", "polyp_type": "??"}, cache=cache)
        assert clean.warnings == []
        assert [w.field for w in noisy.warnings] == ["polyp_type"]
        assert clean.input_hash == noisy.input_hash
        assert cache.hits == 1

    def test_to_dict_serialisable(self, service, ideal_intake):
        import json

        data = service.evaluate({**ideal_intake, "has_otb": True}).to_dict()
        encoded = json.dumps(data, ensure_ascii=False)
        assert "TUBAL_LIGATION" in encoded
        assert data["report"]["category"] == "LOW"
