"""
Pytest Configuration and Fixtures

Shared fixtures for the fertility evaluation pipeline tests.
"""
import pytest
from pathlib import Path
from typing import Any, Callable, Dict
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fertility.core.base import PatientInput
from fertility.core.validation import normalize_input
from fertility.services import EvaluationCache, FertilityEvaluationService


@pytest.fixture
def ideal_intake() -> Dict[str, Any]:
    """Age 30, normal BMI and cycle, no pathology, complete labs."""
    return {
        "age": 30,
        "bmi": 22.0,
        "cycle_duration": 28,
        "infertility_duration": 1,
        "hsg_result": "normal",
        "amh": 2.5,
        "prolactin": 12.0,
        "tsh": 1.8,
        "homa_ir": 1.5,
        "sperm_concentration": 50.0,
        "sperm_progressive_motility": 45.0,
        "sperm_normal_morphology": 6.0,
    }


@pytest.fixture
def make_patient(ideal_intake) -> Callable[..., PatientInput]:
    """Factory building a normalized patient from the ideal intake plus overrides."""
    def _make(**overrides: Any) -> PatientInput:
        return normalize_input({**ideal_intake, **overrides}).patient
    return _make


@pytest.fixture
def service() -> FertilityEvaluationService:
    """Evaluation service without a cache."""
    return FertilityEvaluationService()


@pytest.fixture
def cache() -> EvaluationCache:
    """Small, empty evaluation cache."""
    return EvaluationCache(max_entries=8)
