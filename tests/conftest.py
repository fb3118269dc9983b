"""Pytest fixtures for rotalabs-rollout tests."""

import pytest
from typing import List

from helpers import FixedFingerprinter, percent
from rotalabs_rollout.core.config import NamedCondition, ServerCondition
from rotalabs_rollout.core.context import EvaluationContext
from rotalabs_rollout.evaluation.evaluator import ConditionEvaluator


@pytest.fixture
def context() -> EvaluationContext:
    """Context for a single test instance."""
    return EvaluationContext(id="user1", attributes={"country": "NZ"})


@pytest.fixture
def fixed_fingerprinter() -> FixedFingerprinter:
    return FixedFingerprinter(default=0)


@pytest.fixture
def evaluator(fixed_fingerprinter) -> ConditionEvaluator:
    """Evaluator placing every instance at percentile 0."""
    return ConditionEvaluator(fingerprinter=fixed_fingerprinter)


@pytest.fixture
def template_conditions() -> List[NamedCondition]:
    """Named conditions shaped like a typical rollout template."""
    return [
        NamedCondition(name="always_on", condition=ServerCondition.literal(True)),
        NamedCondition(name="always_off", condition=ServerCondition.literal(False)),
        NamedCondition(
            name="ten_percent",
            condition=ServerCondition.and_(
                ServerCondition.literal(True),
                percent(micro_percent=10_000_000, seed="rollout"),
            ),
        ),
    ]
