"""
rotalabs-rollout - Server-side condition evaluation for remote config rollouts.

Decides per instance which named targeting conditions hold, with deterministic
percentage bucketing that agrees across services.

https://rotalabs.ai
"""

__version__ = "0.1.0"

from rotalabs_rollout.core.config import (
    AndCondition,
    MicroPercentRange,
    NamedCondition,
    OrCondition,
    PercentCondition,
    PercentConditionOperator,
    ServerCondition,
)
from rotalabs_rollout.core.context import EvaluationContext
from rotalabs_rollout.core.errors import FAILED_PRECONDITION, RemoteConfigError
from rotalabs_rollout.evaluation.evaluator import ConditionEvaluator
from rotalabs_rollout.evaluation.hashing import FarmHashFingerprinter, Fingerprinter

__all__ = [
    # Version
    "__version__",
    # Conditions
    "ServerCondition",
    "NamedCondition",
    "OrCondition",
    "AndCondition",
    "PercentCondition",
    "PercentConditionOperator",
    "MicroPercentRange",
    # Context
    "EvaluationContext",
    # Errors
    "RemoteConfigError",
    "FAILED_PRECONDITION",
    # Evaluation
    "ConditionEvaluator",
    "Fingerprinter",
    "FarmHashFingerprinter",
]
