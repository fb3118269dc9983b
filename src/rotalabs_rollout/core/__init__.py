"""Core module for rotalabs-rollout.

This module provides the condition tree, evaluation context and error types
used by condition evaluation.
"""

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

__all__ = [
    "AndCondition",
    "MicroPercentRange",
    "NamedCondition",
    "OrCondition",
    "PercentCondition",
    "PercentConditionOperator",
    "ServerCondition",
    "EvaluationContext",
    "FAILED_PRECONDITION",
    "RemoteConfigError",
]
