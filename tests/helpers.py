"""Shared test doubles and condition builders for rotalabs-rollout tests.

The fingerprinters here return fixed outputs so that percentile boundaries
can be hit exactly, independent of the production hash function.
"""

from typing import Dict, List, Optional

from rotalabs_rollout.core.config import (
    MicroPercentRange,
    PercentCondition,
    PercentConditionOperator,
    ServerCondition,
)
from rotalabs_rollout.evaluation.evaluator import ConditionEvaluator
from rotalabs_rollout.evaluation.hashing import Fingerprinter


class FixedFingerprinter(Fingerprinter):
    """Returns preset fingerprints and records every hashed string.

    Strings missing from ``values`` get ``default``.
    """

    def __init__(self, default: int = 0, values: Optional[Dict[str, int]] = None):
        self.default = default
        self.values = values or {}
        self.calls: List[str] = []

    def fingerprint64(self, value: str) -> int:
        self.calls.append(value)
        return self.values.get(value, self.default)


class ExplodingFingerprinter(Fingerprinter):
    """Fails the test if any percent condition reaches the hash."""

    def fingerprint64(self, value: str) -> int:
        raise AssertionError(f"fingerprint64 called for {value!r}")


def make_evaluator(percentile: int) -> ConditionEvaluator:
    """Create an evaluator that places every instance at ``percentile``."""
    return ConditionEvaluator(fingerprinter=FixedFingerprinter(default=percentile))


def percent(
    operator=PercentConditionOperator.LESS_OR_EQUAL,
    micro_percent=None,
    lower=None,
    upper=None,
    seed=None,
) -> ServerCondition:
    """Build a percent leaf."""
    micro_percent_range = None
    if lower is not None or upper is not None:
        micro_percent_range = MicroPercentRange(
            micro_percent_lower_bound=lower,
            micro_percent_upper_bound=upper,
        )
    return ServerCondition(
        percent=PercentCondition(
            seed=seed,
            operator=operator,
            micro_percent=micro_percent,
            micro_percent_range=micro_percent_range,
        )
    )


def invalid_percent() -> ServerCondition:
    """Percent leaf whose evaluation always raises RemoteConfigError."""
    return percent(operator=PercentConditionOperator.UNKNOWN, micro_percent=1)
