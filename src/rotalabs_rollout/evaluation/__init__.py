"""
Evaluation module for rotalabs-rollout.

This module provides condition evaluation and the stable fingerprints used for
percentile bucketing.
"""

from rotalabs_rollout.evaluation.evaluator import ConditionEvaluator
from rotalabs_rollout.evaluation.hashing import FarmHashFingerprinter, Fingerprinter

__all__ = ["ConditionEvaluator", "Fingerprinter", "FarmHashFingerprinter"]
