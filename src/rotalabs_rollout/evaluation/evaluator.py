"""
Condition evaluator for remote config server templates.

This module decides, for one instance, which named conditions of a template
hold. It supports:
- Composite conditions (OR, AND) with short-circuit evaluation
- Boolean literals (TRUE, FALSE)
- Percent conditions (LESS_OR_EQUAL, GREATER_THAN, BETWEEN) over a seeded,
  deterministic micro-percentile of the instance id

Malformed nodes and trees nested deeper than MAX_CONDITION_RECURSION_DEPTH
evaluate to False. Malformed percent conditions raise RemoteConfigError and
abort the whole batch.
"""

import logging
from numbers import Real
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from rotalabs_rollout.core.config import (
    AndCondition,
    NamedCondition,
    OrCondition,
    PercentCondition,
    PercentConditionOperator,
    ServerCondition,
)
from rotalabs_rollout.core.context import EvaluationContext
from rotalabs_rollout.core.errors import FAILED_PRECONDITION, RemoteConfigError
from rotalabs_rollout.evaluation.hashing import FarmHashFingerprinter, Fingerprinter

logger = logging.getLogger(__name__)

ContextLike = Union[EvaluationContext, Mapping[str, Any]]


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


class ConditionEvaluator:
    """
    Evaluates named server conditions against an instance context.

    The evaluator keeps no per-call state: nesting depth is passed down the
    recursion, so one instance can be shared between threads.

    Examples:
        >>> evaluator = ConditionEvaluator()
        >>> conditions = [
        ...     {"name": "everyone", "condition": {"true": {}}},
        ...     {"name": "nobody", "condition": {"or": {"conditions": []}}},
        ... ]
        >>> evaluator.evaluate_conditions(conditions, {"id": "instance-1"})
        {'everyone': True, 'nobody': False}
    """

    MAX_CONDITION_RECURSION_DEPTH = 10
    MICRO_PERCENT_MODULUS = 100 * 1_000_000

    def __init__(self, fingerprinter: Optional[Fingerprinter] = None):
        """Initialize the evaluator.

        Args:
            fingerprinter: 64-bit string fingerprint used for percent
                conditions. Defaults to FarmHash Fingerprint64.
        """
        self.fingerprinter = fingerprinter or FarmHashFingerprinter()
        logger.debug(
            "ConditionEvaluator initialized",
            extra={"fingerprinter": repr(self.fingerprinter)}
        )

    def evaluate_conditions(
        self,
        named_conditions: Iterable[Union[NamedCondition, Mapping[str, Any]]],
        context: ContextLike,
    ) -> Dict[str, bool]:
        """
        Evaluate every named condition for one instance.

        The order of the conditions is significant; the returned dict keeps
        it. A RemoteConfigError raised by any condition propagates and no
        results are returned.

        Args:
            named_conditions: NamedCondition objects or their dict form
            context: EvaluationContext or mapping with an ``id`` field

        Returns:
            Dict mapping condition name to result, in input order

        Raises:
            RemoteConfigError: If a percent condition is malformed or the
                context has no id
        """
        context = EvaluationContext.coerce(context)
        evaluated_conditions: Dict[str, bool] = {}

        for named_condition in named_conditions:
            if not isinstance(named_condition, NamedCondition):
                named_condition = NamedCondition.from_dict(named_condition)

            evaluated_conditions[named_condition.name] = self.evaluate_condition(
                named_condition.condition, context
            )

        logger.debug(
            "Evaluated named conditions",
            extra={"count": len(evaluated_conditions), "instance_id": context.id}
        )

        return evaluated_conditions

    def evaluate_condition(
        self,
        condition: Union[ServerCondition, Mapping[str, Any]],
        context: ContextLike,
        nesting_level: int = 0,
    ) -> bool:
        """
        Evaluate a single condition tree.

        Variants are checked in the order OR, AND, TRUE, FALSE, PERCENT; the
        first one set decides the node. A node with none of them set is
        unknown and evaluates to False. Dict conditions are converted with
        ServerCondition.from_dict.

        Args:
            condition: Root of the tree to evaluate, or its dict form
            context: EvaluationContext or mapping with an ``id`` field
            nesting_level: Depth of ``condition`` in the enclosing tree

        Returns:
            True if the condition holds for the instance, False otherwise
        """
        if nesting_level >= self.MAX_CONDITION_RECURSION_DEPTH:
            logger.warning(
                "Evaluating condition to false because it exceeded maximum depth",
                extra={"max_depth": self.MAX_CONDITION_RECURSION_DEPTH}
            )
            return False

        if not isinstance(condition, ServerCondition):
            condition = ServerCondition.from_dict(condition)

        if condition.or_condition is not None:
            return self._evaluate_or_condition(condition.or_condition, context, nesting_level)
        if condition.and_condition is not None:
            return self._evaluate_and_condition(condition.and_condition, context, nesting_level)
        if condition.true:
            return True
        if condition.false:
            return False
        if condition.percent is not None:
            return self.evaluate_percent_condition(condition.percent, context)

        unknown_condition = condition.to_dict()
        logger.info(
            "Evaluating unknown condition %s to false",
            unknown_condition,
            extra={"condition": unknown_condition}
        )
        return False

    def _evaluate_or_condition(
        self,
        or_condition: OrCondition,
        context: ContextLike,
        nesting_level: int,
    ) -> bool:
        # Short-circuit: stop at first True
        for sub_condition in or_condition.conditions or []:
            if self.evaluate_condition(sub_condition, context, nesting_level + 1):
                return True
        return False

    def _evaluate_and_condition(
        self,
        and_condition: AndCondition,
        context: ContextLike,
        nesting_level: int,
    ) -> bool:
        # Short-circuit: stop at first False
        for sub_condition in and_condition.conditions or []:
            if not self.evaluate_condition(sub_condition, context, nesting_level + 1):
                return False
        return True

    def evaluate_percent_condition(
        self,
        percent_condition: PercentCondition,
        context: ContextLike,
    ) -> bool:
        """
        Evaluate a percent condition for the instance in ``context``.

        The instance is placed in a micro-percentile in [0, 100_000_000) by
        fingerprinting ``"<seed>.<id>"`` (or just ``id`` without a seed).
        BETWEEN excludes the lower bound and includes the upper bound.

        Args:
            percent_condition: Condition to evaluate
            context: EvaluationContext or mapping with an ``id`` field

        Returns:
            True if the instance falls in the selected range

        Raises:
            RemoteConfigError: If the operator is missing or unusable, a
                required threshold is missing, or the context has no id
        """
        operator = percent_condition.operator
        if not operator:
            raise RemoteConfigError(
                FAILED_PRECONDITION,
                "invalid operator in remote config server condition"
            )

        instance_id = EvaluationContext.coerce(context).id
        if not instance_id:
            raise RemoteConfigError(
                FAILED_PRECONDITION,
                'context argument is missing an "id" field.'
            )

        percentile = self.instance_micro_percentile(percent_condition.seed, instance_id)
        micro_percent = percent_condition.micro_percent
        micro_percent_range = percent_condition.micro_percent_range

        if operator == PercentConditionOperator.LESS_OR_EQUAL:
            if _is_number(micro_percent):
                return percentile <= micro_percent

        elif operator == PercentConditionOperator.GREATER_THAN:
            if _is_number(micro_percent):
                return percentile > micro_percent

        elif operator == PercentConditionOperator.BETWEEN:
            if (
                micro_percent_range is not None
                and _is_number(micro_percent_range.micro_percent_lower_bound)
                and _is_number(micro_percent_range.micro_percent_upper_bound)
            ):
                return (
                    micro_percent_range.micro_percent_lower_bound
                    < percentile
                    <= micro_percent_range.micro_percent_upper_bound
                )

        logger.debug(
            "Percent condition cannot be evaluated",
            extra={"condition": percent_condition.to_dict()}
        )
        raise RemoteConfigError(
            FAILED_PRECONDITION,
            "invalid operator in remote config server condition"
        )

    def instance_micro_percentile(self, seed: Optional[str], instance_id: str) -> int:
        """
        Compute the micro-percentile of an instance for a seed.

        Args:
            seed: Condition seed; empty or None means unsalted
            instance_id: Instance identifier

        Returns:
            Integer in [0, 99_999_999]
        """
        seed_prefix = f"{seed}." if seed else ""
        string_to_hash = f"{seed_prefix}{instance_id}"
        hash64 = self.fingerprinter.fingerprint64(string_to_hash)
        return hash64 % self.MICRO_PERCENT_MODULUS
