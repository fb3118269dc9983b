"""Condition tree classes for remote config targeting.

This module defines the server condition grammar evaluated per instance:
OR/AND composites, boolean literals and percentage-bucket membership, plus
the named conditions that wrap them. Every class converts to and from the
dictionary shape produced by the remote config template API.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

_VARIANT_KEYS = ("or", "and", "true", "false", "percent")


class PercentConditionOperator(str, Enum):
    """Operators for percent conditions."""

    UNKNOWN = "UNKNOWN"
    LESS_OR_EQUAL = "LESS_OR_EQUAL"
    GREATER_THAN = "GREATER_THAN"
    BETWEEN = "BETWEEN"


@dataclass
class MicroPercentRange:
    """Micro-percent bounds for the BETWEEN operator.

    Attributes:
        micro_percent_lower_bound: Exclusive lower bound.
        micro_percent_upper_bound: Inclusive upper bound.
    """

    micro_percent_lower_bound: Optional[Union[int, float]] = None
    micro_percent_upper_bound: Optional[Union[int, float]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert range to dictionary."""
        result = {}
        if self.micro_percent_lower_bound is not None:
            result["microPercentLowerBound"] = self.micro_percent_lower_bound
        if self.micro_percent_upper_bound is not None:
            result["microPercentUpperBound"] = self.micro_percent_upper_bound
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MicroPercentRange":
        """Create range from dictionary."""
        return cls(
            micro_percent_lower_bound=data.get("microPercentLowerBound"),
            micro_percent_upper_bound=data.get("microPercentUpperBound"),
        )


@dataclass
class PercentCondition:
    """Percentage-bucket membership condition.

    Attributes:
        seed: Optional salt prepended to the instance id before hashing.
        operator: Comparison applied to the instance micro-percentile.
        micro_percent: Threshold for LESS_OR_EQUAL and GREATER_THAN.
        micro_percent_range: Bounds for BETWEEN.
    """

    seed: Optional[str] = None
    operator: Optional[Union[str, PercentConditionOperator]] = None
    micro_percent: Optional[Union[int, float]] = None
    micro_percent_range: Optional[MicroPercentRange] = None

    def __post_init__(self):
        """Normalize the operator to the enum where possible."""
        if self.operator and not isinstance(self.operator, PercentConditionOperator):
            try:
                self.operator = PercentConditionOperator(self.operator)
            except ValueError:
                self.operator = PercentConditionOperator.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        """Convert percent condition to dictionary."""
        result = {}
        if self.seed is not None:
            result["seed"] = self.seed
        if self.operator is not None:
            result["operator"] = (
                self.operator.value if isinstance(self.operator, PercentConditionOperator) else self.operator
            )
        if self.micro_percent is not None:
            result["microPercent"] = self.micro_percent
        if self.micro_percent_range is not None:
            result["microPercentRange"] = self.micro_percent_range.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PercentCondition":
        """Create percent condition from dictionary."""
        micro_percent_range = None
        if isinstance(data.get("microPercentRange"), Mapping):
            micro_percent_range = MicroPercentRange.from_dict(data["microPercentRange"])

        return cls(
            seed=data.get("seed"),
            operator=data.get("operator"),
            micro_percent=data.get("microPercent"),
            micro_percent_range=micro_percent_range,
        )


@dataclass
class OrCondition:
    """Composite condition that holds if any sub-condition holds."""

    conditions: Optional[List["ServerCondition"]] = None

    def to_dict(self) -> Dict[str, Any]:
        if self.conditions is None:
            return {}
        return {"conditions": [c.to_dict() for c in self.conditions]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrCondition":
        conditions = None
        if data.get("conditions") is not None:
            conditions = [ServerCondition.from_dict(c) for c in data["conditions"]]
        return cls(conditions=conditions)


@dataclass
class AndCondition:
    """Composite condition that holds if every sub-condition holds."""

    conditions: Optional[List["ServerCondition"]] = None

    def to_dict(self) -> Dict[str, Any]:
        if self.conditions is None:
            return {}
        return {"conditions": [c.to_dict() for c in self.conditions]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AndCondition":
        conditions = None
        if data.get("conditions") is not None:
            conditions = [ServerCondition.from_dict(c) for c in data["conditions"]]
        return cls(conditions=conditions)


def _is_composite(value: Any) -> bool:
    """Whether ``value`` has the wire shape of an OR/AND payload."""
    if not isinstance(value, Mapping):
        return False
    conditions = value.get("conditions")
    return conditions is None or isinstance(conditions, (list, tuple))


def _is_literal(value: Any) -> bool:
    """Whether ``value`` marks a TRUE/FALSE literal as set."""
    return isinstance(value, Mapping) or bool(value)


@dataclass
class ServerCondition:
    """A node of the condition tree.

    Exactly one field is set in well-formed input. Nodes with no field, or
    with several, are still representable; the evaluator decides what they
    mean.

    Attributes:
        or_condition: Disjunction of nested conditions.
        and_condition: Conjunction of nested conditions.
        true: Literal true when set.
        false: Literal false when set.
        percent: Percentage-bucket membership test.
        unknown: Wire fields that do not form a recognized variant, kept so
            they can be reported.
    """

    or_condition: Optional[OrCondition] = None
    and_condition: Optional[AndCondition] = None
    true: Optional[bool] = None
    false: Optional[bool] = None
    percent: Optional[PercentCondition] = None
    unknown: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert condition to dictionary."""
        result = dict(self.unknown or {})
        if self.or_condition is not None:
            result["or"] = self.or_condition.to_dict()
        if self.and_condition is not None:
            result["and"] = self.and_condition.to_dict()
        if self.true:
            result["true"] = {}
        if self.false:
            result["false"] = {}
        if self.percent is not None:
            result["percent"] = self.percent.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: Any) -> "ServerCondition":
        """Create condition from dictionary.

        The literals arrive as empty objects (``{"true": {}}``). A variant
        whose payload has the wrong shape is not built; it is kept in
        ``unknown`` with any unrecognized keys.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            return cls(unknown={"condition": data})

        unknown = {k: v for k, v in data.items() if k not in _VARIANT_KEYS}

        or_condition = None
        if data.get("or") is not None:
            if _is_composite(data["or"]):
                or_condition = OrCondition.from_dict(data["or"])
            else:
                unknown["or"] = data["or"]

        and_condition = None
        if data.get("and") is not None:
            if _is_composite(data["and"]):
                and_condition = AndCondition.from_dict(data["and"])
            else:
                unknown["and"] = data["and"]

        literals = {}
        for key in ("true", "false"):
            if data.get(key) is not None:
                if _is_literal(data[key]):
                    literals[key] = True
                else:
                    unknown[key] = data[key]

        percent = None
        if data.get("percent") is not None:
            if isinstance(data["percent"], Mapping):
                percent = PercentCondition.from_dict(data["percent"])
            else:
                unknown["percent"] = data["percent"]

        return cls(
            or_condition=or_condition,
            and_condition=and_condition,
            true=literals.get("true"),
            false=literals.get("false"),
            percent=percent,
            unknown=unknown or None,
        )

    @classmethod
    def or_(cls, *conditions: "ServerCondition") -> "ServerCondition":
        """Build an OR node over the given conditions."""
        return cls(or_condition=OrCondition(conditions=list(conditions)))

    @classmethod
    def and_(cls, *conditions: "ServerCondition") -> "ServerCondition":
        """Build an AND node over the given conditions."""
        return cls(and_condition=AndCondition(conditions=list(conditions)))

    @classmethod
    def literal(cls, value: bool) -> "ServerCondition":
        """Build a TRUE or FALSE leaf."""
        return cls(true=True) if value else cls(false=True)


@dataclass
class NamedCondition:
    """A top-level condition keyed by its unique name.

    Attributes:
        name: Condition name, unique within a template.
        condition: Root of the condition tree.
    """

    name: str
    condition: ServerCondition

    def __post_init__(self):
        """Validate named condition."""
        if not self.name:
            raise ValueError("Named condition requires a non-empty name")

    def to_dict(self) -> Dict[str, Any]:
        """Convert named condition to dictionary."""
        return {
            "name": self.name,
            "condition": self.condition.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NamedCondition":
        """Create named condition from dictionary."""
        return cls(
            name=data["name"],
            condition=ServerCondition.from_dict(data.get("condition")),
        )
