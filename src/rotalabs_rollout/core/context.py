"""Evaluation context for condition evaluation.

The context describes the instance a template is being evaluated for. Only
the instance ``id`` takes part in evaluation; any other fields are carried
along for callers and ignored here.

Supports both:
- Flat dictionary input: {"id": "instance-123", "country": "NZ"}
- Keyword construction: EvaluationContext(id="instance-123")
"""

from typing import Any, Dict, Mapping, Optional, Union


class EvaluationContext:
    """Per-instance evaluation context.

    Uses __slots__ for memory efficiency.

    Attributes:
        id: Instance identifier hashed for percent conditions.
        attributes: Remaining context fields, not used by the evaluator.
    """

    __slots__ = ("id", "attributes")

    def __init__(self, id: Optional[str] = None, attributes: Optional[Dict[str, Any]] = None):
        self.id = id
        self.attributes = attributes or {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get a context field by name.

        Args:
            key: Field name; ``"id"`` returns the instance identifier.
            default: Value returned when the field is missing.
        """
        if key == "id":
            return self.id if self.id is not None else default
        return self.attributes.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary."""
        result = dict(self.attributes)
        if self.id is not None:
            result["id"] = self.id
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EvaluationContext":
        """Create context from dictionary.

        ``randomizationId`` is accepted as an alias for ``id``.
        """
        attributes = {k: v for k, v in data.items() if k not in ("id", "randomizationId")}
        instance_id = data.get("id")
        if instance_id is None:
            instance_id = data.get("randomizationId")
        return cls(id=instance_id, attributes=attributes)

    @classmethod
    def coerce(cls, context: Union["EvaluationContext", Mapping[str, Any]]) -> "EvaluationContext":
        """Return ``context`` as an EvaluationContext, converting mappings."""
        if isinstance(context, cls):
            return context
        return cls.from_dict(context)

    def __repr__(self) -> str:
        return f"EvaluationContext(id={self.id!r})"
