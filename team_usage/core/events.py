"""
Token usage events.

Defines the inbound event shape and decodes it from JSON-like mappings.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

from .usage import UsageSnapshot


@dataclass(frozen=True)
class AgentContext:
    """Identity of the agent that produced an event."""
    agent_name: str = ""


@dataclass(frozen=True)
class TokenUsageEvent:
    """Usage report delivered by the runtime for one session.

    ``self_usage`` covers the session's own work, ``inclusive_usage`` also
    covers everything it delegated. ``usage`` is the legacy combined field
    used when either of the other two is missing.
    """
    session_id: str = ""
    agent_context: AgentContext = field(default_factory=AgentContext)
    self_usage: Optional[UsageSnapshot] = None
    inclusive_usage: Optional[UsageSnapshot] = None
    usage: Optional[UsageSnapshot] = None

    @property
    def agent_name(self) -> str:
        return self.agent_context.agent_name


_INT_FIELDS = ("input_tokens", "output_tokens", "context_length", "context_limit")


def usage_from_dict(data: Optional[Mapping[str, Any]], path: str = "usage") -> Optional[UsageSnapshot]:
    """Decode a usage snapshot mapping.

    Args:
        data: Mapping with snapshot counters, or None
        path: Location used in error messages

    Returns:
        UsageSnapshot, or None when ``data`` is None

    Raises:
        ValueError: If a counter has the wrong type or is negative
    """
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise ValueError(f"'{path}' must be an object")

    values: Dict[str, Any] = {}
    for name in _INT_FIELDS:
        value = data.get(name, 0)
        # bool is an int subclass but never a valid counter
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"'{path}.{name}' must be an integer")
        values[name] = value

    raw_cost = data.get("cost", 0)
    if isinstance(raw_cost, bool) or not isinstance(raw_cost, (int, float, str)):
        raise ValueError(f"'{path}.cost' must be a number")
    try:
        values["cost"] = Decimal(str(raw_cost))
    except InvalidOperation:
        raise ValueError(f"'{path}.cost' must be a number")
    if not values["cost"].is_finite():
        raise ValueError(f"'{path}.cost' must be finite")

    try:
        return UsageSnapshot(**values)
    except ValueError as e:
        raise ValueError(f"Invalid '{path}': {e}")


def event_from_dict(data: Mapping[str, Any]) -> TokenUsageEvent:
    """Decode a token usage event mapping.

    Missing keys default to absent values; unknown keys are ignored so that
    transports may carry extra fields.

    Raises:
        ValueError: If the event or one of its snapshots is malformed
    """
    if not isinstance(data, Mapping):
        raise ValueError("Event must be an object")

    session_id = data.get("session_id") or ""
    if not isinstance(session_id, str):
        raise ValueError("'session_id' must be a string")

    context_data = data.get("agent_context") or {}
    if not isinstance(context_data, Mapping):
        raise ValueError("'agent_context' must be an object")
    agent_name = context_data.get("agent_name") or ""
    if not isinstance(agent_name, str):
        raise ValueError("'agent_context.agent_name' must be a string")

    return TokenUsageEvent(
        session_id=session_id,
        agent_context=AgentContext(agent_name=agent_name),
        self_usage=usage_from_dict(data.get("self_usage"), "self_usage"),
        inclusive_usage=usage_from_dict(data.get("inclusive_usage"), "inclusive_usage"),
        usage=usage_from_dict(data.get("usage"), "usage"),
    )
