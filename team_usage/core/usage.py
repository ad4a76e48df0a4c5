"""
Usage snapshots and value helpers.

Holds token, context-window and cost counters for one reporting instant.
"""

from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Optional

_COUNTER_FIELDS = ("input_tokens", "output_tokens", "context_length", "context_limit")


@dataclass(frozen=True)
class UsageSnapshot:
    """Token/cost counters reported by one session at one instant.
    
    Snapshots are values: every store or computation works on its own copy.
    """
    input_tokens: int = 0
    output_tokens: int = 0
    context_length: int = 0
    context_limit: int = 0
    cost: Decimal = Decimal("0")
    
    def __post_init__(self):
        """Normalize cost to Decimal and validate counters."""
        for name in _COUNTER_FIELDS:
            value = getattr(self, name)
            # bool is an int subclass but never a valid counter
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer")
            if value < 0:
                raise ValueError(f"{name} cannot be negative")

        if not isinstance(self.cost, Decimal):
            if isinstance(self.cost, bool):
                raise ValueError("cost must be a number")
            try:
                object.__setattr__(self, "cost", Decimal(str(self.cost)))
            except InvalidOperation:
                raise ValueError("cost must be a number")
        if not self.cost.is_finite():
            raise ValueError("cost must be finite")
        if self.cost < 0:
            raise ValueError("cost cannot be negative")
    
    @property
    def total_tokens(self) -> int:
        """Total tokens used (input + output)."""
        return self.input_tokens + self.output_tokens


def clone_usage(usage: Optional[UsageSnapshot]) -> Optional[UsageSnapshot]:
    """Return an independent copy of ``usage``, or None when absent."""
    if usage is None:
        return None
    return replace(usage)


def merge_usage(base: UsageSnapshot, other: UsageSnapshot) -> UsageSnapshot:
    """Add ``other`` into ``base`` field by field.
    
    Token counts, context length and cost are additive. The context limit
    is a capacity ceiling, so the larger one wins.
    """
    return UsageSnapshot(
        input_tokens=base.input_tokens + other.input_tokens,
        output_tokens=base.output_tokens + other.output_tokens,
        context_length=base.context_length + other.context_length,
        context_limit=max(base.context_limit, other.context_limit),
        cost=base.cost + other.cost,
    )


def subtract_usage(base: UsageSnapshot, delta: UsageSnapshot) -> UsageSnapshot:
    """Debit ``delta`` from ``base``, clamping every counter at zero.
    
    The context length is recomputed from the remaining input and output
    tokens rather than subtracted. The context limit is left untouched.
    
    Args:
        base: Snapshot to debit from (typically an inclusive figure)
        delta: Snapshot to remove (typically a descendant's self usage)
        
    Returns:
        New snapshot; neither argument is modified
    """
    input_tokens = max(base.input_tokens - delta.input_tokens, 0)
    output_tokens = max(base.output_tokens - delta.output_tokens, 0)
    return UsageSnapshot(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        context_length=input_tokens + output_tokens,
        context_limit=base.context_limit,
        cost=max(base.cost - delta.cost, Decimal("0")),
    )
