"""
Unit tests for event decoding.

Tests the wire shape of usage events and its validation.
"""

from decimal import Decimal

import pytest

from team_usage.core.events import AgentContext, TokenUsageEvent, event_from_dict, usage_from_dict
from team_usage.core.usage import UsageSnapshot


class TestUsageFromDict:
    """Test snapshot decoding."""

    def test_none_is_absent(self):
        """Verify a missing snapshot decodes to None."""
        assert usage_from_dict(None) is None

    def test_full_snapshot(self):
        """Verify every counter is decoded."""
        usage = usage_from_dict({
            "input_tokens": 100,
            "output_tokens": 50,
            "context_length": 150,
            "context_limit": 128000,
            "cost": 0.01
        })
        assert usage == UsageSnapshot(
            input_tokens=100,
            output_tokens=50,
            context_length=150,
            context_limit=128000,
            cost=Decimal("0.01")
        )

    def test_missing_counters_default_to_zero(self):
        """Verify partial snapshots fill in zeros."""
        usage = usage_from_dict({"input_tokens": 7})
        assert usage.output_tokens == 0
        assert usage.cost == Decimal("0")

    def test_string_cost(self):
        """Verify costs may be sent as strings."""
        assert usage_from_dict({"cost": "1.25"}).cost == Decimal("1.25")

    def test_non_integer_tokens_raise_error(self):
        """Verify token counters must be integers."""
        with pytest.raises(ValueError, match="'usage.input_tokens' must be an integer"):
            usage_from_dict({"input_tokens": "100"})

        with pytest.raises(ValueError, match="'usage.output_tokens' must be an integer"):
            usage_from_dict({"output_tokens": True})

    def test_negative_tokens_raise_error(self):
        """Verify negative counters are rejected at decode time."""
        with pytest.raises(ValueError, match="Invalid 'self_usage'"):
            usage_from_dict({"input_tokens": -1}, "self_usage")

    def test_invalid_cost_raises_error(self):
        """Verify non-numeric costs are rejected."""
        with pytest.raises(ValueError, match="'usage.cost' must be a number"):
            usage_from_dict({"cost": "lots"})

        with pytest.raises(ValueError, match="'usage.cost' must be finite"):
            usage_from_dict({"cost": "NaN"})

    def test_non_object_raises_error(self):
        """Verify snapshots must be objects."""
        with pytest.raises(ValueError, match="'usage' must be an object"):
            usage_from_dict([1, 2])


class TestEventFromDict:
    """Test event decoding."""

    def test_full_event(self):
        """Verify all event fields are decoded."""
        event = event_from_dict({
            "session_id": "s1",
            "agent_context": {"agent_name": "root"},
            "self_usage": {"input_tokens": 100, "output_tokens": 50, "cost": 0.01},
            "inclusive_usage": {"input_tokens": 200, "output_tokens": 80, "cost": 0.02}
        })
        assert event.session_id == "s1"
        assert event.agent_name == "root"
        assert event.self_usage.input_tokens == 100
        assert event.inclusive_usage.input_tokens == 200
        assert event.usage is None

    def test_empty_event(self):
        """Verify an empty object decodes to an event with nothing set."""
        assert event_from_dict({}) == TokenUsageEvent()

    def test_legacy_event(self):
        """Verify legacy events keep only the combined usage field."""
        event = event_from_dict({"session_id": "s1", "usage": {"input_tokens": 10}})
        assert event.self_usage is None
        assert event.inclusive_usage is None
        assert event.usage.input_tokens == 10

    def test_unknown_keys_ignored(self):
        """Verify transport-specific extra keys are tolerated."""
        event = event_from_dict({"type": "token_usage", "session_id": "s1"})
        assert event.session_id == "s1"

    def test_null_fields_treated_as_absent(self):
        """Verify explicit nulls behave like missing keys."""
        event = event_from_dict({"session_id": None, "agent_context": None, "self_usage": None})
        assert event.session_id == ""
        assert event.agent_context == AgentContext()
        assert event.self_usage is None

    def test_invalid_types_raise_error(self):
        """Verify malformed events are rejected."""
        with pytest.raises(ValueError, match="Event must be an object"):
            event_from_dict("s1")

        with pytest.raises(ValueError, match="'session_id' must be a string"):
            event_from_dict({"session_id": 12})

        with pytest.raises(ValueError, match="'agent_context' must be an object"):
            event_from_dict({"agent_context": "root"})

        with pytest.raises(ValueError, match="'agent_context.agent_name' must be a string"):
            event_from_dict({"agent_context": {"agent_name": 3}})
