"""
Session usage reporter.

Turns per-call usage of a hierarchy of agents into token usage events.
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import List, Optional, Union

from ..core.events import AgentContext, TokenUsageEvent
from ..core.ledger import UsageLedger
from ..core.usage import UsageSnapshot, merge_usage

logger = logging.getLogger(__name__)


class SessionReporter:
    """Reports one agent session's usage to a ledger.

    Each reporter accumulates its own (self) usage. Its inclusive usage is
    its self usage plus the inclusive usage of every child it spawned.
    Recording on a reporter re-emits events for all its ancestors, root
    first, and then for itself, since their inclusive figures change too.
    """

    def __init__(
        self,
        ledger: UsageLedger,
        session_id: str,
        agent_name: str,
        parent: Optional["SessionReporter"] = None
    ):
        """Initialize a session reporter.

        Args:
            ledger: Ledger receiving the events (required)
            session_id: Session identifier (required)
            agent_name: Display name of the agent (required)
            parent: Reporter of the delegating session, None for the root

        Raises:
            ValueError: If session_id or agent_name is missing/empty
        """
        if not session_id or not session_id.strip():
            raise ValueError("session_id is required and cannot be empty")
        if not agent_name or not agent_name.strip():
            raise ValueError("agent_name is required and cannot be empty")

        self.ledger = ledger
        self.session_id = session_id
        self.agent_name = agent_name
        self.parent = parent
        self.children: List["SessionReporter"] = []
        self._self_usage = UsageSnapshot()

    def spawn(self, session_id: str, agent_name: str) -> "SessionReporter":
        """Create a reporter for a session this one delegates to."""
        child = SessionReporter(self.ledger, session_id, agent_name, parent=self)
        self.children.append(child)
        return child

    @property
    def self_usage(self) -> UsageSnapshot:
        return self._self_usage

    @property
    def inclusive_usage(self) -> UsageSnapshot:
        inclusive = self._self_usage
        for child in self.children:
            inclusive = merge_usage(inclusive, child.inclusive_usage)
        return inclusive

    def record(
        self,
        input_tokens: int,
        output_tokens: int,
        cost: Union[Decimal, float, str] = Decimal("0"),
        context_length: Optional[int] = None,
        context_limit: int = 0
    ) -> None:
        """Record one model call made by this session.

        Tokens and cost accumulate. The context length is the current window
        occupancy, so the latest call replaces it; it defaults to the call's
        input plus output tokens.

        Raises:
            ValueError: If any value is negative, not an integer count or not a finite cost
        """
        call = UsageSnapshot(
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            context_length=context_length if context_length is not None else input_tokens + output_tokens,
            context_limit=context_limit,
            cost=cost
        )
        accumulated = merge_usage(self._self_usage, call)
        self._self_usage = replace(accumulated, context_length=call.context_length)

        # Root first, down to this session
        lineage = []
        reporter = self
        while reporter is not None:
            lineage.append(reporter)
            reporter = reporter.parent
        for reporter in reversed(lineage):
            reporter.emit()

    def emit(self) -> None:
        """Send this session's current self and inclusive usage to the ledger."""
        event = TokenUsageEvent(
            session_id=self.session_id,
            agent_context=AgentContext(agent_name=self.agent_name),
            self_usage=self._self_usage,
            inclusive_usage=self.inclusive_usage
        )
        logger.debug(
            "Emitting usage for %s (%s): %d tokens",
            self.agent_name, self.session_id, event.self_usage.total_tokens
        )
        self.ledger.record_event(event)
