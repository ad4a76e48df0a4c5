"""
Usage ledger and ingestion.

Holds the latest usage snapshot per session for a hierarchy of agents and
folds incoming usage events into it.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .events import TokenUsageEvent
from .usage import UsageSnapshot, clone_usage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerSnapshot:
    """Read-only view of a ledger, handed to aggregation and breakdown."""
    sessions: Mapping[str, UsageSnapshot]
    inclusive: Mapping[str, UsageSnapshot]
    session_agents: Mapping[str, str]
    root_inclusive: Optional[UsageSnapshot] = None
    root_session_id: str = ""
    root_agent_name: str = ""
    active_session_id: str = ""


class UsageLedger:
    """Process-local usage state for one run of an agent team.

    ``record_event`` is the only mutation entry point. Readers work on
    ``snapshot()`` and never see later mutations.

    Per session the ledger keeps the last reported self usage (last write
    wins, never accumulated). The root agent is the first agent to report
    with a name; its identity never changes afterwards.
    """

    def __init__(self):
        self._sessions: Dict[str, UsageSnapshot] = {}
        self._inclusive: Dict[str, UsageSnapshot] = {}
        self._session_agents: Dict[str, str] = {}
        self._root_inclusive: Optional[UsageSnapshot] = None
        self._root_session_id = ""
        self._root_agent_name = ""
        self._active_session_id = ""

    @property
    def root_agent_name(self) -> str:
        return self._root_agent_name

    @property
    def root_session_id(self) -> str:
        return self._root_session_id

    @property
    def active_session_id(self) -> str:
        return self._active_session_id

    def record_event(self, event: Optional[TokenUsageEvent]) -> None:
        """Fold one usage event into the ledger.

        Never raises: missing fields leave the corresponding state untouched.

        Args:
            event: Usage event from the runtime; None is a no-op
        """
        if event is None:
            logger.debug("Ignoring absent usage event")
            return

        session_id = event.session_id
        agent_name = event.agent_name

        # Legacy events only carry the combined usage field
        self_usage = event.self_usage if event.self_usage is not None else event.usage
        inclusive_usage = event.inclusive_usage if event.inclusive_usage is not None else event.usage

        if agent_name and not self._root_agent_name:
            self._root_agent_name = agent_name
            if session_id and not self._root_session_id:
                self._root_session_id = session_id
            logger.debug(
                "Adopted root agent %r (session %r)", agent_name, self._root_session_id
            )

        if session_id:
            self._active_session_id = session_id

            snapshot = clone_usage(self_usage)
            if snapshot is None:
                snapshot = clone_usage(inclusive_usage)
            if snapshot is not None:
                self._sessions[session_id] = snapshot

            if inclusive_usage is not None:
                self._inclusive[session_id] = clone_usage(inclusive_usage)

            if agent_name:
                self._session_agents[session_id] = agent_name

        if (agent_name
                and agent_name == self._root_agent_name
                and inclusive_usage is not None):
            self._root_inclusive = clone_usage(inclusive_usage)
            if session_id and not self._root_session_id:
                self._root_session_id = session_id

    def snapshot(self) -> LedgerSnapshot:
        """Return a read-only copy of the current ledger state."""
        return LedgerSnapshot(
            sessions=MappingProxyType(dict(self._sessions)),
            inclusive=MappingProxyType(dict(self._inclusive)),
            session_agents=MappingProxyType(dict(self._session_agents)),
            root_inclusive=clone_usage(self._root_inclusive),
            root_session_id=self._root_session_id,
            root_agent_name=self._root_agent_name,
            active_session_id=self._active_session_id,
        )
