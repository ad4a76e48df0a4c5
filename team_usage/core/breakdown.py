"""
Per-agent usage breakdown.

Turns the ledger into a deterministically ordered list of display rows.
"""

from dataclasses import dataclass
from typing import List, Optional

from .aggregation import compute_root_exclusive_usage
from .ledger import LedgerSnapshot
from .usage import UsageSnapshot, clone_usage

ROOT_LABEL = "Root"


@dataclass(frozen=True)
class BreakdownRow:
    """One agent's usage line in the session breakdown."""
    label: str
    usage: UsageSnapshot
    is_active: bool = False


def _root_row(ledger: LedgerSnapshot, root_label: str) -> Optional[BreakdownRow]:
    """Build the root agent's row from its exclusive usage."""
    usage = compute_root_exclusive_usage(ledger)
    if usage is None and ledger.root_session_id:
        usage = clone_usage(ledger.sessions.get(ledger.root_session_id))
    if usage is None:
        return None

    label = ledger.root_agent_name or ledger.root_session_id or root_label
    is_active = bool(ledger.root_session_id) and ledger.active_session_id == ledger.root_session_id
    return BreakdownRow(label=label, usage=usage, is_active=is_active)


def session_breakdown_rows(
    ledger: LedgerSnapshot,
    root_label: str = ROOT_LABEL,
) -> List[BreakdownRow]:
    """Produce one usage row per known agent.

    Ordering contract: the root row comes first when present, followed by
    every other session in ascending session ID order. Sessions without any
    usage data are skipped.

    Args:
        ledger: Read-only ledger state
        root_label: Label for the root row when neither a root agent name
            nor a root session ID is known

    Returns:
        Ordered list of BreakdownRow
    """
    rows = []

    root_row = _root_row(ledger, root_label)
    if root_row is not None:
        rows.append(root_row)

    session_ids = sorted(set(ledger.sessions) | set(ledger.inclusive))
    for session_id in session_ids:
        if session_id == ledger.root_session_id:
            continue

        # record_event stores self usage with every inclusive snapshot, so this
        # only applies to snapshots assembled outside the ledger
        usage = ledger.sessions.get(session_id)
        if usage is None:
            usage = ledger.inclusive.get(session_id)
        if usage is None:
            continue

        rows.append(BreakdownRow(
            label=ledger.session_agents.get(session_id) or session_id,
            usage=clone_usage(usage),
            is_active=session_id == ledger.active_session_id,
        ))

    return rows
