"""
Aggregation of ledger usage.

Derives team-wide totals and the root agent's exclusive usage without
double-counting delegated work.
"""

from typing import Optional, Tuple

from .ledger import LedgerSnapshot
from .usage import UsageSnapshot, clone_usage, merge_usage, subtract_usage

TEAM_TOTAL_LABEL = "Team Total"


def compute_team_totals(ledger: LedgerSnapshot) -> UsageSnapshot:
    """Compute team-wide usage from the ledger.

    Sums every session's self usage. Before any self usage has arrived the
    root's inclusive snapshot stands in; with neither, the result is a
    zero snapshot, never None.

    Note that the inclusive fallback only applies while the self-usage map
    is entirely empty. Once any session has reported, totals reflect only
    sessions that have reported self usage, so the headline figure can dip
    while the root has not yet reported its own.

    Args:
        ledger: Read-only ledger state

    Returns:
        Aggregated UsageSnapshot
    """
    if ledger.sessions:
        totals = UsageSnapshot()
        for session_id in sorted(ledger.sessions):
            totals = merge_usage(totals, ledger.sessions[session_id])
        return totals

    if ledger.root_inclusive is not None:
        return clone_usage(ledger.root_inclusive)

    return UsageSnapshot()


def compute_root_exclusive_usage(ledger: LedgerSnapshot) -> Optional[UsageSnapshot]:
    """Compute what the root agent consumed itself, excluding delegated work.

    Starts from the root's inclusive snapshot and debits every other
    session's self usage from it. Counters clamp at zero when children
    report more than the root's inclusive figure currently reflects.

    Returns:
        Exclusive UsageSnapshot, or None if the root has not reported an
        inclusive snapshot yet
    """
    if ledger.root_inclusive is None:
        return None

    exclusive = clone_usage(ledger.root_inclusive)
    for session_id in sorted(ledger.sessions):
        if session_id == ledger.root_session_id:
            continue
        exclusive = subtract_usage(exclusive, ledger.sessions[session_id])
    return exclusive


def render_totals(
    ledger: LedgerSnapshot,
    team_label: str = TEAM_TOTAL_LABEL,
) -> Tuple[str, UsageSnapshot]:
    """Pair the team totals with their display label.

    The label never influences the numbers.
    """
    return team_label, compute_team_totals(ledger)
