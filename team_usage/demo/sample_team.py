# team_usage/demo/sample_team.py

from decimal import Decimal
from typing import List

from team_usage.core.events import AgentContext, TokenUsageEvent
from team_usage.core.ledger import UsageLedger
from team_usage.core.usage import UsageSnapshot


def build_demo_events() -> List[TokenUsageEvent]:
    """Usage events of an orchestrator delegating to a researcher and a writer.

    The writer runs on an older runtime and only sends the legacy combined
    usage field.
    """
    orchestrator = AgentContext(agent_name="orchestrator")
    first_pass = UsageSnapshot(
        input_tokens=1200,
        output_tokens=300,
        context_length=1500,
        context_limit=128000,
        cost=Decimal("0.006")
    )
    research = UsageSnapshot(
        input_tokens=4000,
        output_tokens=800,
        context_length=4800,
        context_limit=128000,
        cost=Decimal("0.018")
    )
    writing = UsageSnapshot(
        input_tokens=2500,
        output_tokens=1500,
        context_length=4000,
        context_limit=16385,
        cost=Decimal("0.00675")
    )
    # Self usage is cumulative for the session, not per call
    second_pass = UsageSnapshot(
        input_tokens=3200,
        output_tokens=800,
        context_length=2500,
        context_limit=128000,
        cost=Decimal("0.016")
    )

    return [
        TokenUsageEvent(
            session_id="root",
            agent_context=orchestrator,
            self_usage=first_pass,
            inclusive_usage=first_pass
        ),
        TokenUsageEvent(
            session_id="sess-research",
            agent_context=AgentContext(agent_name="researcher"),
            self_usage=research,
            inclusive_usage=research
        ),
        TokenUsageEvent(
            session_id="root",
            agent_context=orchestrator,
            self_usage=first_pass,
            inclusive_usage=UsageSnapshot(
                input_tokens=5200,
                output_tokens=1100,
                context_length=1500,
                context_limit=128000,
                cost=Decimal("0.024")
            )
        ),
        TokenUsageEvent(
            session_id="sess-writer",
            agent_context=AgentContext(agent_name="writer"),
            usage=writing
        ),
        TokenUsageEvent(
            session_id="root",
            agent_context=orchestrator,
            self_usage=second_pass,
            inclusive_usage=UsageSnapshot(
                input_tokens=9700,
                output_tokens=3100,
                context_length=2500,
                context_limit=128000,
                cost=Decimal("0.04075")
            )
        ),
    ]


def build_demo_ledger() -> UsageLedger:
    ledger = UsageLedger()
    for event in build_demo_events():
        ledger.record_event(event)
    return ledger


if __name__ == "__main__":
    ledger = build_demo_ledger()
    print(f"Demo ledger built, root agent: {ledger.root_agent_name}")
