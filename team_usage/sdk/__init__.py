"""
SDK for Team Usage.

Provides programmatic reporting of agent usage into a ledger.
"""

from .openai_client import TrackedOpenAI
from .reporter import SessionReporter

__all__ = ["SessionReporter", "TrackedOpenAI"]
