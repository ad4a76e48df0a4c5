"""
Tracked OpenAI client wrapper.

Reports each call's usage to a session reporter without modifying behavior.
"""

from typing import Any, Dict, List, Optional

from openai import OpenAI

from ..core.pricing import calculate_cost, context_window
from .reporter import SessionReporter


class TrackedOpenAI:
    """OpenAI client wrapper that reports usage for one agent session.

    All failures are loud so that no usage goes unreported silently.
    """

    def __init__(self, model: str, reporter: SessionReporter, client: Optional[OpenAI] = None):
        """Initialize tracked OpenAI client.

        Args:
            model: OpenAI model name (required)
            reporter: Reporter for the session making the calls (required)
            client: Existing OpenAI client (defaults to a new OpenAI())

        Raises:
            ValueError: If model is missing/empty or reporter is missing
        """
        if not model or not model.strip():
            raise ValueError("model is required and cannot be empty")
        if reporter is None:
            raise ValueError("reporter is required")

        self.model = model
        self.reporter = reporter
        self.client = client or OpenAI()

    def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs: Any
    ) -> Any:
        """Create chat completion and report its usage.

        Args:
            messages: List of message dictionaries (required)
            temperature: Sampling temperature (optional)
            max_tokens: Maximum tokens to generate (optional)
            **kwargs: Additional OpenAI parameters

        Returns:
            OpenAI chat completion response

        Raises:
            ValueError: If messages is empty or the response has no usage
            OpenAI API errors: Propagated without modification
        """
        if not messages:
            raise ValueError("messages is required and cannot be empty")

        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs
        )

        usage = response.usage
        if not usage:
            raise ValueError("OpenAI response missing usage information")

        self.reporter.record(
            input_tokens=usage.prompt_tokens,
            output_tokens=usage.completion_tokens,
            cost=calculate_cost(self.model, usage.prompt_tokens, usage.completion_tokens),
            context_length=usage.total_tokens,
            context_limit=context_window(self.model)
        )

        return response
