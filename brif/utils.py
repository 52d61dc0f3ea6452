"""
LLM client abstraction and utilities for the brif summarizer.

This module provides synchronous OpenAI API integration with cost tracking.
The client makes exactly one request per call; retrying is layered on top of
it by ``brif.summarization.retry``.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Protocol


try:
    import openai
    from openai import OpenAI
except ImportError:
    raise ImportError("OpenAI package not installed. Run: pip install openai") from None

from .exceptions import ConfigurationError, TransientCompletionError
from .logging_config import get_logger


logger = get_logger(__name__)


# USD per 1M tokens: (input, output)
PRICING_PER_1M = {
    "gpt-3.5-turbo": (0.50, 1.50),
    "gpt-3.5-turbo-0613": (1.50, 2.00),
    "gpt-3.5-turbo-16k": (3.00, 4.00),
    "gpt-3.5-turbo-0125": (0.50, 1.50),
    "gpt-4": (30.00, 60.00),
    "gpt-4o": (2.50, 10.00),
    "gpt-4o-mini": (0.15, 0.60),
    "gpt-4.1": (2.00, 8.00),
    "gpt-4.1-mini": (0.40, 1.60),
}


@dataclass
class CompletionResult:
    """Generated text plus usage metadata for one completion call."""

    content: str
    model: str
    usage: dict[str, Any] = field(default_factory=dict)
    finish_reason: str | None = None
    processing_time: float = 0.0


class CompletionClient(Protocol):
    """Anything that can turn a message list into generated text."""

    def complete(self, messages: list[dict[str, str]], max_tokens: int) -> CompletionResult:
        ...


class OpenAICompletionClient:
    """Chat-completion client for one OpenAI model."""

    def __init__(self, api_key: str | None, model: str = "gpt-3.5-turbo", client: OpenAI | None = None, **request_kwargs):
        if client is None:
            if not api_key:
                raise ConfigurationError("OPENAI_API_KEY environment variable not set")
            client = OpenAI(api_key=api_key)
        self.client = client
        self.model = model
        self.request_kwargs = request_kwargs

    def complete(self, messages: list[dict[str, str]], max_tokens: int) -> CompletionResult:
        """
        Issue a single chat-completion request.

        Args:
            messages: Ordered list of {"role", "content"} messages
            max_tokens: Cap on generated tokens

        Returns:
            CompletionResult with the generated text and usage/cost breakdown

        Raises:
            TransientCompletionError: If the API call fails for any reason
        """
        request_params = {
            "model": self.model,
            "messages": messages,
            "max_completion_tokens": max_tokens,
        }
        request_params.update(self.request_kwargs)

        start_time = time.time()
        try:
            response = self.client.chat.completions.create(**request_params)
        except openai.OpenAIError as e:
            raise TransientCompletionError(f"OpenAI API call failed: {e}") from e

        processing_time = time.time() - start_time

        if not response.choices:
            raise TransientCompletionError("OpenAI API returned no choices")

        usage = response.usage
        input_tokens = usage.prompt_tokens if usage else 0
        output_tokens = usage.completion_tokens if usage else 0
        input_cost, output_cost = _split_cost(self.model, input_tokens, output_tokens)

        logger.info(f"usage: {input_tokens} input + {output_tokens} output tokens (${input_cost + output_cost:.6f})")

        choice = response.choices[0]
        return CompletionResult(
            content=(choice.message.content or "").strip(),
            model=self.model,
            usage={
                "input_tokens": input_tokens,
                "output_tokens": output_tokens,
                "total_tokens": input_tokens + output_tokens,
                "input_cost": round(input_cost, 6),
                "output_cost": round(output_cost, 6),
                "total_cost": round(input_cost + output_cost, 6),
            },
            finish_reason=choice.finish_reason,
            processing_time=processing_time,
        )


def _split_cost(model: str, input_tokens: int, output_tokens: int) -> tuple[float, float]:
    """Input and output cost in USD; unknown models are reported as free."""
    if model not in PRICING_PER_1M:
        logger.debug(f"No pricing data available for model: {model}")
        return 0.0, 0.0
    input_per_1m, output_per_1m = PRICING_PER_1M[model]
    return (input_tokens / 1_000_000) * input_per_1m, (output_tokens / 1_000_000) * output_per_1m


def estimate_cost(model: str, input_tokens: int, output_tokens: int = 0) -> float:
    """
    Estimate the cost of a run from OpenAI list prices.

    Raises ValueError if model pricing is not available.
    """
    if model not in PRICING_PER_1M:
        raise ValueError(f"No pricing data available for model: {model}")
    input_cost, output_cost = _split_cost(model, input_tokens, output_tokens)
    return round(input_cost + output_cost, 6)
